import http.client
import json
import threading
import time
import unittest
from urllib import error, request

from twisty_sim.client import CubeAPIClient
from twisty_sim.engine import CubeEngine
from twisty_sim.server import CubeHTTPServer


def post_raw(url: str, payload: dict):
    req = request.Request(
        url=url,
        method="POST",
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    return request.urlopen(req, timeout=2.0)


class TestAPI(unittest.TestCase):
    def setUp(self):
        self.engine = CubeEngine(size=3)
        self.server = CubeHTTPServer(engine=self.engine, host="127.0.0.1", port=0, mode="headless")
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        time.sleep(0.05)
        self.base = f"http://{self.server.host}:{self.server.port}"
        self.client = CubeAPIClient(host=self.server.host, port=self.server.port, timeout=2.0)

    def tearDown(self):
        self.server.shutdown()
        self.thread.join(timeout=1.0)

    def test_health(self):
        out = self.client.health()
        self.assertTrue(out["ready"])
        self.assertEqual(out["size"], 3)
        self.assertEqual(out["supported_sizes"], [2, 3])

    def test_turn_applies_and_returns_payload(self):
        out = self.client.turn("front", "clockwise")
        self.assertEqual(out["face"], "front")
        self.assertEqual(out["direction"], "clockwise")
        self.assertEqual(out["step_count"], 1)
        self.assertEqual(len(out["pieces"]), 26)
        moved = [p for p in out["pieces"] if p["colors"] == {"front": "#00ff00", "right": "#ff0000", "top": "#ffffff"}]
        self.assertEqual(len(moved), 1)
        self.assertEqual(moved[0]["position"], [1.0, -1.0, 1.0])

    def test_reset_changes_size(self):
        self.client.turn("top", "counterclockwise")
        out = self.client.reset(size=2)
        self.assertEqual(out["size"], 2)
        self.assertEqual(len(out["pieces"]), 8)
        self.assertEqual(out["step_count"], 0)
        self.assertEqual(self.client.get_state()["size"], 2)

    def test_gated_turn_flow(self):
        out = self.client.begin_turn("left", "counterclockwise")
        self.assertEqual(len(out["moving_ids"]), 9)
        self.assertTrue(out["animating"])

        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/turn", {"face": "back", "direction": "clockwise"})
        self.assertEqual(ctx.exception.code, 409)

        out = self.client.complete_turn()
        self.assertFalse(out["animating"])
        self.assertEqual(out["step_count"], 1)

    def test_cancel_turn(self):
        self.client.begin_turn("top", "clockwise")
        out = self.client.cancel_turn()
        self.assertFalse(out["animating"])
        self.assertEqual(out["step_count"], 0)

    def test_shuffle_reports_moves(self):
        out = self.client.shuffle(moves=12, seed=7)
        self.assertEqual(len(out["moves"]), 12)
        self.assertEqual(out["step_count"], 12)
        again = CubeEngine(size=3)
        pieces, _ = again.shuffle(moves=12, seed=7)
        self.assertEqual([p["position"] for p in out["pieces"]], [list(p.position) for p in pieces])

    def test_invalid_face_returns_400(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/turn", {"face": "middle", "direction": "clockwise"})
        self.assertEqual(ctx.exception.code, 400)

    def test_missing_field_returns_400(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/turn", {"face": "front"})
        self.assertEqual(ctx.exception.code, 400)

    def test_unsupported_size_returns_400(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/reset", {"size": 7})
        self.assertEqual(ctx.exception.code, 400)

    def test_complete_without_pending_returns_409(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/turn/complete", {})
        self.assertEqual(ctx.exception.code, 409)

    def test_negative_seed_returns_400(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/shuffle", {"moves": 3, "seed": -1})
        self.assertEqual(ctx.exception.code, 400)
        self.assertEqual(self.client.get_state()["step_count"], 0)

    def test_non_utf8_body_returns_400(self):
        req = request.Request(
            url=f"{self.base}/turn",
            method="POST",
            data=b"\xff\xfe\xfa",
            headers={"Content-Type": "application/json"},
        )
        with self.assertRaises(error.HTTPError) as ctx:
            request.urlopen(req, timeout=2.0)
        self.assertEqual(ctx.exception.code, 400)

    def test_non_numeric_content_length_returns_400(self):
        conn = http.client.HTTPConnection(self.server.host, self.server.port, timeout=2.0)
        try:
            conn.putrequest("POST", "/turn")
            conn.putheader("Content-Type", "application/json")
            conn.putheader("Content-Length", "abc")
            conn.endheaders()
            resp = conn.getresponse()
            self.assertEqual(resp.status, 400)
            self.assertIn("error", json.loads(resp.read().decode("utf-8")))
        finally:
            conn.close()

    def test_unknown_path_returns_404(self):
        with self.assertRaises(error.HTTPError) as ctx:
            post_raw(f"{self.base}/solve", {})
        self.assertEqual(ctx.exception.code, 404)


if __name__ == "__main__":
    unittest.main()
