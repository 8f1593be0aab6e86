"""HTTP API server for the cube engine."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .engine import SUPPORTED_SIZES, CubeEngine, TurnInProgressError
from .state_codec import CubeValidationError, move_to_json, parse_direction, parse_face, validate_seed
from .transform import DEFAULT_SHUFFLE_MOVES


def _require(body: dict[str, Any], field: str) -> Any:
    if field not in body:
        raise CubeValidationError(f"Missing required field: {field}")
    return body[field]


class CubeHTTPServer:
    def __init__(
        self,
        engine: CubeEngine,
        host: str = "127.0.0.1",
        port: int = 8000,
        mode: str = "headless",
        verbose: bool = False,
    ):
        self.engine = engine
        self.mode = mode
        self.verbose = verbose
        self._lock = threading.RLock()

        handler_cls = self._build_handler()
        self.httpd = ThreadingHTTPServer((host, port), handler_cls)
        self.host, self.port = self.httpd.server_address[:2]

    def _build_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            server_version = "TwistySim/1.0"

            def log_message(self, fmt: str, *args):
                if parent.verbose:
                    print(f"http {self.address_string()} {fmt % args}", flush=True)

            def _send_json(self, code: int, payload: dict[str, Any]):
                body = json.dumps(payload).encode("utf-8")
                self.send_response(code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def _read_json(self) -> dict[str, Any]:
                try:
                    length = int(self.headers.get("Content-Length", "0"))
                except ValueError as exc:
                    raise CubeValidationError("Content-Length must be an integer") from exc
                if length < 0:
                    raise CubeValidationError("Content-Length must not be negative")
                if length == 0:
                    return {}
                data = self.rfile.read(length)
                try:
                    obj = json.loads(data.decode("utf-8"))
                except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                    raise CubeValidationError(f"Invalid JSON body: {exc}") from exc
                if not isinstance(obj, dict):
                    raise CubeValidationError("JSON body must be an object")
                return obj

            def do_GET(self):
                with parent._lock:
                    if self.path == "/health":
                        self._send_json(
                            200,
                            {
                                "mode": parent.mode,
                                "size": parent.engine.size,
                                "supported_sizes": list(SUPPORTED_SIZES),
                                "ready": True,
                            },
                        )
                        return

                    if self.path == "/state":
                        self._send_json(200, parent.engine.state_payload())
                        return

                self._send_json(404, {"error": "Not Found"})

            def do_POST(self):
                try:
                    body = self._read_json()
                    with parent._lock:
                        engine = parent.engine

                        if self.path == "/reset":
                            engine.reset(size=body.get("size"))
                            self._send_json(200, engine.state_payload())
                            return

                        if self.path in ("/turn", "/turn/begin"):
                            face = parse_face(_require(body, "face"))
                            direction = parse_direction(_require(body, "direction"))
                            out: dict[str, Any] = {}
                            if self.path == "/turn":
                                engine.turn(face, direction)
                            else:
                                out["moving_ids"] = engine.begin_turn(face, direction)
                            out.update(engine.state_payload())
                            out.update(move_to_json(face, direction))
                            self._send_json(200, out)
                            return

                        if self.path == "/turn/complete":
                            engine.complete_turn()
                            self._send_json(200, engine.state_payload())
                            return

                        if self.path == "/turn/cancel":
                            engine.cancel_turn()
                            self._send_json(200, engine.state_payload())
                            return

                        if self.path == "/shuffle":
                            moves = body.get("moves", DEFAULT_SHUFFLE_MOVES)
                            seed = body.get("seed")
                            _, move_list = engine.shuffle(moves=moves, seed=validate_seed(seed))
                            out = engine.state_payload()
                            out["moves"] = [move_to_json(f, d) for f, d in move_list]
                            self._send_json(200, out)
                            return

                except CubeValidationError as exc:
                    self._send_json(400, {"error": str(exc)})
                    return
                except TurnInProgressError as exc:
                    self._send_json(409, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

        return Handler

    def serve_forever(self):
        self.httpd.serve_forever()

    def shutdown(self):
        self.httpd.shutdown()
        self.httpd.server_close()
