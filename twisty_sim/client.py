"""HTTP client for the cube server."""

from __future__ import annotations

import json
from urllib import request


def _value(v) -> str:
    # accepts Face / Direction members as well as plain strings
    return str(getattr(v, "value", v))


class CubeAPIClient:
    def __init__(self, host: str = "127.0.0.1", port: int = 8000, timeout: float = 10.0):
        self.base = f"http://{host}:{port}"
        self.timeout = timeout

    def _call(self, method: str, path: str, payload: dict | None = None) -> dict:
        data = None
        headers = {}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = request.Request(url=f"{self.base}{path}", method=method, data=data, headers=headers)
        with request.urlopen(req, timeout=self.timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def health(self) -> dict:
        return self._call("GET", "/health")

    def get_state(self) -> dict:
        return self._call("GET", "/state")

    def reset(self, size: int | None = None) -> dict:
        payload = {} if size is None else {"size": int(size)}
        return self._call("POST", "/reset", payload)

    def turn(self, face: str, direction: str) -> dict:
        return self._call("POST", "/turn", {"face": _value(face), "direction": _value(direction)})

    def begin_turn(self, face: str, direction: str) -> dict:
        return self._call("POST", "/turn/begin", {"face": _value(face), "direction": _value(direction)})

    def complete_turn(self) -> dict:
        return self._call("POST", "/turn/complete", {})

    def cancel_turn(self) -> dict:
        return self._call("POST", "/turn/cancel", {})

    def shuffle(self, moves: int = 20, seed: int | None = None) -> dict:
        return self._call("POST", "/shuffle", {"moves": int(moves), "seed": seed})
