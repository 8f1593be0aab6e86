"""CLI entrypoint for the cube simulator."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import yaml

from .engine import SUPPORTED_SIZES, CubeEngine
from .server import CubeHTTPServer
from .state_codec import move_to_json, validate_moves, validate_seed, validate_size
from .transform import DEFAULT_SHUFFLE_MOVES

DEFAULTS: dict[str, Any] = {
    "size": 3,
    "seed": None,
    "host": "127.0.0.1",
    "port": 8000,
    "shuffle_moves": 0,
    "moves": DEFAULT_SHUFFLE_MOVES,
    "verbose": False,
}


def load_config(path: str | Path) -> dict:
    """Load a YAML config of default option values."""
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NxN twisty cube simulator")
    sub = parser.add_subparsers(dest="mode", required=True)

    # Unset flags stay None so config file values can fill them in.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="YAML file with default option values")
    common.add_argument("--size", type=int, default=None, choices=list(SUPPORTED_SIZES))
    common.add_argument("--seed", type=int, default=None)

    headless = sub.add_parser("headless", parents=[common], help="Run headless HTTP simulator")
    headless.add_argument("--host", default=None)
    headless.add_argument("--port", type=int, default=None)
    headless.add_argument("--shuffle-moves", type=int, default=None, help="Shuffle before serving")
    headless.add_argument("--verbose", action="store_true", default=None, help="Log every request")

    shuffle = sub.add_parser("shuffle", parents=[common], help="Print a shuffled cube state as JSON")
    shuffle.add_argument("--moves", type=int, default=None)

    return parser


def resolve_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge built-in defaults, the config file and explicit flags, in that order."""
    options = dict(DEFAULTS)
    if args.config:
        options.update(load_config(args.config))
    for key in DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value
    validate_size(options["size"], SUPPORTED_SIZES)
    validate_moves(options["moves"])
    validate_moves(options["shuffle_moves"])
    validate_seed(options["seed"])
    return options


def run_shuffle(options: dict[str, Any]) -> dict[str, Any]:
    engine = CubeEngine(size=options["size"], seed=options["seed"])
    _, move_list = engine.shuffle(moves=options["moves"])
    payload = engine.state_payload()
    payload["moves"] = [move_to_json(f, d) for f, d in move_list]
    return payload


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    if args.mode == "shuffle":
        print(json.dumps(run_shuffle(options)), flush=True)
        return

    if args.mode == "headless":
        engine = CubeEngine(size=options["size"], seed=options["seed"])
        server = CubeHTTPServer(
            engine=engine,
            host=options["host"],
            port=options["port"],
            mode="headless",
            verbose=bool(options["verbose"]),
        )
        if options["shuffle_moves"] > 0:
            engine.shuffle(options["shuffle_moves"])
            print(f"shuffled moves={options['shuffle_moves']} size={engine.size}", flush=True)
        print(f"Cube headless server listening on http://{server.host}:{server.port}", flush=True)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            server.shutdown()
        return

    parser.error(f"Unsupported mode: {args.mode}")


if __name__ == "__main__":
    main()
