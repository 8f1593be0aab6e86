"""Input validation and JSON view of piece sets."""

from __future__ import annotations

from typing import Any, Iterable

from .actions import FACE_ORDER, Direction, Face


class CubeValidationError(ValueError):
    """Raised when a face, direction, size or move count is invalid."""


def parse_face(face: Face | str) -> Face:
    if isinstance(face, Face):
        return face
    try:
        return Face(face)
    except ValueError as exc:
        allowed = ", ".join(f.value for f in FACE_ORDER)
        raise CubeValidationError(f"Unknown face {face!r}; expected one of: {allowed}") from exc


def parse_direction(direction: Direction | str) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(direction)
    except ValueError as exc:
        raise CubeValidationError(
            f"Unknown direction {direction!r}; expected clockwise or counterclockwise"
        ) from exc


def validate_size(size: Any, supported: Iterable[int] | None = None) -> int:
    """Return ``size`` if it is a positive integer (and in ``supported`` when given)."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise CubeValidationError(f"Cube size must be a positive integer, got {size!r}")
    if supported is not None:
        supported = tuple(supported)
        if size not in supported:
            raise CubeValidationError(f"Cube size must be one of {list(supported)}, got {size}")
    return size


def validate_moves(moves: Any) -> int:
    if isinstance(moves, bool) or not isinstance(moves, int) or moves < 0:
        raise CubeValidationError(f"Move count must be a non-negative integer, got {moves!r}")
    return moves


def validate_seed(seed: Any) -> int | None:
    """Return ``seed`` if it is None or a non-negative integer."""
    if seed is None:
        return None
    if isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
        raise CubeValidationError(f"Seed must be a non-negative integer or null, got {seed!r}")
    return seed


def piece_to_json(piece) -> dict[str, Any]:
    return {
        "id": piece.id,
        "position": [float(v) for v in piece.position],
        "rotation": [float(v) for v in piece.rotation],
        "colors": {face.value: color for face, color in piece.painted().items()},
    }


def pieces_to_json(pieces) -> list[dict[str, Any]]:
    return [piece_to_json(p) for p in pieces]


def move_to_json(face: Face, direction: Direction) -> dict[str, str]:
    return {"face": face.value, "direction": direction.value}
