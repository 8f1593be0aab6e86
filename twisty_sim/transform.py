"""Face turns and random shuffles over immutable piece sets."""

from __future__ import annotations

import math
from dataclasses import replace

import numpy as np

from .actions import AXIS_INDEX, DIRECTION_ORDER, FACE_AXIS_LAYER, FACE_ORDER, N_FACES, Direction, Face, effective_angle
from .model import Piece, is_on_face, lattice_offset
from .state_codec import CubeValidationError, parse_direction, parse_face, validate_moves, validate_seed, validate_size

DEFAULT_SHUFFLE_MOVES = 20


def _rotation_matrix(axis: str, angle_rad: float) -> np.ndarray:
    """Right-handed rotation about a world axis.

    The y matrix maps (x, z) to (cos*x + sin*z, -sin*x + cos*z).
    """
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    if axis == "x":
        return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=np.float64)
    if axis == "y":
        return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]], dtype=np.float64)
    if axis == "z":
        return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
    raise CubeValidationError(f"Unsupported rotation axis: {axis}")


def _snap_to_lattice(vec: np.ndarray, offset: float) -> tuple[float, float, float]:
    # Lattice values are k - offset for integer k; this keeps 2x2 halves intact.
    snapped = np.round(vec + offset) - offset
    return tuple(float(v) + 0.0 for v in snapped)


def rotate_face(pieces, face: Face | str, direction: Direction | str, size: int) -> tuple[Piece, ...]:
    """Turn one face a quarter turn and return the new piece set.

    Pieces in the face's boundary layer get a new position and an accumulated
    rotation about the face axis; every other piece is returned unchanged.
    """
    face = parse_face(face)
    direction = parse_direction(direction)
    size = validate_size(size)

    axis, _ = FACE_AXIS_LAYER[face]
    axis_idx = AXIS_INDEX[axis]
    angle = effective_angle(face, direction)
    rot = _rotation_matrix(axis, angle)
    offset = lattice_offset(size)

    turned: list[Piece] = []
    for piece in pieces:
        if not is_on_face(piece, face, size):
            turned.append(piece)
            continue
        position = _snap_to_lattice(rot @ np.asarray(piece.position, dtype=np.float64), offset)
        rotation = list(piece.rotation)
        rotation[axis_idx] += angle
        turned.append(replace(piece, position=position, rotation=tuple(rotation)))
    return tuple(turned)


def _as_generator(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(validate_seed(rng))


def random_moves(moves: int, rng: np.random.Generator | int | None = None) -> list[tuple[Face, Direction]]:
    """Draw ``moves`` independent (face, direction) pairs, uniform over each."""
    moves = validate_moves(moves)
    gen = _as_generator(rng)
    out: list[tuple[Face, Direction]] = []
    for _ in range(moves):
        face = FACE_ORDER[int(gen.integers(N_FACES))]
        direction = DIRECTION_ORDER[int(gen.integers(len(DIRECTION_ORDER)))]
        out.append((face, direction))
    return out


def shuffle_cube(
    pieces,
    size: int,
    moves: int = DEFAULT_SHUFFLE_MOVES,
    rng: np.random.Generator | int | None = None,
) -> tuple[Piece, ...]:
    """Apply ``moves`` random quarter turns and return the final piece set.

    Cancelling pairs are not filtered out, so the result is not guaranteed to
    sit at any particular scramble distance.
    """
    size = validate_size(size)
    shuffled = tuple(pieces)
    for face, direction in random_moves(moves, rng):
        shuffled = rotate_face(shuffled, face, direction, size)
    return shuffled
