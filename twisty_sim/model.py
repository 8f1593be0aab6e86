"""Cube state model: pieces and the solved NxN configuration."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product

from .actions import AXIS_INDEX, FACE_AXIS_LAYER, FACE_COLORS, FACE_INDEX, FACE_ORDER, Face
from .state_codec import parse_face, validate_size

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Piece:
    """One visible unit cube.

    ``colors`` is a six-slot record indexed like ``FACE_ORDER``; ``None`` marks
    a side with no sticker. Stickers are keyed by the face they were painted on
    in the solved state and are not re-keyed when the piece moves: the current
    world-facing side is implied by ``position`` and ``rotation``.
    """

    id: int
    position: Vec3
    rotation: Vec3
    colors: tuple[str | None, ...]

    def color(self, face: Face | str) -> str | None:
        return self.colors[FACE_INDEX[parse_face(face)]]

    def painted(self) -> dict[Face, str]:
        return {face: color for face, color in zip(FACE_ORDER, self.colors) if color is not None}

    @property
    def n_colors(self) -> int:
        return sum(1 for c in self.colors if c is not None)


def lattice_offset(size: int) -> float:
    """Coordinate magnitude of the boundary layers, ``(size - 1) / 2``."""
    return (size - 1) / 2


def expected_piece_count(size: int) -> int:
    size = validate_size(size)
    return size**3 - max(size - 2, 0) ** 3


def _paint(index: tuple[int, int, int], size: int) -> tuple[str | None, ...]:
    x, y, z = index
    last = size - 1
    painted = {
        Face.FRONT: z == last,
        Face.BACK: z == 0,
        Face.LEFT: x == 0,
        Face.RIGHT: x == last,
        Face.TOP: y == last,
        Face.BOTTOM: y == 0,
    }
    return tuple(FACE_COLORS[face] if painted[face] else None for face in FACE_ORDER)


def create_initial_cube(size: int) -> tuple[Piece, ...]:
    """Build the solved puzzle of the given size.

    Lattice cells are visited x-major, then y, then z. Interior cells carry no
    sticker and are skipped, so ids stay dense over the visible pieces.
    """
    size = validate_size(size)
    offset = lattice_offset(size)

    pieces: list[Piece] = []
    for index in product(range(size), repeat=3):
        colors = _paint(index, size)
        if all(c is None for c in colors):
            continue
        position = tuple(float(i) - offset for i in index)
        pieces.append(Piece(id=len(pieces), position=position, rotation=(0.0, 0.0, 0.0), colors=colors))
    return tuple(pieces)


def is_on_face(piece: Piece, face: Face | str, size: int) -> bool:
    axis, side = FACE_AXIS_LAYER[parse_face(face)]
    return piece.position[AXIS_INDEX[axis]] == side * lattice_offset(size)


def pieces_on_face(pieces, face: Face | str, size: int) -> tuple[Piece, ...]:
    """Pieces in the boundary layer of ``face``; the layer a turn moves."""
    face = parse_face(face)
    return tuple(p for p in pieces if is_on_face(p, face, size))
