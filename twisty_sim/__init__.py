"""NxN twisty cube simulator package."""

from .actions import Direction, Face
from .engine import CubeEngine
from .model import Piece, create_initial_cube, pieces_on_face
from .transform import rotate_face, shuffle_cube

__all__ = [
    "CubeEngine",
    "Direction",
    "Face",
    "Piece",
    "create_initial_cube",
    "pieces_on_face",
    "rotate_face",
    "shuffle_cube",
]
