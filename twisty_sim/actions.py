"""Face, direction and move tables for the NxN cube."""

from __future__ import annotations

import math
from enum import Enum


class Face(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class Direction(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


FACE_ORDER = (Face.FRONT, Face.BACK, Face.LEFT, Face.RIGHT, Face.TOP, Face.BOTTOM)
FACE_INDEX = {face: i for i, face in enumerate(FACE_ORDER)}
DIRECTION_ORDER = (Direction.CLOCKWISE, Direction.COUNTERCLOCKWISE)
N_FACES = len(FACE_ORDER)

# Solved-state sticker colour per face.
FACE_COLORS = {
    Face.FRONT: "#00ff00",
    Face.BACK: "#0000ff",
    Face.LEFT: "#ff6600",
    Face.RIGHT: "#ff0000",
    Face.TOP: "#ffffff",
    Face.BOTTOM: "#ffff00",
}

# Face -> (normal axis, layer side). A piece is on the face when its
# coordinate along the axis equals side * offset.
FACE_AXIS_LAYER = {
    Face.FRONT: ("z", +1),
    Face.BACK: ("z", -1),
    Face.LEFT: ("x", -1),
    Face.RIGHT: ("x", +1),
    Face.TOP: ("y", +1),
    Face.BOTTOM: ("y", -1),
}

AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# Base turn angle; the per-face sign below turns it into a world-axis angle
# so that clockwise reads clockwise when looking at that face from outside.
TURN_ANGLE = {
    Direction.CLOCKWISE: -math.pi / 2,
    Direction.COUNTERCLOCKWISE: math.pi / 2,
}

FACE_ANGLE_SIGN = {
    Face.FRONT: +1,
    Face.BACK: -1,
    Face.RIGHT: -1,
    Face.LEFT: +1,
    Face.TOP: -1,
    Face.BOTTOM: +1,
}


def effective_angle(face: Face, direction: Direction) -> float:
    """World-axis angle (radians) applied to pieces of ``face`` for one turn."""
    return FACE_ANGLE_SIGN[face] * TURN_ANGLE[direction]


def inverse_direction(direction: Direction) -> Direction:
    if direction is Direction.CLOCKWISE:
        return Direction.COUNTERCLOCKWISE
    return Direction.CLOCKWISE