"""Stateful cube session around the pure turn functions."""

from __future__ import annotations

import threading
from typing import Any

import numpy as np

from .actions import Direction, Face
from .model import Piece, create_initial_cube, pieces_on_face
from .state_codec import (
    move_to_json,
    parse_direction,
    parse_face,
    pieces_to_json,
    validate_moves,
    validate_seed,
    validate_size,
)
from .transform import DEFAULT_SHUFFLE_MOVES, random_moves, rotate_face

SUPPORTED_SIZES = (2, 3)


class TurnInProgressError(RuntimeError):
    """Raised when the cube is changed while a turn animation is pending."""


class CubeEngine:
    """Thread-safe holder of the current puzzle.

    A renderer either applies turns at once with :meth:`turn`, or gates them
    around its animation with :meth:`begin_turn` / :meth:`complete_turn`.
    While a turn is pending no other change is accepted.
    """

    def __init__(self, size: int = 3, seed: int | None = None):
        self._size = validate_size(size, SUPPORTED_SIZES)
        self._lock = threading.RLock()
        self._rng = np.random.default_rng(validate_seed(seed))

        self._pieces = create_initial_cube(self._size)
        self._pending: tuple[Face, Direction] | None = None
        self.step_count = 0
        self.history: list[tuple[Face, Direction]] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def animating(self) -> bool:
        with self._lock:
            return self._pending is not None

    def get_pieces(self) -> tuple[Piece, ...]:
        with self._lock:
            return self._pieces

    def _ensure_idle(self) -> None:
        if self._pending is not None:
            face, direction = self._pending
            raise TurnInProgressError(f"Turn {face.value} {direction.value} is still in progress")

    def reset(self, size: int | None = None) -> tuple[Piece, ...]:
        """Rebuild a solved cube, optionally switching to a new size."""
        with self._lock:
            self._ensure_idle()
            if size is not None:
                self._size = validate_size(size, SUPPORTED_SIZES)
            self._pieces = create_initial_cube(self._size)
            self.step_count = 0
            self.history = []
            return self._pieces

    def _apply(self, face: Face, direction: Direction) -> tuple[Piece, ...]:
        self._pieces = rotate_face(self._pieces, face, direction, self._size)
        self.step_count += 1
        self.history.append((face, direction))
        return self._pieces

    def turn(self, face: Face | str, direction: Direction | str) -> tuple[Piece, ...]:
        face = parse_face(face)
        direction = parse_direction(direction)
        with self._lock:
            self._ensure_idle()
            return self._apply(face, direction)

    def begin_turn(self, face: Face | str, direction: Direction | str) -> list[int]:
        """Open the animation gate for a turn; returns ids of the pieces that move."""
        face = parse_face(face)
        direction = parse_direction(direction)
        with self._lock:
            self._ensure_idle()
            self._pending = (face, direction)
            return [p.id for p in pieces_on_face(self._pieces, face, self._size)]

    def complete_turn(self) -> tuple[Piece, ...]:
        with self._lock:
            if self._pending is None:
                raise TurnInProgressError("No turn in progress")
            face, direction = self._pending
            self._pending = None
            return self._apply(face, direction)

    def cancel_turn(self) -> tuple[Piece, ...]:
        with self._lock:
            if self._pending is None:
                raise TurnInProgressError("No turn in progress")
            self._pending = None
            return self._pieces

    def shuffle(
        self, moves: int = DEFAULT_SHUFFLE_MOVES, seed: int | None = None
    ) -> tuple[tuple[Piece, ...], list[tuple[Face, Direction]]]:
        moves = validate_moves(moves)
        seed = validate_seed(seed)
        with self._lock:
            self._ensure_idle()
            rng = np.random.default_rng(seed) if seed is not None else self._rng
            move_list = random_moves(moves, rng)
            for face, direction in move_list:
                self._apply(face, direction)
            return self._pieces, move_list

    def state_payload(self) -> dict[str, Any]:
        with self._lock:
            pending = None if self._pending is None else move_to_json(*self._pending)
            return {
                "size": self._size,
                "pieces": pieces_to_json(self._pieces),
                "step_count": self.step_count,
                "animating": self._pending is not None,
                "pending": pending,
            }
