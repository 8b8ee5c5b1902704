"""Tetromino shapes, rotations, colours and the queue of upcoming pieces."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .util import Vector2, Vector3, random_range

GRID_W = 10
GRID_H = 20
STACK_SIZE = 5
ROTATIONS = 4


class Shape(IntEnum):
    """The seven tetromino shapes; the value also selects the colour."""

    I = 0  # noqa: E741
    O = 1  # noqa: E741
    T = 2
    J = 3
    L = 4
    S = 5
    Z = 6


_COLORS = {
    Shape.I: Vector3(100, 181, 246),
    Shape.O: Vector3(253, 216, 53),
    Shape.T: Vector3(171, 71, 188),
    Shape.J: Vector3(21, 101, 192),
    Shape.L: Vector3(255, 111, 0),
    Shape.S: Vector3(102, 187, 106),
    Shape.Z: Vector3(255, 0, 0),
}

_Layout = tuple[tuple[int, int], ...]

# Block offsets within a 4x4 box, per rotation (clockwise from 0).
_LAYOUTS: dict[Shape, tuple[_Layout, ...]] = {
    Shape.I: (
        ((1, 0), (1, 1), (1, 2), (1, 3)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
        ((0, 2), (1, 2), (2, 2), (3, 2)),
    ),
    Shape.O: (((1, 1), (1, 2), (2, 1), (2, 2)),) * ROTATIONS,
    Shape.T: (
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (1, 1), (1, 2), (0, 1)),
        ((2, 1), (1, 1), (0, 1), (1, 0)),
        ((1, 2), (1, 1), (1, 0), (2, 1)),
    ),
    Shape.J: (
        ((2, 1), (2, 2), (2, 3), (1, 3)),
        ((3, 2), (2, 2), (1, 2), (1, 1)),
        ((2, 3), (2, 2), (2, 1), (3, 1)),
        ((1, 2), (2, 2), (3, 2), (3, 3)),
    ),
    Shape.L: (
        ((1, 1), (1, 2), (1, 3), (2, 3)),
        ((2, 2), (1, 2), (0, 2), (0, 3)),
        ((1, 3), (1, 2), (1, 1), (0, 1)),
        ((0, 2), (1, 2), (2, 2), (2, 1)),
    ),
    Shape.S: (
        ((0, 2), (1, 2), (1, 1), (2, 1)),
        ((1, 1), (1, 2), (2, 2), (2, 3)),
        ((2, 2), (1, 2), (1, 3), (0, 3)),
        ((1, 3), (1, 2), (0, 2), (0, 1)),
    ),
    Shape.Z: (
        ((1, 1), (2, 1), (2, 2), (3, 2)),
        ((2, 0), (2, 1), (1, 1), (1, 2)),
        ((3, 1), (2, 1), (2, 0), (1, 0)),
        ((2, 2), (2, 1), (3, 1), (3, 0)),
    ),
}


@dataclass(frozen=True)
class Tetromino:
    """A piece: its shape, its rotation (0-3) and the positions of its four blocks."""

    shape: Shape
    rotation: int
    blocks: tuple[Vector2, ...]

    def translated(self, dx: int, dy: int) -> Tetromino:
        """Return the same piece moved by (dx, dy)."""
        offset = Vector2(dx, dy)
        return Tetromino(self.shape, self.rotation, tuple(b + offset for b in self.blocks))

    @property
    def color(self) -> Vector3:
        return shape_color(self.shape)


def shape_color(shape: int) -> Vector3:
    """Return the RGB colour of a shape."""
    return _COLORS[Shape(shape)]


def instantiate_tetromino(x: int, y: int, shape: int, rotation: int) -> Tetromino:
    """Build a piece whose 4x4 layout box has its top left at (x, y)."""
    kind = Shape(shape)
    if not 0 <= rotation < ROTATIONS:
        raise ValueError(f"rotation must be 0..3, got {rotation}")
    blocks = tuple(Vector2(bx + x, by + y) for bx, by in _LAYOUTS[kind][rotation])
    return Tetromino(kind, rotation, blocks)


def _flip(value: int) -> int:
    return 3 - value if 0 <= value <= 3 else value


def mirror_tetromino(tetromino: Tetromino) -> Tetromino:
    """Mirror a piece within its 4x4 box.

    Rotations 0 and 2 flip across the vertical axis, 1 and 3 across the
    horizontal one. Coordinates outside 0..3 are left as they are.
    """
    if tetromino.rotation in (0, 2):
        blocks = tuple(Vector2(_flip(b.x), b.y) for b in tetromino.blocks)
    else:
        blocks = tuple(Vector2(b.x, _flip(b.y)) for b in tetromino.blocks)
    return Tetromino(tetromino.shape, tetromino.rotation, blocks)


def _randint(rng: Optional[random.Random], low: int, high: int) -> int:
    return random_range(low, high) if rng is None else rng.randint(low, high)


def random_tetromino(rng: Optional[random.Random] = None) -> Tetromino:
    """Return a piece of random shape and rotation at the origin."""
    shape = _randint(rng, 0, len(Shape) - 1)
    rotation = _randint(rng, 0, ROTATIONS - 1)
    return instantiate_tetromino(0, 0, shape, rotation)


def place_at_spawn(
    tetromino: Tetromino, rng: Optional[random.Random] = None
) -> Tetromino:
    """Move a piece to a random column with its lowest blocks one row above the grid."""
    xs = [b.x for b in tetromino.blocks]
    left = min(xs)
    width = max(xs) - left
    new_x = _randint(rng, 0, GRID_W - (width + 1))
    lowest = max(b.y for b in tetromino.blocks)
    return tetromino.translated(new_x - left, -1 - lowest)


class NextQueue:
    """A fixed-length queue of upcoming pieces, refilled as pieces are taken."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng
        self._pieces: deque[Tetromino] = deque(
            random_tetromino(rng) for _ in range(STACK_SIZE)
        )

    def __len__(self) -> int:
        return len(self._pieces)

    def pop(self) -> Tetromino:
        """Take the next piece and append a fresh random one."""
        piece = self._pieces.popleft()
        self._pieces.append(random_tetromino(self._rng))
        return piece

    def peek(self, count: int) -> list[Tetromino]:
        """Return the next count pieces without taking them."""
        return list(self._pieces)[:count]