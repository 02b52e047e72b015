"""Motion primitives: directions, vectors and grid/pixel conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import CENTER_TOLERANCE, TILE_SIZE


@dataclass
class Vec2:
    x: float
    y: float

    def __add__(self, o): return Vec2(self.x + o.x, self.y + o.y)
    def __sub__(self, o): return Vec2(self.x - o.x, self.y - o.y)
    def __mul__(self, k): return Vec2(self.x * k, self.y * k)
    def __eq__(self, o): return abs(self.x - o.x) < 0.001 and abs(self.y - o.y) < 0.001

    def dist_sq(self, o):
        dx = self.x - o.x
        dy = self.y - o.y
        return dx * dx + dy * dy

    def copy(self):
        return Vec2(self.x, self.y)


class Direction(Enum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3
    NONE = 4

    @property
    def vector(self) -> Vec2:
        return Vec2(*_VECTORS[self])

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.NONE: (0, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.NONE: Direction.NONE,
}

# Tie-break order for ghost decisions
PRIORITY = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)


def vector_to_direction(x: float, y: float) -> Direction:
    for direction, (dx, dy) in _VECTORS.items():
        if (dx, dy) == (x, y):
            return direction
    return Direction.NONE


def pixel_to_grid(x: float, y: float) -> Tuple[int, int]:
    """(row, col) of the tile containing a pixel position."""
    return math.floor(y / TILE_SIZE), math.floor(x / TILE_SIZE)


def grid_to_pixel(row: float, col: float) -> Vec2:
    """Pixel position of a tile's centre."""
    return Vec2(col * TILE_SIZE + TILE_SIZE / 2, row * TILE_SIZE + TILE_SIZE / 2)


def at_tile_center(x: float, y: float, tolerance: float = CENTER_TOLERANCE) -> bool:
    row, col = pixel_to_grid(x, y)
    center = grid_to_pixel(row, col)
    return abs(x - center.x) <= tolerance and abs(y - center.y) <= tolerance


def distance(a: Vec2, b: Vec2) -> float:
    return math.sqrt(a.dist_sq(b))


def distance_to_next_center(x: float, y: float, direction: Direction) -> float:
    """Pixels left to travel along direction before reaching a tile centre.

    A position sitting on a centre reports the full tile, never zero.
    """
    if direction is Direction.NONE:
        return 0.0
    row, col = pixel_to_grid(x, y)
    center = grid_to_pixel(row, col)
    vec = direction.vector
    if vec.x:
        offset = (center.x - x) * vec.x
    else:
        offset = (center.y - y) * vec.y
    if offset > 1e-9:
        return offset
    return offset + TILE_SIZE


@dataclass
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def around(cls, pos: Vec2, size: float = TILE_SIZE) -> "Rect":
        return cls(pos.x - size / 2, pos.y - size / 2, size, size)


def rects_overlap(a: Rect, b: Rect) -> bool:
    return (a.x < b.x + b.width and a.x + a.width > b.x and
            a.y < b.y + b.height and a.y + a.height > b.y)
