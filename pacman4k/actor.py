from __future__ import annotations

import logging
from typing import Callable

from .config import TILE_SIZE, TUNNEL_STUCK_MS
from .motion import (Direction, Rect, at_tile_center, distance_to_next_center,
                     grid_to_pixel, pixel_to_grid)

logger = logging.getLogger(__name__)

_EPS = 1e-9


class Actor:
    """Anything that walks the maze from tile centre to tile centre."""

    name = "actor"

    def __init__(self, row: int, col: int, speed: float = 0.0):
        self.start_cell = (row, col)
        self.pos = grid_to_pixel(row, col)
        self.direction = Direction.NONE
        self.next_direction = Direction.NONE
        self.speed = speed
        self.tunnel_timer = 0.0
        # True while parked on a tile centre that has not been acted on yet
        self._arrived = True

    @property
    def x(self): return self.pos.x

    @property
    def y(self): return self.pos.y

    @property
    def cell(self):
        return pixel_to_grid(self.pos.x, self.pos.y)

    @property
    def row(self): return self.cell[0]

    @property
    def col(self): return self.cell[1]

    def at_tile_center(self) -> bool:
        return at_tile_center(self.pos.x, self.pos.y)

    def snap_to_center(self):
        self.pos = grid_to_pixel(*self.cell)

    def place(self, row: int, col: int):
        self.pos = grid_to_pixel(row, col)
        self._arrived = True

    def reset(self):
        self.place(*self.start_cell)
        self.direction = Direction.NONE
        self.next_direction = Direction.NONE
        self.tunnel_timer = 0.0

    def reverse(self):
        self.direction = self.direction.opposite
        self.next_direction = self.direction

    def rect(self) -> Rect:
        return Rect.around(self.pos, TILE_SIZE)

    def advance(self, budget: float, on_center: Callable[[], bool]):
        """Walk up to budget pixels along the committed direction.

        on_center runs once for every tile centre reached (and for the centre
        the actor is parked on); returning False keeps the actor parked there.
        """
        while True:
            if self._arrived:
                self._arrived = False
                if not on_center():
                    self._arrived = True
                    return
            if budget <= _EPS or self.direction is Direction.NONE:
                return
            gap = distance_to_next_center(self.pos.x, self.pos.y, self.direction)
            step = min(budget, gap)
            self.pos = self.pos + self.direction.vector * step
            budget -= step
            if gap - step <= _EPS:
                self.snap_to_center()
                self._arrived = True

    # --- Tunnels ---

    def try_teleport(self, maze) -> bool:
        """From a tunnel centre, heading out of the maze, jump to the partner."""
        row, col = self.cell
        if self.direction is Direction.NONE or not maze.is_tunnel(row, col):
            return False
        vec = self.direction.vector
        if maze.is_walkable(row + int(vec.y), col + int(vec.x)):
            return False
        return self._jump(maze, row, col)

    def check_tunnel_stuck(self, maze, dt: float) -> bool:
        row, col = self.cell
        if not maze.is_tunnel(row, col):
            self.tunnel_timer = 0.0
            return False
        self.tunnel_timer += dt
        if self.tunnel_timer <= TUNNEL_STUCK_MS:
            return False
        logger.warning("%s wedged in tunnel at %s, forcing teleport", self.name, (row, col))
        if self._jump(maze, row, col):
            self._arrived = True
            return True
        return False

    def _jump(self, maze, row: int, col: int) -> bool:
        partner = maze.opposite_tunnel(row, col)
        if partner is None:
            return False
        self.pos = grid_to_pixel(*partner)
        self.tunnel_timer = 0.0
        logger.debug("%s teleported through tunnel %s -> %s", self.name, (row, col), partner)
        return True
