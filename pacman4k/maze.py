"""
The maze grid: tile kinds, the classic layout and every walkability query
the actors need. Queries outside the grid never raise; they answer as if
the cell were solid wall.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .motion import PRIORITY, Direction

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class MazeError(ValueError):
    """Raised for a layout that cannot be played."""


class TileKind(Enum):
    EMPTY = 0
    WALL = 1
    DOT = 2
    POWER_PELLET = 3
    GHOST_HOUSE = 4
    GHOST_DOOR = 5
    TUNNEL = 6
    PACMAN_SPAWN = 7
    BLINKY_SPAWN = 8
    PINKY_SPAWN = 9
    INKY_SPAWN = 10
    CLYDE_SPAWN = 11


LEGEND = {
    ' ': TileKind.EMPTY,
    '#': TileKind.WALL,
    '.': TileKind.DOT,
    'o': TileKind.POWER_PELLET,
    'h': TileKind.GHOST_HOUSE,
    '-': TileKind.GHOST_DOOR,
    'T': TileKind.TUNNEL,
    'P': TileKind.PACMAN_SPAWN,
    'b': TileKind.BLINKY_SPAWN,
    'p': TileKind.PINKY_SPAWN,
    'i': TileKind.INKY_SPAWN,
    'c': TileKind.CLYDE_SPAWN,
}

GHOST_SPAWN_KINDS = {
    TileKind.BLINKY_SPAWN: "blinky",
    TileKind.PINKY_SPAWN: "pinky",
    TileKind.INKY_SPAWN: "inky",
    TileKind.CLYDE_SPAWN: "clyde",
}

COLLECTIBLES = (TileKind.DOT, TileKind.POWER_PELLET)

# ---------------------------------------------------------------------------
# ARCADE-ACCURATE MAZE LAYOUT (28x31)
# ---------------------------------------------------------------------------

CLASSIC_LAYOUT = [
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o####.#####.##.#####.####o#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "     #.##### ## #####.#     ",
    "     #.##          ##.#     ",
    "     #.## ###--### ##.#     ",
    "######.## #hhhhhh# ##.######",
    "T     .   #hbhphh#   .     T",
    "######.## #hihchh# ##.######",
    "     #.## ######## ##.#     ",
    "     #.##          ##.#     ",
    "     #.## ######## ##.#     ",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#.####.#####.##.#####.####.#",
    "#o..##.......P .......##..o#",
    "###.##.##.########.##.##.###",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
]

# Bonus fruit appears here on the classic layout
CLASSIC_FRUIT_CELL = (17, 13)


class Maze:
    def __init__(self, layout: Sequence[str] = CLASSIC_LAYOUT,
                 fruit_cell: Optional[Cell] = None):
        self._layout = list(layout)
        self._parse_check()
        self.rows = len(self._layout)
        self.cols = len(self._layout[0])
        self.fruit_cell = fruit_cell or (
            CLASSIC_FRUIT_CELL if self._layout == CLASSIC_LAYOUT else None)

        self.grid: List[List[TileKind]] = []
        self.pacman_spawn: Cell = (0, 0)
        self.ghost_spawns: Dict[str, Cell] = {}
        self.door_tiles: List[Cell] = []
        self.tunnels: List[Cell] = []
        self._total_dots = 0
        self._remaining = 0
        self.reset()
        self._validate()

    def _parse_check(self):
        if not self._layout:
            raise MazeError("layout is empty")
        width = len(self._layout[0])
        for r, row in enumerate(self._layout):
            if len(row) != width:
                raise MazeError(f"row {r} has width {len(row)}, expected {width}")
            for c, char in enumerate(row):
                if char not in LEGEND:
                    raise MazeError(f"unknown tile {char!r} at ({r}, {c})")

    def _validate(self):
        missing = set(GHOST_SPAWN_KINDS.values()) - set(self.ghost_spawns)
        if missing:
            raise MazeError(f"missing ghost spawns: {', '.join(sorted(missing))}")
        if not any('P' in row for row in self._layout):
            raise MazeError("missing player spawn")
        if not self.door_tiles:
            raise MazeError("ghost house has no door")
        if len(self.tunnels) % 2:
            raise MazeError("tunnel tiles must come in pairs")
        for cell in self.tunnels:
            if self.opposite_tunnel(*cell) is None:
                raise MazeError(f"tunnel at {cell} has no partner")

    def reset(self):
        """Restore every dot and power pellet for a new level."""
        self.grid = [[LEGEND[char] for char in row] for row in self._layout]
        self.door_tiles = []
        self.tunnels = []
        self.ghost_spawns = {}
        self._total_dots = 0
        for r, row in enumerate(self.grid):
            for c, kind in enumerate(row):
                if kind in COLLECTIBLES:
                    self._total_dots += 1
                elif kind is TileKind.GHOST_DOOR:
                    self.door_tiles.append((r, c))
                elif kind is TileKind.TUNNEL:
                    self.tunnels.append((r, c))
                elif kind is TileKind.PACMAN_SPAWN:
                    self.pacman_spawn = (r, c)
                elif kind in GHOST_SPAWN_KINDS:
                    self.ghost_spawns[GHOST_SPAWN_KINDS[kind]] = (r, c)
        self._remaining = self._total_dots

    # --- Queries ---

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def tile_at(self, row: int, col: int) -> TileKind:
        if not self.in_bounds(row, col):
            return TileKind.EMPTY
        return self.grid[row][col]

    def is_walkable(self, row: int, col: int) -> bool:
        if not self.in_bounds(row, col):
            return False
        return self.grid[row][col] is not TileKind.WALL

    def is_tunnel(self, row: int, col: int) -> bool:
        return self.tile_at(row, col) is TileKind.TUNNEL

    def is_ghost_door(self, row: int, col: int) -> bool:
        return self.tile_at(row, col) is TileKind.GHOST_DOOR

    def is_ghost_house(self, row: int, col: int) -> bool:
        # Ghost spawn tiles sit inside the house
        kind = self.tile_at(row, col)
        return kind is TileKind.GHOST_HOUSE or kind in GHOST_SPAWN_KINDS

    def opposite_tunnel(self, row: int, col: int) -> Optional[Cell]:
        """Partner of a tunnel tile: the other tunnel on the same row if any."""
        if not self.is_tunnel(row, col):
            return None
        others = [t for t in self.tunnels if t != (row, col)]
        for other in others:
            if other[0] == row:
                return other
        return others[0] if others else None

    def can_enter(self, row: int, col: int, can_use_door: bool = False) -> bool:
        if not self.is_walkable(row, col):
            return False
        if self.is_ghost_door(row, col) and not can_use_door:
            return False
        return True

    def valid_directions(self, row: int, col: int,
                         can_use_door: bool = False) -> List[Direction]:
        """Walkable neighbours in UP, LEFT, DOWN, RIGHT order."""
        valid = []
        for direction in PRIORITY:
            vec = direction.vector
            if self.can_enter(row + int(vec.y), col + int(vec.x), can_use_door):
                valid.append(direction)
        return valid

    # --- Collectibles ---

    def consume_dot(self, row: int, col: int) -> TileKind:
        """Eat whatever collectible is on the tile and report what it was."""
        kind = self.tile_at(row, col)
        if kind not in COLLECTIBLES:
            return TileKind.EMPTY
        self.grid[row][col] = TileKind.EMPTY
        self._remaining -= 1
        return kind

    @property
    def total_dots(self) -> int:
        return self._total_dots

    @property
    def dots_remaining(self) -> int:
        return self._remaining
