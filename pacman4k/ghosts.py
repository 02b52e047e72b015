"""
Ghost entity: per-ghost mode state machine, target selection, speed
resolution, tile-centre steering and the ghost house choreography.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from .actor import Actor
from .config import (FLASH_INTERVAL_MS, GHOST_EATEN_SPEED,
                     GHOST_FRIGHTENED_SPEED, GHOST_HOUSE_SPEED,
                     GHOST_RELEASE_DOTS, GHOST_RELEASE_TIMEOUT_MS, GHOST_SPEED,
                     GHOST_TUNNEL_SPEED, HOUSE_BOB_PX, TILE_SIZE, LevelConfig)
from .maze import Maze
from .modes import (EATEN, HOUSE, LEAVING_HOUSE, Chase, Eaten, Frightened,
                    House, LeavingHouse, Mode, Roaming, Scatter)
from .motion import Direction, Vec2, distance, grid_to_pixel

if TYPE_CHECKING:
    from .pacman import Pacman

logger = logging.getLogger(__name__)

_EPS = 1e-9

PINKY_AHEAD_TILES = 4
INKY_PIVOT_TILES = 2
CLYDE_SHY_TILES = 8


class GhostType(Enum):
    BLINKY = "blinky"   # Shadow
    PINKY = "pinky"     # Speedy
    INKY = "inky"       # Bashful
    CLYDE = "clyde"     # Pokey


# Facing while bobbing in the house
HOUSE_DIRECTIONS = {
    GhostType.BLINKY: Direction.DOWN,
    GhostType.PINKY: Direction.DOWN,
    GhostType.INKY: Direction.UP,
    GhostType.CLYDE: Direction.UP,
}


def scatter_corner(ghost_type: GhostType, maze: Maze) -> Vec2:
    """Scatter targets sit just outside the maze corners, as in the arcade."""
    corners = {
        GhostType.BLINKY: (-3, maze.cols - 3),
        GhostType.PINKY: (-3, 2),
        GhostType.INKY: (maze.rows, maze.cols - 1),
        GhostType.CLYDE: (maze.rows, 0),
    }
    return grid_to_pixel(*corners[ghost_type])


# ---------------------------------------------------------------------------
# CHASE TARGETING
# ---------------------------------------------------------------------------

def ahead_of(pacman: "Pacman", tiles: int) -> Vec2:
    """Point some tiles in front of Pac-Man.

    Facing up also shifts the point left by the same amount, reproducing the
    arcade's overflow bug.
    """
    reach = tiles * TILE_SIZE
    target = pacman.pos + pacman.direction.vector * reach
    if pacman.direction is Direction.UP:
        target.x -= reach
    return target


def target_blinky(ghost: "Ghost", pacman: "Pacman", leader: Optional["Ghost"]) -> Vec2:
    return pacman.pos.copy()


def target_pinky(ghost: "Ghost", pacman: "Pacman", leader: Optional["Ghost"]) -> Vec2:
    return ahead_of(pacman, PINKY_AHEAD_TILES)


def target_inky(ghost: "Ghost", pacman: "Pacman", leader: Optional["Ghost"]) -> Vec2:
    if leader is None:
        logger.debug("inky has no leader, targeting pac-man directly")
        return pacman.pos.copy()
    pivot = ahead_of(pacman, INKY_PIVOT_TILES)
    return pivot + (pivot - leader.pos)


def target_clyde(ghost: "Ghost", pacman: "Pacman", leader: Optional["Ghost"]) -> Vec2:
    if distance(ghost.pos, pacman.pos) > CLYDE_SHY_TILES * TILE_SIZE:
        return pacman.pos.copy()
    return ghost.scatter_target.copy()


TargetFn = Callable[["Ghost", "Pacman", Optional["Ghost"]], Vec2]

CHASE_TARGETS: Dict[GhostType, TargetFn] = {
    GhostType.BLINKY: target_blinky,
    GhostType.PINKY: target_pinky,
    GhostType.INKY: target_inky,
    GhostType.CLYDE: target_clyde,
}


# ---------------------------------------------------------------------------
# GHOST
# ---------------------------------------------------------------------------

class Ghost(Actor):
    def __init__(self, ghost_type: GhostType, maze: Maze,
                 rng: Optional[random.Random] = None):
        super().__init__(*maze.ghost_spawns[ghost_type.value])
        self.type = ghost_type
        self.name = ghost_type.value
        self.maze = maze
        self.rng = rng or random.Random()
        self.scatter_target = scatter_corner(ghost_type, maze)

        door_row, door_col = maze.door_tiles[0]
        self.door_target = grid_to_pixel(door_row, door_col)
        self.exit_point = grid_to_pixel(door_row - 1, door_col)
        self.home = self.pos.copy()

        self.mode: Mode = HOUSE
        self.target: Optional[Vec2] = None
        self.elroy_tier = 0
        self.house_timer = 0.0
        self.blinking = False
        self.reset()

    def reset(self):
        """Back to the spawn tile in the house with every flag cleared."""
        super().reset()
        self.direction = HOUSE_DIRECTIONS[self.type]
        self.next_direction = self.direction
        self.mode = HOUSE
        self.target = self.exit_point.copy()
        self.elroy_tier = 0
        self.house_timer = 0.0
        self.blinking = False

    # --- Read-only views ---

    @property
    def mode_kind(self):
        return self.mode.kind

    @property
    def frightened(self) -> bool:
        return isinstance(self.mode, Frightened)

    @property
    def eaten(self) -> bool:
        return isinstance(self.mode, Eaten)

    @property
    def in_house(self) -> bool:
        return isinstance(self.mode, (House, LeavingHouse))

    @property
    def roaming(self) -> bool:
        return isinstance(self.mode, (Scatter, Chase))

    @property
    def can_use_door(self) -> bool:
        return isinstance(self.mode, (LeavingHouse, Eaten))

    @property
    def elroy(self) -> int:
        if self.frightened or self.eaten:
            return 0
        return self.elroy_tier

    # --- Externally driven transitions ---

    def set_roaming(self, mode: Roaming):
        """Scatter/chase switch from the schedule; always turns the ghost around."""
        if not self.roaming or self.mode is mode:
            return
        self.mode = mode
        self.reverse()

    def enter_frightened(self, duration: float) -> bool:
        if duration <= 0 or isinstance(self.mode, (Eaten, House, LeavingHouse)):
            return False
        previous = self.mode.previous if isinstance(self.mode, Frightened) else self.mode
        self.mode = Frightened(previous, duration)
        self.blinking = False
        self.reverse()
        return True

    def eat(self) -> bool:
        if not self.frightened:
            return False
        self.mode = EATEN
        self.blinking = False
        logger.debug("%s eaten, heading home", self.name)
        return True

    def should_leave_house(self, dots_eaten: int) -> bool:
        if self.type is GhostType.BLINKY:
            return True
        return (dots_eaten >= GHOST_RELEASE_DOTS[self.name] or
                self.house_timer >= GHOST_RELEASE_TIMEOUT_MS[self.name])

    # --- Per-tick pipeline ---

    def update(self, dt: float, pacman: "Pacman", ghosts: Sequence["Ghost"],
               global_mode: Roaming, dots_eaten: int, config: LevelConfig):
        self._update_mode(dt, dots_eaten, config)
        self.update_speed(config)
        self.target = self.compute_target(pacman, ghosts)
        self._move(dt, global_mode)
        self.check_tunnel_stuck(self.maze, dt)

    def _update_mode(self, dt: float, dots_eaten: int, config: LevelConfig):
        mode = self.mode
        if isinstance(mode, Frightened):
            mode.elapsed += dt
            if mode.expired:
                self.mode = mode.previous
                self.blinking = False
                self.reverse()
                logger.debug("%s recovered, back to %s", self.name, self.mode.kind.name)
            else:
                self.blinking = self._blink_phase(mode, config)
            return

        if isinstance(mode, Eaten):
            row, col = self.cell
            if self.maze.is_ghost_door(row, col) or self.maze.is_ghost_house(row, col):
                self._return_home()
            return

        if isinstance(mode, House):
            self.house_timer += dt
            if self.should_leave_house(dots_eaten):
                self._start_leaving()

    def _blink_phase(self, mode: Frightened, config: LevelConfig) -> bool:
        if config.fright_flash_count <= 0:
            return False
        window = config.fright_flash_count * 2 * FLASH_INTERVAL_MS
        if mode.elapsed < mode.duration - window:
            return False
        return int(mode.elapsed // FLASH_INTERVAL_MS) % 2 == 0

    def _return_home(self):
        self.place(*self.start_cell)
        self.mode = HOUSE
        self.direction = Direction.DOWN
        self.next_direction = Direction.DOWN
        logger.debug("%s back in the house", self.name)

    def _start_leaving(self):
        self.mode = LEAVING_HOUSE
        if abs(self.pos.x - self.exit_point.x) <= _EPS:
            self.direction = Direction.UP
        elif self.pos.x < self.exit_point.x:
            self.direction = Direction.RIGHT
        else:
            self.direction = Direction.LEFT
        self.next_direction = self.direction
        logger.debug("%s released from the house", self.name)

    def update_speed(self, config: LevelConfig):
        mul = config.ghost_speed_mul
        row, col = self.cell
        if self.frightened:
            self.speed = GHOST_FRIGHTENED_SPEED * mul
        elif self.maze.is_tunnel(row, col):
            self.speed = GHOST_TUNNEL_SPEED * mul
        elif self.eaten:
            self.speed = GHOST_EATEN_SPEED * mul
        elif self.in_house:
            self.speed = GHOST_HOUSE_SPEED
        elif self.elroy == 1:
            self.speed = GHOST_SPEED * config.elroy1_speed_mul
        elif self.elroy == 2:
            self.speed = GHOST_SPEED * config.elroy2_speed_mul
        else:
            self.speed = GHOST_SPEED * mul

    def compute_target(self, pacman: "Pacman", ghosts: Sequence["Ghost"]) -> Optional[Vec2]:
        """Where this ghost steers to; None while frightened (random turns)."""
        mode = self.mode
        if isinstance(mode, (House, LeavingHouse)):
            return self.exit_point.copy()
        if isinstance(mode, Eaten):
            return self.door_target.copy()
        if isinstance(mode, Frightened):
            return None
        if isinstance(mode, Scatter):
            return self.scatter_target.copy()
        leader = next((g for g in ghosts if g.type is GhostType.BLINKY), None)
        return CHASE_TARGETS[self.type](self, pacman, leader)

    # --- Movement ---

    def _move(self, dt: float, global_mode: Roaming):
        budget = self.speed * dt
        if isinstance(self.mode, House):
            self._bob(budget)
        elif isinstance(self.mode, LeavingHouse):
            self._leave(budget, global_mode)
        else:
            self.advance(budget, self._on_center)

    def _bob(self, budget: float):
        if self.direction not in (Direction.UP, Direction.DOWN):
            self.direction = Direction.DOWN
        self.pos.y += self.direction.vector.y * budget
        if self.pos.y <= self.home.y - HOUSE_BOB_PX:
            self.pos.y = self.home.y - HOUSE_BOB_PX
            self.direction = Direction.DOWN
        elif self.pos.y >= self.home.y + HOUSE_BOB_PX:
            self.pos.y = self.home.y + HOUSE_BOB_PX
            self.direction = Direction.UP
        self.next_direction = self.direction

    def _leave(self, budget: float, global_mode: Roaming):
        # Line up with the door first, then rise straight through it
        exit_point = self.exit_point
        while budget > _EPS:
            dx = exit_point.x - self.pos.x
            if abs(dx) > _EPS:
                self.direction = Direction.RIGHT if dx > 0 else Direction.LEFT
                step = min(budget, abs(dx))
                self.pos.x += step if dx > 0 else -step
            elif self.pos.y - exit_point.y > _EPS:
                self.direction = Direction.UP
                step = min(budget, self.pos.y - exit_point.y)
                self.pos.y -= step
            else:
                break
            budget -= step
        self.next_direction = self.direction

        if abs(self.pos.x - exit_point.x) > _EPS or self.pos.y - exit_point.y > _EPS:
            return
        self.place(*self.cell)
        row, col = self.cell
        if self.maze.is_ghost_house(row, col) or self.maze.is_ghost_door(row, col):
            return
        self.mode = global_mode
        self.direction = Direction.LEFT
        self.next_direction = Direction.LEFT
        logger.debug("%s left the house in %s", self.name, global_mode.kind.name)

    def _on_center(self) -> bool:
        self.try_teleport(self.maze)
        self.direction = self.choose_direction(self.target)
        self.next_direction = self.direction
        return self.direction is not Direction.NONE

    def legal_directions(self) -> List[Direction]:
        """Open neighbours in priority order, minus the way back unless it is all there is."""
        row, col = self.cell
        options = self.maze.valid_directions(row, col, self.can_use_door)
        reverse = self.direction.opposite
        forward = [d for d in options if d is not reverse]
        return forward or options

    def choose_direction(self, target: Optional[Vec2]) -> Direction:
        """Choose the turn at a tile centre (arcade AI)."""
        legal = self.legal_directions()
        if not legal:
            # Boxed in; turning around beats freezing
            logger.debug("%s has no legal move at %s, reversing", self.name, self.cell)
            return self.direction.opposite

        if self.frightened or target is None:
            return self.rng.choice(legal)

        row, col = self.cell
        best_dir = legal[0]
        min_dist = float('inf')
        for direction in legal:
            vec = direction.vector
            next_center = grid_to_pixel(row + vec.y, col + vec.x)
            dist = next_center.dist_sq(target)
            if dist < min_dist:
                min_dist = dist
                best_dir = direction
        return best_dir
