from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional

from .config import GHOST_SCORES, LevelConfig, ModeSchedule, mode_schedule_for
from .ghosts import Ghost, GhostType
from .maze import Maze
from .modes import Roaming, roaming
from .motion import rects_overlap

if TYPE_CHECKING:
    from .pacman import Pacman

logger = logging.getLogger(__name__)


def elroy_tier(dots_remaining: int, config: LevelConfig) -> int:
    """Blinky's acceleration tier for the number of collectibles left."""
    if dots_remaining <= config.elroy2_threshold:
        return 2
    if dots_remaining <= config.elroy1_threshold:
        return 1
    return 0


class GhostCoordinator:
    """Owns the four ghosts, the scatter/chase clock and player collisions."""

    def __init__(self, maze: Maze, audio=None, rng: Optional[random.Random] = None,
                 level: int = 1):
        self.maze = maze
        self.audio = audio
        self.rng = rng or random.Random()
        self.ghosts: List[Ghost] = [Ghost(t, maze, self.rng) for t in GhostType]
        self.schedule: ModeSchedule = mode_schedule_for(level)
        self.mode_index = 0
        self.mode_timer = 0.0

    def set_mode_schedule(self, level: int):
        self.schedule = mode_schedule_for(level)
        self.mode_index = 0
        self.mode_timer = 0.0

    def reset(self):
        """Fresh life or level: ghosts home, schedule back to its first entry."""
        for ghost in self.ghosts:
            ghost.reset()
        self.mode_index = 0
        self.mode_timer = 0.0

    @property
    def blinky(self) -> Ghost:
        return self.ghosts[0]

    @property
    def global_mode(self) -> Roaming:
        return roaming(self.schedule[self.mode_index][0])

    def schedule_frozen(self) -> bool:
        return all(g.frightened or g.eaten or g.in_house for g in self.ghosts)

    def update(self, dt: float, pacman: "Pacman", dots_eaten: int,
               total_dots: int, config: LevelConfig):
        self._update_schedule(dt)

        self.blinky.elroy_tier = elroy_tier(total_dots - dots_eaten, config)

        mode = self.global_mode
        for ghost in self.ghosts:
            ghost.update(dt, pacman, self.ghosts, mode, dots_eaten, config)

    def _update_schedule(self, dt: float):
        if self.schedule_frozen():
            return
        self.mode_timer += dt
        _, duration = self.schedule[self.mode_index]
        if self.mode_timer >= duration and self.mode_index < len(self.schedule) - 1:
            self.mode_index += 1
            self.mode_timer = 0.0
            self._switch_mode(self.global_mode)

    def _switch_mode(self, mode: Roaming):
        logger.debug("global mode -> %s (entry %d)", mode.kind.name, self.mode_index)
        for ghost in self.ghosts:
            ghost.set_roaming(mode)

    def enter_frightened(self, duration: float) -> int:
        """Frighten every eligible ghost; returns how many were affected."""
        if duration <= 0:
            return 0
        count = sum(1 for g in self.ghosts if g.enter_frightened(duration))
        logger.debug("%d ghosts frightened for %.0f ms", count, duration)
        return count

    def check_collisions(self, pacman: "Pacman") -> bool:
        """Resolve player/ghost contact; True when the player was caught."""
        if pacman.dying:
            return False
        player_rect = pacman.rect()
        for ghost in self.ghosts:
            if ghost.in_house or not rects_overlap(player_rect, ghost.rect()):
                continue
            if ghost.frightened:
                ghost.eat()
                points = GHOST_SCORES[min(pacman.ghosts_eaten, len(GHOST_SCORES) - 1)]
                pacman.ghosts_eaten += 1
                pacman.add_score(points)
                if self.audio:
                    self.audio.play("eat_ghost")
            elif not ghost.eaten:
                logger.debug("pac-man caught by %s at %s", ghost.name, ghost.cell)
                pacman.die()
                return True
        return False
