"""
Session and level controller.

GameSession owns one maze, one player and one ghost coordinator and runs
the per-tick update pipeline. It holds no pygame state, so any number of
sessions can run side by side (the test-suite relies on this).
"""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Optional

from .audio import SilentAudio
from .config import (EXTRA_LIFE_SCORE, FRUIT_DOT_TRIGGERS, FRUIT_SCORES,
                     FRUIT_VISIBLE_MS, LEVEL_COMPLETE_MS, READY_MS, TILE_SIZE,
                     Settings, config_for)
from .coordinator import GhostCoordinator
from .maze import Maze
from .motion import Rect, grid_to_pixel, rects_overlap
from .pacman import Pacman

logger = logging.getLogger(__name__)


class GameState(Enum):
    READY = auto()
    PLAYING = auto()
    DYING = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()


class GameSession:
    def __init__(self, maze: Optional[Maze] = None, audio=None, level: int = 1,
                 rng: Optional[random.Random] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.maze = maze or Maze()
        self.audio = audio or SilentAudio()
        self.level = level
        self.config = config_for(level)
        self.pacman = Pacman(self.maze)
        self.coordinator = GhostCoordinator(self.maze, self.audio, rng, level)

        self.state = GameState.READY
        self.state_timer = 0.0
        self.paused = False
        self.high_score = 0
        self.extra_life_awarded = False
        self.fruit_active = False
        self.fruit_timer = 0.0

    @property
    def ghosts(self):
        return self.coordinator.ghosts

    @property
    def score(self) -> int:
        return self.pacman.score

    @property
    def lives(self) -> int:
        return self.pacman.lives

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    # --- Lifecycle ---

    def reset_game(self, level: Optional[int] = None):
        """Start over from the given level with a full set of lives."""
        self.level = level or self.settings.start_level
        self.config = config_for(self.level)
        self.maze.reset()
        self.pacman.reset_game()
        self.coordinator.set_mode_schedule(self.level)
        self.coordinator.reset()
        self.extra_life_awarded = False
        self._clear_fruit()
        self._enter(GameState.READY)
        self.audio.play("intro")
        logger.info("new game at level %d", self.level)

    def toggle_pause(self):
        if self.state is not GameState.GAME_OVER:
            self.paused = not self.paused

    def _enter(self, state: GameState):
        self.state = state
        self.state_timer = 0.0

    def _clear_fruit(self):
        self.fruit_active = False
        self.fruit_timer = 0.0

    # --- Tick ---

    def update(self, dt: float):
        """Advance the simulation by dt milliseconds."""
        if self.paused:
            return
        dt = min(max(dt, 0.0), self.settings.max_delta_ms)

        if self.state is GameState.READY:
            self.state_timer += dt
            if self.state_timer >= READY_MS:
                self._enter(GameState.PLAYING)
        elif self.state is GameState.PLAYING:
            self._update_playing(dt)
        elif self.state is GameState.DYING:
            self.pacman.update(self, dt)
        elif self.state is GameState.LEVEL_COMPLETE:
            self.state_timer += dt
            if self.state_timer >= LEVEL_COMPLETE_MS:
                self.next_level()

    def _update_playing(self, dt: float):
        pacman = self.pacman
        pacman.update(self, dt)
        self.coordinator.update(dt, pacman, pacman.dots_eaten,
                                self.maze.total_dots, self.config)
        self._update_fruit(dt)

        if self.coordinator.check_collisions(pacman):
            self._enter(GameState.DYING)
            self.audio.play("death")
        self._check_extra_life()
        self.high_score = max(self.high_score, pacman.score)

        if self.state is GameState.PLAYING and self.maze.dots_remaining == 0:
            self._enter(GameState.LEVEL_COMPLETE)
            self.audio.play("level_complete")
            logger.info("level %d complete, score %d", self.level, pacman.score)

    def _check_extra_life(self):
        if not self.extra_life_awarded and self.pacman.score >= EXTRA_LIFE_SCORE:
            self.extra_life_awarded = True
            self.pacman.lives += 1
            self.audio.play("extra_life")
            logger.info("extra life at %d points", self.pacman.score)

    # --- Fruit ---

    def on_dot_eaten(self, dots_eaten: int):
        if dots_eaten in FRUIT_DOT_TRIGGERS and self.maze.fruit_cell:
            self.fruit_active = True
            self.fruit_timer = FRUIT_VISIBLE_MS

    def fruit_rect(self) -> Optional[Rect]:
        if not self.fruit_active:
            return None
        return Rect.around(grid_to_pixel(*self.maze.fruit_cell), TILE_SIZE)

    @property
    def fruit_value(self) -> int:
        return FRUIT_SCORES[min(self.config.fruit_bonus_index, len(FRUIT_SCORES) - 1)]

    def _update_fruit(self, dt: float):
        if not self.fruit_active:
            return
        self.fruit_timer -= dt
        if self.fruit_timer <= 0:
            self._clear_fruit()
        elif rects_overlap(self.pacman.rect(), self.fruit_rect()):
            self.pacman.add_score(self.fruit_value)
            self._clear_fruit()
            self.audio.play("fruit")

    # --- Notifications from the entities ---

    def on_death_complete(self):
        if self.pacman.lives <= 0:
            self._enter(GameState.GAME_OVER)
            self.high_score = max(self.high_score, self.pacman.score)
            logger.info("game over at level %d, score %d", self.level, self.pacman.score)
            return
        self.pacman.reset()
        self.coordinator.reset()
        self._clear_fruit()
        self._enter(GameState.READY)

    def next_level(self):
        self.level += 1
        self.config = config_for(self.level)
        self.maze.reset()
        self.pacman.reset_level()
        self.coordinator.set_mode_schedule(self.level)
        self.coordinator.reset()
        self._clear_fruit()
        self._enter(GameState.READY)
        logger.info("level %d start", self.level)
