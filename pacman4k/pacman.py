from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .actor import Actor
from .config import (DEATH_FRAME_MS, DEATH_FRAMES, DOT_SCORE, PACMAN_SPEED,
                     POWER_PELLET_SCORE, STARTING_LIVES)
from .maze import Maze, TileKind
from .motion import Direction

if TYPE_CHECKING:
    from .game import GameSession

logger = logging.getLogger(__name__)

MOUTH_SPEED = 0.009  # mouth openings per millisecond


class Pacman(Actor):
    name = "pacman"

    def __init__(self, maze: Maze):
        super().__init__(*maze.pacman_spawn)
        self.maze = maze
        self.lives = STARTING_LIVES
        self.score = 0
        self.dots_eaten = 0
        self.ghosts_eaten = 0
        self.power_mode = False
        self.power_time = 0.0
        self.power_duration = 0.0
        self.dying = False
        self.death_frame = 0
        self.death_time = 0.0
        self.mouth_angle = 0.0
        self.mouth_dir = 1

    def reset(self):
        """New life: back to spawn, power mode and death sequence cleared."""
        super().reset()
        self.ghosts_eaten = 0
        self.power_mode = False
        self.power_time = 0.0
        self.power_duration = 0.0
        self.dying = False
        self.death_frame = 0
        self.death_time = 0.0
        self.mouth_angle = 0.0
        self.mouth_dir = 1

    def reset_level(self):
        self.reset()
        self.dots_eaten = 0

    def reset_game(self):
        self.reset_level()
        self.lives = STARTING_LIVES
        self.score = 0

    def set_direction(self, direction: Direction):
        """Queue a direction change; it is applied at the next tile centre that allows it."""
        if direction is not Direction.NONE:
            self.next_direction = direction

    def add_score(self, points: int):
        self.score += points

    # --- Per-tick update ---

    def update(self, game: "GameSession", dt: float):
        if self.dying:
            self._update_death(game, dt)
            return

        self.speed = PACMAN_SPEED * game.config.player_speed_mul
        start = self.pos.copy()
        self.advance(self.speed * dt, lambda: self._on_center(game))
        self.check_tunnel_stuck(self.maze, dt)

        if self.power_mode:
            self.power_time += dt
            if self.power_time >= self.power_duration:
                self.power_mode = False
                self.ghosts_eaten = 0
                logger.debug("power mode over")

        if self.pos != start:
            self.mouth_angle += MOUTH_SPEED * dt * self.mouth_dir
            if self.mouth_angle > 1:
                self.mouth_angle = 1
                self.mouth_dir = -1
            elif self.mouth_angle < 0:
                self.mouth_angle = 0
                self.mouth_dir = 1

    def _on_center(self, game: "GameSession") -> bool:
        self.try_teleport(self.maze)
        self._eat(game)

        row, col = self.cell
        wanted = self.next_direction
        if wanted is not Direction.NONE and wanted is not self.direction:
            vec = wanted.vector
            if self.maze.can_enter(row + int(vec.y), col + int(vec.x)):
                self.direction = wanted

        if self.direction is Direction.NONE:
            return False
        vec = self.direction.vector
        # Blocked ahead: wait on the centre, still facing the wall
        return self.maze.can_enter(row + int(vec.y), col + int(vec.x))

    def _eat(self, game: "GameSession"):
        kind = self.maze.consume_dot(*self.cell)
        if kind is TileKind.DOT:
            self.add_score(DOT_SCORE)
            self.dots_eaten += 1
            game.audio.play("munch")
        elif kind is TileKind.POWER_PELLET:
            self.add_score(POWER_PELLET_SCORE)
            self.dots_eaten += 1
            duration = game.config.fright_duration_ms
            self.activate_power_mode(duration)
            game.coordinator.enter_frightened(duration)
            game.audio.play("power")
        else:
            return
        game.on_dot_eaten(self.dots_eaten)

    def activate_power_mode(self, duration: float):
        self.ghosts_eaten = 0
        if duration <= 0:
            return
        self.power_mode = True
        self.power_time = 0.0
        self.power_duration = duration

    # --- Death ---

    def die(self):
        if self.dying:
            return
        self.dying = True
        self.death_frame = 0
        self.death_time = 0.0
        self.power_mode = False
        logger.debug("pac-man died at %s", self.cell)

    def _update_death(self, game: "GameSession", dt: float):
        self.death_time += dt
        while self.death_time >= DEATH_FRAME_MS:
            self.death_time -= DEATH_FRAME_MS
            self.death_frame += 1
            if self.death_frame >= DEATH_FRAMES:
                self.dying = False
                self.lives -= 1
                game.on_death_complete()
                return
