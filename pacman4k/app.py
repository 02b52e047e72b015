"""
pygame front end: window, keyboard input, fixed-FPS clock and a read-only
drawing pass over the GameSession after each update.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import pygame

from .audio import AudioEngine
from .config import DEATH_FRAMES, TILE_SIZE, Settings
from .game import GameSession, GameState
from .ghosts import Ghost
from .maze import TileKind
from .modes import GhostMode
from .motion import Direction

logger = logging.getLogger(__name__)

# Colors (Arcade Palette)
BLACK = (0, 0, 0)
WALL_BLUE = (33, 33, 222)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
PELLET_COLOR = (255, 184, 174)
RED = (255, 0, 0)
PINK = (255, 184, 255)
CYAN = (0, 255, 255)
ORANGE = (255, 184, 82)
BLUE_FRIGHTENED = (33, 33, 255)

GHOST_COLORS = {
    "blinky": RED,
    "pinky": PINK,
    "inky": CYAN,
    "clyde": ORANGE,
}

FRUIT_COLORS = (RED, RED, ORANGE, RED, (0, 200, 0), YELLOW, YELLOW, CYAN)

DIR_KEYS = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

MOUTH_ANGLES = {
    Direction.RIGHT: 0, Direction.UP: 90, Direction.LEFT: 180,
    Direction.DOWN: 270, Direction.NONE: 0,
}


class Renderer:
    def __init__(self, screen: pygame.Surface, session: GameSession, settings: Settings):
        self.screen = screen
        self.session = session
        self.scale = settings.scale
        self.offset = settings.hud_height
        self.font = pygame.font.SysFont("monospace", 9 * self.scale, bold=True)
        self.big_font = pygame.font.SysFont("monospace", 16 * self.scale, bold=True)

    def to_screen(self, x: float, y: float):
        return int(x * self.scale), int(y * self.scale) + self.offset

    def draw(self):
        session = self.session
        self.screen.fill(BLACK)
        self.draw_maze()
        if session.state is not GameState.GAME_OVER:
            self.draw_pacman()
        if session.state in (GameState.READY, GameState.PLAYING):
            for ghost in session.ghosts:
                self.draw_ghost(ghost)
        self.draw_ui()

        height = self.screen.get_height()
        if session.state is GameState.READY:
            self.draw_text_centered("READY!", height // 2 + 2 * TILE_SIZE * self.scale, YELLOW)
        elif session.state is GameState.GAME_OVER:
            self.draw_text_centered("GAME OVER", height // 2, RED, self.big_font)
            self.draw_text_centered("PRESS SPACE", height // 2 + 40, WHITE)
        elif session.paused:
            self.draw_text_centered("PAUSED", height // 2, WHITE, self.big_font)

    def draw_maze(self):
        maze = self.session.maze
        s = TILE_SIZE * self.scale
        flash = (self.session.state is GameState.LEVEL_COMPLETE and
                 int(self.session.state_timer // 250) % 2 == 1)
        wall_color = WHITE if flash else WALL_BLUE
        blink_on = (pygame.time.get_ticks() // 150) % 2 == 0

        for r in range(maze.rows):
            for c in range(maze.cols):
                kind = maze.grid[r][c]
                x, y = self.to_screen(c * TILE_SIZE, r * TILE_SIZE)
                if kind is TileKind.WALL:
                    pygame.draw.rect(self.screen, wall_color, (x + 1, y + 1, s - 2, s - 2), 1)
                elif kind is TileKind.GHOST_DOOR:
                    pygame.draw.rect(self.screen, PINK, (x, y + s // 2 - 2, s, 4))
                elif kind is TileKind.DOT:
                    pygame.draw.circle(self.screen, PELLET_COLOR, (x + s // 2, y + s // 2), max(1, s // 8))
                elif kind is TileKind.POWER_PELLET and blink_on:
                    pygame.draw.circle(self.screen, PELLET_COLOR, (x + s // 2, y + s // 2), s // 3)

        rect = self.session.fruit_rect()
        if rect is not None:
            color = FRUIT_COLORS[self.session.config.fruit_bonus_index % len(FRUIT_COLORS)]
            cx, cy = self.to_screen(rect.x + rect.width / 2, rect.y + rect.height / 2)
            pygame.draw.circle(self.screen, color, (cx, cy), s // 2)

    def draw_pacman(self):
        pacman = self.session.pacman
        x, y = self.to_screen(pacman.x, pacman.y)
        r = int(TILE_SIZE * 0.45 * self.scale)

        if pacman.dying:
            # Shrink over the death sequence
            r = int(r * (1 - pacman.death_frame / DEATH_FRAMES))
            if r > 0:
                pygame.draw.circle(self.screen, YELLOW, (x, y), r)
            return

        pygame.draw.circle(self.screen, YELLOW, (x, y), r)
        if pacman.mouth_angle > 0:
            angle = 45 * pacman.mouth_angle
            base = MOUTH_ANGLES[pacman.direction]
            pts = [(x, y)]
            for a in (base + angle, base - angle):
                rad = math.radians(a)
                pts.append((x + math.cos(rad) * (r + 2), y - math.sin(rad) * (r + 2)))
            pygame.draw.polygon(self.screen, BLACK, pts)

    def draw_ghost(self, ghost: Ghost):
        x, y = self.to_screen(ghost.x, ghost.y)
        r = int(TILE_SIZE * 0.45 * self.scale)

        if ghost.mode_kind is GhostMode.EATEN:
            self._draw_ghost_eyes(x, y, r, ghost)
            return
        if ghost.mode_kind is GhostMode.FRIGHTENED:
            color = WHITE if ghost.blinking else BLUE_FRIGHTENED
        else:
            color = GHOST_COLORS[ghost.name]

        pygame.draw.circle(self.screen, color, (x, y - 2), r)
        pygame.draw.rect(self.screen, color, (x - r, y - 2, r * 2, r))
        feet = [(x - r + i * (r * 2) // 4, y + r - 4 + (4 if i % 2 else 0)) for i in range(5)]
        feet += [(x + r, y + r - 4), (x + r, y), (x - r, y)]
        pygame.draw.polygon(self.screen, color, feet)
        if not ghost.frightened:
            self._draw_ghost_eyes(x, y, r, ghost)

    def _draw_ghost_eyes(self, x: int, y: int, r: int, ghost: Ghost):
        eye_r = max(2, r // 3)
        off_x = r // 2
        vec = ghost.direction.vector
        dx, dy = int(vec.x * 2), int(vec.y * 2)
        for ex in (x - off_x, x + off_x):
            pygame.draw.circle(self.screen, WHITE, (ex, y - 3), eye_r)
            pygame.draw.circle(self.screen, WALL_BLUE, (ex + dx, y - 3 + dy), max(1, eye_r // 2))

    def draw_ui(self):
        session = self.session
        width = self.screen.get_width()
        self.screen.blit(self.font.render(f"SCORE {session.score:08d}", True, WHITE), (8, 8))
        hi = self.font.render(f"HIGH {session.high_score:08d}", True, WHITE)
        self.screen.blit(hi, (width // 2 - hi.get_width() // 2, 8))
        lvl = self.font.render(f"LVL {session.level}", True, YELLOW)
        self.screen.blit(lvl, (width - lvl.get_width() - 8, 8))

        for i in range(max(0, session.lives - 1)):
            pygame.draw.circle(self.screen, YELLOW, (16 + i * 24, self.offset - 12), 8)

    def draw_text_centered(self, text: str, y: int, color=WHITE, font=None):
        font = font or self.font
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(self.screen.get_width() // 2, y)))


class App:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        pygame.init()
        self.audio = AudioEngine(self.settings.audio_enabled)
        self.session = GameSession(audio=self.audio, level=self.settings.start_level,
                                   settings=self.settings)

        maze = self.session.maze
        size = (maze.cols * TILE_SIZE * self.settings.scale,
                maze.rows * TILE_SIZE * self.settings.scale + self.settings.hud_height)
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("ULTRA PAC-MAN 4K")
        self.clock = pygame.time.Clock()
        logger.info("window %dx%d at %d fps, audio %s", size[0], size[1],
                    self.settings.fps, "on" if self.audio.enabled else "off")

        self.renderer = Renderer(self.screen, self.session, self.settings)
        self.running = True

    def handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.running = False
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    self.running = False
                elif e.key == pygame.K_p:
                    self.session.toggle_pause()
                elif e.key == pygame.K_SPACE and self.session.game_over:
                    self.session.reset_game()
                elif e.key in DIR_KEYS:
                    self.session.pacman.set_direction(DIR_KEYS[e.key])

    def run(self):
        """Main game loop"""
        self.session.reset_game(self.settings.start_level)
        while self.running:
            dt = self.clock.tick(self.settings.fps)
            self.handle_events()
            self.session.update(dt)
            self.renderer.draw()
            pygame.display.flip()
        self.audio.stop_all()
        pygame.quit()
