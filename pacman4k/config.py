"""
Configuration - arcade accurate values.

Every distance is in maze pixels (one tile is TILE_SIZE pixels) and every
duration is in milliseconds. Speeds are pixels per millisecond so the
simulation scales explicitly by the elapsed time of each tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

# ---------------------------------------------------------------------------
# GRID
# ---------------------------------------------------------------------------

TILE_SIZE = 16
CENTER_TOLERANCE = 1.0  # pixels

# Reference speeds were tuned in pixels per 60 Hz frame
FRAME_MS = 1000.0 / 60.0

PACMAN_SPEED = 2.0 / FRAME_MS
GHOST_SPEED = 1.75 / FRAME_MS
GHOST_FRIGHTENED_SPEED = 0.9 / FRAME_MS
GHOST_TUNNEL_SPEED = 0.5 / FRAME_MS
GHOST_EATEN_SPEED = GHOST_SPEED * 2
GHOST_HOUSE_SPEED = 0.75 / FRAME_MS

HOUSE_BOB_PX = 4.0

# ---------------------------------------------------------------------------
# LEVEL TABLE
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LevelConfig:
    ghost_speed_mul: float
    player_speed_mul: float
    elroy1_threshold: int
    elroy1_speed_mul: float
    elroy2_threshold: int
    elroy2_speed_mul: float
    fright_duration_ms: float
    fright_flash_count: int
    fruit_bonus_index: int


# Level 1, 2, 3-4, 5-7, 8-10, 11-13, 14-16, 17+
LEVEL_SPECS: Tuple[LevelConfig, ...] = (
    LevelConfig(0.75, 0.80, 20, 0.80, 10, 0.85, 6000, 5, 0),
    LevelConfig(0.85, 0.90, 30, 0.90, 15, 0.95, 5000, 5, 1),
    LevelConfig(0.95, 1.00, 40, 1.00, 20, 1.05, 4000, 5, 2),
    LevelConfig(1.05, 1.00, 40, 1.10, 20, 1.15, 3000, 5, 3),
    LevelConfig(1.15, 1.00, 40, 1.20, 20, 1.25, 2000, 5, 4),
    LevelConfig(1.25, 1.00, 40, 1.30, 20, 1.35, 1000, 3, 5),
    LevelConfig(1.35, 1.00, 40, 1.40, 20, 1.45, 1000, 3, 6),
    LevelConfig(1.45, 1.00, 40, 1.50, 20, 1.55, 0, 0, 7),
)

# First level covered by each LEVEL_SPECS entry
_LEVEL_STARTS = (1, 2, 3, 5, 8, 11, 14, 17)


def config_for(level: int) -> LevelConfig:
    """Level configuration, capped at the last defined entry."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    index = 0
    for i, start in enumerate(_LEVEL_STARTS):
        if level >= start:
            index = i
    return LEVEL_SPECS[index]


# ---------------------------------------------------------------------------
# SCATTER / CHASE SCHEDULES
# ---------------------------------------------------------------------------

SCATTER = "scatter"
CHASE = "chase"

ModeSchedule = List[Tuple[str, float]]

MODE_TIMINGS: Tuple[ModeSchedule, ...] = (
    # Level 1
    [(SCATTER, 7000), (CHASE, 20000), (SCATTER, 7000), (CHASE, 20000),
     (SCATTER, 5000), (CHASE, 20000), (SCATTER, 5000), (CHASE, math.inf)],
    # Levels 2-4
    [(SCATTER, 7000), (CHASE, 20000), (SCATTER, 7000), (CHASE, 20000),
     (SCATTER, 5000), (CHASE, 1033000), (SCATTER, 1), (CHASE, math.inf)],
    # Levels 5+
    [(SCATTER, 5000), (CHASE, 20000), (SCATTER, 5000), (CHASE, 20000),
     (SCATTER, 5000), (CHASE, 1037000), (SCATTER, 1), (CHASE, math.inf)],
)


def mode_schedule_for(level: int) -> ModeSchedule:
    if level <= 1:
        return MODE_TIMINGS[0]
    if level <= 4:
        return MODE_TIMINGS[1]
    return MODE_TIMINGS[2]


# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------

DOT_SCORE = 10
POWER_PELLET_SCORE = 50
GHOST_SCORES = (200, 400, 800, 1600)
# cherry, strawberry, orange, apple, melon, galaxian, bell, key
FRUIT_SCORES = (100, 300, 500, 700, 1000, 2000, 3000, 5000)
EXTRA_LIFE_SCORE = 10000

STARTING_LIVES = 3

# ---------------------------------------------------------------------------
# GHOST HOUSE RELEASE
# ---------------------------------------------------------------------------

# Dots needed to release ghosts from the house; Blinky never waits
GHOST_RELEASE_DOTS = {
    "pinky": 0,
    "inky": 30,
    "clyde": 60,
}

# Time spent in the house after which a ghost leaves regardless of dots
GHOST_RELEASE_TIMEOUT_MS = {
    "pinky": 2000,
    "inky": 6000,
    "clyde": 10000,
}

# ---------------------------------------------------------------------------
# TIMERS
# ---------------------------------------------------------------------------

TUNNEL_STUCK_MS = 1000
FLASH_INTERVAL_MS = 200

DEATH_FRAMES = 11
DEATH_FRAME_MS = 100

READY_MS = 2000
LEVEL_COMPLETE_MS = 3000

FRUIT_DOT_TRIGGERS = (70, 170)
FRUIT_VISIBLE_MS = 10000


# ---------------------------------------------------------------------------
# FRONT END
# ---------------------------------------------------------------------------

@dataclass
class Settings:
    scale: int = 2
    fps: int = 60
    audio_enabled: bool = True
    start_level: int = 1
    max_delta_ms: float = 100.0
    hud_height: int = 48
