"""Ultra Pac-Man 4K: arcade Pac-Man ghost AI and game simulation."""

from .config import LevelConfig, Settings, config_for
from .game import GameSession, GameState
from .maze import Maze, MazeError, TileKind
from .motion import Direction

__version__ = "1.0.0"

__all__ = [
    "Direction",
    "GameSession",
    "GameState",
    "LevelConfig",
    "Maze",
    "MazeError",
    "Settings",
    "TileKind",
    "config_for",
]
