import random

import pytest

from pacman4k.config import Settings
from pacman4k.game import GameSession, GameState
from pacman4k.maze import Maze

# Small closed loop around a four-ghost house, with a tunnel row
SMALL_LAYOUT = [
    "##########",
    "#P.......#",
    "#.##-###.#",
    "#.#bpic#.#",
    "#.######.#",
    "T........T",
    "##########",
]


class RecordingAudio:
    """Audio collaborator that remembers every event it was asked to play."""

    enabled = True

    def __init__(self):
        self.events = []

    def play(self, name):
        self.events.append(name)

    def stop_all(self):
        pass


def put(actor, row, col, direction, offset=0.0):
    """Place an actor on a tile, optionally part-way along direction."""
    actor.place(row, col)
    actor.direction = direction
    actor.next_direction = direction
    if offset:
        actor.pos = actor.pos + direction.vector * offset
        actor._arrived = False


@pytest.fixture
def maze():
    return Maze()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def session(maze, audio, rng):
    return GameSession(maze=maze, audio=audio, rng=rng, settings=Settings(audio_enabled=False))


@pytest.fixture
def playing(session):
    session.state = GameState.PLAYING
    return session
