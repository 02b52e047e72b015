"""
Ghost modes as a tagged union.

A ghost is in exactly one of these states. Frightened carries the
scatter/chase mode it will fall back to, so combinations such as
"frightened and eaten" cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union


class GhostMode(Enum):
    SCATTER = auto()
    CHASE = auto()
    FRIGHTENED = auto()
    EATEN = auto()
    HOUSE = auto()
    LEAVING_HOUSE = auto()


@dataclass(frozen=True)
class Scatter:
    kind: ClassVar[GhostMode] = GhostMode.SCATTER


@dataclass(frozen=True)
class Chase:
    kind: ClassVar[GhostMode] = GhostMode.CHASE


@dataclass(frozen=True)
class House:
    kind: ClassVar[GhostMode] = GhostMode.HOUSE


@dataclass(frozen=True)
class LeavingHouse:
    kind: ClassVar[GhostMode] = GhostMode.LEAVING_HOUSE


@dataclass(frozen=True)
class Eaten:
    kind: ClassVar[GhostMode] = GhostMode.EATEN


Roaming = Union[Scatter, Chase]


@dataclass
class Frightened:
    previous: Roaming
    duration: float
    elapsed: float = 0.0
    kind: ClassVar[GhostMode] = GhostMode.FRIGHTENED

    @property
    def expired(self) -> bool:
        return self.elapsed >= self.duration


Mode = Union[Scatter, Chase, House, LeavingHouse, Frightened, Eaten]

SCATTER = Scatter()
CHASE = Chase()
HOUSE = House()
LEAVING_HOUSE = LeavingHouse()
EATEN = Eaten()


def roaming(name: str) -> Roaming:
    """Scatter or chase state for a schedule entry name."""
    return CHASE if name == "chase" else SCATTER
