"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class Side(StrEnum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> Self:
        return Side.WHITE if self == Side.BLACK else Side.BLACK

    @property
    def symbol(self) -> str:
        """Single character used in position notation"""
        return self.value[0]


class Winner(StrEnum):
    """Outcome of a finished game. A draw is only ever set from outside the rules engine."""

    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"

    @classmethod
    def of(cls, side: Side) -> Self:
        return cls(side.value)


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
