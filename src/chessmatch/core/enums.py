"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Side(IntEnum):
    """Side a player plays as.

    ``NO_SIDE`` is used by players in force/observer mode.
    """

    WHITE = 0
    BLACK = 1
    NO_SIDE = 2

    @property
    def opposite(self) -> Side:
        if self == Side.NO_SIDE:
            return self
        return Side(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class GameResult(IntEnum):
    """Outcome of a game.

    Resignations and timeouts are recorded as the win of the other side.
    ``ERROR`` marks a result value that could not be understood.
    """

    UNKNOWN = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
    ERROR = 4
