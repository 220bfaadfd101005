"""Game layer: players, their time controls and the timeout protocol.

Quick start::

    from chessmatch.game import HumanPlayer, TimeControl
    from chessmatch.core import Side

    white = HumanPlayer("Alice")
    black = HumanPlayer("Bob")
    white.time_control = TimeControl.from_string("40/300+2")
    white.events.on_move_made.append(print)
    white.new_game(Side.WHITE, black)
    white.go()

``PlayerSignals`` and ``QtScheduler`` need PyQt6 and are imported from
their modules directly.
"""

from chessmatch.game.interfaces import IScheduler, PlayerEvents
from chessmatch.game.player import ChessPlayer, EngineProxyPlayer, HumanPlayer
from chessmatch.game.time_control import TimeControl, monotonic_ms

__all__ = [
    # Interfaces
    "IScheduler",
    "PlayerEvents",
    # Concrete
    "ChessPlayer",
    "EngineProxyPlayer",
    "HumanPlayer",
    "TimeControl",
    "monotonic_ms",
]
