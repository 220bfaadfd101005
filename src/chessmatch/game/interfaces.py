"""Abstract interfaces for the game layer.

Players depend on these, not on Qt: the timer is an injected
:class:`IScheduler` and notifications go through :class:`PlayerEvents`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

import chess

# ── Event definitions ────────────────────────────────────────────────────────

ReadyCallback = Callable[[], None]
StartedThinkingCallback = Callable[[int], None]  # time left in ms
MoveMadeCallback = Callable[[chess.Move], None]
ResignCallback = Callable[[], None]
TimeoutCallback = Callable[[], None]
DebugMessageCallback = Callable[[str], None]


@dataclass
class PlayerEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_ready: list[ReadyCallback] = field(default_factory=list)
    on_started_thinking: list[StartedThinkingCallback] = field(default_factory=list)
    on_move_made: list[MoveMadeCallback] = field(default_factory=list)
    on_resign: list[ResignCallback] = field(default_factory=list)
    on_timeout: list[TimeoutCallback] = field(default_factory=list)
    on_debug_message: list[DebugMessageCallback] = field(default_factory=list)


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IScheduler(ABC):
    """A single-shot timer."""

    @abstractmethod
    def arm(self, msec: int) -> None:
        """Fire once after *msec* milliseconds, replacing any pending shot."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending shot, if any."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Is a shot pending?"""

    @abstractmethod
    def on_fire(self, callback: Callable[[], None]) -> None:
        """Call *callback* whenever a shot fires."""
