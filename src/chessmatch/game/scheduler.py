"""Qt implementation of the single-shot player timer."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QTimer

from chessmatch.game.interfaces import IScheduler


class QtScheduler(IScheduler):
    """:class:`IScheduler` backed by a single-shot ``QTimer``.

    Shots are delivered by the Qt event loop of the thread that owns the
    timer, so a running ``QCoreApplication`` is required.
    """

    __slots__ = ("_timer", "_callbacks")

    def __init__(self) -> None:
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._callbacks: list[Callable[[], None]] = []
        self._timer.timeout.connect(self._fire)

    def arm(self, msec: int) -> None:
        self._timer.start(max(0, msec))

    def cancel(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def on_fire(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def _fire(self) -> None:
        for cb in list(self._callbacks):
            cb()
