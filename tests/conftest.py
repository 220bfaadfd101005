"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from chessmatch.game.interfaces import IScheduler


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0
        self._schedulers: list[ManualScheduler] = []

    def __call__(self) -> int:
        return self.now

    def advance(self, msec: int) -> None:
        """Move time forward and fire every scheduler that came due."""
        self.now += msec
        for scheduler in list(self._schedulers):
            scheduler.poll()


class ManualScheduler(IScheduler):
    """Single-shot timer driven by a :class:`ManualClock`."""

    def __init__(self, clock: ManualClock) -> None:
        self._clock = clock
        self._deadline: int | None = None
        self._callbacks: list[Callable[[], None]] = []
        self.armed_with: list[int] = []
        clock._schedulers.append(self)

    def arm(self, msec: int) -> None:
        self._deadline = self._clock.now + msec
        self.armed_with.append(msec)

    def cancel(self) -> None:
        self._deadline = None

    @property
    def is_active(self) -> bool:
        return self._deadline is not None

    def on_fire(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def poll(self) -> None:
        if self._deadline is not None and self._clock.now >= self._deadline:
            self._deadline = None
            for cb in list(self._callbacks):
                cb()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for tests that need Qt's event loop."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
