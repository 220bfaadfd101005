"""Time control bookkeeping for one player."""

from __future__ import annotations

import re
import time
from collections.abc import Callable

MsClock = Callable[[], int]

_TC_RE = re.compile(
    r"^(?:(?P<moves>\d+)/)?(?P<time>\d+(?:\.\d+)?)(?:\+(?P<inc>\d+(?:\.\d+)?))?$"
)


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _seconds_to_ms(text: str) -> int:
    return round(float(text) * 1000)


class TimeControl:
    """A player's clock regime and the time and moves left in it.

    All times are in milliseconds.  The object only does the accounting:
    :meth:`start_timer` marks the start of a move and :meth:`update`
    charges the elapsed time when the move arrives.  Wall-clock time is
    read from *clock*, which tests replace with a manual clock.

    Args:
        time_per_tc: Time budget of one control (0 if unused).
        moves_per_tc: Moves in one control; 0 means the whole game.
        time_per_move: Fixed time per move (0 if unused).
        increment: Time added after every move.
        clock: Millisecond wall clock.
    """

    __slots__ = (
        "time_per_tc",
        "moves_per_tc",
        "time_per_move",
        "increment",
        "time_left",
        "moves_left",
        "moves_played",
        "last_move_time",
        "_clock",
        "_started_at",
    )

    def __init__(
        self,
        time_per_tc: int = 0,
        moves_per_tc: int = 0,
        time_per_move: int = 0,
        increment: int = 0,
        *,
        clock: MsClock = monotonic_ms,
    ) -> None:
        if min(time_per_tc, moves_per_tc, time_per_move, increment) < 0:
            raise ValueError("Time control values must not be negative")
        if time_per_tc and time_per_move:
            raise ValueError("A time control can't have both a budget and a per-move cap")
        self.time_per_tc = time_per_tc
        self.moves_per_tc = moves_per_tc
        self.time_per_move = time_per_move
        self.increment = increment
        self._clock = clock
        self._started_at = 0
        self.time_left = 0
        self.moves_left = 0
        self.moves_played = 0
        self.last_move_time = 0
        self.reset()

    @classmethod
    def from_string(cls, text: str, *, clock: MsClock = monotonic_ms) -> TimeControl:
        """Parse the tournament notation ``moves/seconds+increment``.

        ``40/60+1``, ``300+2`` and ``60`` are tournament controls, ``inf``
        means no limit and ``st=5`` a fixed five seconds per move.

        Raises:
            ValueError: if *text* is not a valid time control.
        """
        clean = text.strip().lower()
        if clean in ("", "inf"):
            return cls(clock=clock)
        if clean.startswith("st="):
            try:
                return cls(time_per_move=_seconds_to_ms(clean[3:]), clock=clock)
            except ValueError:
                raise ValueError(f"Invalid time control: {text!r}") from None

        match = _TC_RE.match(clean)
        if match is None:
            raise ValueError(f"Invalid time control: {text!r}")
        return cls(
            time_per_tc=_seconds_to_ms(match["time"]),
            moves_per_tc=int(match["moves"] or 0),
            increment=_seconds_to_ms(match["inc"] or "0"),
            clock=clock,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_infinite(self) -> bool:
        return self.time_per_tc == 0 and self.time_per_move == 0

    # ── Accounting ───────────────────────────────────────────────────────

    def reset(self) -> None:
        """Refill the clock for a new game."""
        self.time_left = self.time_per_move or self.time_per_tc
        self.moves_left = self.moves_per_tc
        self.moves_played = 0
        self.last_move_time = 0

    def start_timer(self) -> None:
        """Mark the start of a move."""
        self._started_at = self._clock()
        if self.time_per_move:
            self.time_left = self.time_per_move

    def update(self) -> None:
        """Charge the time spent since :meth:`start_timer` for one move."""
        elapsed = self._clock() - self._started_at
        self.last_move_time = elapsed
        self.moves_played += 1

        if self.is_infinite:
            return
        if self.time_per_move:
            self.time_left = self.time_per_move - elapsed
            return

        self.time_left += self.increment - elapsed
        if self.moves_per_tc > 0:
            self.moves_left -= 1
            # Next time control
            if self.moves_left <= 0:
                self.moves_left = self.moves_per_tc
                self.time_left += self.time_per_tc

    def copy(self) -> TimeControl:
        tc = TimeControl(
            self.time_per_tc,
            self.moves_per_tc,
            self.time_per_move,
            self.increment,
            clock=self._clock,
        )
        tc.time_left = self.time_left
        tc.moves_left = self.moves_left
        tc.moves_played = self.moves_played
        tc.last_move_time = self.last_move_time
        return tc

    def __str__(self) -> str:
        if self.time_per_move:
            return f"st={self.time_per_move / 1000:g}"
        if self.is_infinite:
            return "inf"
        text = f"{self.time_per_tc / 1000:g}"
        if self.moves_per_tc:
            text = f"{self.moves_per_tc}/{text}"
        if self.increment:
            text += f"+{self.increment / 1000:g}"
        return text

    def __repr__(self) -> str:
        return f"TimeControl({self})"
