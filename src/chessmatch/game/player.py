"""Chess players and the clock protocol shared by all of them."""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

import chess

from chessmatch.core.enums import GameResult, Side
from chessmatch.core.variant import Variant
from chessmatch.game.interfaces import IScheduler, PlayerEvents
from chessmatch.game.time_control import TimeControl

_LOGGER = logging.getLogger(__name__)


def _default_scheduler() -> IScheduler:
    from chessmatch.game.scheduler import QtScheduler

    return QtScheduler()


class ChessPlayer(ABC):
    """A chess player, human or engine.

    The player keeps its own :class:`TimeControl` and a single-shot timer.
    The time control is the authoritative bookkeeper; the timer only wakes
    the game up when the player is probably out of time.  Moves leave the
    player exclusively through :meth:`emit_move`, which reconciles the two.

    Within one game the calls follow ``new_game`` -> ``go`` -> (move made,
    timeout or resignation) -> ``make_move`` / ``end_game``.

    Args:
        name: Display name.
        scheduler: Timer used to detect timeouts; a ``QTimer`` by default.
        variants: Variants the player can play; standard chess by default.
    """

    __slots__ = (
        "_name",
        "_side",
        "_is_ready",
        "_time_control",
        "_opponent",
        "_variants",
        "_scheduler",
        "events",
        "__weakref__",
    )

    def __init__(
        self,
        name: str = "",
        *,
        scheduler: IScheduler | None = None,
        variants: Iterable[Variant] | None = None,
    ) -> None:
        self._name = name
        self._side = Side.NO_SIDE
        self._is_ready = True
        self._time_control = TimeControl()
        self._opponent: weakref.ref[ChessPlayer] | None = None
        self._variants: set[Variant] = set(variants or (Variant.standard(),))
        self._scheduler = scheduler or _default_scheduler()
        self._scheduler.on_fire(self._on_timer_fired)
        self.events = PlayerEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def side(self) -> Side:
        return self._side

    @side.setter
    def side(self, side: Side) -> None:
        self._side = side

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @time_control.setter
    def time_control(self, time_control: TimeControl) -> None:
        self._time_control = time_control.copy()

    @property
    def opponent(self) -> ChessPlayer | None:
        if self._opponent is None:
            return None
        return self._opponent()

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    def supports_variant(self, variant: Variant) -> bool:
        return variant in self._variants

    # ── Game protocol ────────────────────────────────────────────────────

    def new_game(self, side: Side, opponent: ChessPlayer) -> None:
        """Start a new game playing *side* against *opponent*.

        *side* may be ``Side.NO_SIDE`` for a player in force/observer mode.

        Raises:
            RuntimeError: if the player is not ready.
        """
        self._require_ready("new_game")
        if opponent is None:
            raise RuntimeError("A new game needs an opponent")
        self._opponent = weakref.ref(opponent)
        self._side = side
        self._time_control.reset()

    def end_game(self, result: GameResult) -> None:
        """Tell the player that the game ended by *result*."""
        del result
        self._scheduler.cancel()

    def go(self) -> None:
        """Start thinking of the next move."""
        self._require_ready("go")
        tc = self._time_control
        if tc.time_per_tc:
            self._emit(self.events.on_started_thinking, tc.time_left)
        elif tc.time_per_move:
            self._emit(self.events.on_started_thinking, tc.time_per_move)

        tc.start_timer()
        if not tc.is_infinite:
            self._scheduler.arm(tc.time_left)

    @abstractmethod
    def make_move(self, move: chess.Move) -> None:
        """Send the next move to the player.

        In force/observer mode the move wasn't necessarily made by the
        opponent.
        """

    def make_book_move(self, move: chess.Move) -> None:
        """Force the player to play *move* as its next move."""
        self._time_control.start_timer()
        self.make_move(move)
        self._time_control.update()

    # ── Emitters for subclasses ──────────────────────────────────────────

    def emit_move(self, move: chess.Move) -> None:
        """Emit *move*, preceded by a timeout if it came too late."""
        self._time_control.update()
        if self._scheduler.is_active:
            self._scheduler.cancel()
            if self._time_control.time_left <= 0:
                _LOGGER.debug("%s: move %s came too late", self._name, move)
                self._emit(self.events.on_timeout)
        self._emit(self.events.on_move_made, move)

    def emit_ready(self) -> None:
        self._is_ready = True
        self._emit(self.events.on_ready)

    def emit_resign(self) -> None:
        self._scheduler.cancel()
        self._emit(self.events.on_resign)

    def emit_debug_message(self, text: str) -> None:
        _LOGGER.debug("%s: %s", self._name, text)
        self._emit(self.events.on_debug_message, text)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _require_ready(self, operation: str) -> None:
        if not self._is_ready:
            raise RuntimeError(f"{operation}() called before {self._name!r} is ready")

    def _on_timer_fired(self) -> None:
        _LOGGER.debug("%s: out of time", self._name)
        self._emit(self.events.on_timeout)

    @staticmethod
    def _emit(callbacks: list[Callable[..., None]], *args: object) -> None:
        for cb in list(callbacks):
            cb(*args)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, side={self._side})"


class HumanPlayer(ChessPlayer):
    """A human participant whose moves come from the UI via :meth:`submit_move`.

    ``make_move`` is a no-op because humans see the opponent's move on
    the board.
    """

    __slots__ = ()

    @property
    def is_human(self) -> bool:
        return True

    def make_move(self, move: chess.Move) -> None:
        pass  # Shown by the UI

    def submit_move(self, move: chess.Move) -> None:
        """Play *move* chosen by the user."""
        self.emit_move(move)

    def resign(self) -> None:
        self.emit_resign()


class EngineProxyPlayer(ChessPlayer):
    """An engine participant whose protocol lives in a separate transport.

    The proxy only keeps the clock protocol; the transport (a UCI or
    XBoard driver) is reached through callbacks and reports back with
    :meth:`set_ready`, :meth:`deliver_move`, :meth:`resign` and
    :meth:`emit_debug_message`.  The player is not ready until the
    transport has finished its initialisation handshake.

    Args:
        name: Display name.
        on_go: ``(TimeControl) -> None``, start searching.
        on_make_move: ``(Move) -> None``, forward a move to the engine.
        on_end_game: ``(GameResult) -> None``, the game is over.
    """

    __slots__ = ("_on_go", "_on_make_move", "_on_end_game")

    def __init__(
        self,
        name: str = "Engine",
        *,
        scheduler: IScheduler | None = None,
        variants: Iterable[Variant] | None = None,
        on_go: Callable[[TimeControl], None] | None = None,
        on_make_move: Callable[[chess.Move], None] | None = None,
        on_end_game: Callable[[GameResult], None] | None = None,
    ) -> None:
        super().__init__(name, scheduler=scheduler, variants=variants)
        self._is_ready = False
        self._on_go = on_go
        self._on_make_move = on_make_move
        self._on_end_game = on_end_game

    @property
    def is_human(self) -> bool:
        return False

    def set_ready(self) -> None:
        """The transport finished its handshake."""
        self.emit_ready()

    def go(self) -> None:
        super().go()
        if self._on_go is not None:
            self._on_go(self._time_control)

    def make_move(self, move: chess.Move) -> None:
        if self._on_make_move is not None:
            self._on_make_move(move)

    def end_game(self, result: GameResult) -> None:
        super().end_game(result)
        if self._on_end_game is not None:
            self._on_end_game(result)

    def deliver_move(self, move: chess.Move) -> None:
        """The engine answered with *move*."""
        self.emit_move(move)

    def resign(self) -> None:
        self.emit_resign()
