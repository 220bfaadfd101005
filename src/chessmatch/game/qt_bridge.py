"""Qt bridge re-emitting player notifications as signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chessmatch.game.player import ChessPlayer


class PlayerSignals(QObject):
    """Qt signal face of a :class:`ChessPlayer`.

    Subscribes to the player's events and re-emits each of them as a
    ``pyqtSignal`` so Qt widgets and queued connections can consume them.
    """

    ready = pyqtSignal()
    started_thinking = pyqtSignal(int)
    move_made = pyqtSignal(object)
    resign = pyqtSignal()
    timeout = pyqtSignal()
    debug_message = pyqtSignal(str)

    def __init__(self, player: ChessPlayer, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._player = player
        events = player.events
        events.on_ready.append(self.ready.emit)
        events.on_started_thinking.append(self.started_thinking.emit)
        events.on_move_made.append(self.move_made.emit)
        events.on_resign.append(self.resign.emit)
        events.on_timeout.append(self.timeout.emit)
        events.on_debug_message.append(self.debug_message.emit)

    @property
    def player(self) -> ChessPlayer:
        return self._player
