"""Character-level cursor over PGN text."""

from __future__ import annotations

import io
import logging
from enum import IntEnum
from pathlib import Path
from types import TracebackType
from typing import TextIO

import chess

from chessmatch.core.variant import Variant

_LOGGER = logging.getLogger(__name__)


class StreamStatus(IntEnum):
    """Read status of a :class:`PgnStream`."""

    OK = 0
    END_OF_STREAM = 1
    READ_ERROR = 2


class PgnStream:
    """A PGN input stream shared by successive :class:`PgnGame` reads.

    Besides the character cursor the stream carries the board into which
    parsed positions and moves are applied, and the default variant of
    games that don't declare one.

    Args:
        source: Text to read, either a string or an open text stream.
        variant: Default variant for games without a ``Variant`` tag.
    """

    __slots__ = (
        "_source",
        "_owns_source",
        "_line_number",
        "_position",
        "_last_char",
        "_pending",
        "_status",
        "board",
        "variant",
    )

    def __init__(self, source: str | TextIO, variant: Variant | None = None) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        self._source: TextIO = source
        self._owns_source = False
        self._line_number = 1
        self._position = 0
        self._last_char = ""
        self._pending: str | None = None
        self._status = StreamStatus.OK
        self.variant = variant
        self.board: chess.Board = (variant or Variant.standard()).new_board()

    @classmethod
    def open(cls, path: str | Path, variant: Variant | None = None) -> PgnStream:
        """Open a UTF-8 PGN file; the stream closes it on :meth:`close`."""
        stream = cls(Path(path).open(encoding="utf-8", newline=""), variant)
        stream._owns_source = True
        return stream

    def close(self) -> None:
        if self._owns_source:
            self._source.close()

    def __enter__(self) -> PgnStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── Status ───────────────────────────────────────────────────────────

    @property
    def status(self) -> StreamStatus:
        if self._pending is not None:
            return StreamStatus.OK
        return self._status

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def position(self) -> int:
        """Number of characters consumed so far."""
        return self._position

    # ── Character primitives ─────────────────────────────────────────────

    def read_char(self) -> str:
        """Next character, or ``""`` once the input is exhausted."""
        if self._pending is not None:
            c = self._pending
            self._pending = None
        else:
            if self._status != StreamStatus.OK:
                self._last_char = ""
                return ""
            try:
                c = self._source.read(1)
            except (OSError, UnicodeDecodeError):
                _LOGGER.exception("Failed to read PGN input on line %d", self._line_number)
                self._status = StreamStatus.READ_ERROR
                self._last_char = ""
                return ""
            if not c:
                self._status = StreamStatus.END_OF_STREAM
                self._last_char = ""
                return ""

        if c == "\n":
            self._line_number += 1
        self._position += 1
        self._last_char = c
        return c

    def rewind_char(self) -> None:
        """Make the last character readable once more.

        Raises:
            RuntimeError: if a rewound character is still pending.
        """
        if self._pending is not None:
            raise RuntimeError("Only one character can be rewound")
        if not self._last_char:
            return
        self._pending = self._last_char
        self._position -= 1
        if self._last_char == "\n":
            self._line_number -= 1
        self._last_char = ""

    def read_line(self) -> str:
        """Rest of the current line; the newline is consumed but not returned."""
        chars: list[str] = []
        while True:
            c = self.read_char()
            if not c or c == "\n":
                break
            chars.append(c)
        return "".join(chars).rstrip("\r")

    def skip_white_space(self) -> None:
        """Consume whitespace, leaving the first non-space character unread."""
        while True:
            c = self.read_char()
            if not c:
                return
            if not c.isspace():
                self.rewind_char()
                return
