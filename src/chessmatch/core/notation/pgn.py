"""PGN game reader and writer.

A :class:`PgnGame` is read from a :class:`PgnStream` one lexical item at
a time.  The reader is tolerant: a malformed item stops the current game
but leaves the stream positioned so the next game can still be read.
Comments, variations, NAGs and unknown tags are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from pathlib import Path

import chess

from chessmatch.core.enums import GameResult
from chessmatch.core.notation.models import (
    CommentItem,
    EmptyItem,
    ErrorItem,
    MoveItem,
    MoveNumberItem,
    NagItem,
    PgnErrorKind,
    PgnItem,
    PgnItemType,
    ResultItem,
    TagItem,
)
from chessmatch.core.notation.stream import PgnStream, StreamStatus
from chessmatch.core.variant import Variant

_LOGGER = logging.getLogger(__name__)

_PGN_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}
_MAX_NAG = 255
_MOVES_PER_LINE = 8
_BRACKETS = {"[": "]", "(": ")", "{": "}"}
_TAG_ERRORS = {
    PgnErrorKind.MALFORMED_TAG,
    PgnErrorKind.UNKNOWN_VARIANT,
    PgnErrorKind.INVALID_FEN,
}


def pgn_result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a PGN result token."""
    if result == GameResult.WHITE_WINS:
        return "1-0"
    if result == GameResult.BLACK_WINS:
        return "0-1"
    if result == GameResult.DRAW:
        return "1/2-1/2"
    return "*"


def game_result_from_pgn(token: str) -> GameResult:
    """Convert PGN result token to :class:`GameResult`."""
    if token == "1-0":
        return GameResult.WHITE_WINS
    if token == "0-1":
        return GameResult.BLACK_WINS
    if token == "1/2-1/2":
        return GameResult.DRAW
    if token == "*":
        return GameResult.UNKNOWN
    return GameResult.ERROR


class PgnGame:
    """A chess game in PGN form: the seven-tag header data and the moves."""

    __slots__ = (
        "white_player",
        "black_player",
        "result",
        "variant",
        "fen",
        "moves",
        "has_tags",
        "round",
        "truncated",
        "_has_result_tag",
    )

    def __init__(self) -> None:
        self.white_player = ""
        self.black_player = ""
        self.result = GameResult.UNKNOWN
        self.variant = Variant.standard()
        self.fen = ""
        self.moves: list[chess.Move] = []
        self.has_tags = False
        self.round = 0
        self.truncated = False
        self._has_result_tag = False

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_stream(cls, stream: PgnStream, max_moves: int | None = None) -> PgnGame:
        """Read the next game from *stream*.

        Reading stops at the termination marker, at an empty item, at the
        end of the stream, or before a half-move beyond *max_moves*; only
        the last case sets :attr:`truncated`.  A malformed item also stops
        the game; what was read before it is kept, so callers should check
        the result before trusting it.  A game that breaks before its
        first move is skipped up to its end so it isn't read twice.

        Raises:
            ValueError: if *max_moves* is smaller than one.
        """
        if max_moves is not None and max_moves < 1:
            raise ValueError(f"max_moves must be at least 1: {max_moves}")

        game = cls()
        if stream.variant is not None:
            game.variant = stream.variant
        stream.board = game.variant.new_board()

        while stream.status == StreamStatus.OK:
            capped = max_moves is not None and len(game.moves) >= max_moves
            item = game.read_item(stream)
            if isinstance(item, ErrorItem):
                _LOGGER.warning(
                    "PGN error on line %d: %s", stream.line_number, item.message
                )
                if not game.moves:
                    _skip_rest_of_game(stream, in_movetext=item.error not in _TAG_ERRORS)
                break
            if isinstance(item, TagItem):
                game.has_tags = True
            elif isinstance(item, MoveItem) and capped:
                # One move too many: take it back and leave the rest unread
                game.moves.pop()
                stream.board.pop()
                game.truncated = True
                break
            elif isinstance(item, (ResultItem, EmptyItem)):
                break
        return game

    @classmethod
    def from_board(
        cls,
        board: chess.Board,
        white_player: str,
        black_player: str,
        result: GameResult = GameResult.UNKNOWN,
        round: int = 0,
    ) -> PgnGame:
        """Snapshot of a game played out on *board*."""
        game = cls()
        game.white_player = white_player
        game.black_player = black_player
        game.result = result
        game.round = round
        game.variant = Variant.of_board(board)
        game.fen = board.root().fen()
        game.moves = list(board.move_stack)
        game.has_tags = True
        return game

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def is_random_variant(self) -> bool:
        return self.variant.is_random

    @property
    def is_empty(self) -> bool:
        return not self.moves

    @property
    def starting_fen(self) -> str:
        return self.fen or self.variant.starting_fen

    # ── Reading ──────────────────────────────────────────────────────────

    def read_item(self, stream: PgnStream) -> PgnItem:
        """Consume one PGN item from *stream* and apply it to this game."""
        stream.skip_white_space()
        item_type = PgnItemType.MOVE
        opening = ""
        closing = ""
        bracket_level = 0
        text = ""

        while stream.status == StreamStatus.OK:
            c = stream.read_char()
            if not c:
                break
            # Skip everything in front of the first tag
            if not self.has_tags and item_type != PgnItemType.TAG and c != "[":
                continue
            if c in "\r\n" and item_type != PgnItemType.COMMENT:
                break

            if not opening:
                if not text:
                    if c == ";":
                        return CommentItem(stream.read_line().strip())
                    # Escape: the whole line is ignored
                    if c == "%":
                        stream.read_line()
                        continue
                    if c == ".":
                        stream.skip_white_space()
                        continue
                    if c == "$":
                        item_type = PgnItemType.NAG
                        continue
                    if c.isdigit() and item_type == PgnItemType.MOVE:
                        item_type = PgnItemType.MOVE_NUMBER

                if c == "[":
                    if self.moves:
                        # Probably the next game in the stream
                        stream.rewind_char()
                        return self._error(
                            PgnErrorKind.TAG_AFTER_MOVES, "No termination marker"
                        )
                    item_type = PgnItemType.TAG
                elif c in _BRACKETS:
                    item_type = PgnItemType.COMMENT
                closing = _BRACKETS.get(c, "")
                if closing:
                    opening = c

            if opening and c == opening:
                bracket_level += 1
            elif closing and c == closing:
                bracket_level -= 1
                if bracket_level <= 0:
                    break
            elif item_type in (PgnItemType.MOVE, PgnItemType.NAG) and c.isspace():
                break
            elif item_type == PgnItemType.MOVE_NUMBER and (c.isspace() or c == "."):
                break
            else:
                text += c

        text = text.strip()
        if not text:
            return EmptyItem()

        if (
            item_type in (PgnItemType.MOVE, PgnItemType.MOVE_NUMBER)
            and text in _PGN_RESULT_TOKENS
        ):
            return self._read_result(text, stream)
        if item_type == PgnItemType.MOVE_NUMBER and not text.isdigit():
            # Castling written with zeros
            item_type = PgnItemType.MOVE
        if item_type == PgnItemType.TAG:
            return self._read_tag(text, stream)
        if item_type == PgnItemType.MOVE:
            return self._read_move(text, stream)
        if item_type == PgnItemType.NAG:
            return self._read_nag(text)
        if item_type == PgnItemType.MOVE_NUMBER:
            return MoveNumberItem(text)
        return CommentItem(text)

    def _read_result(self, token: str, stream: PgnStream) -> PgnItem:
        result = game_result_from_pgn(token)
        if self._has_result_tag:
            if result != self.result:
                _LOGGER.warning(
                    "Line %d: the termination marker %s differs from the result tag %s",
                    stream.line_number,
                    token,
                    pgn_result_token(self.result),
                )
        else:
            self.result = result
        return ResultItem(result)

    def _read_tag(self, text: str, stream: PgnStream) -> PgnItem:
        key, sep, raw_value = text.partition(" ")
        if not sep or not key.isidentifier():
            return self._error(PgnErrorKind.MALFORMED_TAG, f"Malformed tag: {text}")
        value = raw_value.replace('"', "").strip()

        if key == "White":
            self.white_player = value
        elif key == "Black":
            self.black_player = value
        elif key == "Result":
            self.result = game_result_from_pgn(value)
            self._has_result_tag = True
            if self.result == GameResult.ERROR:
                _LOGGER.debug("Invalid result: %s", value)
        elif key == "Round":
            self.round = int(value) if value.isdigit() else 0
        elif key == "Variant":
            try:
                variant = Variant.from_name(value)
            except ValueError:
                return self._error(
                    PgnErrorKind.UNKNOWN_VARIANT, f"Invalid variant: {value}"
                )
            board = _playable_board(variant, self.fen)
            if board is None:
                return self._error(
                    PgnErrorKind.INVALID_FEN, f"Invalid FEN for {variant}: {self.fen}"
                )
            stream.board = board
            self.variant = variant
        elif key == "FEN":
            board = _playable_board(self.variant, value)
            if board is None:
                return self._error(PgnErrorKind.INVALID_FEN, f"Invalid FEN: {value}")
            stream.board = board
            self.fen = value
        return TagItem(key, value)

    def _read_move(self, san: str, stream: PgnStream) -> PgnItem:
        if not self.has_tags:
            return self._error(PgnErrorKind.MOVES_BEFORE_TAGS, "No tags found")

        # Without a FEN tag the game starts from the variant's start position
        if not self.fen:
            self.fen = self.variant.starting_fen
            stream.board = self.variant.new_board(self.fen)

        board = stream.board
        try:
            move = board.parse_san(san)
        except ValueError:
            return self._error(PgnErrorKind.ILLEGAL_MOVE, f"Illegal move: {san}")
        if not move:
            return self._error(PgnErrorKind.ILLEGAL_MOVE, f"Illegal move: {san}")

        self.moves.append(move)
        board.push(move)
        return MoveItem(san, move)

    def _read_nag(self, text: str) -> PgnItem:
        if not text.isdigit() or int(text) > _MAX_NAG:
            return self._error(PgnErrorKind.INVALID_NAG, f"Invalid NAG: {text}")
        return NagItem(int(text))

    @staticmethod
    def _error(kind: PgnErrorKind, message: str) -> ErrorItem:
        _LOGGER.debug("%s", message)
        return ErrorItem(kind, message)

    # ── Writing ──────────────────────────────────────────────────────────

    def to_pgn(self, today: date | None = None) -> str:
        """Render the game as a PGN record, terminated by a blank line."""
        day = (today or date.today()).strftime("%Y.%m.%d")
        lines = [f'[Date "{day}"]']
        if self.round > 0:
            lines.append(f'[Round "{self.round}"]')
        lines.append(f'[White "{_tag_value(self.white_player)}"]')
        lines.append(f'[Black "{_tag_value(self.black_player)}"]')
        lines.append(f'[Result "{pgn_result_token(self.result)}"]')
        if self.variant != Variant.standard():
            lines.append(f'[Variant "{self.variant.name}"]')
        if self.variant.is_random or self.starting_fen != self.variant.starting_fen:
            lines.append(f'[FEN "{self.starting_fen}"]')

        parts: list[str] = []
        board = self.variant.new_board(self.starting_fen)
        for ply, move in enumerate(self.moves):
            if ply % _MOVES_PER_LINE == 0:
                parts.append("\n")
            if ply % 2 == 0:
                parts.append(f"{ply // 2 + 1}. ")
            parts.append(f"{board.san(move)} ")
            board.push(move)
        if not self.moves:
            parts.append("\n")
        parts.append(pgn_result_token(self.result))

        return "\n".join(lines) + "\n" + "".join(parts) + "\n\n"

    def write(self, path: str | Path) -> None:
        """Append the game to the PGN file at *path*.

        Games without tags are snapshots still in progress and are not
        written.
        """
        if not self.has_tags:
            return
        with Path(path).open("a", encoding="utf-8", newline="\n") as out:
            out.write(self.to_pgn())


def _tag_value(value: str) -> str:
    return value.replace('"', "")


def iter_games(stream: PgnStream, max_moves: int | None = None) -> Iterator[PgnGame]:
    """Yield every tagged game left in *stream*."""
    while stream.status == StreamStatus.OK:
        start = stream.position
        game = PgnGame.from_stream(stream, max_moves)
        if game.has_tags:
            yield game
        if stream.position == start:
            break


def _playable_board(variant: Variant, fen: str) -> chess.Board | None:
    """Board of *variant* at *fen*, or ``None`` if the position can't be played."""
    try:
        board = variant.new_board(fen or None)
    except ValueError:
        return None
    return board if board.is_valid() else None


def _skip_rest_of_game(stream: PgnStream, *, in_movetext: bool) -> None:
    """Discard the remainder of a game that broke before its first move.

    Stops after the termination marker, or in front of a ``[`` that
    follows movetext since that opens the next game's tags.
    """
    while True:
        stream.skip_white_space()
        c = stream.read_char()
        if not c:
            return
        if c == "[":
            if in_movetext:
                stream.rewind_char()
                return
            _skip_past(stream, "]")
        elif c == "{":
            _skip_past(stream, "}")
        elif c in ";%":
            stream.read_line()
        else:
            in_movetext = True
            token = c
            while True:
                c = stream.read_char()
                if not c or c.isspace():
                    break
                if c in "[{;":
                    stream.rewind_char()
                    break
                token += c
            if token in _PGN_RESULT_TOKENS:
                return


def _skip_past(stream: PgnStream, closing: str) -> None:
    while True:
        c = stream.read_char()
        if not c or c == closing:
            return
