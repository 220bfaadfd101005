"""PGN items produced by one parse step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

import chess

from chessmatch.core.enums import GameResult


class PgnItemType(IntEnum):
    TAG = 0
    MOVE = 1
    MOVE_NUMBER = 2
    NAG = 3
    COMMENT = 4
    RESULT = 5
    EMPTY = 6
    ERROR = 7


class PgnErrorKind(IntEnum):
    """Why a PGN item was rejected."""

    MALFORMED_TAG = 0
    UNKNOWN_VARIANT = 1
    INVALID_FEN = 2
    ILLEGAL_MOVE = 3
    INVALID_NAG = 4
    MOVES_BEFORE_TAGS = 5
    TAG_AFTER_MOVES = 6


@dataclass(frozen=True, slots=True)
class TagItem:
    kind: ClassVar[PgnItemType] = PgnItemType.TAG

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class MoveItem:
    kind: ClassVar[PgnItemType] = PgnItemType.MOVE

    san: str
    move: chess.Move


@dataclass(frozen=True, slots=True)
class MoveNumberItem:
    kind: ClassVar[PgnItemType] = PgnItemType.MOVE_NUMBER

    number: str


@dataclass(frozen=True, slots=True)
class NagItem:
    kind: ClassVar[PgnItemType] = PgnItemType.NAG

    value: int


@dataclass(frozen=True, slots=True)
class CommentItem:
    kind: ClassVar[PgnItemType] = PgnItemType.COMMENT

    text: str


@dataclass(frozen=True, slots=True)
class ResultItem:
    kind: ClassVar[PgnItemType] = PgnItemType.RESULT

    result: GameResult


@dataclass(frozen=True, slots=True)
class EmptyItem:
    kind: ClassVar[PgnItemType] = PgnItemType.EMPTY


@dataclass(frozen=True, slots=True)
class ErrorItem:
    """A rejected item; the current game stops here."""

    kind: ClassVar[PgnItemType] = PgnItemType.ERROR

    error: PgnErrorKind
    message: str


PgnItem = Union[
    TagItem,
    MoveItem,
    MoveNumberItem,
    NagItem,
    CommentItem,
    ResultItem,
    EmptyItem,
    ErrorItem,
]
