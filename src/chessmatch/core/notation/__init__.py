"""Notation package: PGN stream, items, and game reader/writer."""

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
from chessmatch.core.notation.pgn import (
    PgnGame,
    game_result_from_pgn,
    iter_games,
    pgn_result_token,
)
from chessmatch.core.notation.stream import PgnStream, StreamStatus

__all__ = [
    "PgnStream",
    "StreamStatus",
    "PgnGame",
    "iter_games",
    "pgn_result_token",
    "game_result_from_pgn",
    # Items
    "PgnItem",
    "PgnItemType",
    "PgnErrorKind",
    "TagItem",
    "MoveItem",
    "MoveNumberItem",
    "NagItem",
    "CommentItem",
    "ResultItem",
    "EmptyItem",
    "ErrorItem",
]
