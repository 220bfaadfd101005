"""Core domain layer: sides, results, variants and PGN notation.

Quick start::

    from chessmatch.core import PgnStream, iter_games

    with PgnStream.open("games.pgn") as stream:
        for game in iter_games(stream):
            print(game.white_player, game.black_player, len(game.moves))
"""

from chessmatch.core.enums import GameResult, Side
from chessmatch.core.notation import (
    PgnGame,
    PgnStream,
    StreamStatus,
    game_result_from_pgn,
    iter_games,
    pgn_result_token,
)
from chessmatch.core.variant import Variant

__all__ = [
    # Enums
    "GameResult",
    "Side",
    # Domain objects
    "Variant",
    # Notation
    "PgnGame",
    "PgnStream",
    "StreamStatus",
    "game_result_from_pgn",
    "iter_games",
    "pgn_result_token",
]
