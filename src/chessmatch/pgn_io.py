"""PGN file import/export helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from chessmatch.core.notation import PgnGame, PgnStream, iter_games
from chessmatch.settings import MatchSettings

_LOGGER = logging.getLogger(__name__)


def load_games(file_path: Path, settings: MatchSettings | None = None) -> list[PgnGame]:
    """Read every game of the PGN file at *file_path*.

    Games cut short by a malformed item are returned as far as they
    were read.
    """
    settings = settings or MatchSettings()
    with PgnStream.open(file_path, settings.variant()) as stream:
        games = list(iter_games(stream, settings.max_moves))
    _LOGGER.info("Loaded %d games from %s", len(games), file_path)
    return games


def save_game(
    game: PgnGame,
    file_path: Path | None = None,
    settings: MatchSettings | None = None,
) -> Path:
    """Append *game* to a PGN file and return its path.

    Without *file_path* the game goes to ``settings.pgn_output``.
    """
    settings = settings or MatchSettings()
    save_path = Path(file_path) if file_path is not None else Path(settings.pgn_output)
    if save_path.suffix.lower() != ".pgn":
        save_path = save_path.with_suffix(".pgn")

    if not game.has_tags:
        _LOGGER.debug("Not saving a game without tags to %s", save_path)
    game.write(save_path)
    return save_path
