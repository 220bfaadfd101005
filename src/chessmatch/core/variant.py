"""Chess variants backed by python-chess board classes."""

from __future__ import annotations

from dataclasses import dataclass

import chess
import chess.variant

_CHESS960_NAME = "Chess960"


@dataclass(frozen=True, slots=True)
class Variant:
    """A chess variant: the board class that enforces its rules.

    ``is_random`` marks variants whose starting position is randomised
    (Chess960), for which the starting FEN is always recorded.
    """

    name: str
    board_class: type[chess.Board]
    is_random: bool = False

    @classmethod
    def standard(cls) -> Variant:
        return cls(chess.Board.aliases[0], chess.Board)

    @classmethod
    def from_name(cls, name: str) -> Variant:
        """Resolve *name* (any python-chess alias, case-insensitive).

        Raises:
            ValueError: if no variant is known under *name*.
        """
        clean = name.strip()
        if not clean:
            raise ValueError("Empty variant name")
        if "960" in clean:
            return cls(_CHESS960_NAME, chess.Board, is_random=True)
        board_class = chess.variant.find_variant(clean)
        return cls(board_class.aliases[0], board_class)

    @classmethod
    def of_board(cls, board: chess.Board) -> Variant:
        """Variant of a live *board*."""
        board_class = type(board)
        if board.chess960 and board_class is chess.Board:
            return cls(_CHESS960_NAME, chess.Board, is_random=True)
        return cls(board_class.aliases[0], board_class, is_random=board.chess960)

    @property
    def is_standard(self) -> bool:
        return self.board_class is chess.Board and not self.is_random

    @property
    def starting_fen(self) -> str:
        return self.board_class.starting_fen

    def new_board(self, fen: str | None = None) -> chess.Board:
        """Board set up at *fen*, or at the variant's starting position.

        Raises:
            ValueError: if the board rejects *fen*.
        """
        return self.board_class(
            fen if fen else self.board_class.starting_fen,
            chess960=self.is_random,
        )

    def __str__(self) -> str:
        return self.name
