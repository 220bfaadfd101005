"""Tests for Variant."""

import chess
import chess.variant
import pytest

from chessmatch.core.variant import Variant


class TestVariantLookup:
    def test_standard(self) -> None:
        v = Variant.standard()
        assert v.board_class is chess.Board
        assert v.is_standard
        assert not v.is_random
        assert str(v) == "Standard"

    def test_standard_by_name(self) -> None:
        assert Variant.from_name("standard") == Variant.standard()

    def test_alias_is_case_insensitive(self) -> None:
        v = Variant.from_name("ATOMIC")
        assert v.board_class is chess.variant.AtomicBoard
        assert v.name == "Atomic"
        assert not v.is_standard

    def test_chess960_is_random(self) -> None:
        v = Variant.from_name("Chess960")
        assert v.is_random
        assert v.board_class is chess.Board
        assert not v.is_standard

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(ValueError):
            Variant.from_name("Bughouse on Mars")

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="Empty"):
            Variant.from_name("  ")

    def test_hashable(self) -> None:
        assert len({Variant.standard(), Variant.from_name("Standard")}) == 1


class TestVariantBoards:
    def test_new_board_at_start(self) -> None:
        board = Variant.standard().new_board()
        assert board.fen() == chess.STARTING_FEN

    def test_new_board_from_fen(self) -> None:
        fen = "8/8/8/8/8/8/4K2k/8 b - - 0 1"
        board = Variant.standard().new_board(fen)
        assert board.fen() == fen

    def test_new_board_rejects_bad_fen(self) -> None:
        with pytest.raises(ValueError):
            Variant.standard().new_board("not a fen")

    def test_variant_board_class(self) -> None:
        board = Variant.from_name("Crazyhouse").new_board()
        assert isinstance(board, chess.variant.CrazyhouseBoard)

    def test_of_board_roundtrip(self) -> None:
        assert Variant.of_board(chess.Board()) == Variant.standard()
        assert Variant.of_board(chess.variant.AtomicBoard()) == Variant.from_name("Atomic")
        assert Variant.of_board(chess.Board(chess960=True)).is_random
