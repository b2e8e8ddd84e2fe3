"""Tests for Rules: check detection and game-over classification."""

import pytest

from chesstree.core.board import Board
from chesstree.core.enums import Color, GameStatus, PieceType
from chesstree.core.notation import board_from_placement
from chesstree.core.rules import Rules
from chesstree.core.types import E1, E8


class TestCheckCheck:
    def test_quiet_start(self) -> None:
        kings = {Color.WHITE: E1, Color.BLACK: E8}
        assert Rules.check_check(Board.initial(), kings) is None

    def test_reports_attacker(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/4K2r")
        kings = {Color.WHITE: E1, Color.BLACK: E8}
        checker = Rules.check_check(board, kings)
        assert checker is not None
        assert checker.piece_type == PieceType.ROOK
        assert checker.color == Color.BLACK

    def test_white_attackers_examined_first(self) -> None:
        # Both kings are in check; only the first attacker is reported.
        board = board_from_placement("4k2R/8/8/8/8/8/8/4K2r")
        kings = {Color.WHITE: E1, Color.BLACK: E8}
        checker = Rules.check_check(board, kings)
        assert checker is not None and checker.color == Color.WHITE

    def test_is_in_check_per_color(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/4K2r")
        kings = {Color.WHITE: E1, Color.BLACK: E8}
        assert Rules.is_in_check(board, kings, Color.WHITE)
        assert not Rules.is_in_check(board, kings, Color.BLACK)

    def test_missing_king_is_not_in_check(self) -> None:
        assert not Rules.is_in_check(Board(), {}, Color.WHITE)


class TestClassify:
    @pytest.mark.parametrize(
        ("check_in_play", "immovable", "expected"),
        [
            (False, False, GameStatus.CONTINUE),
            (True, False, GameStatus.CONTINUE),
            (True, True, GameStatus.CHECKMATE),
            (False, True, GameStatus.STALEMATE),
        ],
    )
    def test_table(self, check_in_play: bool, immovable: bool, expected: GameStatus) -> None:
        assert Rules.classify(check_in_play, immovable) == expected
