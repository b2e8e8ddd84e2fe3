"""Tests for coordinate move parsing and placement strings."""

import pytest

from chesstree.core.board import Board
from chesstree.core.enums import Color, PieceType
from chesstree.core.move import Move
from chesstree.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
    parse_move,
    parse_squares,
)
from chesstree.core.types import parse_square, square_name


class TestSquares:
    def test_round_trip_names(self) -> None:
        for row in range(8):
            for col in range(8):
                assert parse_square(square_name((row, col))) == (row, col)

    def test_known_squares(self) -> None:
        assert square_name((0, 0)) == "a1"
        assert square_name((7, 7)) == "h8"
        assert parse_square("e4") == (3, 4)

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44"])
    def test_invalid_square(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)


class TestParseMove:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("a2a4", ((1, 0), (3, 0))),
            ("h8e2", ((7, 7), (1, 4))),
            ("a2 to a4", ((1, 0), (3, 0))),
            ("h8 to e2", ((7, 7), (1, 4))),
            ("  E2E4 ", ((1, 4), (3, 4))),
            ("e2 e4", ((1, 4), (3, 4))),
        ],
    )
    def test_forms(self, text: str, expected: tuple) -> None:
        assert parse_squares(text) == expected

    def test_promotion_suffix(self) -> None:
        assert parse_move("e7e8n") == Move((6, 4), (7, 4), PieceType.KNIGHT)
        assert parse_move("e7e8").promotion is None

    @pytest.mark.parametrize("text", ["", "e2", "e2e9", "z2e4", "e2-e4", "e7e8k"])
    def test_rejects_garbage(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_move(text)

    def test_str_round_trip(self) -> None:
        assert str(parse_move("e7 to e8q")) == "e7e8q"


class TestPlacement:
    def test_starting_placement_matches_initial_board(self) -> None:
        assert board_to_placement(Board.initial()) == STARTING_PLACEMENT
        board = board_from_placement(STARTING_PLACEMENT)
        assert board_to_placement(board) == STARTING_PLACEMENT

    def test_extra_fen_fields_ignored(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        king = board[(0, 4)]
        assert king is not None and king.piece_type == PieceType.KING

    def test_positions_set(self) -> None:
        board = board_from_placement("4k3/8/8/3P4/8/8/8/4K3")
        pawn = board[(4, 3)]
        assert pawn is not None
        assert pawn.position == (4, 3)
        assert pawn.color == Color.WHITE

    def test_displaced_pawn_is_past_first_move(self) -> None:
        board = board_from_placement("4k3/2p5/8/3P4/8/8/8/4K3")
        displaced = board[(4, 3)]
        home = board[(6, 2)]
        assert displaced is not None and displaced.move_count == 2
        assert home is not None and home.move_count == 0

    def test_displaced_king_and_rook_have_moved(self) -> None:
        board = board_from_placement("r3k3/8/8/8/8/8/8/1R3K1R")
        assert board[(0, 5)] is not None and board[(0, 5)].has_moved
        assert board[(0, 1)] is not None and board[(0, 1)].has_moved
        assert board[(0, 7)] is not None and not board[(0, 7)].has_moved
        assert board[(7, 0)] is not None and not board[(7, 0)].has_moved
        assert board[(7, 4)] is not None and not board[(7, 4)].has_moved

    @pytest.mark.parametrize(
        "placement",
        [
            "",
            "8/8/8",
            "9/8/8/8/8/8/8/8",
            "4k3/8/8/8/8/8/8/4K2",
            "4k3/8/8/8/8/8/8/4K3R",
            "4k3/8/8/8/8/8/8/4X3",
        ],
    )
    def test_invalid_placement(self, placement: str) -> None:
        with pytest.raises(ValueError):
            board_from_placement(placement)
