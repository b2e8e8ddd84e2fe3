"""High-level chess rules: check detection and game-over classification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from chesstree.core.enums import Color, GameStatus
from chesstree.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesstree.core.board import Board
    from chesstree.core.piece import Piece
    from chesstree.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def check_check(board: Board, king_squares: Mapping[Color, Square]) -> Piece | None:
        """The piece giving check to either king, or ``None``."""
        return MoveGenerator(board).find_checking_piece(king_squares)

    @staticmethod
    def is_in_check(
        board: Board, king_squares: Mapping[Color, Square], color: Color
    ) -> bool:
        king_sq = king_squares.get(color)
        if king_sq is None:
            return False
        return MoveGenerator(board).is_in_check(color, king_sq)

    @staticmethod
    def classify(check_in_play: bool, immovable: bool) -> GameStatus:
        """Checkmate and stalemate both need a side with nothing to play."""
        if not immovable:
            return GameStatus.CONTINUE
        return GameStatus.CHECKMATE if check_in_play else GameStatus.STALEMATE
