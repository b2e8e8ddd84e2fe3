"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chesstree.core import Board, Color, MoveGenerator

    board = Board.initial()
    gen = MoveGenerator(board)
    for piece in board.pieces(Color.WHITE):
        print(piece, gen.legal_moves(piece))
"""

from chesstree.core.board import Board
from chesstree.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameResult,
    GameStatus,
    MoveFlag,
    PieceType,
)
from chesstree.core.errors import (
    CannotCaptureError,
    GameOverError,
    IllegalMoveError,
    InvalidMoveError,
    NoPieceAtSourceError,
    OwnPieceBlockedError,
    SelfCheckError,
    WrongTurnError,
)
from chesstree.core.move import Move
from chesstree.core.move_generator import MoveGenerator
from chesstree.core.move_tree import MoveTree, MoveTreeNode
from chesstree.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
    parse_move,
    parse_squares,
)
from chesstree.core.piece import Piece, move_template
from chesstree.core.rules import Rules
from chesstree.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "Color",
    "GameResult",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Errors
    "CannotCaptureError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidMoveError",
    "NoPieceAtSourceError",
    "OwnPieceBlockedError",
    "SelfCheckError",
    "WrongTurnError",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveTree",
    "MoveTreeNode",
    "Piece",
    "Rules",
    "move_template",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
    "parse_move",
    "parse_squares",
]
