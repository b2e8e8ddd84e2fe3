"""Coordinate move parsing and board placement strings."""

from __future__ import annotations

import re

from chesstree.core.board import Board
from chesstree.core.enums import Color, PieceType
from chesstree.core.move import Move
from chesstree.core.piece import Piece
from chesstree.core.types import Square, parse_square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_MOVE_RE = re.compile(r"^([a-h][1-8])\s*(?:to\s*)?([a-h][1-8])([qrbn])?$")
_PROMO_PIECE: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}
_PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


# ── Moves ────────────────────────────────────────────────────────────────────


def parse_move(text: str) -> Move:
    """Parse ``"a2a4"`` or ``"a2 to a4"`` (optional promotion letter).

    >>> parse_move("a2a4")
    Move(from_sq=(1, 0), to_sq=(3, 0), promotion=None)
    """
    m = _MOVE_RE.match(text.strip().lower())
    if m is None:
        raise ValueError(f"Cannot parse move: {text!r}")
    from_name, to_name, promo = m.groups()
    return Move(
        parse_square(from_name),
        parse_square(to_name),
        _PROMO_PIECE[promo] if promo else None,
    )


def parse_squares(text: str) -> tuple[Square, Square]:
    """``(from, to)`` pair for a coordinate move string."""
    move = parse_move(text)
    return move.from_sq, move.to_sq


# ── Placement ────────────────────────────────────────────────────────────────


def board_from_placement(placement: str) -> Board:
    """Build a board from a FEN piece-placement field.

    Only the first FEN field is read.  Pieces off their starting squares
    are flagged as having moved: pawns get ``move_count = 2`` (not an en
    passant target), kings and rooks get ``has_moved``.
    """
    ranks = placement.split()[0].split("/") if placement.strip() else []
    if len(ranks) != 8:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        row = 7 - rank_idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                col += step
                continue
            if col >= 8:
                raise ValueError(f"Too many squares in rank {row + 1}: {placement!r}")
            piece = Piece.from_char(ch, (row, col))
            _mark_if_displaced(piece)
            board[(row, col)] = piece
            col += 1
        if col != 8:
            raise ValueError(f"Rank {row + 1} does not cover 8 squares: {placement!r}")
    return board


def board_to_placement(board: Board) -> str:
    """FEN piece-placement field for *board*."""
    ranks: list[str] = []
    for row in range(7, -1, -1):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def _mark_if_displaced(piece: Piece) -> None:
    row, col = piece.position
    if piece.piece_type == PieceType.PAWN:
        if row != _PAWN_HOME_ROW[piece.color]:
            # Past its first move; 1 is reserved for a fresh double step.
            piece.move_count = 2
            piece.has_moved = True
    elif piece.piece_type == PieceType.KING:
        piece.has_moved = (row, col) != (piece.color.home_rank, 4)
    elif piece.piece_type == PieceType.ROOK:
        piece.has_moved = (row, col) not in (
            (piece.color.home_rank, 0),
            (piece.color.home_rank, 7),
        )
