"""Occupancy-aware move filtering + attack detection."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING

from chesstree.core.enums import Color, PieceType
from chesstree.core.move_tree import MoveTreeNode
from chesstree.core.types import Square, is_on_board

if TYPE_CHECKING:
    from chesstree.core.board import Board
    from chesstree.core.move import Move
    from chesstree.core.piece import Piece


class MoveGenerator:
    """Reduces a piece's move tree to the squares it may legally reach.

    "Legal" here means reachable given the board's occupancy; whether the
    move would expose the mover's own king is decided one level up, by
    forecasting the move on the game state.

    Args:
        board: Board to read occupancy from.
        last_move: The move played just before, if any.  En passant is
            only offered against the pawn that made it.
        en_passant_needs_last_move: When ``False`` the move-count rule
            alone decides en passant eligibility.
    """

    __slots__ = ("_board", "_last_move", "_strict_en_passant")

    def __init__(
        self,
        board: Board,
        last_move: Move | None = None,
        en_passant_needs_last_move: bool = True,
    ) -> None:
        self._board = board
        self._last_move = last_move
        self._strict_en_passant = en_passant_needs_last_move

    # -- Legal squares -------------------------------------------------------

    def legal_moves(self, piece: Piece) -> list[Square]:
        """Destinations for *piece*, level order, without duplicates."""
        if piece.piece_type == PieceType.PAWN:
            return self._pawn_moves(piece)

        board = self._board
        legal: list[Square] = []
        queue: deque[MoveTreeNode] = deque(piece.possible_squares().root.children)
        while queue:
            node = queue.popleft()
            occupant = board[node.square]
            if occupant is None:
                legal.append(node.square)
                queue.extend(node.children)
            elif piece.can_capture(occupant):
                # Captured piece blocks the rest of the ray.
                legal.append(node.square)
        return legal

    def _pawn_moves(self, pawn: Piece) -> list[Square]:
        board = self._board
        tree = pawn.possible_squares()
        row, col = pawn.position
        direction = pawn.color.pawn_direction

        for diag in ((row + direction, col + 1), (row + direction, col - 1)):
            if is_on_board(diag) and not pawn.can_capture(board[diag]):
                tree.trim_branch(diag)

        double = (row + 2 * direction, col)
        if pawn.move_count == 0 and is_on_board(double) and not board.is_empty(double):
            tree.trim_branch(double)

        # Pawns never capture straight ahead; this also cuts the double step.
        forward = (row + direction, col)
        if is_on_board(forward) and not board.is_empty(forward):
            tree.trim_branch(forward)

        moves = tree.to_list()
        moves.extend(sq for sq in self.en_passant_moves(pawn) if sq not in moves)
        return moves

    # -- En passant -----------------------------------------------------------

    def en_passant_moves(self, pawn: Piece) -> list[Square]:
        """Empty squares *pawn* may move to by capturing en passant."""
        if pawn.piece_type != PieceType.PAWN:
            return []
        row, col = pawn.position
        direction = pawn.color.pawn_direction
        moves: list[Square] = []
        for side in (col + 1, col - 1):
            beside = (row, side)
            if not is_on_board(beside):
                continue
            target = self._board[beside]
            if target is None or not pawn.can_take_en_passant(target):
                continue
            if self._strict_en_passant and (
                self._last_move is None or self._last_move.to_sq != beside
            ):
                continue
            moves.append((row + direction, side))
        return moves

    def en_passant_victim(self, pawn: Piece, to_sq: Square) -> Square | None:
        """Square of the pawn removed if *pawn* moves to *to_sq* en passant."""
        if to_sq in self.en_passant_moves(pawn):
            return (pawn.position[0], to_sq[1])
        return None

    # -- Attacks --------------------------------------------------------------

    def is_attacked(self, sq: Square, by_color: Color) -> bool:
        """Whether any *by_color* piece could capture on *sq*."""
        for piece in self._board.pieces(by_color):
            if piece.piece_type == PieceType.PAWN:
                if piece.attacks_diagonally(sq):
                    return True
            elif sq in self.legal_moves(piece):
                return True
        return False

    def is_in_check(self, color: Color, king_sq: Square) -> bool:
        return self.is_attacked(king_sq, color.opposite)

    def find_checking_piece(self, king_squares: Mapping[Color, Square]) -> Piece | None:
        """First piece whose legal moves reach the enemy king, or ``None``.

        White pieces are examined against the black king first, then black
        pieces against the white king.  Only one attacker is reported even
        when several give check.
        """
        white, black = self._board.pieces_by_color()
        for attackers, victim in ((white, Color.BLACK), (black, Color.WHITE)):
            king_sq = king_squares.get(victim)
            if king_sq is None:
                continue
            for piece in attackers:
                if king_sq in self.legal_moves(piece):
                    return piece
        return None
