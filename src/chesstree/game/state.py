"""Game state machine: turns, special moves, check and game-over detection."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

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
    NoPieceAtSourceError,
    OwnPieceBlockedError,
    SelfCheckError,
    WrongTurnError,
)
from chesstree.core.move import Move
from chesstree.core.move_generator import MoveGenerator
from chesstree.core.notation import board_from_placement
from chesstree.core.piece import Piece
from chesstree.core.rules import Rules
from chesstree.core.types import Square, is_on_board, square_name
from chesstree.game.interfaces import GamePhase, RuleSet

_LOGGER = logging.getLogger(__name__)

PromotionChooser = Callable[[Color], PieceType]


@dataclass(slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    flag: MoveFlag = MoveFlag.NORMAL
    captured: PieceType | None = None
    was_check: bool = False


@dataclass(slots=True)
class _MoveDelta:
    """Everything :meth:`GameState._undo` needs to reverse one applied move."""

    piece: Piece
    from_sq: Square
    to_sq: Square
    prior_move_count: int
    prior_has_moved: bool
    captured: Piece | None
    prior_king_sq: Square | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    en_passant_sq: Square | None = None
    en_passant_piece: Piece | None = None
    promoted: Piece | None = None
    rook: Piece | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None
    rook_had_moved: bool = False

    @property
    def taken(self) -> Piece | None:
        return self.captured if self.captured is not None else self.en_passant_piece


@dataclass
class GameState:
    """Owns the board, whose turn it is, the king cache and the history.

    The only supported way to change the position is :meth:`make_move`.
    Speculative moves (:meth:`available_moves`, self-check rejection) go
    through a symmetric apply/undo pair and leave no trace.

    ``king_squares[color]`` always equals the position of that color's
    king; both are written by the same apply/undo step.
    """

    rules: RuleSet = field(default_factory=RuleSet.standard)
    promotion_chooser: PromotionChooser | None = None

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    king_squares: dict[Color, Square] = field(default_factory=dict, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    castle_pending: bool = field(default=False, init=False)
    check_in_play: bool = field(default=False, init=False)
    status: GameStatus = field(default=GameStatus.CONTINUE, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)

    def __post_init__(self) -> None:
        self.king_squares = self._find_kings(self.board)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Initialise (or reset) the game, optionally from a FEN placement.

        Raises ``ValueError`` for a position that could not arise in play:
        a color without exactly one king, or the side not on move in check.
        """
        board = board_from_placement(placement) if placement else Board.initial()
        kings = self._find_kings(board)
        if Rules.is_in_check(board, kings, side_to_move.opposite):
            raise ValueError(f"{side_to_move.opposite} is in check but not on move")

        self.board = board
        self.king_squares = kings
        self.side_to_move = side_to_move
        self.move_history.clear()
        self.castle_pending = False
        self.check_in_play = Rules.is_in_check(self.board, self.king_squares, side_to_move)
        self.status = GameStatus.CONTINUE
        self.result = GameResult.IN_PROGRESS
        self.phase = GamePhase.AWAITING_MOVE

    @classmethod
    def from_placement(
        cls,
        placement: str,
        side_to_move: Color = Color.WHITE,
        rules: RuleSet | None = None,
    ) -> GameState:
        state = cls(rules=rules or RuleSet.standard())
        state.setup(placement, side_to_move)
        return state

    @staticmethod
    def _find_kings(board: Board) -> dict[Color, Square]:
        kings: dict[Color, list[Square]] = {Color.WHITE: [], Color.BLACK: []}
        for piece in board:
            if piece.piece_type == PieceType.KING:
                kings[piece.color].append(piece.position)
        for color, squares in kings.items():
            if len(squares) != 1:
                raise ValueError(f"Expected one {color} king, found {len(squares)}")
        return {color: squares[0] for color, squares in kings.items()}

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Color | None:
        if self.result == GameResult.WHITE_WINS:
            return Color.WHITE
        if self.result == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1].move if self.move_history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def generator(self) -> MoveGenerator:
        return MoveGenerator(
            self.board,
            self.last_move,
            en_passant_needs_last_move=self.rules.en_passant_needs_last_move,
        )

    def legal_moves(self, target: Piece | Square) -> list[Square]:
        """Occupancy-legal destinations for a piece (or the piece on a square).

        Castling and self-check are not considered here; see
        :meth:`available_moves` for the fully filtered set.
        """
        piece = target if isinstance(target, Piece) else self.board[target]
        if piece is None:
            return []
        return self.generator().legal_moves(piece)

    # ── Validation ───────────────────────────────────────────────────────

    def validate_move(self, from_sq: Square, to_sq: Square) -> Piece:
        """Return the piece to move, or raise an ``InvalidMoveError``.

        Sets :attr:`castle_pending` when the move is a castle.
        """
        self.castle_pending = False
        if not (is_on_board(from_sq) and is_on_board(to_sq)):
            raise IllegalMoveError(
                f"Square off the board: {from_sq} -> {to_sq}", from_sq, to_sq
            )

        piece = self.board[from_sq]
        if piece is None:
            raise NoPieceAtSourceError(from_sq, to_sq)
        if piece.color != self.side_to_move:
            raise WrongTurnError(from_sq, to_sq)
        if from_sq == to_sq:
            raise IllegalMoveError(
                f"Your {piece.piece_type} must leave {square_name(from_sq)} to move.",
                from_sq,
                to_sq,
            )

        target = self.board[to_sq]
        if (
            target is not None
            and target.piece_type == PieceType.KING
            and target.color != piece.color
        ):
            raise CannotCaptureError(
                f"The {target.color} king on {square_name(to_sq)} cannot be captured.",
                from_sq,
                to_sq,
            )

        if to_sq in self.legal_moves(piece):
            return piece

        if (
            piece.piece_type == PieceType.KING
            and not piece.has_moved
            and self.can_castle(from_sq, to_sq)
        ):
            self.castle_pending = True
            return piece

        route = f"from {square_name(from_sq)} to {square_name(to_sq)}"
        occupant = self.board[to_sq]
        if occupant is not None and occupant.color == piece.color:
            raise OwnPieceBlockedError(
                f"Your {piece.piece_type} cannot move {route}: your own "
                f"{occupant.piece_type} is there.",
                from_sq,
                to_sq,
            )
        if occupant is not None:
            raise CannotCaptureError(
                f"Your {piece.piece_type} cannot capture {route}.", from_sq, to_sq
            )
        raise IllegalMoveError(
            f"Your {piece.piece_type} cannot move {route}.", from_sq, to_sq
        )

    def can_castle(self, from_sq: Square, to_sq: Square) -> bool:
        """King on *from_sq* may castle by stepping two files to *to_sq*."""
        row, col = from_sq
        if to_sq[0] != row:
            return False
        king = self.board[from_sq]
        if king is None or king.piece_type != PieceType.KING or king.has_moved:
            return False

        distance = to_sq[1] - col
        if distance == -2:
            rook_sq, between = (row, 0), (1, 2, 3)
        elif distance == 2:
            rook_sq, between = (row, 7), (5, 6)
        else:
            return False

        rook = self.board[rook_sq]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            return False
        if any(not self.board.is_empty((row, c)) for c in between):
            return False

        if not self.rules.castle_through_check:
            gen = self.generator()
            enemy = king.color.opposite
            # Landing square is covered by the self-check forecast.
            for c in (col, col + distance // 2):
                if gen.is_attacked((row, c), enemy):
                    return False
        return True

    # ── Move application ─────────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Validate and commit a move, then re-evaluate check and game over.

        *promotion* picks the piece for a promoting pawn; when omitted the
        injected :attr:`promotion_chooser` is asked, falling back to the
        rule set's default.
        """
        if self.is_game_over:
            raise GameOverError("The game is over.", from_sq, to_sq)
        if promotion is not None and promotion not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to {promotion}", from_sq, to_sq)

        piece = self.validate_move(from_sq, to_sq)
        castle = self.castle_pending
        self.castle_pending = False

        if not self.forecast(from_sq, to_sq, castle):
            _LOGGER.debug(
                "Rejected %s%s: leaves king in check",
                square_name(from_sq),
                square_name(to_sq),
            )
            raise SelfCheckError(
                f"Moving that {piece.piece_type} leaves your king in check!",
                from_sq,
                to_sq,
            )

        kind: PieceType | None = None
        if self._promotes(piece, to_sq):
            kind = promotion or self._ask_promotion(piece.color)
        delta = self._apply(from_sq, to_sq, kind, castle)

        move = Move(from_sq, to_sq, kind)
        self.check_in_play = Rules.check_check(self.board, self.king_squares) is not None
        taken = delta.taken
        record = MoveRecord(
            move=move,
            notation=str(move),
            flag=delta.flag,
            captured=taken.piece_type if taken is not None else None,
            was_check=self.check_in_play,
        )
        self.move_history.append(record)
        self.side_to_move = self.side_to_move.opposite
        _LOGGER.info("%s played %s", piece.color, record.notation)

        self.check_game_over()
        return record

    def _promotes(self, piece: Piece, to_sq: Square) -> bool:
        return piece.piece_type == PieceType.PAWN and to_sq[0] == piece.color.back_rank

    def _ask_promotion(self, color: Color) -> PieceType:
        if self.promotion_chooser is None:
            return self.rules.default_promotion
        kind = self.promotion_chooser(color)
        if kind not in PROMOTION_TYPES:
            raise ValueError(f"Promotion chooser returned {kind!r}")
        return kind

    def _apply(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None,
        castle: bool,
    ) -> _MoveDelta:
        board = self.board
        piece = board[from_sq]
        assert piece is not None
        delta = _MoveDelta(
            piece=piece,
            from_sq=from_sq,
            to_sq=to_sq,
            prior_move_count=piece.move_count,
            prior_has_moved=piece.has_moved,
            captured=board[to_sq],
            prior_king_sq=self.king_squares.get(piece.color),
        )

        if piece.piece_type == PieceType.PAWN:
            victim_sq = self.generator().en_passant_victim(piece, to_sq)
            if victim_sq is not None:
                delta.en_passant_sq = victim_sq
                delta.en_passant_piece = board.remove(victim_sq)
                delta.flag = MoveFlag.EN_PASSANT
            elif abs(to_sq[0] - from_sq[0]) == 2:
                delta.flag = MoveFlag.DOUBLE_PAWN

        board[from_sq] = None
        piece.move_count += 1
        piece.has_moved = True

        if promotion is not None:
            delta.promoted = Piece(piece.color, promotion, to_sq, piece.move_count, True)
            delta.flag = MoveFlag.PROMOTION
            board[to_sq] = delta.promoted
        else:
            board[to_sq] = piece

        if piece.piece_type == PieceType.KING:
            self.king_squares[piece.color] = to_sq
            if castle:
                self._apply_castle_rook(delta)
        return delta

    def _apply_castle_rook(self, delta: _MoveDelta) -> None:
        row, to_col = delta.to_sq
        if to_col < delta.from_sq[1]:
            delta.rook_from, delta.rook_to = (row, 0), (row, to_col + 1)
            delta.flag = MoveFlag.CASTLE_QUEENSIDE
        else:
            delta.rook_from, delta.rook_to = (row, 7), (row, to_col - 1)
            delta.flag = MoveFlag.CASTLE_KINGSIDE
        rook = self.board.remove(delta.rook_from)
        assert rook is not None
        delta.rook = rook
        delta.rook_had_moved = rook.has_moved
        self.board[delta.rook_to] = rook
        rook.has_moved = True

    def _undo(self, delta: _MoveDelta) -> None:
        board = self.board
        if delta.rook is not None:
            assert delta.rook_from is not None and delta.rook_to is not None
            board[delta.rook_to] = None
            board[delta.rook_from] = delta.rook
            delta.rook.has_moved = delta.rook_had_moved

        board[delta.to_sq] = delta.captured
        if delta.en_passant_piece is not None:
            assert delta.en_passant_sq is not None
            board[delta.en_passant_sq] = delta.en_passant_piece

        piece = delta.piece
        board[delta.from_sq] = piece
        piece.move_count = delta.prior_move_count
        piece.has_moved = delta.prior_has_moved
        if piece.piece_type == PieceType.KING and delta.prior_king_sq is not None:
            self.king_squares[piece.color] = delta.prior_king_sq

    def _in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self.board, self.king_squares, color)

    # ── Forecasting ──────────────────────────────────────────────────────

    def forecast(self, from_sq: Square, to_sq: Square, castle: bool = False) -> bool:
        """Whether the move keeps the mover's king out of check.

        The move is applied and always rolled back; the position is
        unchanged afterwards.  The move must already be occupancy-legal.
        """
        piece = self.board[from_sq]
        if piece is None:
            return False
        promotion = self.rules.default_promotion if self._promotes(piece, to_sq) else None
        delta = self._apply(from_sq, to_sq, promotion, castle)
        try:
            return not self._in_check(piece.color)
        finally:
            self._undo(delta)

    def castle_targets(self, piece: Piece) -> list[Square]:
        """Squares *piece* (an unmoved king) may castle to."""
        if piece.piece_type != PieceType.KING or piece.has_moved:
            return []
        row, col = piece.position
        return [
            (row, col + step)
            for step in (-2, 2)
            if is_on_board((row, col + step))
            and self.can_castle(piece.position, (row, col + step))
        ]

    def available_moves(self) -> dict[Square, list[Square]]:
        """Every move the side to move can play without exposing its king.

        Maps origin square → destinations; origins with nothing to play
        are left out, so an empty mapping means the side is stuck.
        """
        available: dict[Square, list[Square]] = {}
        for piece in self.board.pieces(self.side_to_move):
            from_sq = piece.position
            targets = [to for to in self.legal_moves(piece) if self.forecast(from_sq, to)]
            targets.extend(
                to
                for to in self.castle_targets(piece)
                if self.forecast(from_sq, to, castle=True)
            )
            if targets:
                available[from_sq] = targets
        return available

    def escape_moves(self) -> dict[str, list[str]]:
        """:meth:`available_moves` in algebraic square names."""
        return {
            square_name(from_sq): [square_name(to) for to in targets]
            for from_sq, targets in self.available_moves().items()
        }

    def check_game_over(self) -> GameStatus:
        """Classify the position as continue, checkmate or stalemate.

        A terminal status is recorded on the state and ends the game.
        """
        if self.is_game_over:
            return self.status
        immovable = not self.available_moves()
        self.status = Rules.classify(self.check_in_play, immovable)
        if self.status == GameStatus.CHECKMATE:
            self.result = GameResult.win_for(self.side_to_move.opposite)
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info("Checkmate, %s wins", self.side_to_move.opposite)
        elif self.status == GameStatus.STALEMATE:
            self.result = GameResult.DRAW
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info("Stalemate")
        return self.status

    def random_move(self, rng: random.Random | None = None) -> Move:
        """Uniformly pick a movable piece, then one of its destinations."""
        available = self.available_moves()
        if not available:
            raise GameOverError(f"{self.side_to_move} has no moves available.")
        pick = rng.choice if rng is not None else random.choice
        from_sq = pick(list(available))
        return Move(from_sq, pick(available[from_sq]))
