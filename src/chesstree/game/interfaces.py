"""Abstract interfaces and configuration for the game layer.

High-level :class:`~chesstree.game.controller.GameController` depends on
these, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chesstree.core.enums import PROMOTION_TYPES, Color, PieceType

if TYPE_CHECKING:
    from chesstree.core.move import Move
    from chesstree.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # automated player is choosing
    GAME_OVER = auto()


# ── Rule configuration ───────────────────────────────────────────────────────


class RuleSet:
    """Immutable rule options.

    Args:
        castle_through_check: Allow castling while the king stands on or
            passes over an attacked square.  Only occupancy is checked then.
        en_passant_needs_last_move: Offer en passant only against the pawn
            that made the immediately preceding move.
        default_promotion: Piece a pawn becomes when nobody is asked.
    """

    __slots__ = ("castle_through_check", "en_passant_needs_last_move", "default_promotion")

    def __init__(
        self,
        castle_through_check: bool = False,
        en_passant_needs_last_move: bool = True,
        default_promotion: PieceType = PieceType.QUEEN,
    ) -> None:
        if default_promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {default_promotion.name}")
        self.castle_through_check = castle_through_check
        self.en_passant_needs_last_move = en_passant_needs_last_move
        self.default_promotion = default_promotion

    # Presets
    @classmethod
    def standard(cls) -> RuleSet:
        """Tournament rules."""
        return cls()

    @classmethod
    def lenient(cls) -> RuleSet:
        """Occupancy-only castling and move-count en passant."""
        return cls(castle_through_check=True, en_passant_needs_last_move=False)

    def __repr__(self) -> str:
        return (
            f"RuleSet(castle_through_check={self.castle_through_check}, "
            f"en_passant_needs_last_move={self.en_passant_needs_last_move}, "
            f"default_promotion={self.default_promotion.name})"
        )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or automated)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, state: GameState) -> Move:
        """Return the move this player wants to play in *state*.

        Blocking: a human player waits for input here.
        """

    @abstractmethod
    def choose_promotion(self) -> PieceType:
        """Pick the piece a promoting pawn becomes (Q, R, B or N)."""
