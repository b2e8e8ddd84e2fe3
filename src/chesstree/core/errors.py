"""Move rejection errors.

Every rejected move surfaces as an :class:`InvalidMoveError` subclass so
callers can either handle the whole family or a single kind.
"""

from __future__ import annotations

from chesstree.core.types import Square, square_name


class InvalidMoveError(ValueError):
    """A move was refused; the game state is unchanged."""

    def __init__(
        self,
        message: str,
        from_sq: Square | None = None,
        to_sq: Square | None = None,
    ) -> None:
        super().__init__(message)
        self.from_sq = from_sq
        self.to_sq = to_sq


class NoPieceAtSourceError(InvalidMoveError):
    """The origin square is empty."""

    def __init__(self, from_sq: Square, to_sq: Square | None = None) -> None:
        super().__init__(f"No piece at {square_name(from_sq)}", from_sq, to_sq)


class WrongTurnError(InvalidMoveError):
    """The piece belongs to the side not on move."""

    def __init__(self, from_sq: Square, to_sq: Square | None = None) -> None:
        super().__init__(
            f"You cannot move the opponent's piece at {square_name(from_sq)}",
            from_sq,
            to_sq,
        )


class IllegalMoveError(InvalidMoveError):
    """Destination is neither a legal move nor a valid castle."""


class OwnPieceBlockedError(IllegalMoveError):
    """Destination holds a piece of the mover's own color."""


class CannotCaptureError(IllegalMoveError):
    """Destination holds an enemy piece the mover cannot reach."""


class SelfCheckError(InvalidMoveError):
    """The move would leave the mover's own king in check."""


class GameOverError(InvalidMoveError):
    """The game already has a terminal outcome."""
