"""Concrete player implementations."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import TYPE_CHECKING

from chesstree.core.enums import PROMOTION_TYPES, Color, PieceType
from chesstree.core.notation import parse_move
from chesstree.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chesstree.core.move import Move
    from chesstree.game.state import GameState

_LOGGER = logging.getLogger(__name__)

PROMOTION_PROMPT = "Promote to (1) queen, (2) rook, (3) bishop or (4) knight: "

_PROMOTION_WORDS: dict[str, PieceType] = {
    "1": PieceType.QUEEN,
    "2": PieceType.ROOK,
    "3": PieceType.BISHOP,
    "4": PieceType.KNIGHT,
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
    "queen": PieceType.QUEEN,
    "rook": PieceType.ROOK,
    "bishop": PieceType.BISHOP,
    "knight": PieceType.KNIGHT,
}


def parse_promotion_choice(text: str) -> PieceType | None:
    """Map ``"1"``, ``"q"`` or ``"queen"`` (any case) to a piece type."""
    return _PROMOTION_WORDS.get(text.strip().lower())


class HumanPlayer(IPlayer):
    """A human participant answering text prompts.

    Input arrives through *read_line*, a ``(prompt) -> str`` callable
    (``input`` by default).  Unparseable answers are logged and asked
    again; an exception from *read_line* (e.g. ``EOFError``) propagates.
    """

    __slots__ = ("_color", "_name", "_read_line")

    def __init__(
        self,
        color: Color,
        name: str = "",
        read_line: Callable[[str], str] = input,
    ) -> None:
        self._color = color
        self._name = name or f"Player ({color})"
        self._read_line = read_line

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> Move:
        while True:
            text = self._read_line(f"{self._name}, your move: ")
            try:
                return parse_move(text)
            except ValueError:
                _LOGGER.warning("Could not read a move from %r", text)

    def choose_promotion(self) -> PieceType:
        while True:
            text = self._read_line(PROMOTION_PROMPT)
            kind = parse_promotion_choice(text)
            if kind is not None:
                return kind
            _LOGGER.warning("Not a promotion choice: %r", text)


class RandomPlayer(IPlayer):
    """An automated participant that plays uniformly random legal moves.

    Args:
        color: Side the player plays.
        name: Display name.
        rng: Source of randomness; pass a seeded ``random.Random`` for
            reproducible games.
    """

    __slots__ = ("_color", "_name", "_rng")

    def __init__(
        self,
        color: Color,
        name: str = "Random",
        rng: random.Random | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._rng = rng or random.Random()

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, state: GameState) -> Move:
        return state.random_move(self._rng)

    def choose_promotion(self) -> PieceType:
        return self._rng.choice(PROMOTION_TYPES)
