"""GameController: drives a chess game between two players.

Asks each player for a move and hands it to a :class:`GameState`;
listeners subscribe through :class:`GameEvents`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesstree.core.enums import Color, GameResult, GameStatus, PieceType
from chesstree.core.errors import InvalidMoveError
from chesstree.core.move import Move
from chesstree.game.interfaces import GamePhase, IPlayer, RuleSet
from chesstree.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]
RejectedCallback = Callable[[Move, InvalidMoveError], None]


@dataclass
class GameEvents:
    """Listener lists; every handler of an event is called in registration order."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full chess game: asks players for moves, validates
    them through :class:`GameState`, switches turns, notifies listeners.

    Single-threaded: a human player's ``request_move`` blocks until the
    player answers.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
        rules: RuleSet | None = None,
    ) -> None:
        """Set up a new game between *white* and *black*."""
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._state = GameState(
            rules=rules or RuleSet.standard(),
            promotion_chooser=self._choose_promotion,
        )
        self._state.setup(placement, side_to_move)
        _LOGGER.info("New game: %s (white) vs %s (black)", white.name, black.name)
        self._emit_phase(GamePhase.AWAITING_MOVE)

        # A set-up position may already be decided.
        if self._state.check_game_over() != GameStatus.CONTINUE:
            self._emit_game_over(self._state.result)

    def submit_move(self, move: Move) -> bool:
        """Play *move* for the side on move.  ``False`` means it was rejected."""
        if self._state.is_game_over:
            return False

        try:
            record = self._state.make_move(move.from_sq, move.to_sq, move.promotion)
        except InvalidMoveError as exc:
            _LOGGER.debug("Rejected %s: %s", move, exc)
            self._emit_rejected(move, exc)
            return False

        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return True

        self._state.phase = GamePhase.AWAITING_MOVE
        return True

    def play_turn(self) -> bool:
        """Ask the player on move for a move and submit it."""
        cp = self.current_player
        if cp is None or self._state.is_game_over:
            return False

        if not cp.is_human:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
        return self.submit_move(cp.request_move(self._state))

    def play(self, max_plies: int | None = None) -> GameResult:
        """Run turns until the game ends or *max_plies* moves are played.

        Rejected moves are asked for again and do not count as plies.
        """
        if len(self._players) != 2:
            raise RuntimeError("No players seated; call new_game() first")
        played = 0
        while not self._state.is_game_over and (max_plies is None or played < max_plies):
            if self.play_turn():
                played += 1
        return self._state.result

    # ── Internal helpers ─────────────────────────────────────────────────

    def _choose_promotion(self, color: Color) -> PieceType:
        player = self._players.get(color)
        if player is None:
            return self._state.rules.default_promotion
        return player.choose_promotion()

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_rejected(self, move: Move, exc: InvalidMoveError) -> None:
        for cb in self.events.on_rejected:
            cb(move, exc)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
