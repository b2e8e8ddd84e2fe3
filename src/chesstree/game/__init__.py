"""Game management layer: controller, players, state machine.

Quick start::

    from chesstree.core import Color
    from chesstree.game import GameController, HumanPlayer, RandomPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=RandomPlayer(Color.BLACK),
    )
    ctrl.play()
"""

from chesstree.game.controller import GameController, GameEvents
from chesstree.game.interfaces import GamePhase, IPlayer, RuleSet
from chesstree.game.player import HumanPlayer, RandomPlayer, parse_promotion_choice
from chesstree.game.state import GameState, MoveRecord, PromotionChooser

__all__ = [
    # Interfaces / config
    "GamePhase",
    "IPlayer",
    "RuleSet",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "PromotionChooser",
    "RandomPlayer",
    "parse_promotion_choice",
]
