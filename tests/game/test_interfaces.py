"""Tests for RuleSet and the player interface."""

import pytest

from chesstree.core.enums import Color, GameResult, PieceType
from chesstree.game.interfaces import IPlayer, RuleSet


class TestRuleSet:
    def test_standard(self) -> None:
        rules = RuleSet.standard()
        assert not rules.castle_through_check
        assert rules.en_passant_needs_last_move
        assert rules.default_promotion == PieceType.QUEEN

    def test_lenient(self) -> None:
        rules = RuleSet.lenient()
        assert rules.castle_through_check
        assert not rules.en_passant_needs_last_move

    @pytest.mark.parametrize("kind", [PieceType.PAWN, PieceType.KING])
    def test_invalid_default_promotion(self, kind: PieceType) -> None:
        with pytest.raises(ValueError):
            RuleSet(default_promotion=kind)

    def test_repr(self) -> None:
        assert "default_promotion=QUEEN" in repr(RuleSet())


class TestPlayerInterface:
    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            IPlayer()  # type: ignore[abstract]


class TestEnums:
    def test_color_helpers(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.BLACK.pawn_direction == -1
        assert Color.WHITE.back_rank == 7
        assert str(Color.BLACK) == "black"

    def test_win_for(self) -> None:
        assert GameResult.win_for(Color.WHITE) == GameResult.WHITE_WINS
        assert GameResult.win_for(Color.BLACK) == GameResult.BLACK_WINS
