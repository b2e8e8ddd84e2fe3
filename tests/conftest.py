"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import random
from collections.abc import Iterator

import pytest

from chesstree.core.board import Board
from chesstree.game.state import GameState


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def state() -> GameState:
    """A game set up in the standard starting position."""
    gs = GameState()
    gs.setup()
    return gs


@pytest.fixture
def rng() -> Iterator[random.Random]:
    """Seeded randomness so random games replay identically."""
    yield random.Random(20240601)
