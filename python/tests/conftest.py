"""Shared fixtures for the engine tests."""

from __future__ import annotations

import pytest

from slidepuzzle.engine.gameplay.game import try_move
from slidepuzzle.models.board import BoardState


@pytest.fixture
def goal3() -> BoardState:
    return BoardState.goal(3)


@pytest.fixture
def one_move_board() -> BoardState:
    """3×3 goal with the blank (pos 8) swapped with its neighbour at pos 5."""
    board = BoardState.goal(3)
    _, moved = try_move(board, 5)
    assert moved
    return board
