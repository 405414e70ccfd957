"""Shuffle generator and the solvability rule."""

from __future__ import annotations

import random
from dataclasses import replace

import pytest

from slidepuzzle.config import DEFAULT_CONFIG
from slidepuzzle.engine.gamegenerator import (
    GameGenerator,
    ShuffleStrategy,
    count_inversions,
    is_solvable,
)
from slidepuzzle.engine.gameplay.game import try_move
from slidepuzzle.errors import ShuffleError
from slidepuzzle.models.board import BoardState, canonical_key


def _swap_tiles(board: BoardState, a: int, b: int) -> BoardState:
    """Swap two non-blank tiles, a move no slide sequence can make."""
    ta, tb = board.tiles[a], board.tiles[b]
    ta.current_position, tb.current_position = tb.current_position, ta.current_position
    return board


# -- solvability rule -----------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_goal_is_solvable(size: int) -> None:
    board = BoardState.goal(size)
    assert count_inversions(board) == 0
    assert is_solvable(board)


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_single_transposition_is_unsolvable(size: int) -> None:
    board = _swap_tiles(BoardState.goal(size), 0, 1)
    assert count_inversions(board) == 1
    assert not is_solvable(board)


def test_even_board_counts_blank_row() -> None:
    # one vertical slide on 4×4: three inversions, blank one row up
    board = BoardState.goal(4)
    _, moved = try_move(board, 11)
    assert moved
    assert count_inversions(board) == 3
    assert is_solvable(board)


def test_inversions_follow_row_major_order() -> None:
    board = BoardState.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
    assert count_inversions(board) == 1


# -- random walk ------------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5])
@pytest.mark.parametrize("seed", range(10))
def test_random_walk_boards_are_valid_and_solvable(size: int, seed: int) -> None:
    board = GameGenerator.generate(size, rng=random.Random(seed))
    board.validate()
    assert not board.is_solved()
    assert is_solvable(board)


def test_single_move_walk_leaves_goal() -> None:
    board = GameGenerator.generate(3, moves=1, rng=random.Random(0))
    assert board.blank.current_position in (5, 7)


def test_two_by_two_cycle_length_still_scrambles() -> None:
    # a backtrack-free walk of 12 slides on 2×2 always ends on the goal
    board = GameGenerator.solved(2)
    GameGenerator.scramble(board, 12, random.Random(1))
    assert board.is_solved()

    board = GameGenerator.generate(2, moves=12, rng=random.Random(1))
    assert not board.is_solved()


def test_scramble_without_backtrack_guard() -> None:
    board = GameGenerator.solved(3)
    GameGenerator.scramble(board, 50, random.Random(5), avoid_backtrack=False)
    board.validate()
    assert is_solvable(board)


def test_seed_makes_boards_reproducible() -> None:
    a = GameGenerator.generate(4, rng=random.Random(42))
    b = GameGenerator.generate(4, rng=random.Random(42))
    assert canonical_key(a) == canonical_key(b)


def test_zero_moves_rejected() -> None:
    with pytest.raises(ValueError):
        GameGenerator.generate(3, moves=0)


# -- permutation ------------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4])
@pytest.mark.parametrize("seed", range(10))
def test_permutation_boards_are_solvable(size: int, seed: int) -> None:
    board = GameGenerator.generate(
        size, rng=random.Random(seed), strategy=ShuffleStrategy.PERMUTATION
    )
    board.validate()
    assert not board.is_solved()
    assert is_solvable(board)


class _StuckRandom(random.Random):
    """Never actually shuffles, so every draw is the solved board."""

    def shuffle(self, x, *args, **kwargs) -> None:  # type: ignore[override]
        x.sort()


def test_permutation_gives_up_after_max_attempts() -> None:
    with pytest.raises(ShuffleError):
        GameGenerator.permute(3, _StuckRandom(), max_attempts=5)


# -- config -----------------------------------------------------------------------


def test_walk_lengths_per_size() -> None:
    assert DEFAULT_CONFIG.moves_for(3) == 100
    assert DEFAULT_CONFIG.moves_for(4) == 200
    assert DEFAULT_CONFIG.moves_for(5) == 2500


def test_custom_walk_length_is_used() -> None:
    cfg = replace(DEFAULT_CONFIG, shuffle_moves={3: 1})
    board = GameGenerator.generate(3, rng=random.Random(0), config=cfg)
    assert board.blank.current_position in (5, 7)
