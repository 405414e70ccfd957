"""Move validation and the game session."""

from __future__ import annotations

import random
import time

import pytest

from slidepuzzle.config import DEFAULT_CONFIG
from slidepuzzle.engine.gameplay.game import GamePlay, try_move
from slidepuzzle.models.board import BoardState, Direction, canonical_key


def _positions(board: BoardState) -> dict[int, int]:
    return {t.id: t.current_position for t in board.tiles}


# -- try_move ---------------------------------------------------------------------


@pytest.mark.parametrize("tile_id", [0, 1, 2, 3, 4, 6])
def test_non_adjacent_tile_is_a_no_op(goal3: BoardState, tile_id: int) -> None:
    before = canonical_key(goal3)
    board, moved = try_move(goal3, tile_id)
    assert moved is False
    assert board is goal3
    assert canonical_key(board) == before


@pytest.mark.parametrize("tile_id", [5, 7])
def test_adjacent_tile_swaps_with_blank(goal3: BoardState, tile_id: int) -> None:
    before = _positions(goal3)
    board, moved = try_move(goal3, tile_id)
    assert moved is True

    after = _positions(board)
    changed = {i for i in before if before[i] != after[i]}
    assert changed == {tile_id, 8}
    assert after[tile_id] == before[8]
    assert after[8] == before[tile_id]


def test_diagonal_is_not_adjacent() -> None:
    board = BoardState.from_flat(3, [0, 1, 2, 3, 8, 5, 6, 7, 4])
    assert try_move(board, 0)[1] is False
    assert try_move(board, 1)[1] is True


def test_row_wrap_is_not_adjacent() -> None:
    # blank at pos 3 (row 1, col 0); pos 2 is the end of row 0
    board = BoardState.from_flat(3, [0, 1, 2, 8, 4, 5, 6, 7, 3])
    assert try_move(board, 2)[1] is False


def test_blank_and_unknown_ids_are_no_ops(goal3: BoardState) -> None:
    assert try_move(goal3, 8)[1] is False
    assert try_move(goal3, 42)[1] is False
    assert goal3.is_solved()


def test_random_clicks_keep_board_valid() -> None:
    rng = random.Random(7)
    board = BoardState.goal(4)
    for _ in range(500):
        try_move(board, rng.randrange(16))
        board.validate()
    assert sorted(_positions(board).values()) == list(range(16))


# -- GamePlay ---------------------------------------------------------------------


def test_direction_moves_neighbouring_tile(goal3: BoardState) -> None:
    game = GamePlay.from_board(goal3)
    assert game.move(Direction.UP) is False  # nothing below the blank
    assert game.move(Direction.LEFT) is False  # nothing right of the blank
    assert game.move(Direction.DOWN) is True
    assert game.state.board.tiles[5].current_position == 8
    assert game.move(Direction.UP) is True
    assert game.is_won


def test_move_counter_counts_legal_moves_only(goal3: BoardState) -> None:
    game = GamePlay.from_board(goal3)
    game.move_tile(0)
    game.move_tile(7)
    game.move_tile(7)
    assert game.state.moves == 2


def test_move_at(one_move_board: BoardState) -> None:
    game = GamePlay.from_board(one_move_board)
    assert game.move_at(0, 0) is False
    assert game.move_at(5, 5) is False
    assert game.move_at(2, 2) is True
    assert game.is_won


def test_winning_pauses_the_clock(one_move_board: BoardState) -> None:
    game = GamePlay.from_board(one_move_board)
    game.move_tile(5)
    frozen = game.state.elapsed_time
    assert game.state.elapsed_time == frozen


def test_leaving_the_goal_restarts_the_clock(one_move_board: BoardState) -> None:
    game = GamePlay.from_board(one_move_board)
    assert game.move_tile(5)
    frozen = game.state.elapsed_time

    assert game.move_tile(5)
    assert not game.is_won
    time.sleep(0.05)
    assert game.state.elapsed_time > frozen


def test_new_game_is_scrambled_and_valid() -> None:
    game = GamePlay(4, rng=random.Random(1))
    game.state.board.validate()
    assert not game.is_won
    game.close()


def test_reset_resizes_and_clears_counter() -> None:
    game = GamePlay(3, rng=random.Random(1))
    for direction in Direction:
        game.move(direction)
    game.reset(size=4)
    assert game.size == 4
    assert game.state.board.size == 4
    assert game.state.moves == 0
    game.close()


def test_size_outside_config_is_rejected() -> None:
    with pytest.raises(ValueError):
        GamePlay(DEFAULT_CONFIG.max_size + 1)
