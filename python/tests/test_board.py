"""Board model and state-space operations."""

from __future__ import annotations

import random

import pytest

from slidepuzzle.errors import BoardError
from slidepuzzle.models.board import (
    BoardState,
    Move,
    Tile,
    canonical_key,
    is_goal,
    successors,
)


# -- construction -------------------------------------------------------------


def test_goal_layout() -> None:
    board = BoardState.goal(3)
    assert [t.id for t in board.tiles] == list(range(9))
    assert all(t.current_position == t.correct_position == t.id for t in board.tiles)
    assert board.blank.id == 8
    assert board.blank.current_position == 8
    assert sum(t.is_empty for t in board.tiles) == 1
    assert board.is_solved()
    board.validate()


def test_from_flat_and_grid_agree() -> None:
    flat = [0, 1, 2, 3, 4, 8, 6, 7, 5]
    board = BoardState.from_flat(3, flat)
    assert board.grid() == [[0, 1, 2], [3, 4, 8], [6, 7, 5]]
    assert board.blank.current_position == 5
    assert board.tile_at(8).id == 5
    assert not board.is_solved()


def test_from_flat_rejects_bad_input() -> None:
    with pytest.raises(BoardError):
        BoardState.from_flat(3, [0, 1, 2])
    with pytest.raises(BoardError):
        BoardState.from_flat(2, [0, 0, 1, 2])


def test_tile_labels() -> None:
    board = BoardState.goal(3)
    assert board.tiles[0].label == "1"
    assert board.blank.label == ""


def test_is_tile_correct(one_move_board: BoardState) -> None:
    assert one_move_board.is_tile_correct(0)
    assert not one_move_board.is_tile_correct(8)
    assert not one_move_board.is_tile_correct(5)


def test_copy_is_independent(goal3: BoardState) -> None:
    clone = goal3.copy()
    clone.tiles[0].current_position = 99
    assert goal3.tiles[0].current_position == 0


# -- validation ---------------------------------------------------------------


def _corrupt(kind: str) -> BoardState:
    board = BoardState.goal(3)
    if kind == "duplicate-position":
        board.tiles[1].current_position = 0
    elif kind == "no-blank":
        board.tiles[8].is_empty = False
    elif kind == "two-blanks":
        board.tiles[0].is_empty = True
    elif kind == "missing-tile":
        board.tiles.pop()
    elif kind == "out-of-range":
        board.tiles[2].current_position = 9
    elif kind == "duplicate-id":
        board.tiles[3] = Tile(id=2, current_position=3, correct_position=3)
    return board


@pytest.mark.parametrize(
    "kind",
    ["duplicate-position", "no-blank", "two-blanks", "missing-tile", "out-of-range", "duplicate-id"],
)
def test_validate_rejects_malformed_boards(kind: str) -> None:
    with pytest.raises(BoardError):
        _corrupt(kind).validate()


def test_goal_rejects_tiny_boards() -> None:
    with pytest.raises(BoardError):
        BoardState.goal(1)


# -- canonical key ------------------------------------------------------------


def test_key_ignores_tile_order_in_memory(one_move_board: BoardState) -> None:
    shuffled = one_move_board.copy()
    random.Random(3).shuffle(shuffled.tiles)
    assert canonical_key(shuffled) == canonical_key(one_move_board)


def test_key_distinguishes_different_layouts(goal3: BoardState, one_move_board: BoardState) -> None:
    assert canonical_key(goal3) == tuple(range(9))
    assert canonical_key(goal3) != canonical_key(one_move_board)


# -- successors / goal test -----------------------------------------------------


def test_successors_from_corner_blank(goal3: BoardState) -> None:
    before = canonical_key(goal3)
    result = successors(goal3)

    assert [m for m, _ in result] == [Move(5, 5, 8), Move(7, 7, 8)]
    for move, nxt in result:
        assert nxt.blank.current_position == move.from_position
        assert nxt.tiles[move.tile_id].current_position == move.to_position
        nxt.validate()
    assert canonical_key(goal3) == before, "successors() must not touch its input"


def test_successors_from_centre_blank() -> None:
    board = BoardState.from_flat(3, [0, 1, 2, 3, 8, 5, 6, 7, 4])
    result = successors(board)
    assert sorted(m.from_position for m, _ in result) == [1, 3, 5, 7]
    assert len({canonical_key(b) for _, b in result}) == 4


def test_is_goal_is_stable(goal3: BoardState, one_move_board: BoardState) -> None:
    assert is_goal(goal3)
    assert is_goal(goal3)
    assert not is_goal(one_move_board)
    assert not is_goal(one_move_board)
