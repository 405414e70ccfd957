"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.errors import ShuffleError
from slidepuzzle.models.board import BoardState, neighbor_positions

logger = logging.getLogger(__name__)


class ShuffleStrategy(StrEnum):
    RANDOM_WALK = "random-walk"
    PERMUTATION = "permutation"


def count_inversions(board: BoardState) -> int:
    """Pairs of non-blank tiles, read row-major, that are out of goal order."""
    order = sorted(
        (t for t in board.tiles if not t.is_empty),
        key=lambda t: t.current_position,
    )
    seq = [t.correct_position for t in order]
    inv = 0
    for i in range(len(seq)):
        for j in range(i + 1, len(seq)):
            if seq[i] > seq[j]:
                inv += 1
    return inv


def is_solvable(board: BoardState) -> bool:
    """Return True if *board* can reach its goal by legal slides.

    Odd sizes need an even inversion count.  Even sizes also add the
    number of rows between the blank and its goal row (the row counted
    from the bottom, for the standard goal) and need that sum even.
    """
    inv = count_inversions(board)
    if board.size % 2 == 1:
        return inv % 2 == 0
    blank = board.blank
    row_distance = abs(
        blank.current_position // board.size - blank.correct_position // board.size
    )
    return (inv + row_distance) % 2 == 0


class GameGenerator:
    """Creates solvable puzzles by shuffling from the solved state."""

    @staticmethod
    def solved(size: int) -> BoardState:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return BoardState.goal(size)

    @staticmethod
    def scramble(
        board: BoardState,
        moves: int,
        rng: random.Random | None = None,
        avoid_backtrack: bool = True,
    ) -> None:
        """Scramble *board* in-place with *moves* random blank slides.

        Every step is a legal, reversible slide, so the result is always
        solvable.
        """
        rng = rng or random.Random()
        n = board.size
        blank = board.blank
        cells = {t.current_position: t for t in board.tiles}
        prev_pos: int | None = None

        for _ in range(moves):
            bpos = blank.current_position
            neighbors = neighbor_positions(bpos, n)
            if avoid_backtrack and prev_pos in neighbors and len(neighbors) > 1:
                neighbors.remove(prev_pos)
            target = rng.choice(neighbors)
            tile = cells[target]
            tile.current_position, blank.current_position = bpos, target
            cells[bpos], cells[target] = tile, blank
            prev_pos = bpos

    @staticmethod
    def permute(
        size: int,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_CONFIG.permutation_attempts,
    ) -> BoardState:
        """Return a uniformly random solvable board other than the goal.

        Unsolvable or solved draws are resampled; :class:`ShuffleError`
        is raised when *max_attempts* draws all fail.
        """
        rng = rng or random.Random()
        board = BoardState.goal(size)
        positions = list(range(size * size))
        for attempt in range(1, max_attempts + 1):
            rng.shuffle(positions)
            for tile, pos in zip(board.tiles, positions):
                tile.current_position = pos
            if not board.is_solved() and is_solvable(board):
                logger.debug("Permutation accepted after %d draw(s)", attempt)
                return board
        raise ShuffleError(
            f"No solvable {size}×{size} permutation in {max_attempts} attempts."
        )

    @staticmethod
    def generate(
        size: int,
        moves: int | None = None,
        rng: random.Random | None = None,
        strategy: ShuffleStrategy = ShuffleStrategy.RANDOM_WALK,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> BoardState:
        """Return a random *solvable* board of the given size."""
        rng = rng or random.Random()
        if strategy is ShuffleStrategy.PERMUTATION:
            return GameGenerator.permute(size, rng, config.permutation_attempts)

        count = config.moves_for(size) if moves is None else moves
        if count < 1:
            raise ValueError(f"Shuffle needs at least one move, got {count}.")

        avoid_backtrack = True
        while True:
            board = GameGenerator.solved(size)
            GameGenerator.scramble(board, count, rng, avoid_backtrack)
            # Ensure the board is not already solved
            if not board.is_solved():
                logger.debug("Generated %d×%d board with %d random moves", size, size, count)
                return board
            # a backtrack-free walk on 2×2 cycles back to the goal every 12 moves
            avoid_backtrack = False
