"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from slidepuzzle.engine.gamesolver.solver import SolveResult
from slidepuzzle.models.board import BoardState, Move, canonical_key


class GameState:
    """Holds the current board, move counter, elapsed time and cached solution."""

    def __init__(self, board: BoardState) -> None:
        self.board = board
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True
        self._solution: SolveResult | None = None
        self._solution_key: tuple[int, ...] | None = None

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()

    # -- solution cache -------------------------------------------------------

    def store_solution(self, key: tuple[int, ...], result: SolveResult) -> None:
        """Remember *result*, found for the board whose key was *key*."""
        self._solution = result
        self._solution_key = key

    def clear_solution(self) -> None:
        self._solution = None
        self._solution_key = None

    @property
    def solution(self) -> list[Move]:
        """The cached moves, or ``[]`` once the board has moved on."""
        if self._solution is None or not self._solution.found:
            return []
        if self._solution_key != canonical_key(self.board):
            return []
        return list(self._solution.moves)

    @property
    def last_result(self) -> SolveResult | None:
        return self._solution
