"""The four operations a frontend needs, as plain functions."""

from __future__ import annotations

import random
import threading

from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.engine.gamegenerator import GameGenerator, ShuffleStrategy
from slidepuzzle.engine.gameplay import try_move
from slidepuzzle.engine.gamesolver import BackgroundSolver, SolveJob, SolveResult, Solver
from slidepuzzle.models.board import BoardState, is_goal


def initialize_or_shuffle(
    size: int,
    *,
    rng: random.Random | None = None,
    strategy: ShuffleStrategy = ShuffleStrategy.RANDOM_WALK,
    config: EngineConfig = DEFAULT_CONFIG,
) -> BoardState:
    """Return a fresh, solvable, scrambled board of the requested size."""
    config.check_size(size)
    return GameGenerator.generate(size, rng=rng, strategy=strategy, config=config)


def apply_move(board: BoardState, tile_id: int) -> tuple[BoardState, bool]:
    """Attempt to slide *tile_id*; see :func:`~slidepuzzle.engine.gameplay.try_move`."""
    return try_move(board, tile_id)


def solve(
    board: BoardState,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
    cancel: threading.Event | None = None,
) -> SolveResult:
    """Solve *board* on the calling thread."""
    return Solver.solve(board, max_iterations=config.max_iterations, cancel=cancel)


def solve_async(
    board: BoardState,
    *,
    solver: BackgroundSolver | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SolveJob:
    """Solve a snapshot of *board* in the background.

    Pass a session's *solver* to get its one-search-at-a-time behaviour;
    without one, a private executor is created and shut down when the
    job completes.
    """
    if solver is not None:
        return solver.submit(board)
    own = BackgroundSolver(config)
    job = own.submit(board)
    job.future.add_done_callback(lambda _f: own.shutdown(wait=False))
    return job


def is_complete(board: BoardState) -> bool:
    return is_goal(board)
