"""Background solving: one search per session, cooperative cancellation."""

from __future__ import annotations

import random
import threading

from slidepuzzle.api import solve_async
from slidepuzzle.engine.gamegenerator import GameGenerator, ShuffleStrategy
from slidepuzzle.engine.gameplay.game import try_move
from slidepuzzle.engine.gamesolver import BackgroundSolver, SolveJob, SolveResult, SolveStatus
from slidepuzzle.models.board import BoardState, canonical_key


def _hard_board() -> BoardState:
    return GameGenerator.generate(4, rng=random.Random(3), strategy=ShuffleStrategy.PERMUTATION)


def test_result_is_delivered(one_move_board: BoardState) -> None:
    delivered: list[tuple[SolveJob, SolveResult]] = []
    ready = threading.Event()

    def on_result(job: SolveJob, result: SolveResult) -> None:
        delivered.append((job, result))
        ready.set()

    solver = BackgroundSolver(on_result=on_result)
    try:
        job = solver.submit(one_move_board)
        assert ready.wait(10)
        assert job.result(10).status is SolveStatus.FOUND
        assert delivered[0][0] is job
        assert not solver.busy
    finally:
        solver.shutdown()


def test_new_submission_cancels_previous(one_move_board: BoardState) -> None:
    delivered: list[SolveResult] = []
    solver = BackgroundSolver(on_result=lambda _job, result: delivered.append(result))
    try:
        first = solver.submit(_hard_board())
        second = solver.submit(one_move_board)

        assert first.cancelled
        assert first.result(10).status is SolveStatus.CANCELLED
        assert second.result(10).status is SolveStatus.FOUND
        solver.shutdown()
        assert [r.status for r in delivered] == [SolveStatus.FOUND]
    finally:
        solver.shutdown()


def test_cancel_suppresses_delivery() -> None:
    delivered: list[SolveResult] = []
    solver = BackgroundSolver(on_result=lambda _job, result: delivered.append(result))
    try:
        job = solver.submit(_hard_board())
        solver.cancel()
        assert job.result(10).status is SolveStatus.CANCELLED
        solver.shutdown()
        assert delivered == []
    finally:
        solver.shutdown()


def test_job_works_on_a_snapshot(one_move_board: BoardState) -> None:
    solver = BackgroundSolver()
    try:
        key = canonical_key(one_move_board)
        job = solver.submit(one_move_board)
        try_move(one_move_board, 5)  # the live board moves on
        assert job.key == key
        assert len(job.result(10).moves) == 1
    finally:
        solver.shutdown()


def test_solve_async_without_session(one_move_board: BoardState) -> None:
    job = solve_async(one_move_board)
    assert job.result(10).status is SolveStatus.FOUND
