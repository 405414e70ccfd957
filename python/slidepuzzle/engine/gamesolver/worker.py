"""Runs searches off the interactive thread.

A :class:`BackgroundSolver` belongs to one puzzle session and keeps at
most one search in flight.  Submitting a new board supersedes the
previous job; a superseded job never reaches the ``on_result`` callback.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.engine.gamesolver.solver import Solver, SolveResult
from slidepuzzle.models.board import BoardState, canonical_key

logger = logging.getLogger(__name__)

ResultCallback = Callable[["SolveJob", SolveResult], None]


class SolveJob:
    """Handle to one background search."""

    def __init__(self, board: BoardState, future: Future[SolveResult], cancel: threading.Event) -> None:
        self.key = canonical_key(board)
        self.future = future
        self.superseded = False
        self._cancel = cancel

    def cancel(self) -> None:
        """Ask the search to stop; it returns ``CANCELLED`` at its next iteration."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def done(self) -> bool:
        return self.future.done()

    @property
    def failed(self) -> bool:
        """True once the search has ended with an exception."""
        return self.future.done() and self.future.exception() is not None

    def result(self, timeout: float | None = None) -> SolveResult:
        return self.future.result(timeout)


class BackgroundSolver:
    """Single-worker search executor for one puzzle session."""

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.config = config
        self.on_result = on_result
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="slidepuzzle-solver")
        self._lock = threading.Lock()
        self._current: SolveJob | None = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._current is not None and not self._current.done()

    @property
    def current(self) -> SolveJob | None:
        return self._current

    def submit(self, board: BoardState) -> SolveJob:
        """Start solving a snapshot of *board*, superseding any earlier job."""
        snapshot = board.copy()
        snapshot.validate()
        cancel = threading.Event()

        with self._lock:
            if self._current is not None:
                logger.debug("Superseding previous search")
                self._drop(self._current)
            future = self._executor.submit(
                Solver.solve,
                snapshot,
                max_iterations=self.config.max_iterations,
                cancel=cancel,
            )
            job = SolveJob(snapshot, future, cancel)
            self._current = job

        future.add_done_callback(lambda _f: self._deliver(job))
        return job

    def cancel(self) -> None:
        """Drop the current job; its result, if any, is discarded."""
        with self._lock:
            if self._current is not None:
                self._drop(self._current)
            self._current = None

    def shutdown(self, wait: bool = True) -> None:
        """Stop a running search and release the worker thread.

        A job that already finished still delivers its result.
        """
        with self._lock:
            if self._current is not None and not self._current.done():
                self._drop(self._current)
        self._executor.shutdown(wait=wait)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _drop(job: SolveJob) -> None:
        job.superseded = True
        if not job.done():
            job.cancel()

    def _deliver(self, job: SolveJob) -> None:
        # on_result runs outside the lock, so a consumer that cancels
        # concurrently must still match the job against its own state.
        with self._lock:
            if job.superseded or job.cancelled:
                return
        if self.on_result is None:
            return
        exc = job.future.exception()
        if exc is not None:
            logger.error("Background search failed", exc_info=exc)
            return
        self.on_result(job, job.future.result())
