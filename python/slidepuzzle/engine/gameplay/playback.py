"""Replays a found solution one move at a time."""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from slidepuzzle.models.board import Move

if TYPE_CHECKING:
    from slidepuzzle.engine.gameplay.game import GamePlay

logger = logging.getLogger(__name__)


class SolutionPlayback:
    """A timed, cancellable walk through *moves*.

    Each step goes through :meth:`GamePlay.move_tile`, and only while the
    puzzle is unsolved and playback has not been stopped.  Drive it with
    :meth:`run` (blocking) or :meth:`start` (timer thread).
    """

    def __init__(self, game: GamePlay, moves: list[Move], interval: float = 0.2) -> None:
        self.game = game
        self.moves = list(moves)
        self.interval = interval
        self.index = 0
        self.done = threading.Event()
        self._lock = threading.RLock()
        self._stopped = False
        self._started = False
        self._timer: threading.Timer | None = None

    @property
    def finished(self) -> bool:
        return self._stopped or self._exhausted()

    @property
    def remaining(self) -> int:
        return len(self.moves) - self.index

    def step(self) -> bool:
        """Apply the next move.  Returns False when nothing was applied."""
        with self._lock:
            return self._step_locked()

    def run(
        self,
        sleep: Callable[[float], None] = time.sleep,
        on_step: Callable[[Move], None] | None = None,
    ) -> int:
        """Play every remaining move on the calling thread; return the count."""
        applied = 0
        while True:
            with self._lock:
                if self.finished:
                    break
                move = self.moves[self.index]
                if not self._step_locked():
                    break
            applied += 1
            if on_step is not None:
                on_step(move)
            if not self.finished:
                sleep(self.interval)
        self._finish()
        return applied

    def start(self) -> None:
        """Apply one move every ``interval`` seconds on a timer thread."""
        with self._lock:
            if self._started or self.finished:
                return
            self._started = True
            self._schedule()

    def stop(self) -> None:
        """Stop playback.  Safe to call any number of times."""
        with self._lock:
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self.done.set()

    # -- helpers --------------------------------------------------------------

    def _exhausted(self) -> bool:
        return self.index >= len(self.moves) or self.game.is_won

    def _step_locked(self) -> bool:
        if self._stopped or self._exhausted():
            return False
        move = self.moves[self.index]
        if not self.game.move_tile(move.tile_id):
            logger.warning("Playback move %d (tile %d) is no longer legal", self.index, move.tile_id)
            self._stopped = True
            return False
        self.index += 1
        return True

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        with self._lock:
            self._timer = None
            if self._step_locked() and not self.finished:
                self._schedule()
                return
        self._finish()

    def _finish(self) -> None:
        with self._lock:
            self._stopped = True
        self.done.set()
