"""Core gameplay logic: validates moves, checks the win condition and
coordinates background solving for one session."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import replace
from typing import Callable

from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.engine.gamegenerator import GameGenerator
from slidepuzzle.engine.gameplay.playback import SolutionPlayback
from slidepuzzle.engine.gamesolver import BackgroundSolver, SolveJob, SolveResult
from slidepuzzle.engine.gamestate import GameState
from slidepuzzle.models.board import DIRECTION_OFFSETS, BoardState, Direction, Move, Tile, canonical_key

logger = logging.getLogger(__name__)


def try_move(board: BoardState, tile_id: int) -> tuple[BoardState, bool]:
    """Slide tile *tile_id* into the blank if the two are 4-adjacent.

    The board is updated in place.  A non-adjacent, unknown or blank tile
    leaves it untouched and reports ``False``.
    """
    tile = board.tile(tile_id)
    if tile is None or tile.is_empty:
        return board, False

    blank = board.blank
    tr, tc = board.row_col(tile.current_position)
    br, bc = board.row_col(blank.current_position)
    if abs(tr - br) + abs(tc - bc) != 1:
        return board, False

    tile.current_position, blank.current_position = (
        blank.current_position,
        tile.current_position,
    )
    return board, True


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self,
        size: int,
        config: EngineConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self.size = config.check_size(size)
        self.config = config
        self.rng = rng or random.Random()
        board = GameGenerator.generate(size, rng=self.rng, config=config)
        self.state = GameState(board)
        self._init_session()

    @classmethod
    def from_board(cls, board: BoardState, config: EngineConfig = DEFAULT_CONFIG) -> GamePlay:
        """Create a game session from an existing board."""
        board.validate()
        obj = object.__new__(cls)
        obj.size = board.size
        obj.config = config
        obj.rng = random.Random()
        obj.state = GameState(board)
        obj._init_session()
        return obj

    def _init_session(self) -> None:
        # Guards the pending job and the hint request against the worker's
        # result callback.
        self._lock = threading.RLock()
        self._solver: BackgroundSolver | None = None
        self._playback: SolutionPlayback | None = None
        self._pending: SolveJob | None = None
        self._on_solved: Callable[[SolveResult], None] | None = None
        self._hint_pending = False
        self._on_hint: Callable[[Move | None], None] | None = None

    # -- movement (direction = where the *tile* moves) ------------------------

    def tile_for(self, direction: Direction) -> Tile | None:
        """Return the tile that would slide in *direction*, if any.

        E.g. ``Direction.UP`` picks the tile **below** the blank.
        """
        board = self.state.board
        br, bc = board.row_col(board.blank.current_position)
        dr, dc = DIRECTION_OFFSETS[direction]
        tr, tc = br + dr, bc + dc
        if not (0 <= tr < board.size and 0 <= tc < board.size):
            return None
        return board.tile_at(tr * board.size + tc)

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank."""
        tile = self.tile_for(direction)
        if tile is None:
            return False
        return self.move_tile(tile.id)

    def move_tile(self, tile_id: int) -> bool:
        """Move tile *tile_id* into the blank.

        Returns True if the tile was adjacent to the blank and the move
        was applied.  The clock stops while the puzzle is solved and runs
        again once a move leaves the goal.
        """
        _, moved = try_move(self.state.board, tile_id)
        if moved:
            self.state.increment_moves()
            if self.is_won:
                self.state.pause()
                logger.info("Puzzle solved in %d moves", self.state.moves)
            else:
                self.state.resume()
        return moved

    def move_at(self, row: int, col: int) -> bool:
        """Move the tile at (row, col) into the blank."""
        board = self.state.board
        if not (0 <= row < board.size and 0 <= col < board.size):
            return False
        return self.move_tile(board.tile_at(row * board.size + col).id)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def is_solving(self) -> bool:
        return self._solver is not None and self._solver.busy

    @property
    def is_playing(self) -> bool:
        return self._playback is not None and not self._playback.finished

    # -- lifecycle ------------------------------------------------------------

    def reset(self, size: int | None = None) -> None:
        """Start over with a fresh shuffle, optionally at a new *size*."""
        self.stop_playback()
        self.cancel_search()
        if size is not None:
            self.size = self.config.check_size(size)
        board = GameGenerator.generate(self.size, rng=self.rng, config=self.config)
        self.state = GameState(board)

    def close(self) -> None:
        self.stop_playback()
        with self._lock:
            self._pending = None
            self._hint_pending = False
        if self._solver is not None:
            self._solver.shutdown(wait=False)
            self._solver = None

    # -- solving --------------------------------------------------------------

    def request_solution(
        self, on_solved: Callable[[SolveResult], None] | None = None
    ) -> SolveJob:
        """Search for a solution of the current board in the background.

        Any search still running for this session is cancelled.  The
        result is cached on :attr:`state` and then handed to *on_solved*.
        """
        self.stop_playback()
        with self._lock:
            self.state.clear_solution()
            if self._solver is None:
                self._solver = BackgroundSolver(self.config, on_result=self._store_result)
            self._on_solved = on_solved
            self._hint_pending = False
            self._pending = self._solver.submit(self.state.board)
            return self._pending

    def find_or_show_solution(
        self, on_solved: Callable[[SolveResult], None] | None = None
    ) -> SolutionPlayback | SolveJob:
        """Play back a cached solution if one fits the board, else search."""
        if self.state.solution:
            return self.start_playback()
        return self.request_solution(on_solved)

    def hint(
        self, on_hint: Callable[[Move | None], None] | None = None
    ) -> Move | SolveJob | None:
        """Apply the next move towards the goal.

        With a cached solution that still fits the board the move is made
        at once and returned.  Otherwise it is made when a background
        search reports back: the one already running, or a new one if
        none is.  The job is returned and *on_hint* receives the applied
        move (``None`` when the search found nothing).  Never searches on
        the calling thread.
        """
        if self.is_won:
            return None
        self.stop_playback()
        with self._lock:
            move = self._apply_cached_hint()
            if move is not None:
                return move
            job = self._pending
            if job is None or job.failed:
                job = self.request_solution(self._on_solved)
            self._hint_pending = True
            self._on_hint = on_hint
            return job

    def playback(self, interval: float | None = None) -> SolutionPlayback:
        """Return a playback of the cached solution without starting it."""
        self.stop_playback()
        interval = self.config.playback_interval if interval is None else interval
        self._playback = SolutionPlayback(self, self.state.solution, interval)
        return self._playback

    def start_playback(self, interval: float | None = None) -> SolutionPlayback:
        playback = self.playback(interval)
        playback.start()
        return playback

    def cancel_search(self) -> None:
        with self._lock:
            self._pending = None
            self._hint_pending = False
            if self._solver is not None:
                self._solver.cancel()

    def stop_playback(self) -> None:
        if self._playback is not None:
            self._playback.stop()
            self._playback = None

    # -- helpers --------------------------------------------------------------

    def _apply_cached_hint(self) -> Move | None:
        moves = self.state.solution
        if not moves or not self.move_tile(moves[0].tile_id):
            return None
        # The rest of the solution still solves the new board.
        rest = replace(self.state.last_result, moves=moves[1:])
        self.state.store_solution(canonical_key(self.state.board), rest)
        return moves[0]

    def _store_result(self, job: SolveJob, result: SolveResult) -> None:
        with self._lock:
            # Jobs cancelled after the worker's own check land here too.
            if job is not self._pending:
                return
            self._pending = None
            self.state.store_solution(job.key, result)
            on_solved = self._on_solved
            on_hint = self._on_hint if self._hint_pending else None
            hinted = self._apply_cached_hint() if self._hint_pending else None
            self._hint_pending = False
        if on_solved is not None:
            on_solved(result)
        if on_hint is not None:
            on_hint(hinted)
