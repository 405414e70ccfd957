"""Sliding puzzle solver: A* over position keys.

The frontier is a binary heap of ``(f, h, seq, index)`` entries next to a
dict mapping each open key to the arena index of its best node.  Ties on
``f`` go to the smaller ``h``, then to the earlier insertion, so two runs
on the same board always return the same moves.  Superseded heap entries
are left in place and skipped when popped.

Nodes live in a flat arena list and point at their parent by index; the
whole arena is dropped when :meth:`Solver.solve` returns.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import StrEnum

from slidepuzzle.config import DEFAULT_CONFIG
from slidepuzzle.engine.gamegenerator.generator import is_solvable
from slidepuzzle.engine.gamesolver.heuristics import Evaluator
from slidepuzzle.models.board import BoardState, Move, canonical_key, neighbor_positions

logger = logging.getLogger(__name__)


class SolveStatus(StrEnum):
    FOUND = "found"
    ALREADY_SOLVED = "already-solved"
    UNSOLVABLE = "unsolvable"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


@dataclass
class SolveResult:
    """Outcome of one search.

    ``moves`` is empty for every status except ``FOUND``.
    """

    status: SolveStatus
    moves: list[Move] = field(default_factory=list)
    iterations: int = 0
    expanded: int = 0
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.status is SolveStatus.FOUND


class _Node:
    __slots__ = ("key", "g", "h", "parent", "move")

    def __init__(
        self, key: tuple[int, ...], g: int, h: int, parent: int, move: Move | None
    ) -> None:
        self.key = key
        self.g = g
        self.h = h
        self.parent = parent
        self.move = move


def _path(arena: list[_Node], index: int) -> list[Move]:
    moves: list[Move] = []
    node = arena[index]
    while node.parent >= 0:
        moves.append(node.move)  # type: ignore[arg-type]
        node = arena[node.parent]
    moves.reverse()
    return moves


def _search(
    board: BoardState,
    budget: int,
    cancel: threading.Event | None,
) -> tuple[SolveStatus, list[Move], int, int]:
    """A* over position keys.

    Expansion is the key-level form of :func:`~slidepuzzle.models.board.successors`:
    the blank trades places with each neighbour in the same up/down/left/right
    order, without building a :class:`BoardState` per child.
    """
    n = board.size
    ordered = sorted(board.tiles, key=lambda t: t.id)
    ids = [t.id for t in ordered]
    goal = tuple(t.correct_position for t in ordered)
    evaluate = Evaluator(board)
    blank = evaluate.blank_index
    adj = [tuple(neighbor_positions(p, n)) for p in range(n * n)]

    start = canonical_key(board)
    h0 = evaluate(start)
    arena = [_Node(start, 0, h0, -1, None)]
    heap: list[tuple[int, int, int, int]] = [(h0, h0, 0, 0)]
    seq = itertools.count(1)
    open_nodes: dict[tuple[int, ...], int] = {start: 0}
    closed: set[tuple[int, ...]] = set()
    iterations = 0
    expanded = 0

    while heap:
        if iterations >= budget:
            return SolveStatus.ABORTED, [], iterations, expanded
        if cancel is not None and cancel.is_set():
            return SolveStatus.CANCELLED, [], iterations, expanded
        iterations += 1

        _, _, _, index = heapq.heappop(heap)
        node = arena[index]
        key = node.key
        if key in closed:
            continue

        if key == goal:
            return SolveStatus.FOUND, _path(arena, index), iterations, expanded

        open_nodes.pop(key, None)
        closed.add(key)
        expanded += 1

        g2 = node.g + 1
        bpos = key[blank]
        for npos in adj[bpos]:
            i = key.index(npos)
            nxt = list(key)
            nxt[i] = bpos
            nxt[blank] = npos
            child_key = tuple(nxt)
            if child_key in closed:
                continue
            existing = open_nodes.get(child_key)
            if existing is not None and arena[existing].g <= g2:
                continue
            h2 = evaluate(child_key)
            arena.append(_Node(child_key, g2, h2, index, Move(ids[i], npos, bpos)))
            child = len(arena) - 1
            open_nodes[child_key] = child
            heapq.heappush(heap, (g2 + h2, h2, next(seq), child))

    return SolveStatus.UNSOLVABLE, [], iterations, expanded


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def solve(
        board: BoardState,
        *,
        max_iterations: int | None = None,
        cancel: threading.Event | None = None,
        check_parity: bool = True,
    ) -> SolveResult:
        """Search for a move sequence that takes *board* to its goal.

        *board* is never modified.  Running out of *max_iterations* yields
        ``ABORTED``; an exhausted frontier (or, with *check_parity*, an
        odd-parity start) yields ``UNSOLVABLE``.  Setting *cancel* stops
        the search at the next iteration with ``CANCELLED``.
        """
        board.validate()
        t0 = time.perf_counter()

        if board.is_solved():
            return SolveResult(SolveStatus.ALREADY_SOLVED)

        if check_parity and not Solver.is_solvable(board):
            logger.info("Board fails the parity test; skipping search")
            return SolveResult(SolveStatus.UNSOLVABLE, elapsed=time.perf_counter() - t0)

        budget = DEFAULT_CONFIG.max_iterations if max_iterations is None else max_iterations
        logger.debug("Solving %d×%d board (budget %d)", board.size, board.size, budget)
        status, moves, iterations, expanded = _search(board, budget, cancel)
        result = SolveResult(
            status=status,
            moves=moves,
            iterations=iterations,
            expanded=expanded,
            elapsed=time.perf_counter() - t0,
        )

        if status is SolveStatus.FOUND:
            logger.info(
                "Solution of %d moves after %d iterations (%.2fs)",
                len(moves), iterations, result.elapsed,
            )
        elif status is SolveStatus.ABORTED:
            logger.warning("Search aborted after %d iterations", iterations)
        elif status is SolveStatus.CANCELLED:
            logger.debug("Search cancelled after %d iterations", iterations)
        else:
            logger.warning("Frontier exhausted after %d iterations", iterations)
        return result

    @staticmethod
    def hint(board: BoardState, *, max_iterations: int | None = None) -> Move | None:
        """Return the single best next move, or ``None`` if solved / unsolvable."""
        if board.is_solved():
            return None
        result = Solver.solve(board, max_iterations=max_iterations)
        return result.moves[0] if result.moves else None

    @staticmethod
    def is_solvable(board: BoardState) -> bool:
        """Return True if *board* can reach the goal state."""
        return is_solvable(board)
