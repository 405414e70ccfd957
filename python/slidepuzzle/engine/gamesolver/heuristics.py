"""Distance estimates used to order the search.

Both estimates work on *position keys*: the tuple returned by
:func:`~slidepuzzle.models.board.canonical_key`, i.e. the current position
of every tile listed in tile-id order.
"""

from __future__ import annotations

from slidepuzzle.models.board import BoardState, canonical_key


class Evaluator:
    """Precomputed goal tables for one board layout.

    Built once per search; scoring a key then costs a table lookup per
    tile for the Manhattan part and a pass over each line for the
    linear-conflict part.
    """

    __slots__ = ("size", "blank_index", "goal_row", "goal_col", "_dist")

    def __init__(self, board: BoardState) -> None:
        n = board.size
        ordered = sorted(board.tiles, key=lambda t: t.id)
        self.size = n
        self.blank_index = next(i for i, t in enumerate(ordered) if t.is_empty)
        self.goal_row = [t.correct_position // n for t in ordered]
        self.goal_col = [t.correct_position % n for t in ordered]

        # _dist[i][pos]: Manhattan distance of tile i standing on pos.
        dist: list[list[int]] = []
        for i in range(len(ordered)):
            gr, gc = self.goal_row[i], self.goal_col[i]
            if i == self.blank_index:
                dist.append([0] * (n * n))
                continue
            dist.append([abs(p // n - gr) + abs(p % n - gc) for p in range(n * n)])
        self._dist = dist

    def manhattan(self, key: tuple[int, ...]) -> int:
        dist = self._dist
        return sum(dist[i][pos] for i, pos in enumerate(key))

    def linear_conflict(self, key: tuple[int, ...]) -> int:
        n = self.size
        rows: list[list[tuple[int, int]]] = [[] for _ in range(n)]
        cols: list[list[tuple[int, int]]] = [[] for _ in range(n)]
        for i, pos in enumerate(key):
            if i == self.blank_index:
                continue
            r, c = divmod(pos, n)
            if self.goal_row[i] == r:
                rows[r].append((c, self.goal_col[i]))
            if self.goal_col[i] == c:
                cols[c].append((r, self.goal_row[i]))

        conflicts = 0
        for line in rows + cols:
            if len(line) < 2:
                continue
            line.sort()
            for a in range(len(line) - 1):
                target = line[a][1]
                for b in range(a + 1, len(line)):
                    if target > line[b][1]:
                        conflicts += 1
        return 2 * conflicts

    def __call__(self, key: tuple[int, ...]) -> int:
        return self.manhattan(key) + self.linear_conflict(key)


# -- board-level helpers ------------------------------------------------------


def manhattan(board: BoardState) -> int:
    """Sum of |Δrow| + |Δcol| over every non-blank tile."""
    return Evaluator(board).manhattan(canonical_key(board))


def linear_conflict(board: BoardState) -> int:
    """Two extra moves for every pair of tiles inverted within their goal line."""
    return Evaluator(board).linear_conflict(canonical_key(board))


def heuristic(board: BoardState) -> int:
    return Evaluator(board)(canonical_key(board))
