"""Board model for the sliding puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

from slidepuzzle.errors import BoardError


class Direction(StrEnum):
    """Direction a *tile* slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the blank to the tile that slides in the given direction.
# UP   → tile below the blank moves up, and so on.
DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}

# Neighbour order used everywhere the blank's surroundings are scanned.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Tile:
    """One tile.  ``id`` is stable; only ``current_position`` ever changes."""

    id: int
    current_position: int
    correct_position: int
    is_empty: bool = False

    @property
    def label(self) -> str:
        return "" if self.is_empty else str(self.id + 1)


@dataclass(frozen=True)
class Move:
    """A single slide: *tile_id* travels from *from_position* into the blank."""

    tile_id: int
    from_position: int
    to_position: int

    @property
    def blank_to(self) -> int:
        """Where the blank ends up after the slide."""
        return self.from_position


@dataclass
class BoardState:
    """An N×N board.

    ``tiles`` is ordered by tile id.  Positions are row-major indices in
    ``[0, size * size)``.
    """

    size: int
    tiles: list[Tile] = field(default_factory=list)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def goal(cls, size: int) -> BoardState:
        """Return the solved board: tile ``i`` at position ``i``, last tile blank."""
        if size < 2:
            raise BoardError(f"Board size must be at least 2, got {size}.")
        total = size * size
        tiles = [
            Tile(id=i, current_position=i, correct_position=i, is_empty=i == total - 1)
            for i in range(total)
        ]
        return cls(size=size, tiles=tiles)

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> BoardState:
        """Create a board from a row-major list of tile ids, one per position.

        The goal layout is assumed (tile ``i`` belongs at position ``i`` and
        the highest id is the blank).  Example::

            BoardState.from_flat(3, [0, 1, 2, 3, 4, 8, 6, 7, 5])
        """
        if len(flat) != size * size:
            raise BoardError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise BoardError(f"Tile ids must be 0..{size * size - 1}, got {flat}.")
        board = cls.goal(size)
        for pos, tile_id in enumerate(flat):
            board.tiles[tile_id].current_position = pos
        return board

    def copy(self) -> BoardState:
        return BoardState(size=self.size, tiles=[replace(t) for t in self.tiles])

    # -- queries --------------------------------------------------------------

    def tile(self, tile_id: int) -> Tile | None:
        if 0 <= tile_id < len(self.tiles) and self.tiles[tile_id].id == tile_id:
            return self.tiles[tile_id]
        for t in self.tiles:
            if t.id == tile_id:
                return t
        return None

    def tile_at(self, position: int) -> Tile:
        for t in self.tiles:
            if t.current_position == position:
                return t
        raise BoardError(f"No tile at position {position}.")

    @property
    def blank(self) -> Tile:
        for t in self.tiles:
            if t.is_empty:
                return t
        raise BoardError("Board has no blank tile.")

    def row_col(self, position: int) -> tuple[int, int]:
        return divmod(position, self.size)

    def grid(self) -> list[list[int]]:
        """Tile ids laid out row by row (inverse of :meth:`from_flat`)."""
        flat = [0] * (self.size * self.size)
        for t in self.tiles:
            flat[t.current_position] = t.id
        return [flat[r * self.size : (r + 1) * self.size] for r in range(self.size)]

    def is_solved(self) -> bool:
        return all(t.current_position == t.correct_position for t in self.tiles)

    def is_tile_correct(self, position: int) -> bool:
        """Check whether the tile sitting at *position* belongs there."""
        return self.tile_at(position).correct_position == position

    def validate(self) -> None:
        """Raise :class:`BoardError` unless the board honours its invariants."""
        n = self.size
        if n < 2:
            raise BoardError(f"Board size must be at least 2, got {n}.")
        total = n * n
        if len(self.tiles) != total:
            raise BoardError(
                f"Expected {total} tiles for a {n}×{n} board, got {len(self.tiles)}."
            )
        blanks = sum(1 for t in self.tiles if t.is_empty)
        if blanks != 1:
            raise BoardError(f"Board must have exactly one blank tile, found {blanks}.")

        seen_ids: set[int] = set()
        current: set[int] = set()
        correct: set[int] = set()
        for t in self.tiles:
            if t.id in seen_ids:
                raise BoardError(f"Duplicate tile id {t.id}.")
            seen_ids.add(t.id)
            for pos in (t.current_position, t.correct_position):
                if not 0 <= pos < total:
                    raise BoardError(f"Tile {t.id} has out-of-range position {pos}.")
            current.add(t.current_position)
            correct.add(t.correct_position)
        if len(current) != total:
            raise BoardError("Two tiles share a current position.")
        if len(correct) != total:
            raise BoardError("Two tiles share a correct position.")


# -- state-space operations ---------------------------------------------------


def canonical_key(board: BoardState) -> tuple[int, ...]:
    """Current positions listed in tile-id order.

    Two boards share a key exactly when every tile id sits on the same
    position in both, regardless of how ``tiles`` is ordered in memory.
    """
    return tuple(t.current_position for t in sorted(board.tiles, key=lambda t: t.id))


def is_goal(board: BoardState) -> bool:
    return board.is_solved()


def neighbor_positions(position: int, size: int) -> list[int]:
    """In-bounds orthogonal neighbours of *position*, in up/down/left/right order."""
    r, c = divmod(position, size)
    out: list[int] = []
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = r + dr, c + dc
        if 0 <= nr < size and 0 <= nc < size:
            out.append(nr * size + nc)
    return out


def successors(board: BoardState) -> list[tuple[Move, BoardState]]:
    """Every board one slide away from *board*, paired with that slide.

    *board* itself is left untouched.
    """
    blank = board.blank
    out: list[tuple[Move, BoardState]] = []
    for pos in neighbor_positions(blank.current_position, board.size):
        mover = board.tile_at(pos)
        nxt = board.copy()
        nxt.tiles[board.tiles.index(mover)].current_position = blank.current_position
        nxt.tiles[board.tiles.index(blank)].current_position = pos
        out.append((Move(mover.id, pos, blank.current_position), nxt))
    return out
