from slidepuzzle.models.board import (
    BoardState,
    Direction,
    Move,
    Tile,
    canonical_key,
    is_goal,
    successors,
)

__all__ = [
    "BoardState",
    "Direction",
    "Move",
    "Tile",
    "canonical_key",
    "is_goal",
    "successors",
]
