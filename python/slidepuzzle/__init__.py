"""Sliding puzzle engine: shuffling, move validation and A* solving."""

from slidepuzzle.api import apply_move, initialize_or_shuffle, is_complete, solve, solve_async
from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.errors import BoardError, PuzzleError, ShuffleError

__all__ = [
    "DEFAULT_CONFIG",
    "BoardError",
    "EngineConfig",
    "PuzzleError",
    "ShuffleError",
    "apply_move",
    "initialize_or_shuffle",
    "is_complete",
    "solve",
    "solve_async",
]
