from slidepuzzle.engine.gamegenerator.generator import (
    GameGenerator,
    ShuffleStrategy,
    count_inversions,
    is_solvable,
)

__all__ = ["GameGenerator", "ShuffleStrategy", "count_inversions", "is_solvable"]
