"""Engine tunables."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_shuffle_moves() -> dict[int, int]:
    return {2: 20, 3: 100, 4: 200}


@dataclass(frozen=True)
class EngineConfig:
    """Knobs shared by the generator, the solver and playback.

    Override single values with :func:`dataclasses.replace`::

        cfg = replace(DEFAULT_CONFIG, max_iterations=50_000)
    """

    # random-walk length per board size; other sizes use size² × 100
    shuffle_moves: dict[int, int] = field(default_factory=_default_shuffle_moves)
    # search iterations (heap pops) before a solve is aborted
    max_iterations: int = 10_000_000
    # seconds between two playback steps
    playback_interval: float = 0.2
    # resample budget of the permutation shuffle
    permutation_attempts: int = 1_000
    min_size: int = 2
    max_size: int = 8

    def moves_for(self, size: int) -> int:
        """Return the random-walk length used to scramble a *size* board."""
        return self.shuffle_moves.get(size, size * size * 100)

    def check_size(self, size: int) -> int:
        if not self.min_size <= size <= self.max_size:
            raise ValueError(
                f"Board size must be between {self.min_size} and "
                f"{self.max_size}, got {size}."
            )
        return size


DEFAULT_CONFIG = EngineConfig()
