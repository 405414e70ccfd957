from slidepuzzle.engine.gameplay.game import GamePlay, try_move
from slidepuzzle.engine.gameplay.playback import SolutionPlayback

__all__ = ["GamePlay", "SolutionPlayback", "try_move"]
