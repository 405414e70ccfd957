from slidepuzzle.engine.gamesolver.heuristics import (
    Evaluator,
    heuristic,
    linear_conflict,
    manhattan,
)
from slidepuzzle.engine.gamesolver.solver import Solver, SolveResult, SolveStatus
from slidepuzzle.engine.gamesolver.worker import BackgroundSolver, SolveJob

__all__ = [
    "BackgroundSolver",
    "Evaluator",
    "SolveJob",
    "SolveResult",
    "SolveStatus",
    "Solver",
    "heuristic",
    "linear_conflict",
    "manhattan",
]
