#!/usr/bin/env python3
"""Sliding Puzzle.

Usage::

    python main.py play               # interactive menu
    python main.py play -s 4          # straight into a 4×4 game
    python main.py shuffle -s 3 --seed 7
    python main.py solve --board 1,2,3,4,5,0,7,8,6
"""

from __future__ import annotations

import math
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import rich.box
import typer
from rich.console import Console
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig  # noqa: E402
from slidepuzzle.engine.gamegenerator import GameGenerator, ShuffleStrategy  # noqa: E402
from slidepuzzle.engine.gamesolver import Solver, SolveStatus  # noqa: E402
from slidepuzzle.errors import BoardError, PuzzleError  # noqa: E402
from slidepuzzle.log import configure_logging  # noqa: E402
from slidepuzzle.models.board import BoardState  # noqa: E402

console = Console()


# -- helpers ------------------------------------------------------------------


def parse_board(text: str) -> BoardState:
    """Parse row-major tile labels (``0`` = blank) into a board.

    ``"1,2,3,4,5,0,7,8,6"`` is a 3×3 board one move away from solved.
    """
    try:
        labels = [int(part) for part in text.replace(" ", ",").split(",") if part]
    except ValueError as exc:
        raise BoardError(f"Board must be comma-separated integers: {text!r}") from exc
    size = math.isqrt(len(labels))
    if size * size != len(labels):
        raise BoardError(f"{len(labels)} tiles do not form a square board.")
    blank_id = size * size - 1
    return BoardState.from_flat(size, [blank_id if v == 0 else v - 1 for v in labels])


def _config(max_iterations: Optional[int], interval: Optional[float] = None) -> EngineConfig:
    cfg = DEFAULT_CONFIG
    if max_iterations is not None:
        cfg = replace(cfg, max_iterations=max_iterations)
    if interval is not None:
        cfg = replace(cfg, playback_interval=interval)
    return cfg


def _print_board(board: BoardState) -> None:
    from frontend.cli.rich.app import render_board

    console.print(render_board(board))


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Sliding Puzzle.")


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log search progress."),
) -> None:
    configure_logging(verbose)


@app.command()
def play(
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=DEFAULT_CONFIG.min_size, max=DEFAULT_CONFIG.max_size,
        help="Grid size. Omit for the interactive menu.",
    ),
    max_iterations: Optional[int] = typer.Option(
        None, "--max-iterations", min=1, help="Search budget per solve.",
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", min=0.0, help="Seconds between playback steps.",
    ),
) -> None:
    """Play in the Rich terminal frontend."""
    from frontend.cli.rich import app as rich_app

    rich_app.run(size=size, config=_config(max_iterations, interval))


@app.command()
def shuffle(
    size: int = typer.Option(
        3, "-s", "--size",
        min=DEFAULT_CONFIG.min_size, max=DEFAULT_CONFIG.max_size,
        help="Grid size.",
    ),
    moves: Optional[int] = typer.Option(None, "-m", "--moves", min=1, help="Random-walk length."),
    strategy: ShuffleStrategy = typer.Option(ShuffleStrategy.RANDOM_WALK, "--strategy"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible board."),
) -> None:
    """Print a solvable shuffled board."""
    try:
        board = GameGenerator.generate(size, moves=moves, rng=random.Random(seed), strategy=strategy)
    except PuzzleError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    _print_board(board)
    labels = [0 if board.tiles[i].is_empty else i + 1 for row in board.grid() for i in row]
    console.print(",".join(map(str, labels)))


@app.command()
def solve(
    board_text: Optional[str] = typer.Option(
        None, "-b", "--board", help="Row-major tile labels, 0 for the blank.",
    ),
    size: int = typer.Option(3, "-s", "--size", help="Size of a generated board."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed of a generated board."),
    max_iterations: Optional[int] = typer.Option(
        None, "--max-iterations", min=1, help="Search budget.",
    ),
) -> None:
    """Solve a given board, or a freshly shuffled one."""
    cfg = _config(max_iterations)
    try:
        if board_text is not None:
            board = parse_board(board_text)
            board.validate()
        else:
            board = GameGenerator.generate(cfg.check_size(size), rng=random.Random(seed), config=cfg)
    except (PuzzleError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    _print_board(board)
    result = Solver.solve(board, max_iterations=cfg.max_iterations)
    console.print(
        f"Status: [bold]{result.status.value}[/bold]  "
        f"({result.iterations} iterations, {result.elapsed:.2f}s)"
    )

    if result.moves:
        table = Table(box=rich.box.ROUNDED, border_style="dim")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Tile", justify="right", style="yellow")
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        for i, move in enumerate(result.moves, 1):
            table.add_row(str(i), str(move.tile_id + 1), str(move.from_position), str(move.to_position))
        console.print(table)

    if result.status not in (SolveStatus.FOUND, SolveStatus.ALREADY_SOLVED):
        raise typer.Exit(2)


if __name__ == "__main__":
    app()
