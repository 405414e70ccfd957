"""Rich terminal frontend: boards, menus and status panels.

Tiles slide with the arrow keys; the solver runs in the background and
its solution is played back on a timer while the screen keeps updating.
"""

from __future__ import annotations

from typing import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from frontend.cli.input_handler import get_key, get_key_timeout
from slidepuzzle.config import DEFAULT_CONFIG, EngineConfig
from slidepuzzle.engine.gameplay import GamePlay
from slidepuzzle.engine.gamesolver import SolveResult, SolveStatus
from slidepuzzle.models.board import BoardState, Direction, Move

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_STATUS_TEXT = {
    SolveStatus.FOUND: "[bold green]Solution found: {moves} moves.[/bold green]  Press V to play it.",
    SolveStatus.ALREADY_SOLVED: "[green]Already solved![/green]",
    SolveStatus.UNSOLVABLE: "[red]This board cannot be solved.[/red]",
    SolveStatus.ABORTED: "[yellow]No solution within the search budget.[/yellow]  Try R to reshuffle.",
    SolveStatus.CANCELLED: "[dim]Search cancelled.[/dim]",
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def describe(result: SolveResult, remaining: int | None = None) -> str:
    """Status line markup for a finished search."""
    moves = len(result.moves) if remaining is None else remaining
    return _STATUS_TEXT[result.status].format(moves=moves)


def result_notice(game: GamePlay, result: SolveResult) -> str:
    """Like :func:`describe`, but only offers a solution that fits the board now."""
    if result.status is not SolveStatus.FOUND:
        return describe(result)
    if game.is_won:
        return ""
    remaining = len(game.state.solution)
    if not remaining:
        return "[yellow]The board changed during the search.[/yellow]  Press V to search again."
    return describe(result, remaining)


def hint_notice(move: Move | None) -> str:
    if move is None:
        return "[yellow]No hint available.[/yellow]"
    return f"[cyan]Hint:[/cyan] moved tile [bold]{move.tile_id + 1}[/bold]"


# -- board rendering ----------------------------------------------------------


def render_board(board: BoardState) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.grid()):
        cells: list[str] = []
        for c, tile_id in enumerate(row):
            tile = board.tile(tile_id)
            if tile.is_empty:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r * board.size + c):
                cells.append(f"[bold green]{tile.label:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{tile.label:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(sel_size: int, config: EngineConfig) -> None:
    console.clear()

    sizes = Text()
    for s in range(max(3, config.min_size), config.max_size + 1):
        if sizes:
            sizes.append("  ")
        if s == sel_size:
            sizes.append(f" {s}×{s} ", style="bold green on #313244")
        else:
            sizes.append(f" {s}×{s} ", style="dim")

    opts = Text()
    opts.append("  ← →", style="bold cyan")
    opts.append("  size    ", style="dim")
    opts.append("Enter", style="bold cyan")
    opts.append("  play    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  quit", style="dim")

    body = Group(Text(""), Align.center(sizes), Text(""), Align.center(opts), Text(""))
    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    size = game.size
    won = game.is_won
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    controls = Text()
    for key, label in (
        ("↑↓←→", "move"),
        ("N", "hint"),
        ("V", "solve"),
        ("X", "stop"),
        ("R", "shuffle"),
        ("Q", "back"),
    ):
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f"  {label} ", style="dim")

    parts: list = [Align.center(render_board(game.state.board))]
    if won:
        congrats = Text()
        congrats.append("\n  ★ ", style="bold yellow")
        congrats.append("SOLVED!", style="bold green")
        congrats.append(" ★\n", style="bold yellow")
        parts.append(Align.center(congrats))

    panel = Panel(
        Group(*parts),
        title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        border_style="bold green" if won else "bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


# -- game loop ----------------------------------------------------------------


def apply_hint(game: GamePlay, on_hint: Callable[[Move | None], None]) -> str:
    """Make the next solving move now, or once the background search ends."""
    if game.is_won:
        return "[green]Already solved![/green]"
    outcome = game.hint(on_hint)
    if isinstance(outcome, Move):
        return hint_notice(outcome)
    return ""


def _play_game(size: int, config: EngineConfig) -> None:
    game = GamePlay(size, config)
    results: list[SolveResult] = []
    hints: list[Move | None] = []
    notice = ""

    try:
        while True:
            if results:
                notice = result_notice(game, results.pop())
            if hints:
                notice = hint_notice(hints.pop())
            if game.is_solving:
                status = "[cyan]Solving…[/cyan]  Press X to cancel."
            elif game.is_playing:
                status = "[cyan]Playing solution…[/cyan]  Press X to stop."
            else:
                status = notice
            _draw_game(game, status)

            key = get_key_timeout(config.playback_interval / 2)
            if key is None:
                continue
            notice = ""

            if key in _DIRECTIONS:
                game.stop_playback()
                game.move(_DIRECTIONS[key])
            elif key == "hint":
                notice = apply_hint(game, hints.append)
            elif key == "solve":
                if game.is_won:
                    notice = "[green]Already solved![/green]"
                elif not game.is_solving and not game.is_playing:
                    game.find_or_show_solution(results.append)
            elif key == "stop":
                game.stop_playback()
                game.cancel_search()
                notice = "[dim]Stopped.[/dim]"
            elif key == "shuffle":
                game.reset()
                notice = "[yellow]Shuffled![/yellow]"
            elif key == "quit":
                return
    finally:
        game.close()


# -- public entry point -------------------------------------------------------


def run(size: int | None = None, config: EngineConfig = DEFAULT_CONFIG) -> None:
    """Launch the Rich CLI.  With *size* the menu is skipped."""
    if size is not None:
        _play_game(config.check_size(size), config)
        return

    sel_size = 3
    while True:
        _draw_menu(sel_size, config)
        key = get_key()
        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        if key == "left":
            sel_size = max(max(3, config.min_size), sel_size - 1)
        elif key == "right":
            sel_size = min(config.max_size, sel_size + 1)
        elif key == "enter":
            _play_game(sel_size, config)
