"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler and backend as the vanilla CLI.  Includes a built-in
menu for puzzle choice, play, and study.
"""

from __future__ import annotations

import random
import sys
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gamegenerator import (
    DEFAULT_GRID_SIZE,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    PuzzleGenerator,
)
from backend.engine.gameplay import ActionResult, GamePlay
from backend.models.piece import PieceType
from backend.models.puzzle import PuzzleDefinition
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.presentation import (
    Selection,
    apply_key,
    cell_glyph,
    error_message,
    status_message,
    type_glyph,
)

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _result_status(result: ActionResult | None) -> str:
    if result is None or result.ok:
        return ""
    return f"[red]{error_message(result.error)}[/red]"


# -- board rendering ----------------------------------------------------------


def _render_board(game: GamePlay, cursor: int | None = None) -> Table:
    """Return a Rich Table representing the pipe grid.

    Pipes carrying flow from the start cell are green.
    """
    flow = game.flow()
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(game.size):
        table.add_column(width=1, justify="center")

    cells = game.board_snapshot()
    for r in range(game.size):
        row: list[str] = []
        for cell in cells[r * game.size : (r + 1) * game.size]:
            glyph = cell_glyph(cell)
            if cell.is_reserved:
                style = "bold cyan"
            elif cell.piece is None:
                style = "dim"
            elif cell.index in flow:
                style = "bold green"
            else:
                style = "bold white"
            if cell.index == cursor:
                style += " on #313244"
            row.append(f"[{style}]{glyph}[/{style}]")
        table.add_row(*row)

    return table


def _render_inventory(game: GamePlay, selection: Selection) -> Text:
    text = Text("  Inventory: ", style="dim")
    for piece_type, count in game.inventory().items():
        label = f" {type_glyph(piece_type)} {piece_type} ×{count} "
        if piece_type == selection.piece_type:
            text.append(label, style="bold green on #313244")
        elif count == 0:
            text.append(label, style="dim")
        else:
            text.append(label, style="bold white")
    return text


def _controls(extra: bool = False) -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Tab", style="bold cyan")
    controls.append("  piece   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  place   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  rotate   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  help   ", style="dim")
    if extra:
        controls.append("V", style="bold yellow")
        controls.append("  solve   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


# -- solver helpers -----------------------------------------------------------


def _reveal_solution(game: GamePlay) -> str:
    steps = game.definition.solution
    if not steps:
        return "[yellow]This puzzle has no stored solution.[/yellow]"

    game.reset()
    for i, step in enumerate(steps):
        result = game.apply_step(step)
        if not result:
            return f"[red]Solution step {i + 1} failed: {result.error}[/red]"
        console.clear()

        progress = Text()
        progress.append(f"  Solving… step {i + 1}/{len(steps)} ", style="bold cyan")
        progress.append(f"({step.type} on cell {step.index})", style="dim")

        panel = Panel(
            Align.center(_render_board(game)),
            title=f"[bold cyan]Reveal  {game.size}×{game.size}[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(0.15)

    return f"[bold green]Solved in {len(steps)} placements![/bold green]"


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    """Draw the main menu."""
    console.clear()

    sizes = Text()
    for s in range(MIN_GRID_SIZE, MAX_GRID_SIZE + 1):
        if s > MIN_GRID_SIZE:
            sizes.append("  ")
        if s == sel_size:
            sizes.append(f" {s}×{s} ", style="bold green on #313244")
        else:
            sizes.append(f" {s}×{s} ", style="dim")

    nav = Text("  ← →  change size of random puzzles", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Classic 4×4    ")
    opts.append("2", style="bold cyan")
    opts.append("  Random    ")
    opts.append("3", style="bold yellow")
    opts.append("  Study    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]P I P E   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    return stats


def _draw_game(game: GamePlay, selection: Selection, status: str = "") -> None:
    """Draw the game screen (play mode — stats visible, no reveal)."""
    console.clear()

    panel = Panel(
        Group(
            Align.center(_render_board(game, selection.index)),
            Text(""),
            Align.center(_render_inventory(game, selection)),
            Align.center(Text(status_message(game), style="italic")),
        ),
        title=f"[bold cyan]Pipe Puzzle  {game.size}×{game.size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save the cursor right before the stats line so _update_time() can
    # come back and overwrite only that line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls()))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted — no flicker from a full redraw.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    m, s = divmod(int(game.state.elapsed_time), 60)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{m:02d}:{s:02d}{_RS}"
    )

    visible_len = len(f"Moves: {game.state.moves}    Time: {m:02d}:{s:02d}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_study(game: GamePlay, selection: Selection, status: str = "") -> None:
    """Draw the study screen (no stats, solution reveal available)."""
    console.clear()

    panel = Panel(
        Group(
            Align.center(_render_board(game, selection.index)),
            Text(""),
            Align.center(_render_inventory(game, selection)),
            Align.center(Text(status_message(game), style="italic")),
        ),
        title=f"[bold yellow]Study  {game.size}×{game.size}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(extra=True)))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append(status_message(game), style="bold green")
    congrats.append(" ★\n", style="bold yellow")

    group = Group(
        Align.center(_render_board(game)),
        Align.center(congrats),
        Align.center(_stats(game)),
    )

    panel = Panel(
        group,
        title=f"[bold green]Pipe Puzzle  {game.size}×{game.size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_help() -> None:
    console.clear()

    pieces = Text()
    for piece_type in PieceType:
        pieces.append(f"  {type_glyph(piece_type)} ", style="bold cyan")
        pieces.append(f"{piece_type}  ", style="bold white")

    group = Group(
        Text("Lay pipes so the flow runs from S to E."),
        Text("Empty cells are walls. Every piece in the inventory must be placed.\n"),
        Align.center(pieces),
        Text(),
        _controls(),
    )
    panel = Panel(
        group,
        title="[bold cyan]How to play[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Clock paused. Press any key to return.\n", style="dim"))
    )


# -- game loops ---------------------------------------------------------------


def _fresh_selection(game: GamePlay) -> Selection:
    selection = Selection()
    selection.cycle(game)
    return selection


def _play_game(definition: PuzzleDefinition) -> None:
    """Play mode — timed, no solution reveal."""
    while True:
        game = GamePlay(definition)
        selection = _fresh_selection(game)
        status = ""

        while not game.is_won:
            _draw_game(game, selection, status)

            # Wait for input with a short timeout so the clock keeps ticking.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            if key == "restart":
                game.reset()
                selection = _fresh_selection(game)
                status = ""
            elif key == "quit":
                return
            elif key == "help":
                game.state.pause()
                _draw_help()
                get_key()
                game.state.resume()
            else:
                status = _result_status(apply_key(game, selection, key))

        # -- win ---------------------------------------------------------------
        game.state.pause()
        _draw_win(game)

        console.print(
            Align.center(
                Text(
                    "\n  Press R to play again, Q to go back.\n",
                    style="dim",
                )
            )
        )

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


def _study_game(definition: PuzzleDefinition) -> None:
    """Study mode — untimed, the stored solution can be revealed."""
    game = GamePlay(definition)
    selection = _fresh_selection(game)
    status = ""

    while True:
        _draw_study(game, selection, status)
        status = ""
        key = get_key()

        if key == "restart":
            game.reset()
            selection = _fresh_selection(game)
            status = "[yellow]Board cleared![/yellow]"
        elif key == "solve":
            status = _reveal_solution(game)
        elif key == "quit":
            return
        elif not game.is_won:
            status = _result_status(apply_key(game, selection, key))


# -- menu loop ----------------------------------------------------------------


def _menu_loop(sel_size: int, rng: random.Random) -> None:
    while True:
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key == "left":
            sel_size = max(MIN_GRID_SIZE, sel_size - 1)
        elif key == "right":
            sel_size = min(MAX_GRID_SIZE, sel_size + 1)
        elif key in ("1", "enter"):
            _play_game(PuzzleGenerator.reference())
        elif key == "2":
            _play_game(PuzzleGenerator.generate(sel_size, rng))
        elif key == "3":
            _study_game(PuzzleGenerator.generate(sel_size, rng))


# -- public entry point -------------------------------------------------------


def run(size: int = DEFAULT_GRID_SIZE, seed: int | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(size, random.Random(seed))
