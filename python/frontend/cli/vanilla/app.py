"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for puzzle choice, play, and study.
"""

from __future__ import annotations

import random
import sys
import time

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


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected size / cursor)


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time string (no newline)."""
    return (
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )


# -- board rendering ----------------------------------------------------------


def _render_board(game: GamePlay, cursor: int | None = None) -> str:
    """Return an ANSI-coloured text representation of the board.

    Pipes carrying flow from the start cell are green; the cursor cell
    is highlighted.
    """
    flow = game.flow()
    sep = "+" + ("---+" * game.size)
    lines: list[str] = [sep]
    cells = game.board_snapshot()
    for r in range(game.size):
        row_cells: list[str] = []
        for cell in cells[r * game.size : (r + 1) * game.size]:
            glyph = cell_glyph(cell)
            if cell.index == cursor:
                row_cells.append(f"{_BG_SEL} {glyph} {_R}")
            elif cell.is_reserved:
                row_cells.append(f"{_C} {glyph} {_R}")
            elif cell.piece is None:
                row_cells.append(f"{_DIM} {glyph} {_R}")
            elif cell.index in flow:
                row_cells.append(f"{_G} {glyph} {_R}")
            else:
                row_cells.append(f" {glyph} ")
        lines.append("|" + "|".join(row_cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _render_inventory(game: GamePlay, selection: Selection) -> str:
    parts: list[str] = []
    for piece_type, count in game.inventory().items():
        label = f"{type_glyph(piece_type)} {piece_type} ×{count}"
        if piece_type == selection.piece_type:
            parts.append(f"{_BG_SEL} {label} {_R}")
        elif count == 0:
            parts.append(f"{_DIM} {label} {_R}")
        else:
            parts.append(f" {label} ")
    return "  Inventory:" + " ".join(parts)


# -- solver helpers -----------------------------------------------------------


def _reveal_solution(game: GamePlay) -> str:
    """Reset the board and replay the known solution.  Returns a status message."""
    steps = game.definition.solution
    if not steps:
        return f"{_Y}This puzzle has no stored solution.{_R}"

    game.reset()
    for i, step in enumerate(steps):
        result = game.apply_step(step)
        if not result:
            return f"{_RED}Solution step {i + 1} failed: {result.error}{_R}"
        _clear()
        print(f"  {_C}=== Solving… ({game.size}×{game.size}) ==={_R}")
        print()
        print(_render_board(game))
        print()
        print(f"  Step {i + 1}/{len(steps)}  ({step.type} on cell {step.index})")
        sys.stdout.flush()
        time.sleep(0.15)

    return f"{_G}Solved in {len(steps)} placements!{_R}"


# -- menu screen --------------------------------------------------------------


def _show_menu(sel_size: int) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}        P I P E   P U Z Z L E        {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()

    sizes_str = ""
    for s in range(MIN_GRID_SIZE, MAX_GRID_SIZE + 1):
        if s == sel_size:
            sizes_str += f"  {_BG_SEL} {s}×{s} {_R}"
        else:
            sizes_str += f"  {_DIM}{s}×{s}{_R}"
    print(f"    Size:{sizes_str}")
    print(f"    {_DIM}← → to change (random puzzles){_R}")
    print()

    print(f"    {_C}1{_R}  Play classic 4×4")
    print(f"    {_C}2{_R}  Play random")
    print(f"    {_Y}3{_R}  Study")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------


def _controls_line() -> str:
    return (
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}Tab{_R}: piece  |  "
        f"{_C}P{_R}: place  |  "
        f"{_C}Space{_R}: rotate  |  "
        f"{_C}R{_R}: restart  |  "
        f"{_C}H{_R}: help  |  "
        f"{_C}Q{_R}: back"
    )


def _show_game(game: GamePlay, selection: Selection, status: str = "") -> None:
    """Draw the full game screen.

    The stats line (Moves + Time) is printed last, with no trailing
    newline, so ``_update_time`` can cheaply overwrite it in-place
    using ``\\r\\033[K``.
    """
    _clear()
    print(f"  {_C}=== Pipe Puzzle ({game.size}×{game.size}) ==={_R}")
    print()
    print(_render_board(game, selection.index))
    print()
    print(_render_inventory(game, selection))
    print(f"  {status_message(game)}")
    print()
    print(_controls_line())
    if status:
        print(f"  {status}")
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_study(game: GamePlay, selection: Selection, status: str = "") -> None:
    _clear()
    print(f"  {_Y}=== Study ({game.size}×{game.size}) ==={_R}")
    print()
    print(_render_board(game, selection.index))
    print()
    print(_render_inventory(game, selection))
    print(f"  {status_message(game)}")
    if status:
        print(f"\n  {status}")
    print()
    print(_controls_line() + f"  |  {_Y}V{_R}: solve")


def _show_win(game: GamePlay) -> None:
    _clear()
    print(f"  {_G}=== Pipe Puzzle ({game.size}×{game.size}) ==={_R}")
    print()
    print(_render_board(game))
    print()
    print(f"  {_G}★ {status_message(game)} ★{_R}")
    print()
    print(
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )


def _show_help() -> None:
    _clear()
    print(f"  {_C}=== How to play ==={_R}")
    print()
    print(f"  Lay pipes so the flow runs from {_C}S{_R} to {_C}E{_R}.")
    print("  Empty cells are walls. Every piece in the inventory must be placed.")
    print()
    print("    " + "   ".join(f"{_C}{type_glyph(t)}{_R} {t}" for t in PieceType))
    print()
    print(_controls_line())
    print(f"\n  {_DIM}Clock paused. Press any key to return.{_R}")


def _result_status(result: ActionResult | None) -> str:
    if result is None or result.ok:
        return ""
    return f"{_RED}{error_message(result.error)}{_R}"


# -- game loops ---------------------------------------------------------------


def _play_game(definition: PuzzleDefinition) -> None:
    """Play mode — timed, no solution reveal."""
    while True:
        game = GamePlay(definition)
        selection = Selection()
        selection.cycle(game)
        status = ""

        while not game.is_won:
            _show_game(game, selection, status)

            # Wait for input; update the time display every 0.5 s.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            if key == "restart":
                game.reset()
                selection = Selection()
                selection.cycle(game)
                status = ""
            elif key == "quit":
                return
            elif key == "help":
                game.state.pause()
                _show_help()
                get_key()
                game.state.resume()
            else:
                status = _result_status(apply_key(game, selection, key))

        # -- win ---------------------------------------------------------------
        game.state.pause()
        _show_win(game)
        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


def _study_game(definition: PuzzleDefinition) -> None:
    """Study mode — untimed, the stored solution can be revealed."""
    game = GamePlay(definition)
    selection = Selection()
    selection.cycle(game)
    status = ""

    while True:
        _show_study(game, selection, status)
        status = ""
        key = get_key()

        if key == "restart":
            game.reset()
            selection = Selection()
            selection.cycle(game)
            status = f"{_Y}Board cleared!{_R}"
        elif key == "solve":
            status = _reveal_solution(game)
        elif key == "quit":
            return
        elif not game.is_won:
            status = _result_status(apply_key(game, selection, key))


# -- menu loop ----------------------------------------------------------------


def _menu_loop(sel_size: int, rng: random.Random) -> None:
    while True:
        _show_menu(sel_size)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
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
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(size, random.Random(seed))
