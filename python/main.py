#!/usr/bin/env python3
"""Pipe Puzzle Game.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -s 5       # Rich terminal, 5×5 random puzzles
    python main.py --seed 7           # reproducible random puzzles
    python main.py --log-level DEBUG --log-file pipes.log
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import DEFAULT_GRID_SIZE, MAX_GRID_SIZE, MIN_GRID_SIZE  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel, log_file: Optional[Path]) -> None:
    """Send log records to *log_file* when given, otherwise to stderr.

    The terminal frontends redraw the whole screen, so anything chattier
    than WARNING belongs in a file.
    """
    handlers: list[logging.Handler] = []
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def _menu_loop(size: int, seed: Optional[int]) -> None:
    while True:
        print()
        print("  ====================================")
        print("         P I P E   P U Z Z L E        ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            frontend = {"1": Frontend.vanilla, "2": Frontend.rich}[choice]
            mod = importlib.import_module(_RUNNERS[frontend])
            mod.run(size=size, seed=seed)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: int = typer.Option(
        DEFAULT_GRID_SIZE, "-s", "--size",
        min=MIN_GRID_SIZE, max=MAX_GRID_SIZE,
        help=f"Grid size of random puzzles ({MIN_GRID_SIZE}-{MAX_GRID_SIZE}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the random puzzle generator.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level",
        help="Logging threshold.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Write log records to this file instead of stderr.",
    ),
) -> None:
    """Pipe Puzzle Game."""
    _configure_logging(log_level, log_file)
    logger.debug("Starting with frontend=%s size=%d seed=%s", frontend, size, seed)

    if frontend is None:
        _menu_loop(size, seed)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(size=size, seed=seed)


if __name__ == "__main__":
    app()
