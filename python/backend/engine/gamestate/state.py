"""Tracks the mutable state of a puzzle in progress."""

from __future__ import annotations

import time

from backend.models.board import Board
from backend.models.inventory import Inventory


class GameState:
    """Holds the current board, inventory, move counter, and elapsed time."""

    def __init__(self, board: Board, inventory: Inventory) -> None:
        self.board = board
        self.inventory = inventory
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def placed_count(self) -> int:
        return self.board.placed_count
