"""Core gameplay logic — applies player actions and derives the puzzle status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Mapping

from backend.engine.connectivity import ConnectivityEvaluator
from backend.engine.gamestate import GameState
from backend.models.board import Cell
from backend.models.errors import PuzzleError
from backend.models.inventory import RequiredPiece
from backend.models.piece import PieceType, coerce_piece_type
from backend.models.puzzle import PuzzleDefinition, SolutionStep

logger = logging.getLogger(__name__)


class PuzzleStatus(StrEnum):
    IN_PROGRESS = "in_progress"
    ALL_PLACED_NOT_CONNECTED = "all_placed_not_connected"
    SOLVED = "solved"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a player action; falsy when the action was rejected."""

    error: PuzzleError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class GamePlay:
    """Orchestrates a single puzzle session."""

    def __init__(self, definition: PuzzleDefinition) -> None:
        self.definition = definition
        self.size = definition.size
        self.state = GameState(definition.new_board(), definition.new_inventory())

    # -- actions --------------------------------------------------------------

    def place_piece(self, piece_type: PieceType | str, index: int) -> ActionResult:
        """Take a *piece_type* piece from the inventory and drop it on *index*.

        The inventory only changes once the board has accepted the piece.
        """
        try:
            piece_type = coerce_piece_type(piece_type)
            self.state.inventory.ensure_available(piece_type)
            self.state.board.place(index, piece_type)
            self.state.inventory.take(piece_type)
        except PuzzleError as exc:
            logger.debug("Rejected place of %s on %s: %s", piece_type, index, exc)
            return ActionResult(exc)

        self.state.increment_moves()
        logger.debug("Placed %s on cell %d", piece_type, index)
        self._log_if_solved()
        return ActionResult()

    def rotate_piece(self, index: int) -> ActionResult:
        """Turn the piece on *index* 90° clockwise."""
        try:
            piece = self.state.board.rotate(index)
        except PuzzleError as exc:
            logger.debug("Rejected rotate on %s: %s", index, exc)
            return ActionResult(exc)

        self.state.increment_moves()
        logger.debug("Rotated cell %d to %d°", index, piece.rotation)
        self._log_if_solved()
        return ActionResult()

    def apply_step(self, step: SolutionStep) -> ActionResult:
        """Place the piece of *step* and turn it to the step's rotation."""
        result = self.place_piece(step.type, step.index)
        for _ in range(step.rotation // 90):
            if not result:
                break
            result = self.rotate_piece(step.index)
        return result

    def reset(self) -> None:
        """Empty the board and restock the inventory."""
        board = self.state.board
        for index in range(board.total_cells):
            board.clear(index)
        self.state.inventory.restock()
        self.state = GameState(board, self.state.inventory)
        logger.info("Puzzle reset")

    # -- queries --------------------------------------------------------------

    def status(self) -> PuzzleStatus:
        if not self.state.inventory.is_empty:
            return PuzzleStatus.IN_PROGRESS
        if ConnectivityEvaluator.is_connected(self.state.board):
            return PuzzleStatus.SOLVED
        return PuzzleStatus.ALL_PLACED_NOT_CONNECTED

    @property
    def is_won(self) -> bool:
        return self.status() is PuzzleStatus.SOLVED

    def board_snapshot(self) -> tuple[Cell, ...]:
        return self.state.board.snapshot()

    def inventory(self) -> Mapping[PieceType, int]:
        return self.state.inventory.as_dict()

    @property
    def pieces_remaining(self) -> int:
        return self.state.inventory.total_remaining

    def flow(self) -> set[int]:
        """Cells currently fed by the start cell."""
        return ConnectivityEvaluator.reachable(self.state.board)

    # -- helpers --------------------------------------------------------------

    def _log_if_solved(self) -> None:
        if self.is_won:
            logger.info("Puzzle solved after %d moves", self.state.moves)


def initialize(
    required_pieces: Iterable[
        RequiredPiece | tuple[PieceType | str, int] | Mapping[str, object]
    ],
    grid_size: int,
    start_index: int = 0,
    end_index: int | None = None,
) -> GamePlay:
    """Create a fresh puzzle session.

    *required_pieces* may mix ``RequiredPiece`` objects, ``(type, count)``
    pairs and ``{"type": ..., "count": ...}`` records::

        initialize([("I", 3), ("L", 2), {"type": "T", "count": 1}], grid_size=4)
    """
    required = tuple(_required_piece(item) for item in required_pieces)
    definition = PuzzleDefinition(
        size=grid_size,
        required=required,
        start=start_index,
        end=end_index,
    )
    return GamePlay(definition)


def _required_piece(item) -> RequiredPiece:
    if isinstance(item, RequiredPiece):
        return item
    if isinstance(item, Mapping):
        return RequiredPiece(**item)
    return RequiredPiece(*item)
