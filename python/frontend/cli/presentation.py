"""Shared glue for the terminal frontends.

Maps board cells to box-drawing glyphs, puzzle errors and statuses to
player-facing messages, and key actions to controller calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gameplay import ActionResult, GamePlay, PuzzleStatus
from backend.models.board import Cell, CellRole
from backend.models.errors import (
    CellOccupied,
    EmptyCell,
    InvalidPieceType,
    InvalidRotation,
    OutOfInventory,
    OutOfRange,
    PuzzleError,
    ReservedCell,
)
from backend.models.piece import Direction, PieceType, PlacedPiece

N, E, S, W = Direction.N, Direction.E, Direction.S, Direction.W

_GLYPHS: dict[frozenset[Direction], str] = {
    frozenset({N, S}): "│",
    frozenset({E, W}): "─",
    frozenset({S, E}): "┌",
    frozenset({S, W}): "┐",
    frozenset({N, E}): "└",
    frozenset({N, W}): "┘",
    frozenset({N, E, S}): "├",
    frozenset({N, S, W}): "┤",
    frozenset({E, S, W}): "┬",
    frozenset({N, E, W}): "┴",
    frozenset({N, E, S, W}): "┼",
}

_ERROR_MESSAGES: dict[type[PuzzleError], str] = {
    CellOccupied: "That cell already holds a piece.",
    ReservedCell: "Pieces cannot go on the START or END cell.",
    EmptyCell: "There is no piece there to rotate.",
    OutOfInventory: "No pieces of that type left.",
    OutOfRange: "That cell is off the board.",
    InvalidPieceType: "Unknown piece type.",
    InvalidRotation: "Pieces only turn in 90° steps.",
}


# -- glyphs -------------------------------------------------------------------


def piece_glyph(piece: PlacedPiece) -> str:
    return _GLYPHS[piece.open_directions]


def cell_glyph(cell: Cell) -> str:
    if cell.role is CellRole.START:
        return "S"
    if cell.role is CellRole.END:
        return "E"
    if cell.piece is None:
        return "·"
    return piece_glyph(cell.piece)


def type_glyph(piece_type: PieceType) -> str:
    """Glyph of *piece_type* at rotation 0, for inventory listings."""
    return piece_glyph(PlacedPiece(piece_type))


# -- messages -----------------------------------------------------------------


def error_message(error: PuzzleError) -> str:
    return _ERROR_MESSAGES.get(type(error), str(error))


def status_message(game: GamePlay) -> str:
    status = game.status()
    if status is PuzzleStatus.SOLVED:
        return "Congratulations! Puzzle Solved!"
    if status is PuzzleStatus.ALL_PLACED_NOT_CONNECTED:
        return (
            "All pieces placed, but the path is not connected yet. "
            "Try rotating the pieces!"
        )
    if game.state.placed_count == 0:
        return "Place pipe pieces to connect the path."
    return f"Pieces remaining: {game.pieces_remaining}."


# -- cursor & selection -------------------------------------------------------

_CURSOR_STEPS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


@dataclass
class Selection:
    """Cursor position on the grid plus the inventory type in hand."""

    index: int = 0
    piece_type: PieceType | None = None

    def move(self, key: str, size: int) -> None:
        dr, dc = _CURSOR_STEPS[key]
        row, col = divmod(self.index, size)
        row = min(max(row + dr, 0), size - 1)
        col = min(max(col + dc, 0), size - 1)
        self.index = row * size + col

    def cycle(self, game: GamePlay) -> None:
        """Pick the next piece type that still has stock."""
        stocked = [t for t, n in game.inventory().items() if n > 0]
        if not stocked:
            self.piece_type = None
        elif self.piece_type not in stocked:
            self.piece_type = stocked[0]
        else:
            pos = stocked.index(self.piece_type)
            self.piece_type = stocked[(pos + 1) % len(stocked)]


def apply_key(game: GamePlay, selection: Selection, key: str) -> ActionResult | None:
    """Translate a board key into a controller call.

    Returns the controller's result for ``place``/``rotate`` keys and
    ``None`` for keys that only move the cursor or change the selection.
    """
    if key in _CURSOR_STEPS:
        selection.move(key, game.size)
        return None
    if key == "cycle":
        selection.cycle(game)
        return None
    if key in ("place", "enter"):
        if selection.piece_type is None or not game.inventory().get(selection.piece_type):
            selection.cycle(game)
        if selection.piece_type is None:
            return ActionResult(OutOfInventory("any"))
        result = game.place_piece(selection.piece_type, selection.index)
        if result and not game.inventory().get(selection.piece_type):
            selection.cycle(game)
        return result
    if key == "rotate":
        return game.rotate_piece(selection.index)
    return None
