"""Rejections raised by the puzzle models.

Every player-driven rejection is a ``PuzzleError``.  The game controller
catches them and hands them back as values, so a bad drop or a click on
an empty cell never aborts a session.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for recoverable puzzle rejections."""

    code = "puzzle_error"


class InvalidPieceType(PuzzleError):
    code = "invalid_piece_type"

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown piece type: {value!r}.")
        self.value = value


class InvalidRotation(PuzzleError):
    code = "invalid_rotation"

    def __init__(self, rotation: object) -> None:
        super().__init__(
            f"Rotation must be one of 0, 90, 180, 270; got {rotation!r}."
        )
        self.rotation = rotation


class OutOfRange(PuzzleError):
    code = "out_of_range"

    def __init__(self, index: int, total: int) -> None:
        super().__init__(f"Cell {index} is outside the grid (0-{total - 1}).")
        self.index = index


class ReservedCell(PuzzleError):
    code = "reserved_cell"

    def __init__(self, index: int) -> None:
        super().__init__(f"Cell {index} is the start or end cell.")
        self.index = index


class CellOccupied(PuzzleError):
    code = "cell_occupied"

    def __init__(self, index: int) -> None:
        super().__init__(f"Cell {index} already holds a piece.")
        self.index = index


class EmptyCell(PuzzleError):
    code = "empty_cell"

    def __init__(self, index: int) -> None:
        super().__init__(f"Cell {index} has no piece to rotate.")
        self.index = index


class OutOfInventory(PuzzleError):
    code = "out_of_inventory"

    def __init__(self, piece_type: object) -> None:
        super().__init__(f"No {piece_type} pieces left in the inventory.")
        self.piece_type = piece_type
