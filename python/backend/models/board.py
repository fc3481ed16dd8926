"""Board model for the pipe puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.errors import (
    CellOccupied,
    EmptyCell,
    OutOfRange,
    ReservedCell,
)
from backend.models.piece import (
    Direction,
    PieceType,
    PlacedPiece,
    coerce_piece_type,
)


class CellRole(StrEnum):
    NORMAL = "normal"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid cell, as handed to renderers."""

    index: int
    row: int
    col: int
    role: CellRole
    piece: PlacedPiece | None = None

    @property
    def is_reserved(self) -> bool:
        return self.role is not CellRole.NORMAL


@dataclass
class Board:
    """Represents the pipe puzzle board.

    Cells are addressed by row-major index.  ``pieces`` holds the placed
    piece of every cell, ``None`` for empty cells; the start and end
    cells always stay ``None``.
    """

    size: int
    start: int = 0
    end: int | None = None
    pieces: list[PlacedPiece | None] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Grid size must be at least 2, got {self.size}.")
        total = self.size * self.size
        if self.end is None:
            self.end = total - 1
        for name, index in (("start", self.start), ("end", self.end)):
            if not 0 <= index < total:
                raise ValueError(
                    f"The {name} cell {index} is outside a "
                    f"{self.size}×{self.size} grid."
                )
        if self.start == self.end:
            raise ValueError("Start and end must be different cells.")
        if not self.pieces:
            self.pieces = [None] * total
        elif len(self.pieces) != total:
            raise ValueError(
                f"Expected {total} cells for a {self.size}×{self.size} board, "
                f"got {len(self.pieces)}."
            )
        if self.pieces[self.start] is not None or self.pieces[self.end] is not None:
            raise ValueError("The start and end cells cannot hold a piece.")

    # -- queries --------------------------------------------------------------

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    def coords(self, index: int) -> tuple[int, int]:
        self._check_index(index)
        return divmod(index, self.size)

    def role(self, index: int) -> CellRole:
        self._check_index(index)
        if index == self.start:
            return CellRole.START
        if index == self.end:
            return CellRole.END
        return CellRole.NORMAL

    def is_reserved(self, index: int) -> bool:
        return self.role(index) is not CellRole.NORMAL

    def piece_at(self, index: int) -> PlacedPiece | None:
        self._check_index(index)
        return self.pieces[index]

    @property
    def placed_count(self) -> int:
        return sum(1 for p in self.pieces if p is not None)

    def neighbors(self, index: int) -> list[tuple[Direction, int]]:
        """Return in-grid neighbours of *index* with the direction to reach each."""
        row, col = self.coords(index)
        result: list[tuple[Direction, int]] = []
        for direction in Direction:
            dr, dc = direction.offset
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                result.append((direction, nr * self.size + nc))
        return result

    def cell(self, index: int) -> Cell:
        row, col = self.coords(index)
        return Cell(
            index=index,
            row=row,
            col=col,
            role=self.role(index),
            piece=self.pieces[index],
        )

    def snapshot(self) -> tuple[Cell, ...]:
        return tuple(self.cell(i) for i in range(self.total_cells))

    # -- mutations ------------------------------------------------------------

    def place(self, index: int, piece_type: PieceType | str) -> PlacedPiece:
        """Put a fresh piece (rotation 0) on an empty normal cell."""
        if self.is_reserved(index):
            raise ReservedCell(index)
        if self.pieces[index] is not None:
            raise CellOccupied(index)
        piece = PlacedPiece(coerce_piece_type(piece_type))
        self.pieces[index] = piece
        return piece

    def rotate(self, index: int) -> PlacedPiece:
        """Turn the piece on *index* 90° clockwise and return it."""
        piece = self.piece_at(index)
        if piece is None:
            raise EmptyCell(index)
        piece = piece.rotated()
        self.pieces[index] = piece
        return piece

    def clear(self, index: int) -> PlacedPiece | None:
        """Remove and return the piece on *index* (``None`` if it was empty)."""
        piece = self.piece_at(index)
        self.pieces[index] = None
        return piece

    def copy(self) -> Board:
        return Board(
            size=self.size,
            start=self.start,
            end=self.end,
            pieces=self.pieces[:],
        )

    # -- helpers --------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < self.total_cells
        ):
            raise OutOfRange(index, self.total_cells)
