"""Puzzle definitions: grid, endpoints, required pieces and a known solution."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import Board
from backend.models.inventory import Inventory, RequiredPiece
from backend.models.piece import PieceType, check_rotation, coerce_piece_type


@dataclass(frozen=True)
class SolutionStep:
    """Place ``type`` on ``index`` and turn it to ``rotation``."""

    index: int
    type: PieceType
    rotation: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", coerce_piece_type(self.type))
        check_rotation(self.rotation)


@dataclass(frozen=True)
class PuzzleDefinition:
    size: int
    required: tuple[RequiredPiece, ...]
    start: int = 0
    end: int | None = None
    solution: tuple[SolutionStep, ...] = ()

    def __post_init__(self) -> None:
        board = self.new_board()  # validates size, start and end
        object.__setattr__(self, "end", board.end)
        object.__setattr__(self, "required", tuple(self.required))
        object.__setattr__(self, "solution", tuple(self.solution))

        free_cells = board.total_cells - 2
        total = sum(item.count for item in self.required)
        if total > free_cells:
            raise ValueError(
                f"{total} pieces cannot fit in the {free_cells} free cells "
                f"of a {self.size}×{self.size} grid."
            )

    @property
    def total_pieces(self) -> int:
        return sum(item.count for item in self.required)

    def new_board(self) -> Board:
        return Board(size=self.size, start=self.start, end=self.end)

    def new_inventory(self) -> Inventory:
        return Inventory(self.required)
