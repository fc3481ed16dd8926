from backend.models.board import Board, Cell, CellRole
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
from backend.models.inventory import Inventory, RequiredPiece
from backend.models.piece import Direction, PieceType, PlacedPiece
from backend.models.puzzle import PuzzleDefinition, SolutionStep

__all__ = [
    "Board",
    "Cell",
    "CellOccupied",
    "CellRole",
    "Direction",
    "EmptyCell",
    "InvalidPieceType",
    "InvalidRotation",
    "Inventory",
    "OutOfInventory",
    "OutOfRange",
    "PieceType",
    "PlacedPiece",
    "PuzzleDefinition",
    "PuzzleError",
    "RequiredPiece",
    "ReservedCell",
    "SolutionStep",
]
