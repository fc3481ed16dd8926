"""Pieces the player still has to place."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from backend.models.errors import OutOfInventory
from backend.models.piece import PieceType, coerce_piece_type


@dataclass(frozen=True)
class RequiredPiece:
    type: PieceType
    count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", coerce_piece_type(self.type))
        if self.count < 0:
            raise ValueError(
                f"Required count for {self.type} cannot be negative ({self.count})."
            )


class Inventory:
    """Remaining count per piece type, built from a required-pieces list.

    Types that appear more than once in the list are summed.
    """

    def __init__(self, required: Iterable[RequiredPiece]) -> None:
        self._required: dict[PieceType, int] = {}
        for item in required:
            self._required[item.type] = self._required.get(item.type, 0) + item.count
        self._remaining = dict(self._required)

    # -- queries --------------------------------------------------------------

    @property
    def total_required(self) -> int:
        return sum(self._required.values())

    @property
    def total_remaining(self) -> int:
        return sum(self._remaining.values())

    @property
    def is_empty(self) -> bool:
        return self.total_remaining == 0

    def remaining(self, piece_type: PieceType | str) -> int:
        return self._remaining.get(coerce_piece_type(piece_type), 0)

    def as_dict(self) -> Mapping[PieceType, int]:
        """Snapshot of remaining counts in required-list order."""
        return dict(self._remaining)

    # -- mutations ------------------------------------------------------------

    def ensure_available(self, piece_type: PieceType | str) -> PieceType:
        piece_type = coerce_piece_type(piece_type)
        if self._remaining.get(piece_type, 0) <= 0:
            raise OutOfInventory(piece_type)
        return piece_type

    def take(self, piece_type: PieceType | str) -> None:
        piece_type = self.ensure_available(piece_type)
        self._remaining[piece_type] -= 1

    def restock(self) -> None:
        self._remaining = dict(self._required)
