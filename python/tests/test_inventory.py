"""Inventory accounting tests."""

from __future__ import annotations

import pytest

from backend.models.errors import InvalidPieceType, OutOfInventory
from backend.models.inventory import Inventory, RequiredPiece
from backend.models.piece import PieceType


def _inventory() -> Inventory:
    return Inventory(
        [
            RequiredPiece(PieceType.T, 1),
            RequiredPiece(PieceType.L, 2),
            RequiredPiece(PieceType.I, 3),
        ]
    )


def test_counts_from_required_pieces() -> None:
    inv = _inventory()
    assert inv.total_required == 6
    assert inv.total_remaining == 6
    assert inv.as_dict() == {PieceType.T: 1, PieceType.L: 2, PieceType.I: 3}
    assert list(inv.as_dict()) == [PieceType.T, PieceType.L, PieceType.I]


def test_take_until_empty() -> None:
    inv = _inventory()
    inv.take(PieceType.T)
    assert inv.remaining(PieceType.T) == 0
    with pytest.raises(OutOfInventory):
        inv.take(PieceType.T)
    assert inv.remaining(PieceType.T) == 0
    assert inv.total_remaining == 5


def test_unlisted_type_has_no_stock() -> None:
    inv = _inventory()
    assert inv.remaining(PieceType.CROSS) == 0
    with pytest.raises(OutOfInventory):
        inv.ensure_available("+")


def test_unknown_type() -> None:
    with pytest.raises(InvalidPieceType):
        _inventory().take("Q")


def test_duplicate_entries_are_summed() -> None:
    inv = Inventory([RequiredPiece("I", 2), RequiredPiece("I", 1)])
    assert inv.remaining("I") == 3


def test_restock() -> None:
    inv = _inventory()
    for piece_type in ("T", "L", "L", "I"):
        inv.take(piece_type)
    inv.restock()
    assert inv.as_dict() == _inventory().as_dict()


def test_negative_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        RequiredPiece(PieceType.L, -1)


def test_empty_inventory() -> None:
    inv = Inventory([])
    assert inv.is_empty
    assert inv.total_required == 0
