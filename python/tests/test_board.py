"""Board model tests — placement, rotation, neighbours and snapshots."""

from __future__ import annotations

import dataclasses

import pytest

from backend.models.board import Board, CellRole
from backend.models.errors import (
    CellOccupied,
    EmptyCell,
    InvalidPieceType,
    OutOfRange,
    PuzzleError,
    ReservedCell,
)
from backend.models.piece import Direction, PieceType, PlacedPiece


# -- construction -------------------------------------------------------------


def test_defaults_put_start_and_end_in_opposite_corners() -> None:
    board = Board(size=4)
    assert board.start == 0
    assert board.end == 15
    assert board.role(0) is CellRole.START
    assert board.role(15) is CellRole.END
    assert all(board.role(i) is CellRole.NORMAL for i in range(1, 15))
    assert board.placed_count == 0


def test_custom_endpoints() -> None:
    board = Board(size=3, start=4, end=2)
    assert board.is_reserved(4)
    assert board.is_reserved(2)
    assert not board.is_reserved(0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": 1},
        {"size": 4, "start": 3, "end": 3},
        {"size": 4, "end": 16},
        {"size": 4, "start": -1},
        {"size": 2, "pieces": [None] * 3},
        {"size": 2, "pieces": [PlacedPiece(PieceType.I), None, None, None]},
    ],
)
def test_invalid_construction(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Board(**kwargs)


# -- place --------------------------------------------------------------------


def test_place_puts_an_unrotated_piece() -> None:
    board = Board(size=4)
    piece = board.place(5, PieceType.T)
    assert piece == PlacedPiece(PieceType.T, 0)
    assert board.piece_at(5) == piece
    assert board.placed_count == 1


@pytest.mark.parametrize(
    ("index", "piece_type", "error"),
    [
        (5, PieceType.I, CellOccupied),
        (0, PieceType.I, ReservedCell),
        (15, PieceType.I, ReservedCell),
        (16, PieceType.I, OutOfRange),
        (-1, PieceType.I, OutOfRange),
        (6.0, PieceType.I, OutOfRange),
        (True, PieceType.I, OutOfRange),
        (6, "Z", InvalidPieceType),
    ],
)
def test_rejected_place_leaves_board_untouched(
    index: int, piece_type: PieceType | str, error: type[PuzzleError]
) -> None:
    board = Board(size=4)
    board.place(5, PieceType.L)
    board.rotate(5)
    before = board.copy()

    with pytest.raises(error):
        board.place(index, piece_type)

    assert board == before


# -- rotate / clear -----------------------------------------------------------


def test_rotate_steps_through_all_orientations() -> None:
    board = Board(size=4)
    board.place(6, PieceType.I)
    seen = [board.rotate(6).rotation for _ in range(4)]
    assert seen == [90, 180, 270, 0]
    assert board.piece_at(6) == PlacedPiece(PieceType.I, 0)


@pytest.mark.parametrize(
    ("index", "error"),
    [
        (6, EmptyCell),
        (0, EmptyCell),
        (15, EmptyCell),
        (99, OutOfRange),
        (5.0, OutOfRange),
    ],
)
def test_rejected_rotate(index: int, error: type[PuzzleError]) -> None:
    board = Board(size=4)
    before = board.copy()
    with pytest.raises(error):
        board.rotate(index)
    assert board == before


def test_clear() -> None:
    board = Board(size=4)
    board.place(3, PieceType.L)
    assert board.clear(3) == PlacedPiece(PieceType.L)
    assert board.piece_at(3) is None
    assert board.clear(3) is None
    with pytest.raises(OutOfRange):
        board.clear(42)


# -- neighbours ---------------------------------------------------------------


def test_neighbors_of_corner() -> None:
    board = Board(size=4)
    assert board.neighbors(0) == [(Direction.E, 1), (Direction.S, 4)]
    assert board.neighbors(15) == [(Direction.N, 11), (Direction.W, 14)]


def test_neighbors_of_inner_cell() -> None:
    board = Board(size=4)
    assert board.neighbors(5) == [
        (Direction.N, 1),
        (Direction.E, 6),
        (Direction.S, 9),
        (Direction.W, 4),
    ]


def test_neighbors_do_not_wrap_rows() -> None:
    board = Board(size=4)
    assert (Direction.E, 4) not in board.neighbors(3)
    assert (Direction.W, 3) not in board.neighbors(4)


# -- snapshot -----------------------------------------------------------------


def test_snapshot_is_a_read_only_view() -> None:
    board = Board(size=3)
    board.place(4, PieceType.CROSS)
    cells = board.snapshot()

    assert len(cells) == 9
    assert cells[0].role is CellRole.START and cells[0].is_reserved
    assert cells[8].role is CellRole.END
    assert (cells[4].row, cells[4].col) == (1, 1)
    assert cells[4].piece == PlacedPiece(PieceType.CROSS)
    assert cells[1].piece is None

    with pytest.raises(dataclasses.FrozenInstanceError):
        cells[4].piece = None  # type: ignore[misc]

    board.rotate(4)
    assert cells[4].piece.rotation == 0
