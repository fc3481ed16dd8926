"""Connectivity evaluator tests.

Boards are built by hand: ``_board`` places each ``(index, type, rotation)``
triple directly on a fresh board.
"""

from __future__ import annotations

import pytest

from backend.engine.connectivity import ConnectivityEvaluator
from backend.models.board import Board
from backend.models.piece import PieceType

I, L, T, CROSS = PieceType.I, PieceType.L, PieceType.T, PieceType.CROSS


# -- helpers ------------------------------------------------------------------


def _board(
    size: int,
    pieces: list[tuple[int, PieceType, int]],
    start: int = 0,
    end: int | None = None,
) -> Board:
    board = Board(size=size, start=start, end=end)
    for index, piece_type, rotation in pieces:
        board.place(index, piece_type)
        for _ in range(rotation // 90):
            board.rotate(index)
    return board


# -- tests --------------------------------------------------------------------


def test_empty_board_is_not_connected() -> None:
    board = Board(size=4)
    assert not ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.reachable(board) == {0}
    assert ConnectivityEvaluator.flow_path(board) == []


def test_adjacent_endpoints_connect_without_pieces() -> None:
    board = Board(size=2, start=0, end=1)
    assert ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.flow_path(board) == [0, 1]


def test_single_elbow_on_two_by_two() -> None:
    board = _board(2, [(1, L, 90)])  # opens W and S
    assert ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.flow_path(board) == [0, 1, 3]


def test_straight_row() -> None:
    board = _board(4, [(1, I, 90), (2, I, 90)], start=0, end=3)
    assert ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.flow_path(board) == [0, 1, 2, 3]


def test_straight_row_with_one_vertical_piece() -> None:
    board = _board(4, [(1, I, 90), (2, I, 0)], start=0, end=3)
    assert not ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.reachable(board) == {0, 1}


def test_openings_must_be_reciprocal() -> None:
    # Cell 1 opens east, but the elbow on cell 2 only opens south and east.
    board = _board(4, [(1, I, 90), (2, L, 0)], start=0, end=3)
    assert not ConnectivityEvaluator.is_connected(board)
    assert 2 not in ConnectivityEvaluator.reachable(board)


def test_empty_cells_are_walls() -> None:
    # Both pipes face each other across the empty cell 2.
    board = _board(4, [(1, I, 90), (3, L, 90)], start=0, end=7)
    assert not ConnectivityEvaluator.is_connected(board)


def test_reference_path_down_and_across() -> None:
    board = _board(
        4,
        [(4, I, 0), (8, L, 270), (9, I, 90), (10, I, 90), (11, L, 90), (5, T, 0)],
    )
    assert ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.flow_path(board) == [0, 4, 8, 9, 10, 11, 15]


def test_flow_path_is_shortest() -> None:
    board = _board(3, [(i, CROSS, 0) for i in range(1, 8)])
    path = ConnectivityEvaluator.flow_path(board)
    assert path[0] == 0 and path[-1] == 8
    assert len(path) == 5
    assert ConnectivityEvaluator.reachable(board) == set(range(9))


def test_flow_stops_at_the_end_cell() -> None:
    # Cell 2 touches only the end cell (1) and the empty cell 5.
    board = _board(3, [(2, CROSS, 0)], start=0, end=1)
    assert ConnectivityEvaluator.is_connected(board)
    assert ConnectivityEvaluator.reachable(board) == {0, 1}


def test_loops_terminate() -> None:
    # A closed ring around the middle of a 4x4 board, fed through cell 4.
    board = _board(
        4,
        [(4, T, 0), (5, T, 90), (6, L, 90), (10, L, 180), (9, L, 270)],
    )
    assert not ConnectivityEvaluator.is_connected(board)
    assert {5, 6, 9, 10} <= ConnectivityEvaluator.reachable(board)


@pytest.mark.parametrize("size", [4, 8, 12])
def test_serpentine_through_every_cell(size: int) -> None:
    """Snake row by row from the top-left to the bottom-left corner.

    Even sizes only, so that the last row runs westwards.
    """
    end = (size - 1) * size
    pieces: list[tuple[int, PieceType, int]] = []
    for r in range(size):
        going_east = r % 2 == 0
        first_col, last_col = (0, size - 1) if going_east else (size - 1, 0)
        for c in range(size):
            index = r * size + c
            if index in (0, end):
                continue
            if c == last_col:
                # {W,S} going east, {E,S} going west
                pieces.append((index, L, 90 if going_east else 0))
            elif c == first_col:
                # {N,E} going east, {N,W} going west
                pieces.append((index, L, 270 if going_east else 180))
            else:
                pieces.append((index, I, 90))
    board = _board(size, pieces, end=end)
    assert ConnectivityEvaluator.is_connected(board)
    assert len(ConnectivityEvaluator.flow_path(board)) == size * size
