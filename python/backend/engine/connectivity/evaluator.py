"""Flow connectivity between the start and end cells."""

from __future__ import annotations

from collections import deque

from backend.models.board import Board
from backend.models.piece import ALL_DIRECTIONS, Direction


class ConnectivityEvaluator:
    """Stateless evaluator — all methods are static.

    The board is searched breadth-first.  Flow passes from a cell to its
    neighbour in direction ``d`` only when the first cell is open towards
    ``d`` and the neighbour is open towards ``d.opposite``.  The start and
    end cells count as open on every side; empty cells block the flow.
    """

    @staticmethod
    def is_connected(board: Board) -> bool:
        return board.end in ConnectivityEvaluator._search(board)

    @staticmethod
    def reachable(board: Board) -> set[int]:
        """Return every cell index the flow from the start cell reaches."""
        return set(ConnectivityEvaluator._search(board))

    @staticmethod
    def flow_path(board: Board) -> list[int]:
        """Return the shortest start-to-end index path, or ``[]`` if disconnected."""
        parents = ConnectivityEvaluator._search(board)
        if board.end not in parents:
            return []
        path: list[int] = []
        node: int | None = board.end
        while node is not None:
            path.append(node)
            node = parents[node]
        path.reverse()
        return path

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _open_directions(board: Board, index: int) -> frozenset[Direction]:
        if board.is_reserved(index):
            return ALL_DIRECTIONS
        piece = board.pieces[index]
        return piece.open_directions if piece is not None else frozenset()

    @staticmethod
    def _search(board: Board) -> dict[int, int | None]:
        """BFS from the start cell; maps each reached cell to its predecessor."""
        parents: dict[int, int | None] = {board.start: None}
        queue = deque([board.start])

        while queue:
            current = queue.popleft()
            if current == board.end:
                continue  # flow stops at the end cell
            exits = ConnectivityEvaluator._open_directions(board, current)
            for direction, neighbor in board.neighbors(current):
                if neighbor in parents or direction not in exits:
                    continue
                entries = ConnectivityEvaluator._open_directions(board, neighbor)
                if direction.opposite in entries:
                    parents[neighbor] = current
                    queue.append(neighbor)

        return parents
