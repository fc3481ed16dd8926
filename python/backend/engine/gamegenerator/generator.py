"""Generates solvable pipe puzzles."""

from __future__ import annotations

import logging
import random
from collections import Counter

from backend.models.board import Board
from backend.models.inventory import RequiredPiece
from backend.models.piece import Direction, PieceType, rotation_for
from backend.models.puzzle import PuzzleDefinition, SolutionStep

logger = logging.getLogger(__name__)

REFERENCE_SIZE = 4

# Grid sizes offered by the CLI and the menus.
DEFAULT_GRID_SIZE = REFERENCE_SIZE
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 8


class PuzzleGenerator:
    """Creates puzzles together with a placement that solves them."""

    @staticmethod
    def reference() -> PuzzleDefinition:
        """Return the classic 4×4 puzzle: one T, two L and three I pieces.

        The known solution runs down the left column and along the bottom
        row; the T piece is a spare that sits off the path.
        """
        return PuzzleDefinition(
            size=REFERENCE_SIZE,
            required=(
                RequiredPiece(PieceType.T, 1),
                RequiredPiece(PieceType.L, 2),
                RequiredPiece(PieceType.I, 3),
            ),
            start=0,
            end=REFERENCE_SIZE * REFERENCE_SIZE - 1,
            solution=(
                SolutionStep(4, PieceType.I, 0),
                SolutionStep(8, PieceType.L, 270),
                SolutionStep(9, PieceType.I, 90),
                SolutionStep(10, PieceType.I, 90),
                SolutionStep(11, PieceType.L, 90),
                SolutionStep(5, PieceType.T, 0),
            ),
        )

    @staticmethod
    def generate(
        size: int,
        rng: random.Random | None = None,
        start: int = 0,
        end: int | None = None,
    ) -> PuzzleDefinition:
        """Return a random puzzle whose pieces can form a start-to-end pipe.

        Start and end must not be adjacent: such a puzzle is solved before
        any piece is placed.
        """
        rng = rng or random.Random()
        board = Board(size=size, start=start, end=end)
        if any(n == board.end for _, n in board.neighbors(board.start)):
            raise ValueError(
                f"Start {board.start} and end {board.end} are adjacent; "
                "the puzzle would need no pieces."
            )
        path = PuzzleGenerator._carve_path(board, rng)

        steps: list[SolutionStep] = []
        for prev, cell, nxt in zip(path, path[1:], path[2:]):
            wanted = {
                PuzzleGenerator._direction_to(board, cell, prev),
                PuzzleGenerator._direction_to(board, cell, nxt),
            }
            a, b = wanted
            piece_type = PieceType.I if a.opposite == b else PieceType.L
            rotation = rotation_for(piece_type, wanted)
            assert rotation is not None
            steps.append(SolutionStep(cell, piece_type, rotation))

        counts = Counter(step.type for step in steps)
        required = tuple(
            RequiredPiece(piece_type, counts[piece_type])
            for piece_type in (PieceType.I, PieceType.L)
            if counts[piece_type]
        )
        logger.debug(
            "Generated %d×%d puzzle, path length %d, pieces %s",
            size, size, len(path), dict(counts),
        )
        return PuzzleDefinition(
            size=size,
            required=required,
            start=board.start,
            end=board.end,
            solution=tuple(steps),
        )

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _carve_path(board: Board, rng: random.Random) -> list[int]:
        """Randomised depth-first walk from start to end; returns the cell path."""
        visited = {board.start}
        stack: list[tuple[int, list[int]]] = [
            (board.start, PuzzleGenerator._shuffled_neighbors(board, board.start, rng))
        ]
        while stack:
            cell, options = stack[-1]
            if cell == board.end:
                return [c for c, _ in stack]
            if not options:
                stack.pop()
                continue
            nxt = options.pop()
            if nxt in visited:
                continue
            visited.add(nxt)
            stack.append((nxt, PuzzleGenerator._shuffled_neighbors(board, nxt, rng)))
        raise RuntimeError("No path between start and end.")  # grid is connected

    @staticmethod
    def _shuffled_neighbors(board: Board, index: int, rng: random.Random) -> list[int]:
        neighbors = [n for _, n in board.neighbors(index)]
        rng.shuffle(neighbors)
        return neighbors

    @staticmethod
    def _direction_to(board: Board, source: int, target: int) -> Direction:
        for direction, neighbor in board.neighbors(source):
            if neighbor == target:
                return direction
        raise ValueError(f"Cells {source} and {target} are not adjacent.")
