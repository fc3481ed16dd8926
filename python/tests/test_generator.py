"""Puzzle generator tests.

Every generated puzzle carries its own solution; replaying it through
the real game controller must end in ``SOLVED``.
"""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gameplay import GamePlay, PuzzleStatus
from backend.models.piece import PieceType
from backend.models.puzzle import PuzzleDefinition

SEEDS = range(10)


# -- helpers ------------------------------------------------------------------


def _assert_solution_solves(definition: PuzzleDefinition) -> None:
    game = GamePlay(definition)
    for i, step in enumerate(definition.solution):
        result = game.apply_step(step)
        assert result, f"Step {i} ({step}) was rejected: {result.error}"
    assert game.status() is PuzzleStatus.SOLVED


# -- reference puzzle ---------------------------------------------------------


def test_reference_puzzle() -> None:
    definition = PuzzleGenerator.reference()
    assert definition.size == 4
    assert (definition.start, definition.end) == (0, 15)
    assert {(r.type, r.count) for r in definition.required} == {
        (PieceType.T, 1),
        (PieceType.L, 2),
        (PieceType.I, 3),
    }
    assert definition.total_pieces == 6
    _assert_solution_solves(definition)


# -- random puzzles -----------------------------------------------------------


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("size", [2, 3, 4, 6, 8])
def test_generated_puzzle_is_solvable(size: int, seed: int) -> None:
    definition = PuzzleGenerator.generate(size, random.Random(seed))
    _assert_solution_solves(definition)


@pytest.mark.parametrize("seed", SEEDS)
def test_required_pieces_match_the_solution(seed: int) -> None:
    definition = PuzzleGenerator.generate(5, random.Random(seed))
    required = {r.type: r.count for r in definition.required}
    used = Counter(step.type for step in definition.solution)
    assert required == dict(used)
    assert set(required) <= {PieceType.I, PieceType.L}


@pytest.mark.parametrize("seed", SEEDS)
def test_solution_uses_distinct_free_cells(seed: int) -> None:
    definition = PuzzleGenerator.generate(6, random.Random(seed))
    cells = [step.index for step in definition.solution]
    assert len(cells) == len(set(cells))
    assert definition.start not in cells
    assert definition.end not in cells


def test_same_seed_same_puzzle() -> None:
    first = PuzzleGenerator.generate(5, random.Random(1234))
    second = PuzzleGenerator.generate(5, random.Random(1234))
    assert first == second


def test_two_by_two_needs_one_elbow() -> None:
    definition = PuzzleGenerator.generate(2, random.Random(0))
    assert [(r.type, r.count) for r in definition.required] == [(PieceType.L, 1)]


@pytest.mark.parametrize(("start", "end"), [(12, 2), (7, 17), (6, 8)])
def test_custom_endpoints(start: int, end: int) -> None:
    definition = PuzzleGenerator.generate(5, random.Random(3), start=start, end=end)
    assert (definition.start, definition.end) == (start, end)
    _assert_solution_solves(definition)


def test_generate_without_rng() -> None:
    definition = PuzzleGenerator.generate(4)
    _assert_solution_solves(definition)


def test_invalid_size() -> None:
    with pytest.raises(ValueError):
        PuzzleGenerator.generate(1)


@pytest.mark.parametrize(("start", "end"), [(6, 7), (6, 11), (1, 0)])
def test_adjacent_endpoints_are_rejected(start: int, end: int) -> None:
    with pytest.raises(ValueError, match="adjacent"):
        PuzzleGenerator.generate(5, random.Random(3), start=start, end=end)
