from backend.engine.gamegenerator.generator import (
    DEFAULT_GRID_SIZE,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    PuzzleGenerator,
)

__all__ = ["DEFAULT_GRID_SIZE", "MAX_GRID_SIZE", "MIN_GRID_SIZE", "PuzzleGenerator"]
