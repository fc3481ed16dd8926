from backend.engine.gameplay.game import (
    ActionResult,
    GamePlay,
    PuzzleStatus,
    initialize,
)

__all__ = ["ActionResult", "GamePlay", "PuzzleStatus", "initialize"]
