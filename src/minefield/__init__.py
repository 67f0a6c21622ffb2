"""
Minefield game engine.

Provides the grid model, mine placement, flood-fill reveal and the
game state machine, plus a Gymnasium environment that drives them.
"""
from .errors import (
    MinefieldError,
    ConfigurationError,
    OutOfBoundsError,
    InvalidStateError,
    AlreadyPlacedError,
)
from .cell import Cell, CellState
from .placer import MinePlacer
from .board import Board, GameConfig, BEGINNER, INTERMEDIATE, EXPERT
from .reveal import reveal_from
from .engine import (
    GameEngine,
    GameState,
    Outcome,
    ActionResult,
    CellView,
    new_game,
)
from .environment import MinesweeperEnv

__all__ = [
    "MinefieldError",
    "ConfigurationError",
    "OutOfBoundsError",
    "InvalidStateError",
    "AlreadyPlacedError",
    "Cell",
    "CellState",
    "MinePlacer",
    "Board",
    "GameConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "reveal_from",
    "GameEngine",
    "GameState",
    "Outcome",
    "ActionResult",
    "CellView",
    "new_game",
    "MinesweeperEnv",
]
