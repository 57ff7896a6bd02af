"""
Minesweeper engine.

Provides the board state machine, a console front end and a
Gymnasium environment for automated play.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "MinesweeperEnv",
]
