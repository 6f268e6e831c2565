"""
Minesweeper board engine.

Provides the board model, mine placement, adjacency labels, cascading
reveal, flagging, chording and a gymnasium environment on top.
"""
from .cell import Cell, CellState
from .events import BoardEvent, EventKind
from .mines import place_mines
from .adjacency import compute_adjacency, neighbors
from .chord import ChordGesture
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    new_board,
)
from .rendering import render_text
from .environment import ActionType, MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "BoardEvent",
    "EventKind",
    "place_mines",
    "compute_adjacency",
    "neighbors",
    "ChordGesture",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "new_board",
    "render_text",
    "ActionType",
    "MinesweeperEnv",
    "make_vec_env",
]
