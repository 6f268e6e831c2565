"""
Base agent interface for Minesweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..game.cell import OBS_HIDDEN
from ..game.environment import ActionType


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Agents choose one MinesweeperEnv action per step: an ActionType
    applied to a cell, encoded as type * cells + row * width + col.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Encoded action index.
        """

    def encode(self, action_type: ActionType, row: int, col: int) -> int:
        """Convert (ActionType, row, col) to a flat action index."""
        return int(action_type) * self.total_cells + row * self.board_width + col

    def decode(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert a flat action index to (ActionType, row, col)."""
        action_type, index = divmod(int(action), self.total_cells)
        row, col = divmod(index, self.board_width)
        return ActionType(action_type), row, col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get a reveal-only valid actions mask from an observation.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask over the full action space; only REVEAL actions
            on hidden cells are True.
        """
        mask = np.zeros(len(ActionType) * self.total_cells, dtype=bool)
        mask[: self.total_cells] = observation.flatten() == OBS_HIDDEN
        return mask

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """
        Update agent with experience (for learning agents).

        Args:
            observation: State before action.
            action: Action taken.
            reward: Reward received.
            next_observation: State after action.
            done: Whether episode ended.
        """
