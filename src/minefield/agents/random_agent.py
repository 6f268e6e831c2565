"""
Uniform reveal baseline.

Picks any hidden cell from the REVEAL slice of the action mask. The board's
flag, chord and auto-flag moves are never used, so every game is decided
by reveals alone.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent whose every move is ActionType.REVEAL on a uniformly drawn
    hidden cell.

    Its win rate is the floor the rule agent's flag/chord play is
    measured against.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        """
        Args:
            board_height: Rows of the board the agent will see.
            board_width: Columns of the board the agent will see.
            seed: Seed for the numpy generator that draws the cells;
                None draws from fresh OS entropy.
        """
        super().__init__(board_height, board_width)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Draw one reveal from the mask.

        Only the first width * height entries (REVEAL actions, encoded as
        row * width + col) are considered.

        Args:
            observation: Board observation, used to build the mask when
                none is given.
            valid_actions: Environment action mask.

        Returns:
            A REVEAL action index, or 0 when nothing is left to reveal.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        hidden = np.flatnonzero(valid_actions[: self.total_cells])
        if hidden.size == 0:
            # Game over; the env scores this as a no-op.
            return 0

        return int(self.rng.choice(hidden))
