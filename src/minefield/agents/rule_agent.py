"""
Rule-based agent for Minesweeper.

Plays with the board's own convenience moves: auto-flag a numbered cell
whose hidden neighbors must all be mines, chord a numbered cell whose
flags are complete, and guess only when neither applies.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..game.adjacency import neighbors
from ..game.cell import OBS_FLAGGED, OBS_HIDDEN
from ..game.environment import ActionType
from .base_agent import BaseAgent


@dataclass
class CellInfo:
    """Information about a revealed numbered cell."""

    row: int
    col: int
    adjacent_mines: int
    hidden_neighbors: List[Tuple[int, int]]
    flagged_neighbors: List[Tuple[int, int]]

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among hidden neighbors."""
        return self.adjacent_mines - len(self.flagged_neighbors)


# ============================================================================
# Rule Agent
# ============================================================================

class RuleAgent(BaseAgent):
    """
    Agent that applies the two single-cell rules before guessing.

    Strategy:
        1. A numbered cell whose hidden neighbors equal its remaining
           mines: flag them (AUTO_FLAG when none are flagged yet).
        2. A numbered cell whose flags equal its label: CHORD it.
        3. Otherwise reveal a random hidden cell, corners first on the
           opening move.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(board_height, board_width)
        self.rng = np.random.default_rng(seed)
        self._first_move = True

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the first certain move, or a guess.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Encoded action index.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        for info in self._numbered_cells(observation):
            action = self._certain_action(info)
            if action is not None and valid_actions[action]:
                return action

        return self._guess(valid_actions)

    def _certain_action(self, info: CellInfo) -> Optional[int]:
        """Deduce a safe move around one numbered cell, if any."""
        if not info.hidden_neighbors:
            return None
        if len(info.hidden_neighbors) == info.remaining_mines:
            if not info.flagged_neighbors:
                return self.encode(ActionType.AUTO_FLAG, info.row, info.col)
            row, col = info.hidden_neighbors[0]
            return self.encode(ActionType.FLAG, row, col)
        if info.remaining_mines == 0:
            return self.encode(ActionType.CHORD, info.row, info.col)
        return None

    def _numbered_cells(self, observation: np.ndarray) -> Iterator[CellInfo]:
        """Yield every revealed numbered cell with its neighborhood."""
        height, width = observation.shape
        for row in range(height):
            for col in range(width):
                value = int(observation[row, col])
                if not 1 <= value <= 8:
                    continue
                hidden = []
                flagged = []
                for r, c in neighbors(row, col, height, width):
                    if observation[r, c] == OBS_HIDDEN:
                        hidden.append((r, c))
                    elif observation[r, c] == OBS_FLAGGED:
                        flagged.append((r, c))
                yield CellInfo(row, col, value, hidden, flagged)

    def _guess(self, valid_actions: np.ndarray) -> int:
        """Reveal a random hidden cell."""
        valid_indices = np.where(valid_actions[: self.total_cells])[0]
        if len(valid_indices) == 0:
            return 0

        if self._first_move:
            self._first_move = False
            corners = [
                self.encode(ActionType.REVEAL, row, col)
                for row in (0, self.board_height - 1)
                for col in (0, self.board_width - 1)
            ]
            corners = [a for a in corners if valid_actions[a]]
            if corners:
                return int(self.rng.choice(corners))

        return int(self.rng.choice(valid_indices))

    def reset(self) -> None:
        """Forget the opening move for a new game."""
        self._first_move = True
