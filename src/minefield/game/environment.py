"""
Gymnasium environment wrapper for the Minesweeper board engine.

Provides a standard RL interface over reveal, flag, chord and auto-flag.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import OBS_EXPLODED, OBS_PRESSED
from .rendering import render_text


class ActionType(IntEnum):
    """Kinds of move; each has one action per cell."""

    REVEAL = 0
    FLAG = 1
    CHORD = 2
    AUTO_FLAG = 3


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of Cell.to_observation codes:
        - -3 = hidden cell pressed by a chord (never seen between steps)
        - -2 = flagged cell
        - -1 = hidden cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 / 10 = revealed / exploded mine after a loss

    Actions:
        Discrete space of size 4 * width * height.
        Action a is ActionType(a // cells) applied to cell a % cells,
        where cell i is (i // width, i % width).

    Rewards:
        - +1 for a reveal or chord that uncovers cells
        - 0 for a flag or auto-flag that changes the board
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.num_cells = self.config.height * self.config.width
        self.board = Board(self.config, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=OBS_PRESSED,
            high=OBS_EXPLODED,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * self.num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a freshly mined board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = Board(self.config, rng=self.np_random)
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (ActionType, row, col), see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action_type, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply(action_type, row, col)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[ActionType, int, int]:
        """Split a flat action into (ActionType, row, col)."""
        action_type, index = divmod(int(action), self.num_cells)
        row, col = divmod(index, self.config.width)
        return ActionType(action_type), row, col

    def encode_action(self, action_type: ActionType, row: int, col: int) -> int:
        """Inverse of decode_action."""
        return int(action_type) * self.num_cells + row * self.config.width + col

    def _apply(self, action_type: ActionType, row: int, col: int) -> float:
        """
        Run an action on the board and score it.

        Returns:
            Reward value.
        """
        if action_type == ActionType.REVEAL:
            changed = self.board.reveal(row, col)
        elif action_type == ActionType.FLAG:
            changed = self.board.toggle_flag(row, col)
        elif action_type == ActionType.CHORD:
            changed = self.board.chord(row, col)
        else:
            changed = self.board.auto_flag_neighbors(row, col)

        if not changed:
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        if action_type in (ActionType.FLAG, ActionType.AUTO_FLAG):
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.safe_cell_count,
            "flags": self.board.flag_count,
            "game_state": self.board.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.board)
        if self.render_mode == "human":
            print(render_text(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        board = self.board
        if not board.is_playing:
            return mask

        for row in range(self.config.height):
            for col in range(self.config.width):
                cell = board.get_cell(row, col)
                if cell.is_hidden:
                    mask[self.encode_action(ActionType.REVEAL, row, col)] = True
                if not cell.is_revealed:
                    mask[self.encode_action(ActionType.FLAG, row, col)] = True
                if not cell.is_numbered:
                    continue

                hidden = sum(
                    1 for r, c in board.neighbors(row, col)
                    if board.get_cell(r, c).is_hidden
                )
                if hidden and board.count_adjacent_flags(row, col) >= cell.adjacent_mines:
                    mask[self.encode_action(ActionType.CHORD, row, col)] = True
                if hidden == cell.adjacent_mines:
                    mask[self.encode_action(ActionType.AUTO_FLAG, row, col)] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel play.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
