"""
Evaluation module for Minesweeper agents.

Plays agents through MinesweeperEnv and aggregates results.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..agents.base_agent import BaseAgent
from ..game.board import BoardConfig
from ..game.environment import MinesweeperEnv

logger = logging.getLogger(__name__)


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    total_reward: float = 0.0
    steps: int = 0
    won: bool = False
    revealed_cells: int = 0


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare multiple agents.

    Provides standardized evaluation across different agent types.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: int = 500,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode.
            seed: Seed for the first episode's board; later episodes
                continue from the environment's generator.
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def run_episode(self, env: MinesweeperEnv, agent: BaseAgent) -> EpisodeStats:
        """Play one game to the end or to max_steps."""
        stats = EpisodeStats()
        observation = env.board.get_observation()
        agent.reset()

        for _ in range(self.max_steps):
            valid_actions = env.get_action_mask()
            action = agent.select_action(observation, valid_actions)

            next_observation, reward, terminated, truncated, info = env.step(action)
            agent.update(
                observation, action, float(reward), next_observation,
                terminated or truncated,
            )
            observation = next_observation

            stats.total_reward += float(reward)
            stats.steps += 1
            stats.revealed_cells = info["revealed"]

            if terminated or truncated:
                stats.won = info["game_state"] == "WON"
                break

        return stats

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            env.reset(seed=self.seed if episode == 0 else None)
            stats = self.run_episode(env, agent)

            wins += stats.won
            total_reward += stats.total_reward
            total_steps += stats.steps
            total_revealed += stats.revealed_cells

        logger.debug(
            "%s: %d/%d wins", type(agent).__name__, wins, self.num_episodes
        )
        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(agent)
        return results
