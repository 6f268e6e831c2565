"""
Minesweeper agents module.

Provides agents that play through MinesweeperEnv:
- RandomAgent: Baseline random reveals
- RuleAgent: Auto-flag and chord driven play
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .rule_agent import RuleAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "RuleAgent",
]
