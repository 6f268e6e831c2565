#!/usr/bin/env python3
"""
minefield - Main entry point.

Usage:
    python main.py evaluate [--agent {random,rule}] [--games N]
    python main.py compare [--games N]
    python main.py demo [--agent {random,rule}] [--games N] [--delay S]
"""
import argparse
import logging
from typing import Optional

from minefield.agents import BaseAgent, RandomAgent, RuleAgent
from minefield.evaluation import Evaluator
from minefield.game import BoardConfig

from demo import demo

AGENTS = {
    "random": RandomAgent,
    "rule": RuleAgent,
}


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from common arguments."""
    return BoardConfig(width=args.width, height=args.height, num_mines=args.mines)


def make_agent(
    name: str, config: BoardConfig, seed: Optional[int] = None
) -> BaseAgent:
    """Instantiate an agent by its command-line name."""
    return AGENTS[name](config.height, config.width, seed=seed)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    config = board_config(args)
    agent = make_agent(args.agent, config, args.seed)
    evaluate_agent(agent, args.agent.capitalize(), config, args.games, args.seed)


def evaluate_agent(
    agent: BaseAgent,
    name: str,
    config: BoardConfig,
    num_episodes: int = 100,
    seed: Optional[int] = None,
) -> None:
    """Evaluate a single agent and print results."""
    evaluator = Evaluator(config, num_episodes=num_episodes, seed=seed)

    print(f"\nEvaluating {name} over {num_episodes} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    config = board_config(args)
    agents = {
        name.capitalize(): make_agent(name, config, args.seed) for name in AGENTS
    }

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def run_demo(args: argparse.Namespace) -> None:
    """Watch an agent play in the terminal."""
    config = board_config(args)
    demo(make_agent(args.agent, config, args.seed), config, args.delay, args.games)


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=9, help="Board columns")
    parser.add_argument("--height", type=int, default=9, help="Board rows")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="minefield - Minesweeper engine, agents and evaluation"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    eval_parser.add_argument(
        "--agent", choices=sorted(AGENTS), default="rule", help="Agent to evaluate"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    add_board_arguments(eval_parser)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )
    add_board_arguments(compare_parser)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch an agent play")
    demo_parser.add_argument(
        "--agent", choices=sorted(AGENTS), default="rule", help="Agent to watch"
    )
    demo_parser.add_argument("--games", type=int, default=3, help="Number of games")
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    add_board_arguments(demo_parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    elif args.command == "demo":
        run_demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
