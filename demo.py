#!/usr/bin/env python3
"""Watch an agent play Minesweeper in the terminal."""
import os
import time

from minefield.agents import BaseAgent, RuleAgent
from minefield.game import BoardConfig, MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(agent: BaseAgent, config: BoardConfig, delay: float = 0.3, games: int = 3):
    """Run demo games with visualization."""
    env = MinesweeperEnv(config=config, render_mode="ansi")
    cells = config.width * config.height

    print(f"Board: {config.height}x{config.width} with {config.mine_count} mines "
          f"({100 * config.mine_count / cells:.1f}% density)")
    time.sleep(delay)

    wins = 0

    for game in range(games):
        obs, _ = env.reset()
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            action_type, row, col = env.decode_action(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins} | Mines left: {env.board.mines_remaining}")
            print(f"Last move: {action_type.name} ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100 * wins / games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    args = parser.parse_args()

    config = BoardConfig(width=args.size, height=args.size, num_mines=args.mines)
    demo(RuleAgent(args.size, args.size), config, delay=args.delay, games=args.games)
