#!/usr/bin/env python3
"""
Minegrid - headless command line entry point.

Usage:
    python main.py evaluate [--difficulty {beginner,intermediate,expert}] [--games N]
    python main.py explore [--steps N] [--seed S]
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from agents import RandomAgent
from evaluation import Evaluator, ExplorationRunner
from minegrid import BEGINNER, EXPERT, INFINITE, INTERMEDIATE


DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def evaluate(args: argparse.Namespace) -> None:
    """Play random games on a fixed board and print the results."""
    config = DIFFICULTIES[args.difficulty]
    agent = RandomAgent(config.rows, config.cols, seed=args.seed)
    evaluator = Evaluator(config, num_episodes=args.games)

    print(f"\nEvaluating Random over {args.games} {args.difficulty} games...")
    results = evaluator.evaluate(agent, seed=args.seed)

    print("Results for Random:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def explore(args: argparse.Namespace) -> None:
    """Explore the infinite board with random moves and print block stats."""
    runner = ExplorationRunner(INFINITE, seed=args.seed, pan_every=args.pan_every)
    agent = RandomAgent(INFINITE.rows, INFINITE.cols, seed=args.seed)

    print(f"\nExploring the infinite board for {args.steps} moves...")
    stats = runner.run(agent, steps=args.steps)

    print("=" * 40)
    for name, value in stats.to_dict().items():
        print(f"{name:<20} {value:>10}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minegrid - headless runs of the grid engine"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events at DEBUG level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate the random agent")
    eval_parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="beginner",
        help="Fixed board preset",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    explore_parser = subparsers.add_parser(
        "explore", help="Explore the infinite board"
    )
    explore_parser.add_argument(
        "--steps", type=int, default=200, help="Number of moves"
    )
    explore_parser.add_argument(
        "--pan-every", type=int, default=10, help="Moves between viewport pans"
    )
    explore_parser.add_argument("--seed", type=int, default=None, help="World seed")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "evaluate":
        evaluate(args)
    elif args.command == "explore":
        explore(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
