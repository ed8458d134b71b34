"""
Performance benchmark script for the blast engine.

Tests the speed of the rules engine and the environment.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Any, Optional

from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import GameConfig, load_config
from utils.logger import Logger, MetricsTracker


def benchmark_engine(
    config: GameConfig,
    num_games: int = 1000,
    seed: int = 42,
    log_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Benchmark the rules engine with a random player.

    Args:
        config: Game configuration
        num_games: Number of games to play
        seed: Random seed
        log_dir: Directory for per-game JSONL records (disabled when None)

    Returns:
        Dictionary of benchmark results
    """
    from blast.session import play_random_game

    tracker = MetricsTracker(window_size=num_games)
    logger = Logger(log_dir, "benchmark") if log_dir else None

    total_moves = 0
    wins = 0
    start = time.perf_counter()

    for i in tqdm(range(num_games), desc="Games"):
        stats = play_random_game(config, seed=seed + i)
        total_moves += stats['moves_made']
        wins += stats['status'] == 'won'
        tracker.add_all(stats)
        if logger:
            logger.log(stats)

    total_time = time.perf_counter() - start

    if logger:
        logger.save_summary()

    return {
        'num_games': num_games,
        'total_moves': total_moves,
        'total_time': total_time,
        'moves_per_second': total_moves / total_time if total_time > 0 else 0.0,
        'games_per_second': num_games / total_time if total_time > 0 else 0.0,
        'win_rate': wins / num_games if num_games else 0.0,
        'score': tracker.get_summary('score'),
        'largest_group': tracker.get_summary('largest_group'),
        'reshuffles_used': tracker.get_summary('reshuffles_used'),
    }


def benchmark_environment(config: GameConfig, num_steps: int = 100000, seed: int = 42) -> Dict[str, float]:
    """
    Benchmark the Gymnasium environment speed.

    Args:
        config: Game configuration
        num_steps: Number of steps to take
        seed: Random seed

    Returns:
        Dictionary of benchmark results
    """
    from environment.blast_env import BlastEnv

    env = BlastEnv(config=config, seed=seed)
    env.reset(seed=seed)

    steps = 0
    episodes = 0
    start = time.perf_counter()

    for _ in tqdm(range(num_steps), desc="Steps"):
        action = env.sample_valid_action()
        _, _, terminated, truncated, _ = env.step(action)
        steps += 1

        if terminated or truncated:
            episodes += 1
            env.reset(seed=seed + episodes)

    total_time = time.perf_counter() - start
    env.close()

    return {
        'num_steps': steps,
        'num_episodes': episodes,
        'total_time': total_time,
        'steps_per_second': steps / total_time if total_time > 0 else 0.0,
        'avg_episode_length': steps / episodes if episodes > 0 else 0,
    }


def print_results(title: str, results: Dict[str, Any]) -> None:
    """Print benchmark results."""
    print(f"\n{'='*60}")
    print(title)
    print('='*60)
    for key, value in results.items():
        if isinstance(value, float):
            print(f"  {key}: {value:.2f}")
        elif isinstance(value, dict):
            print(f"  {key}:")
            for k, v in value.items():
                print(f"    {k}: {v:.2f}")
        else:
            print(f"  {key}: {value}")
    print('='*60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark the blast engine")
    parser.add_argument(
        "--engine",
        action="store_true",
        help="Benchmark rules engine"
    )
    parser.add_argument(
        "--env",
        action="store_true",
        help="Benchmark environment"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Run all benchmarks"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML game config"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1000,
        help="Number of games for the engine benchmark"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=100000,
        help="Number of steps for the environment benchmark"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Write per-game JSONL records to this directory"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed"
    )

    args = parser.parse_args()
    config = load_config(args.config) if args.config else GameConfig()

    if args.all or args.engine:
        results = benchmark_engine(config, num_games=args.games, seed=args.seed, log_dir=args.log_dir)
        print_results("RULES ENGINE BENCHMARK", results)

    if args.all or args.env:
        results = benchmark_environment(config, num_steps=args.steps, seed=args.seed)
        print_results("ENVIRONMENT BENCHMARK", results)

    if not any([args.all, args.engine, args.env]):
        print("No benchmark selected. Use --all to run all benchmarks.")
        parser.print_help()


if __name__ == "__main__":
    main()
