"""
Interactive play script for the blast puzzle.

Allows playing manually in the terminal or watching a random player.
"""
import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import GameConfig, load_config
from blast.controller import InputController
from blast.renderer import Renderer, clear_screen
from blast.session import GameSession, GameStatus, play_random_game
from blast.types import BoosterType
from utils.logger import Logger

BOOSTER_COMMANDS = {
    'b': BoosterType.BOMB,
    't': BoosterType.TELEPORT,
    'n': BoosterType.NONE,
}


def new_game(config: GameConfig, renderer: Renderer) -> Tuple[GameSession, InputController, str]:
    """Deal a fresh session and report a board that starts without moves."""
    session = GameSession(config)
    opening = session.opening_check()
    message = renderer.render_outcome(opening) if opening.ended else ""
    return session, InputController(session), message


def play_manual(config: GameConfig, log_dir: Optional[str] = None) -> None:
    """
    Play the game manually in the terminal.

    Args:
        config: Game configuration
        log_dir: Directory for the JSONL action log (disabled when None)
    """
    renderer = Renderer()
    logger = Logger(log_dir, "manual") if log_dir else None

    session, controller, message = new_game(config, renderer)

    while True:
        clear_screen()
        print(renderer.render_game_state(session, controller.selected, controller.pending))
        print("\nControls:")
        print("  row col  tap a cell (e.g. '3 4')")
        print("  b / t / n  select bomb / teleport / no booster")
        print("  r restart, q quit")
        if message:
            print(f"\n{message}")

        if session.is_game_over():
            print(f"\n*** {'YOU WIN' if session.status == GameStatus.WON else 'YOU LOSE'} ***")
            print(session.reason)
            print(f"Score: {session.score:,} / {session.cfg.target_score:,}")

            action = input("\nPlay again? (y/n): ").strip().lower()
            if action != 'y':
                break
            session, controller, message = new_game(config, renderer)
            continue

        user_input = input("\n> ").strip().lower()

        if user_input == 'q':
            print("Thanks for playing!")
            break
        elif user_input == 'r':
            session, controller, message = new_game(config, renderer)
            continue
        elif user_input in BOOSTER_COMMANDS:
            controller.select(BOOSTER_COMMANDS[user_input])
            message = ""
            continue

        try:
            row, col = (int(p) for p in user_input.split())
        except ValueError:
            message = "Invalid input. Use format: row col"
            continue

        booster = controller.selected
        outcome = controller.click(row, col)
        if outcome is None:
            message = "Pick the second tile." if controller.pending else ""
            continue

        message = renderer.render_outcome(outcome)
        if logger:
            logger.log_action(booster.name.lower(), outcome, row=row, col=col)

    if logger:
        logger.save_summary({'final': session.get_statistics()})


def play_random(config: GameConfig, num_games: int = 10, seed: int = 42) -> None:
    """
    Play random games and show statistics.

    Args:
        config: Game configuration
        num_games: Number of games to play
        seed: Random seed
    """
    print(f"\nPlaying {num_games} random games...")

    scores = []
    moves = []
    wins = 0

    for i in range(num_games):
        stats = play_random_game(config, seed=seed + i)
        scores.append(stats['score'])
        moves.append(stats['moves_made'])
        wins += stats['status'] == 'won'

        print(f"Game {i+1}: Score={stats['score']:,}, "
              f"Moves={stats['moves_made']}, "
              f"Result={stats['status']} ({stats['reason']})")

    print("\n" + "="*60)
    print("RANDOM PLAYER STATISTICS")
    print("="*60)
    print(f"Games: {num_games}")
    print(f"Wins: {wins}")
    print(f"Mean Score: {np.mean(scores):.1f} ± {np.std(scores):.1f}")
    print(f"Max Score: {max(scores)}")
    print(f"Mean Moves: {np.mean(moves):.1f}")
    print("="*60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play the blast puzzle")
    parser.add_argument(
        "--mode",
        type=str,
        choices=["manual", "random"],
        default="manual",
        help="Play mode: play manually or watch a random player"
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
        default=10,
        help="Number of games for random mode"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Write a JSONL action log to this directory"
    )

    args = parser.parse_args()

    config = load_config(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    if args.mode == "manual":
        play_manual(config, log_dir=args.log_dir)
    elif args.mode == "random":
        play_random(config, num_games=args.games, seed=config.seed if config.seed is not None else 42)


if __name__ == "__main__":
    main()
