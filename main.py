"""Main entry point for Rock-Paper-Scissors Minus One simulations."""

import argparse
import os
import random
from datetime import datetime

import matplotlib.pyplot as plt

from parameters import NUM_SIMULATIONS, WIN_RATE_WINDOW
from src.player_policies import PLAYER_POLICIES, make_player_policy
from src.simulation import RoundSimulation
from src.symbols import Difficulty, RoundResult


def rolling_rate(
    history: list[RoundResult], result: RoundResult, window: int
) -> list[float]:
    """Share of `result` over a trailing window, one value per round."""
    rates = []
    for i in range(len(history)):
        recent = history[max(0, i - window + 1):i + 1]
        rates.append(sum(1 for r in recent if r == result) / len(recent))
    return rates


def plot_win_rates(
    histories: dict[str, list[RoundResult]],
    output_dir: str,
    window: int = WIN_RATE_WINDOW,
) -> str:
    """Plot and save rolling player/bot win rates per difficulty.

    Args:
        histories: Round results keyed by difficulty name
        output_dir: Directory to save the plot
        window: Rolling window size in rounds

    Returns:
        Path of the saved image
    """
    os.makedirs(output_dir, exist_ok=True)
    fig, axes = plt.subplots(
        len(histories), 1, figsize=(10, 4 * len(histories)), squeeze=False
    )

    for ax, (name, history) in zip(axes[:, 0], histories.items()):
        player_rate = rolling_rate(history, RoundResult.PLAYER_WINS, window)
        bot_rate = rolling_rate(history, RoundResult.BOT_WINS, window)
        tie_rate = rolling_rate(history, RoundResult.TIE, window)
        ax.plot(player_rate, label="Player", linewidth=2)
        ax.plot(bot_rate, label="Bot", linewidth=2)
        ax.plot(tie_rate, label="Tie", alpha=0.5)
        ax.axhline(y=1 / 3, color="r", linestyle="--", alpha=0.5, label="1/3 baseline")
        ax.set_xlabel("Round")
        ax.set_ylabel("Rate")
        ax.set_title(f"Rolling Outcome Rates vs {name} bot ({window}-round window)")
        ax.set_ylim(0, 1)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plot_path = os.path.join(output_dir, f"win_rates_{timestamp}.png")
    plt.savefig(plot_path, dpi=150)
    plt.close(fig)
    print(f"Win-rate plot saved to {plot_path}")
    return plot_path


def print_results(name: str, results: dict, num_rounds: int):
    print(f"\n--- Results vs {name} bot ({num_rounds} rounds) ---")
    if num_rounds == 0:
        return
    labels = (("player_wins", "Player wins"), ("bot_wins", "Bot wins"), ("ties", "Ties"))
    for key, label in labels:
        count = results[key]
        print(f"  {label}: {count}/{num_rounds} ({count / num_rounds * 100:.1f}%)")
    print(f"  Forced moves (timeouts): {results['forced_moves']}")


def main(args=None):
    """Run simulated rounds against one or both bot difficulties.

    Args:
        args: Optional parsed arguments (for programmatic use)
    """
    parser = argparse.ArgumentParser(
        description="Simulate Rock-Paper-Scissors Minus One rounds against the bot"
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        default="both",
        choices=["easy", "hard", "both"],
        help="Bot difficulty to simulate against",
    )
    parser.add_argument(
        "--player-policy",
        type=str,
        default="random",
        choices=sorted(PLAYER_POLICIES),
        help="Automated player policy",
    )
    parser.add_argument(
        "--num-rounds",
        type=int,
        default=NUM_SIMULATIONS,
        help="Number of rounds per difficulty",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        default=False,
        help="Save a rolling win-rate plot",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="plots",
        help="Directory for plots",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print every round",
    )

    if args is None:
        args = parser.parse_args()

    if args.difficulty == "both":
        difficulties = [Difficulty.EASY, Difficulty.HARD]
    else:
        difficulties = [Difficulty(args.difficulty)]

    print("=== Rock-Paper-Scissors Minus One Simulation ===\n")
    print(f"Player policy: {args.player_policy}")
    print(f"Rounds per difficulty: {args.num_rounds}")
    print("=" * 60)

    rng = random.Random(args.seed)
    all_results = {}
    for difficulty in difficulties:
        name = difficulty.value.capitalize()
        simulation = RoundSimulation(
            difficulty=difficulty,
            player_policy=make_player_policy(args.player_policy, rng),
            rng=rng,
        )
        if args.verbose:
            print(f"\n{'=' * 60}")
            print(f"SIMULATING vs {name} bot")
            print(f"{'=' * 60}")
        all_results[name] = simulation.simulate_session(
            args.num_rounds, verbose=args.verbose
        )

    print("\n" + "=" * 60)
    print("SIMULATION RESULTS")
    print("=" * 60)
    for name, results in all_results.items():
        print_results(name, results, args.num_rounds)
    print("=" * 60)

    if args.plot and args.num_rounds > 0:
        plot_win_rates(
            {name: results["history"] for name, results in all_results.items()},
            args.output_dir,
        )

    return all_results


if __name__ == "__main__":
    main()
