"""Play Rock-Paper-Scissors Minus One against the bot in a terminal."""

import argparse
import threading

from parameters import SCORE_FILE, TICK_INTERVAL_MS
from src.countdown import format_time
from src.round_machine import InvalidChoice, RoundStateMachine
from src.round_state import Phase, RoundSnapshot
from src.score_ledger import JsonScoreLedger, ScoreBoard
from src.symbols import Difficulty


def render(snapshot: RoundSnapshot):
    """Print a snapshot as a few lines of text."""
    if snapshot.phase == Phase.RESOLVED:
        print("\n" + "=" * 60)
        print(f"Player: {snapshot.player_final}   VS   Bot: {snapshot.bot_final}")
        print(snapshot.prompt())
        print("=" * 60)
        return

    if snapshot.phase == Phase.AWAITING_FIRST_PICK:
        print(f"\nPlayer: {snapshot.player_wins}  Bot: {snapshot.bot_wins}")
    if snapshot.phase == Phase.AWAITING_DISCARD:
        print(f"Bot holds {snapshot.bot_first} and {snapshot.bot_second}")
    print(f"Time Left: {format_time(snapshot.remaining_ms)}s")
    print(snapshot.prompt())


class Ticker:
    """Ticks the machine from a background thread while input blocks.

    Every call into the machine goes through `lock`, so ticks and typed
    input are processed one at a time.
    """

    def __init__(
        self,
        machine: RoundStateMachine,
        lock: threading.Lock,
        interval_ms: float = TICK_INTERVAL_MS,
    ):
        self.machine = machine
        self.lock = lock
        self.interval_ms = interval_ms
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def tick(self) -> RoundSnapshot | None:
        with self.lock:
            return self.machine.tick()

    def _run(self):
        while not self._stop.wait(self.interval_ms / 1000.0):
            self.tick()

    def start(self):
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None


def play(machine: RoundStateMachine, lock: threading.Lock):
    with lock:
        machine.start()
    while True:
        text = input("[r]ock / [p]aper / [s]cissors > ")
        with lock:
            try:
                machine.submit(text)
            except InvalidChoice as e:
                print(f"Invalid choice: {e}")


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Play Rock-Paper-Scissors Minus One against the bot"
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        default="easy",
        choices=[d.value for d in Difficulty],
        help="Bot difficulty for the whole session",
    )
    parser.add_argument(
        "--score-file",
        type=str,
        default=SCORE_FILE,
        help="Where cumulative scores are stored",
    )
    parser.add_argument(
        "--reset-stats",
        action="store_true",
        default=False,
        help="Reset the stored scores before playing",
    )

    if args is None:
        args = parser.parse_args()

    scoreboard = ScoreBoard(JsonScoreLedger(args.score_file))
    if args.reset_stats:
        scoreboard.reset()
        print("Scores reset.")

    machine = RoundStateMachine(
        Difficulty(args.difficulty), scoreboard=scoreboard, listeners=[render]
    )

    print("=== Rock Paper Scissors Minus One ===")
    print(f"Difficulty: {args.difficulty}")
    lock = threading.Lock()
    ticker = Ticker(machine, lock)
    ticker.start()
    try:
        play(machine, lock)
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        ticker.stop()
        machine.shutdown()
        print(
            f"Final score - Player: {scoreboard.player_wins}  "
            f"Bot: {scoreboard.bot_wins}"
        )


if __name__ == "__main__":
    main()
