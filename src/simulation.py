"""Round simulation engine."""

import random

from parameters import RESULT_DELAY_MS
from src.player_policies import RandomPlayerPolicy
from src.round_machine import RoundStateMachine
from src.round_state import Phase, Resolved
from src.score_ledger import MemoryScoreLedger, ScoreBoard
from src.symbols import Difficulty, RoundResult


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now

    def advance_to(self, when: float) -> float:
        self.now = max(self.now, when)
        return self.now


class RoundSimulation:
    """Plays rounds of an automated player against the bot.

    The machine runs on a ManualClock, so a simulated session covering
    minutes of countdowns completes instantly.

    Args:
        difficulty: Bot difficulty
        player_policy: Automated player (defaults to RandomPlayerPolicy)
        rng: Random source shared by the bot, forced moves and the player
        scoreboard: Scores; defaults to a fresh in-memory board
        bot: Optional bot override, passed through to the machine
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        player_policy=None,
        rng=None,
        scoreboard: ScoreBoard | None = None,
        bot=None,
    ):
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random()
        self.player_policy = (
            player_policy if player_policy is not None else RandomPlayerPolicy(self.rng)
        )
        self.clock = ManualClock()
        self.scoreboard = (
            scoreboard
            if scoreboard is not None
            else ScoreBoard(MemoryScoreLedger(), verbose=False)
        )
        self.machine = RoundStateMachine(
            difficulty,
            scoreboard=self.scoreboard,
            bot=bot,
            rng=self.rng,
            clock=self.clock,
            result_delay_ms=RESULT_DELAY_MS,
        )
        self.forced_moves = 0

    def _step(self):
        """Advance the current phase by one player action or one timeout."""
        snapshot = self.machine.snapshot()
        action = self.player_policy.get_action(snapshot)
        delay = self.player_policy.reaction_time(snapshot)

        if action is None or delay >= snapshot.remaining_ms:
            self.clock.advance_to(self.machine.state.deadline)
            self.machine.tick()
            self.forced_moves += 1
        else:
            self.clock.advance(delay)
            self.machine.submit(action)

    def simulate_round(self, verbose: bool = False) -> Resolved:
        """Play one complete round. Returns the resolved round state."""
        if self.machine.state is None:
            self.machine.start()
        elif self.machine.phase == Phase.RESOLVED:
            self.clock.advance_to(self.machine.state.deadline)
            self.machine.tick()

        round_number = self.machine.round_number
        while self.machine.phase != Phase.RESOLVED:
            self._step()

        state = self.machine.state
        if verbose:
            print(f"--- Round {round_number} ---")
            print(f"Player pair: {state.player_first}, {state.player_second}")
            print(f"Bot pair:    {state.bot_first}, {state.bot_second}")
            print(f"Player keeps {state.player_final}, bot keeps {state.bot_final}")
            print(f"{state.result.message}")
        return state

    def simulate_session(self, num_rounds: int, verbose: bool = False) -> dict:
        """Play num_rounds rounds.

        Returns:
            dict with win/tie counts and the per-round result history
        """
        results = {"player_wins": 0, "bot_wins": 0, "ties": 0, "history": []}
        for i in range(num_rounds):
            state = self.simulate_round(verbose=verbose)
            results["history"].append(state.result)
            if state.result == RoundResult.PLAYER_WINS:
                results["player_wins"] += 1
            elif state.result == RoundResult.BOT_WINS:
                results["bot_wins"] += 1
            else:
                results["ties"] += 1

            if not verbose and (i + 1) % 100 == 0:
                print(f"Completed {i + 1}/{num_rounds} rounds...")

        results["forced_moves"] = self.forced_moves
        self.machine.shutdown()
        return results
