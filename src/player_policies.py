"""Automated player policies for simulated rounds."""

import random

from parameters import MAX_THINK_TIME_MS
from src.bot_strategy import maximin_choice
from src.round_state import Phase, RoundSnapshot
from src.symbols import SYMBOLS, Symbol


class RandomPlayerPolicy:
    """Picks legal symbols at random after a random reaction time."""

    name = "random"

    def __init__(self, rng=random, max_think_time_ms: float = MAX_THINK_TIME_MS):
        self.rng = rng
        self.max_think_time_ms = max_think_time_ms

    def reaction_time(self, snapshot: RoundSnapshot) -> float:
        return self.rng.uniform(0, self.max_think_time_ms)

    def get_action(self, snapshot: RoundSnapshot) -> Symbol | None:
        """Returns the symbol to submit, or None to let the countdown run out."""
        if snapshot.phase == Phase.AWAITING_FIRST_PICK:
            return self.rng.choice(SYMBOLS)
        if snapshot.phase == Phase.AWAITING_SECOND_PICK:
            remaining = [s for s in SYMBOLS if s != snapshot.player_first]
            return self.rng.choice(remaining)
        if snapshot.phase == Phase.AWAITING_DISCARD:
            return self.rng.choice([snapshot.player_first, snapshot.player_second])
        return None


class IdlePlayerPolicy:
    """Never answers, so every move is forced by the countdown."""

    name = "idle"

    def reaction_time(self, snapshot: RoundSnapshot) -> float:
        return 0.0

    def get_action(self, snapshot: RoundSnapshot) -> Symbol | None:
        return None


class MaximinPlayerPolicy(RandomPlayerPolicy):
    """Random picks, then keeps the symbol with the best worst case.

    The bot's pair is already on the table during the discard phase, so the
    player can run the same maximin the hard bot uses, only in reverse.
    """

    name = "maximin"

    def get_action(self, snapshot: RoundSnapshot) -> Symbol | None:
        if snapshot.phase == Phase.AWAITING_DISCARD:
            return maximin_choice(
                (snapshot.player_first, snapshot.player_second),
                (snapshot.bot_first, snapshot.bot_second),
            )
        return super().get_action(snapshot)


PLAYER_POLICIES = {
    RandomPlayerPolicy.name: RandomPlayerPolicy,
    IdlePlayerPolicy.name: IdlePlayerPolicy,
    MaximinPlayerPolicy.name: MaximinPlayerPolicy,
}


def make_player_policy(name: str, rng=random):
    """Build a player policy by name."""
    if name not in PLAYER_POLICIES:
        raise ValueError(
            f"Unknown player policy {name!r}; choose from {sorted(PLAYER_POLICIES)}"
        )
    if name == IdlePlayerPolicy.name:
        return IdlePlayerPolicy()
    return PLAYER_POLICIES[name](rng)
