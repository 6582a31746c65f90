"""Bot policies: provisional pair generation and the final discard decision."""

import random

from src.symbols import SYMBOLS, Difficulty, Outcome, Symbol, beats


def compute_payoff(bot_symbol: Symbol, player_symbol: Symbol) -> int:
    """Payoff of a single matchup from the bot's side.

    Returns:
        +1 if the bot wins
         0 on a tie
        -1 if the bot loses
    """
    outcome = beats(bot_symbol, player_symbol)
    if outcome == Outcome.FIRST_WINS:
        return 1
    elif outcome == Outcome.SECOND_WINS:
        return -1
    return 0


def worst_case_payoff(
    candidate: Symbol, opponent_pair: tuple[Symbol, Symbol]
) -> int:
    """MIN over the opponent's two symbols of PAYOFF(candidate, response)."""
    return min(compute_payoff(candidate, response) for response in opponent_pair)


def maximin_choice(
    own_pair: tuple[Symbol, Symbol], opponent_pair: tuple[Symbol, Symbol]
) -> Symbol:
    """
    MAXIMIN(own, opp) = argmax_{c in own} min_{r in opp} PAYOFF(c, r)

    Ties keep the first enumerated candidate of own_pair, so the result is
    deterministic for a given ordering.
    """
    best_symbol = own_pair[0]
    best_value = worst_case_payoff(best_symbol, opponent_pair)
    for candidate in own_pair[1:]:
        value = worst_case_payoff(candidate, opponent_pair)
        if value > best_value:
            best_symbol = candidate
            best_value = value
    return best_symbol


class EasyBotPolicy:
    """Keeps one of its own two symbols at random. Never sees the player's pair."""

    def __init__(self, rng=random):
        self.rng = rng

    def choose_final(self, bot_pair: tuple[Symbol, Symbol]) -> Symbol:
        return self.rng.choice(bot_pair)


class HardBotPolicy:
    """Keeps the symbol with the best worst case against the player's pair."""

    def choose_final(
        self,
        bot_pair: tuple[Symbol, Symbol],
        player_pair: tuple[Symbol, Symbol],
    ) -> Symbol:
        return maximin_choice(bot_pair, player_pair)


class BotStrategyEngine:
    """Produces the bot's provisional pair and its final symbol.

    The random source is injectable (anything with a `choice` method, e.g.
    `random.Random(seed)`), which keeps the engine reproducible in tests.
    """

    def __init__(self, rng=random):
        self.rng = rng
        self.easy_policy = EasyBotPolicy(rng)
        self.hard_policy = HardBotPolicy()

    def generate_provisional_pair(
        self, difficulty: Difficulty
    ) -> tuple[Symbol, Symbol]:
        """Pick two distinct symbols uniformly at random.

        The same for both difficulties. The bot has not seen the player's
        picks at this point.
        """
        first = self.rng.choice(SYMBOLS)
        remaining = [symbol for symbol in SYMBOLS if symbol != first]
        second = self.rng.choice(remaining)
        return first, second

    def choose_final(
        self,
        difficulty: Difficulty,
        bot_pair: tuple[Symbol, Symbol],
        player_pair: tuple[Symbol, Symbol],
    ) -> Symbol:
        """Discard one of the bot's symbols and return the one that is kept."""
        if difficulty == Difficulty.HARD:
            return self.hard_policy.choose_final(bot_pair, player_pair)
        return self.easy_policy.choose_final(bot_pair)
