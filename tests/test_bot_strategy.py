"""Tests for the bot strategy engine."""

import random
from collections import Counter

from src.bot_strategy import (
    BotStrategyEngine,
    EasyBotPolicy,
    compute_payoff,
    maximin_choice,
    worst_case_payoff,
)
from src.symbols import SYMBOLS, Difficulty, Symbol

ROCK, PAPER, SCISSORS = Symbol.ROCK, Symbol.PAPER, Symbol.SCISSORS


def test_payoff_from_bot_side():
    assert compute_payoff(ROCK, SCISSORS) == 1
    assert compute_payoff(ROCK, ROCK) == 0
    assert compute_payoff(ROCK, PAPER) == -1


def test_provisional_pair_is_distinct_and_uniform():
    engine = BotStrategyEngine(random.Random(1234))
    firsts = Counter()
    trials = 3000
    for _ in range(trials):
        first, second = engine.generate_provisional_pair(Difficulty.HARD)
        assert first != second
        assert first in SYMBOLS and second in SYMBOLS
        firsts[first] += 1

    assert set(firsts) == set(SYMBOLS)
    for symbol in SYMBOLS:
        assert 800 < firsts[symbol] < 1200


def test_provisional_pair_ignores_difficulty():
    easy = BotStrategyEngine(random.Random(99))
    hard = BotStrategyEngine(random.Random(99))
    for _ in range(50):
        assert easy.generate_provisional_pair(Difficulty.EASY) == hard.generate_provisional_pair(
            Difficulty.HARD
        )


def test_hard_keeps_rock_against_rock_scissors():
    # Rock vs {Rock, Scissors} -> worst Tie (0); Paper -> worst loss (-1)
    assert worst_case_payoff(ROCK, (ROCK, SCISSORS)) == 0
    assert worst_case_payoff(PAPER, (ROCK, SCISSORS)) == -1

    engine = BotStrategyEngine(random.Random(0))
    assert engine.choose_final(Difficulty.HARD, (ROCK, PAPER), (ROCK, SCISSORS)) == ROCK
    assert engine.choose_final(Difficulty.HARD, (PAPER, ROCK), (ROCK, SCISSORS)) == ROCK


def test_hard_tie_break_prefers_first_candidate():
    # Both candidates have a worst case of -1 against {Rock, Paper}
    assert maximin_choice((ROCK, SCISSORS), (ROCK, PAPER)) == ROCK
    assert maximin_choice((SCISSORS, ROCK), (ROCK, PAPER)) == SCISSORS


def test_hard_is_deterministic():
    engine = BotStrategyEngine(random.Random(5))
    for bot_pair in [(a, b) for a in SYMBOLS for b in SYMBOLS if a != b]:
        for player_pair in [(a, b) for a in SYMBOLS for b in SYMBOLS if a != b]:
            picks = {
                engine.choose_final(Difficulty.HARD, bot_pair, player_pair)
                for _ in range(10)
            }
            assert len(picks) == 1
            assert picks.pop() in bot_pair


def test_easy_keeps_either_symbol_of_its_pair():
    engine = BotStrategyEngine(random.Random(42))
    picks = Counter(
        engine.choose_final(Difficulty.EASY, (PAPER, SCISSORS), (ROCK, PAPER))
        for _ in range(500)
    )
    assert set(picks) == {PAPER, SCISSORS}
    assert 180 < picks[PAPER] < 320


def test_easy_policy_never_sees_player_pair():
    class FirstItem:
        def choice(self, seq):
            return seq[0]

    policy = EasyBotPolicy(FirstItem())
    assert policy.choose_final((SCISSORS, ROCK)) == SCISSORS
