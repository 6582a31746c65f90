"""Shared fixtures for the test suite."""

import random

import matplotlib
import pytest

from src.round_machine import RoundStateMachine
from src.score_ledger import MemoryScoreLedger, ScoreBoard
from src.simulation import ManualClock
from src.symbols import Difficulty, Symbol

matplotlib.use("Agg")


class ScriptedBot:
    """Bot stand-in returning fixed symbols and recording its calls."""

    def __init__(self, pair=(Symbol.PAPER, Symbol.SCISSORS), final=Symbol.SCISSORS):
        self.pair = pair
        self.final = final
        self.pair_calls = []
        self.final_calls = []

    def generate_provisional_pair(self, difficulty):
        self.pair_calls.append(difficulty)
        return self.pair

    def choose_final(self, difficulty, bot_pair, player_pair):
        self.final_calls.append((difficulty, bot_pair, player_pair))
        return self.final


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def ledger():
    return MemoryScoreLedger()


@pytest.fixture
def scoreboard(ledger):
    return ScoreBoard(ledger, verbose=False)


@pytest.fixture
def scripted_bot():
    """Factory for ScriptedBot instances with custom pair and final."""
    return ScriptedBot


@pytest.fixture
def bot(scripted_bot):
    return scripted_bot()


@pytest.fixture
def machine(clock, scoreboard, bot):
    """Started machine at t=0 with a scripted bot and a seeded rng."""
    m = RoundStateMachine(
        Difficulty.EASY,
        scoreboard=scoreboard,
        bot=bot,
        rng=random.Random(7),
        clock=clock,
    )
    m.start()
    return m
