"""Tests for the simulation engine, player policies and the CLI runner."""

import argparse
import random

import pytest

import main
from src.player_policies import (
    IdlePlayerPolicy,
    MaximinPlayerPolicy,
    RandomPlayerPolicy,
    make_player_policy,
)
from src.round_state import Phase, RoundSnapshot
from src.simulation import ManualClock, RoundSimulation
from src.symbols import Difficulty, RoundResult, Symbol


def test_manual_clock():
    clock = ManualClock()
    assert clock() == 0
    clock.advance(250)
    clock.advance_to(100)
    assert clock() == 250
    clock.advance_to(1000)
    assert clock() == 1000


def test_session_counts_add_up():
    simulation = RoundSimulation(Difficulty.HARD, rng=random.Random(11))
    results = simulation.simulate_session(60)
    assert results["player_wins"] + results["bot_wins"] + results["ties"] == 60
    assert len(results["history"]) == 60
    assert simulation.scoreboard.player_wins == results["player_wins"]
    assert simulation.scoreboard.bot_wins == results["bot_wins"]
    assert simulation.machine.closed


def test_idle_player_is_always_forced():
    simulation = RoundSimulation(
        Difficulty.EASY, player_policy=IdlePlayerPolicy(), rng=random.Random(2)
    )
    results = simulation.simulate_session(20)
    assert results["forced_moves"] == 3 * 20


def test_rounds_are_numbered_and_resolved():
    simulation = RoundSimulation(Difficulty.EASY, rng=random.Random(4))
    first = simulation.simulate_round()
    second = simulation.simulate_round()
    assert simulation.machine.round_number == 2
    assert first.phase == second.phase == Phase.RESOLVED
    assert second.player_first != second.player_second
    assert second.bot_first != second.bot_second


def test_maximin_player_keeps_best_worst_case():
    policy = MaximinPlayerPolicy(random.Random(0))
    snapshot = RoundSnapshot(
        phase=Phase.AWAITING_DISCARD,
        generation=3,
        remaining_ms=2000,
        player_wins=0,
        bot_wins=0,
        player_first=Symbol.PAPER,
        player_second=Symbol.ROCK,
        bot_first=Symbol.ROCK,
        bot_second=Symbol.SCISSORS,
    )
    assert policy.get_action(snapshot) == Symbol.ROCK


def test_random_player_second_pick_is_legal():
    policy = RandomPlayerPolicy(random.Random(0))
    snapshot = RoundSnapshot(
        phase=Phase.AWAITING_SECOND_PICK,
        generation=2,
        remaining_ms=4000,
        player_wins=0,
        bot_wins=0,
        player_first=Symbol.SCISSORS,
    )
    for _ in range(50):
        assert policy.get_action(snapshot) != Symbol.SCISSORS


def test_make_player_policy():
    assert isinstance(make_player_policy("idle"), IdlePlayerPolicy)
    assert isinstance(make_player_policy("maximin"), MaximinPlayerPolicy)
    with pytest.raises(ValueError):
        make_player_policy("psychic")


def test_rolling_rate():
    history = [RoundResult.PLAYER_WINS, RoundResult.BOT_WINS, RoundResult.PLAYER_WINS]
    assert main.rolling_rate(history, RoundResult.PLAYER_WINS, window=2) == [1.0, 0.5, 0.5]


def test_main_runs_both_difficulties_and_plots(tmp_path):
    args = argparse.Namespace(
        difficulty="both",
        player_policy="random",
        num_rounds=30,
        seed=5,
        plot=True,
        output_dir=str(tmp_path),
        verbose=False,
    )
    results = main.main(args)
    assert set(results) == {"Easy", "Hard"}
    for outcome in results.values():
        assert outcome["player_wins"] + outcome["bot_wins"] + outcome["ties"] == 30
    assert len(list(tmp_path.glob("win_rates_*.png"))) == 1
