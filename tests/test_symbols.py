"""Tests for the symbol model and the beats-relation."""

import pytest

from src.symbols import SYMBOLS, Outcome, RoundResult, Symbol, beats, round_result


def test_beats_same_symbol_is_tie():
    for symbol in SYMBOLS:
        assert beats(symbol, symbol) == Outcome.TIE


def test_beats_cycle():
    assert beats(Symbol.ROCK, Symbol.SCISSORS) == Outcome.FIRST_WINS
    assert beats(Symbol.PAPER, Symbol.ROCK) == Outcome.FIRST_WINS
    assert beats(Symbol.SCISSORS, Symbol.PAPER) == Outcome.FIRST_WINS
    assert beats(Symbol.SCISSORS, Symbol.ROCK) == Outcome.SECOND_WINS
    assert beats(Symbol.ROCK, Symbol.PAPER) == Outcome.SECOND_WINS
    assert beats(Symbol.PAPER, Symbol.SCISSORS) == Outcome.SECOND_WINS


def test_beats_is_antisymmetric():
    opposite = {Outcome.FIRST_WINS: Outcome.SECOND_WINS, Outcome.SECOND_WINS: Outcome.FIRST_WINS}
    for a in SYMBOLS:
        for b in SYMBOLS:
            if a != b:
                assert beats(b, a) == opposite[beats(a, b)]


def test_round_result_from_player_side():
    assert round_result(Symbol.ROCK, Symbol.SCISSORS) == RoundResult.PLAYER_WINS
    assert round_result(Symbol.ROCK, Symbol.PAPER) == RoundResult.BOT_WINS
    assert round_result(Symbol.PAPER, Symbol.PAPER) == RoundResult.TIE


def test_result_messages():
    assert RoundResult.PLAYER_WINS.message == "You win!"
    assert RoundResult.BOT_WINS.message == "Bot wins!"
    assert RoundResult.TIE.message == "It's a tie!"


@pytest.mark.parametrize(
    "text,expected",
    [("Rock", Symbol.ROCK), ("paper", Symbol.PAPER), (" S ", Symbol.SCISSORS), ("r", Symbol.ROCK)],
)
def test_parse(text, expected):
    assert Symbol.parse(text) == expected


@pytest.mark.parametrize("text", ["", "lizard", "x", "rocks"])
def test_parse_rejects_unknown(text):
    with pytest.raises(ValueError):
        Symbol.parse(text)
