"""Symbols, outcomes and the beats-relation for Rock-Paper-Scissors."""

from enum import Enum


class Symbol(Enum):
    """One of the three playable symbols."""

    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Symbol":
        """Parse a symbol from its name or first letter (case-insensitive).

        Raises:
            ValueError: if text does not name a symbol
        """
        key = text.strip().lower()
        for symbol in cls:
            if key in (symbol.value.lower(), symbol.value[0].lower()):
                return symbol
        raise ValueError(f"Unknown symbol: {text!r}")


# Fixed enumeration order, used wherever "uniformly among all three" is needed
SYMBOLS: tuple[Symbol, ...] = (Symbol.ROCK, Symbol.PAPER, Symbol.SCISSORS)

# (winner, loser) pairs: Rock > Scissors > Paper > Rock
WINS: frozenset[tuple[Symbol, Symbol]] = frozenset(
    {
        (Symbol.ROCK, Symbol.SCISSORS),
        (Symbol.PAPER, Symbol.ROCK),
        (Symbol.SCISSORS, Symbol.PAPER),
    }
)


class Outcome(Enum):
    """Result of comparing two symbols, from the first symbol's side."""

    FIRST_WINS = "FirstWins"
    SECOND_WINS = "SecondWins"
    TIE = "Tie"


class RoundResult(Enum):
    """Result of a round, from the player's side."""

    PLAYER_WINS = "PlayerWins"
    BOT_WINS = "BotWins"
    TIE = "Tie"

    @property
    def message(self) -> str:
        return RESULT_MESSAGES[self]


RESULT_MESSAGES = {
    RoundResult.PLAYER_WINS: "You win!",
    RoundResult.BOT_WINS: "Bot wins!",
    RoundResult.TIE: "It's a tie!",
}


class Difficulty(Enum):
    """Bot difficulty, fixed for a whole session."""

    EASY = "easy"
    HARD = "hard"


def beats(a: Symbol, b: Symbol) -> Outcome:
    """
    BEATS(a, b): compare two symbols.

    BEATS(a, b) = {
        Tie         if a = b
        FirstWins   if (a, b) in {(Rock, Scissors), (Paper, Rock), (Scissors, Paper)}
        SecondWins  otherwise
    }
    """
    if a == b:
        return Outcome.TIE
    if (a, b) in WINS:
        return Outcome.FIRST_WINS
    return Outcome.SECOND_WINS


def round_result(player_final: Symbol, bot_final: Symbol) -> RoundResult:
    """Map BEATS(player, bot) onto the player's point of view."""
    outcome = beats(player_final, bot_final)
    if outcome == Outcome.FIRST_WINS:
        return RoundResult.PLAYER_WINS
    elif outcome == Outcome.SECOND_WINS:
        return RoundResult.BOT_WINS
    return RoundResult.TIE
