"""Round state and data structures for Rock-Paper-Scissors Minus One.

A round is one of four immutable variants keyed by `Phase`. Each variant
carries only the fields that are known in that phase, so a transition always
builds a new object and a rejected input leaves the old one untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from src.symbols import RoundResult, Symbol


class Phase(Enum):
    """Round phase."""

    AWAITING_FIRST_PICK = "AwaitingFirstPick"
    AWAITING_SECOND_PICK = "AwaitingSecondPick"
    AWAITING_DISCARD = "AwaitingDiscard"
    RESOLVED = "Resolved"


@dataclass(frozen=True)
class AwaitingFirstPick:
    """Nothing committed yet."""

    deadline: float

    phase: ClassVar[Phase] = Phase.AWAITING_FIRST_PICK


@dataclass(frozen=True)
class AwaitingSecondPick:
    """Player has committed one symbol."""

    deadline: float
    player_first: Symbol

    phase: ClassVar[Phase] = Phase.AWAITING_SECOND_PICK


@dataclass(frozen=True)
class AwaitingDiscard:
    """Both sides hold a provisional pair."""

    deadline: float
    player_first: Symbol
    player_second: Symbol
    bot_first: Symbol
    bot_second: Symbol

    phase: ClassVar[Phase] = Phase.AWAITING_DISCARD

    @property
    def player_pair(self) -> tuple[Symbol, Symbol]:
        return (self.player_first, self.player_second)

    @property
    def bot_pair(self) -> tuple[Symbol, Symbol]:
        return (self.bot_first, self.bot_second)


@dataclass(frozen=True)
class Resolved:
    """Both finals are known. `deadline` is when the next round begins."""

    deadline: float
    player_first: Symbol
    player_second: Symbol
    bot_first: Symbol
    bot_second: Symbol
    player_final: Symbol
    bot_final: Symbol
    result: RoundResult

    phase: ClassVar[Phase] = Phase.RESOLVED


RoundState = Union[AwaitingFirstPick, AwaitingSecondPick, AwaitingDiscard, Resolved]


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of a round handed to the presentation layer."""

    phase: Phase
    generation: int
    remaining_ms: float
    player_wins: int
    bot_wins: int
    player_first: Symbol | None = None
    player_second: Symbol | None = None
    bot_first: Symbol | None = None
    bot_second: Symbol | None = None
    player_final: Symbol | None = None
    bot_final: Symbol | None = None
    result: RoundResult | None = None

    def prompt(self) -> str:
        """Instruction line for the current phase."""
        if self.phase == Phase.AWAITING_FIRST_PICK:
            return "Select your first choice:"
        if self.phase == Phase.AWAITING_SECOND_PICK:
            return f"You chose {self.player_first}. Now select your second choice:"
        if self.phase == Phase.AWAITING_DISCARD:
            return (
                f"You chose {self.player_first} and {self.player_second}. "
                "Select one to remain:"
            )
        return self.result.message

    def to_dict(self) -> dict:
        def name(symbol: Symbol | None) -> str | None:
            return symbol.value if symbol is not None else None

        return {
            "phase": self.phase.value,
            "generation": self.generation,
            "remaining_ms": round(self.remaining_ms),
            "player_wins": self.player_wins,
            "bot_wins": self.bot_wins,
            "player_first": name(self.player_first),
            "player_second": name(self.player_second),
            "bot_first": name(self.bot_first),
            "bot_second": name(self.bot_second),
            "player_final": name(self.player_final),
            "bot_final": name(self.bot_final),
            "result": self.result.value if self.result is not None else None,
        }


def snapshot_from_state(
    state: RoundState,
    generation: int,
    now: float,
    player_wins: int,
    bot_wins: int,
) -> RoundSnapshot:
    """Create a presentation snapshot from a round state."""
    return RoundSnapshot(
        phase=state.phase,
        generation=generation,
        remaining_ms=max(0.0, state.deadline - now),
        player_wins=player_wins,
        bot_wins=bot_wins,
        player_first=getattr(state, "player_first", None),
        player_second=getattr(state, "player_second", None),
        bot_first=getattr(state, "bot_first", None),
        bot_second=getattr(state, "bot_second", None),
        player_final=getattr(state, "player_final", None),
        bot_final=getattr(state, "bot_final", None),
        result=getattr(state, "result", None),
    )
