"""Phase countdowns, forced moves on timeout, and the next-round delay."""

import random
import time

from parameters import DISCARD_TIME_MS, FIRST_PICK_TIME_MS, SECOND_PICK_TIME_MS
from src.round_state import (
    AwaitingDiscard,
    AwaitingFirstPick,
    AwaitingSecondPick,
    Phase,
    RoundState,
)
from src.symbols import SYMBOLS, Symbol

PHASE_DURATIONS_MS = {
    Phase.AWAITING_FIRST_PICK: FIRST_PICK_TIME_MS,
    Phase.AWAITING_SECOND_PICK: SECOND_PICK_TIME_MS,
    Phase.AWAITING_DISCARD: DISCARD_TIME_MS,
}


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


def phase_duration(phase: Phase) -> int:
    """Full countdown for a phase. Resolved has no countdown."""
    return PHASE_DURATIONS_MS.get(phase, 0)


def format_time(ms: float) -> str:
    """Format milliseconds as seconds with three decimals, e.g. 3.250."""
    ms = max(0, int(ms))
    seconds = ms // 1000
    milliseconds = ms % 1000
    return f"{seconds}.{milliseconds:03d}"


def fallback_choice(state: RoundState, rng=random) -> Symbol:
    """
    Symbol played on the player's behalf when a phase times out.

    FALLBACK(s) = {
        uniform(SYMBOLS)                        if s = AwaitingFirstPick
        uniform(SYMBOLS \\ {first})              if s = AwaitingSecondPick
        uniform({first, second})                if s = AwaitingDiscard
    }
    """
    if isinstance(state, AwaitingFirstPick):
        return rng.choice(SYMBOLS)
    if isinstance(state, AwaitingSecondPick):
        remaining = [symbol for symbol in SYMBOLS if symbol != state.player_first]
        return rng.choice(remaining)
    if isinstance(state, AwaitingDiscard):
        return rng.choice(state.player_pair)
    raise ValueError(f"No countdown in phase {state.phase.value}")


class Countdown:
    """Single deadline keyed by a generation number.

    Every `arm` or `disarm` bumps the generation. A caller holding an older
    generation can therefore never observe its timer as expired.
    """

    def __init__(self):
        self.generation = 0
        self.deadline: float | None = None

    def arm(self, now: float, duration_ms: float) -> int:
        self.generation += 1
        self.deadline = now + duration_ms
        return self.generation

    def disarm(self) -> int:
        self.generation += 1
        self.deadline = None
        return self.generation

    @property
    def armed(self) -> bool:
        return self.deadline is not None

    def remaining(self, now: float) -> float:
        if self.deadline is None:
            return 0.0
        return max(0.0, self.deadline - now)

    def expired(self, now: float, generation: int | None = None) -> bool:
        if self.deadline is None:
            return False
        if generation is not None and generation != self.generation:
            return False
        return now >= self.deadline


class DeferredCallback:
    """One-shot callback that fires on the first poll at or after `due_at`."""

    def __init__(self, due_at: float, callback):
        self.due_at = due_at
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True

    def poll(self, now: float) -> bool:
        """Run the callback at its due time if `now` has reached it.

        Returns True if it ran on this call.
        """
        if not self.pending or now < self.due_at:
            return False
        self.fired = True
        self.callback(self.due_at)
        return True
