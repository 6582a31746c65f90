"""Round state machine: sequences picks, discards, timeouts and scoring."""

import random

from parameters import RESULT_DELAY_MS
from src.bot_strategy import BotStrategyEngine
from src.countdown import (
    Countdown,
    DeferredCallback,
    fallback_choice,
    monotonic_ms,
    phase_duration,
)
from src.round_state import (
    AwaitingDiscard,
    AwaitingFirstPick,
    AwaitingSecondPick,
    Phase,
    Resolved,
    RoundSnapshot,
    RoundState,
    snapshot_from_state,
)
from src.score_ledger import ScoreBoard
from src.symbols import Difficulty, Symbol, round_result


class InvalidChoice(ValueError):
    """Input is not legal in the current phase. The round is left untouched."""


class RoundStateMachine:
    """Drives rounds for one session against a bot of fixed difficulty.

    Input arrives through `submit` (player choices) and `tick` (clock
    samples). Each call is processed to completion before returning. Every
    accepted transition replaces `state` with a new immutable variant and
    pushes a `RoundSnapshot` to the registered listeners.

    Args:
        difficulty: Bot difficulty for every round of the session
        scoreboard: Session scores; defaults to an in-memory board
        bot: Object with `generate_provisional_pair(difficulty)` and
            `choose_final(difficulty, bot_pair, player_pair)`
        rng: Random source for forced moves on timeout
        clock: Callable returning the current time in milliseconds
        result_delay_ms: How long a resolved round is shown before the next
        listeners: Callables receiving a RoundSnapshot after each transition
        verbose: Print forced moves and results
    """

    def __init__(
        self,
        difficulty: Difficulty,
        scoreboard: ScoreBoard | None = None,
        bot=None,
        rng=random,
        clock=monotonic_ms,
        result_delay_ms: float = RESULT_DELAY_MS,
        listeners=None,
        verbose: bool = False,
    ):
        self.difficulty = difficulty
        self.scoreboard = scoreboard if scoreboard is not None else ScoreBoard()
        self.bot = bot if bot is not None else BotStrategyEngine(rng)
        self.rng = rng
        self.clock = clock
        self.result_delay_ms = result_delay_ms
        self.listeners = list(listeners or [])
        self.verbose = verbose

        self.state: RoundState | None = None
        self.round_number = 0
        self.closed = False
        self.forced_moves = 0
        self.countdown = Countdown()
        self._timer_generation: int | None = None
        self._next_round: DeferredCallback | None = None

    @property
    def generation(self) -> int:
        return self.countdown.generation

    @property
    def phase(self) -> Phase | None:
        return self.state.phase if self.state is not None else None

    def add_listener(self, listener):
        self.listeners.append(listener)

    def _now(self, now: float | None) -> float:
        return self.clock() if now is None else now

    # ------------------------------------------------------------------
    # Public events
    # ------------------------------------------------------------------

    def start(self, now: float | None = None) -> RoundSnapshot:
        """Begin the first round of the session."""
        if self.closed:
            raise InvalidChoice("Session is closed")
        if self.state is not None:
            raise InvalidChoice("Session already started")
        now = self._now(now)
        self._begin_round(now)
        return self.snapshot(now)

    def submit(self, choice, now: float | None = None) -> RoundSnapshot:
        """Apply a player choice.

        Input arriving after the phase deadline loses to the timeout: the
        forced move is applied and the input is rejected.

        Args:
            choice: A Symbol, or text accepted by `Symbol.parse`

        Raises:
            InvalidChoice: if the choice is not legal in the current phase,
                or the phase timed out before it arrived
        """
        if self.closed:
            raise InvalidChoice("Session is closed")
        if self.state is None:
            raise InvalidChoice("Session has not started")
        now = self._now(now)
        forced_before = self.forced_moves
        self._catch_up(now)
        if self.forced_moves != forced_before:
            raise InvalidChoice("Time is up")
        symbol = self._coerce(choice)
        self._apply(symbol, now)
        return self.snapshot(now)

    def tick(self, now: float | None = None) -> RoundSnapshot | None:
        """Sample the clock.

        Starts the next round once the result delay has passed, and forces a
        move for every phase that has timed out. Returns the new snapshot
        if a transition happened, otherwise None.
        """
        if self.closed or self.state is None:
            return None
        now = self._now(now)
        if self._catch_up(now):
            return self.snapshot(now)
        return None

    def snapshot(self, now: float | None = None) -> RoundSnapshot:
        if self.state is None:
            raise InvalidChoice("Session has not started")
        return snapshot_from_state(
            self.state,
            self.generation,
            self._now(now),
            self.scoreboard.player_wins,
            self.scoreboard.bot_wins,
        )

    def shutdown(self):
        """Cancel the pending next round and disarm the countdown."""
        if self._next_round is not None:
            self._next_round.cancel()
            self._next_round = None
        self.countdown.disarm()
        self._timer_generation = None
        self.closed = True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _catch_up(self, now: float) -> bool:
        """Replay every round start and timeout due by `now`, in order.

        A forced move is applied at the deadline it missed, so the following
        phase's deadline counts from there rather than from `now`.
        """
        moved = False
        while True:
            if self._next_round is not None and self._next_round.poll(now):
                moved = True
            elif self.countdown.expired(now, self._timer_generation):
                deadline = self.countdown.deadline
                symbol = fallback_choice(self.state, self.rng)
                if self.verbose:
                    print(f"Time's up! Playing {symbol} for the player")
                self.forced_moves += 1
                self._apply(symbol, deadline)
                moved = True
            else:
                return moved

    def _coerce(self, choice) -> Symbol:
        if isinstance(choice, Symbol):
            return choice
        if isinstance(choice, str):
            try:
                return Symbol.parse(choice)
            except ValueError as e:
                raise InvalidChoice(str(e)) from e
        raise InvalidChoice(f"Not a symbol: {choice!r}")

    def _apply(self, symbol: Symbol, now: float):
        """Validate `symbol` against the current phase, then transition.

        All checks run before anything is assigned, so a rejected symbol
        leaves `state`, the countdown and the score as they were.
        """
        state = self.state

        if isinstance(state, AwaitingFirstPick):
            new_state = AwaitingSecondPick(
                deadline=now + phase_duration(Phase.AWAITING_SECOND_PICK),
                player_first=symbol,
            )
        elif isinstance(state, AwaitingSecondPick):
            if symbol == state.player_first:
                raise InvalidChoice(f"{symbol} was already chosen")
            bot_first, bot_second = self.bot.generate_provisional_pair(self.difficulty)
            new_state = AwaitingDiscard(
                deadline=now + phase_duration(Phase.AWAITING_DISCARD),
                player_first=state.player_first,
                player_second=symbol,
                bot_first=bot_first,
                bot_second=bot_second,
            )
        elif isinstance(state, AwaitingDiscard):
            if symbol not in state.player_pair:
                raise InvalidChoice(
                    f"{symbol} is not one of "
                    f"{state.player_first} and {state.player_second}"
                )
            bot_final = self.bot.choose_final(
                self.difficulty, state.bot_pair, state.player_pair
            )
            new_state = Resolved(
                deadline=now + self.result_delay_ms,
                player_first=state.player_first,
                player_second=state.player_second,
                bot_first=state.bot_first,
                bot_second=state.bot_second,
                player_final=symbol,
                bot_final=bot_final,
                result=round_result(symbol, bot_final),
            )
        else:
            raise InvalidChoice("Round is already resolved")

        self._enter(new_state, now)

    def _enter(self, new_state: RoundState, now: float):
        self.state = new_state

        if isinstance(new_state, Resolved):
            self._timer_generation = None
            self.countdown.disarm()
            self.scoreboard.record(new_state.result)
            self._next_round = DeferredCallback(new_state.deadline, self._begin_round)
            if self.verbose:
                print(
                    f"Round {self.round_number}: Player {new_state.player_final} vs "
                    f"Bot {new_state.bot_final} -> {new_state.result.message}"
                )
        else:
            self._timer_generation = self.countdown.arm(
                now, phase_duration(new_state.phase)
            )

        self._publish(now)

    def _begin_round(self, now: float):
        self.round_number += 1
        self._next_round = None
        self._enter(
            AwaitingFirstPick(deadline=now + phase_duration(Phase.AWAITING_FIRST_PICK)),
            now,
        )

    def _publish(self, now: float):
        if not self.listeners:
            return
        snapshot = self.snapshot(now)
        for listener in self.listeners:
            listener(snapshot)
