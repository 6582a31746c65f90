"""Score persistence for Rock-Paper-Scissors Minus One."""

import json
import os
import threading
from abc import ABC, abstractmethod

from parameters import BOT_WINS_KEY, PLAYER_WINS_KEY
from src.symbols import RoundResult


class PersistenceUnavailable(RuntimeError):
    """The score store could not be read or written."""


class ScoreLedger(ABC):
    """Key-value store holding the cumulative (player_wins, bot_wins)."""

    @abstractmethod
    def load(self) -> tuple[int, int]:
        """Load scores. Returns (0, 0) if nothing has been saved yet.

        Raises:
            PersistenceUnavailable: if the store cannot be read
        """
        pass

    @abstractmethod
    def save(self, player_wins: int, bot_wins: int):
        """Save scores.

        Raises:
            PersistenceUnavailable: if the store cannot be written
        """
        pass

    @abstractmethod
    def reset(self):
        """Forget all saved scores."""
        pass


def _parse_count(data: dict, key: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PersistenceUnavailable(f"Invalid score for {key}: {value!r}")
    return value


class JsonScoreLedger(ScoreLedger):
    """Scores stored as a small JSON object on disk."""

    def __init__(self, filepath: str):
        self.filepath = filepath

    def load(self) -> tuple[int, int]:
        if not os.path.exists(self.filepath):
            return 0, 0
        try:
            with open(self.filepath, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceUnavailable(
                f"Could not read scores from {self.filepath}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise PersistenceUnavailable(f"Malformed score file {self.filepath}")
        return _parse_count(data, PLAYER_WINS_KEY), _parse_count(data, BOT_WINS_KEY)

    def save(self, player_wins: int, bot_wins: int):
        try:
            directory = os.path.dirname(self.filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.filepath, "w") as f:
                json.dump({PLAYER_WINS_KEY: player_wins, BOT_WINS_KEY: bot_wins}, f)
        except OSError as e:
            raise PersistenceUnavailable(
                f"Could not write scores to {self.filepath}: {e}"
            ) from e

    def reset(self):
        try:
            if os.path.exists(self.filepath):
                os.remove(self.filepath)
        except OSError as e:
            raise PersistenceUnavailable(
                f"Could not reset scores in {self.filepath}: {e}"
            ) from e


class MemoryScoreLedger(ScoreLedger):
    """In-process store, used by the simulator and tests."""

    def __init__(self, player_wins: int = 0, bot_wins: int = 0):
        self.data: dict[str, int] = {}
        if player_wins or bot_wins:
            self.save(player_wins, bot_wins)

    def load(self) -> tuple[int, int]:
        return self.data.get(PLAYER_WINS_KEY, 0), self.data.get(BOT_WINS_KEY, 0)

    def save(self, player_wins: int, bot_wins: int):
        self.data[PLAYER_WINS_KEY] = player_wins
        self.data[BOT_WINS_KEY] = bot_wins

    def reset(self):
        self.data.clear()


class ScoreBoard:
    """Session scores backed by a ledger.

    The ledger is read once here. After the first persistence failure, the
    board keeps counting in memory only and does not touch the ledger again.
    """

    def __init__(self, ledger: ScoreLedger | None = None, verbose: bool = True):
        self.ledger = ledger
        self.verbose = verbose
        self.player_wins = 0
        self.bot_wins = 0
        self.persistence_error: PersistenceUnavailable | None = None
        self._lock = threading.Lock()

        if ledger is None:
            return
        try:
            self.player_wins, self.bot_wins = ledger.load()
        except PersistenceUnavailable as e:
            self._mark_unavailable(e)

    @property
    def persistent(self) -> bool:
        return self.ledger is not None and self.persistence_error is None

    def _mark_unavailable(self, error: PersistenceUnavailable):
        self.persistence_error = error
        if self.verbose:
            print(f"Warning: {error}. Scores will be kept for this session only.")

    def _store(self):
        if not self.persistent:
            return
        try:
            self.ledger.save(self.player_wins, self.bot_wins)
        except PersistenceUnavailable as e:
            self._mark_unavailable(e)

    def record(self, result: RoundResult) -> tuple[int, int]:
        """Count one resolved round. A tie changes nothing and is not written."""
        with self._lock:
            if result == RoundResult.PLAYER_WINS:
                self.player_wins += 1
            elif result == RoundResult.BOT_WINS:
                self.bot_wins += 1
            else:
                return self.player_wins, self.bot_wins
            self._store()
            return self.player_wins, self.bot_wins

    def reset(self):
        """Zero the counters and clear the ledger."""
        with self._lock:
            self.player_wins = 0
            self.bot_wins = 0
            if not self.persistent:
                return
            try:
                self.ledger.reset()
            except PersistenceUnavailable as e:
                self._mark_unavailable(e)
