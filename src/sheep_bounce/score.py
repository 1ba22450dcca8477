"""
score.py: Score accumulation and high score persistence.
"""

import logging
import sqlite3
from concurrent.futures import Executor, Future
from typing import Optional, Protocol

from .data_models import GameMode, ScoreState

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get_high_score(self, mode: GameMode) -> int: ...

    def set_high_score(self, mode: GameMode, score: int) -> None: ...


class ScoreTracker:
    """
    Keeps the session score for one mode. The in-memory state is
    authoritative; the store only hears about new high scores, and a
    failing store never reaches the simulation.
    """

    def __init__(self, store: Optional[ScoreStore], mode: GameMode,
                 executor: Optional[Executor] = None):
        self.store = store
        self.executor = executor
        self.state = ScoreState(mode=GameMode(mode), high_score=self._load_high_score(mode))

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def high_score(self) -> int:
        return self.state.high_score

    def _load_high_score(self, mode: GameMode) -> int:
        if self.store is None:
            return 0
        try:
            return self.store.get_high_score(mode)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Could not read high score for {GameMode(mode).name}: {e}")
            return 0

    def update(self, change: int) -> bool:
        """Applies a score change. Returns True if it set a new high score."""
        state = self.state
        state.score += change
        if state.score <= state.high_score:
            return False

        state.high_score = state.score
        self._persist(state.mode, state.high_score)
        return True

    def reset(self):
        self.state.score = 0

    def _persist(self, mode: GameMode, high_score: int):
        if self.store is None:
            return
        if self.executor is None:
            self._write(mode, high_score)
            return
        future = self.executor.submit(self._write, mode, high_score)
        future.add_done_callback(self._log_write_failure)

    def _write(self, mode: GameMode, high_score: int):
        try:
            self.store.set_high_score(mode, high_score)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Could not save high score {high_score} for {mode.name}: {e}")

    @staticmethod
    def _log_write_failure(future: Future):
        error = future.exception()
        if error is not None:
            logger.error(f"High score writer failed: {error}")

    def score_text(self) -> str:
        return f"{self.state.score} / {self.state.high_score}"
