"""
prefs_db.py: SQLite persistence for the sound preference and per-mode high scores.

The table only ever holds one row. A missing row reads as the defaults
(sound on, every score 0).
"""

import logging
import sqlite3
import threading

from .constants import DB_FILE
from .data_models import GameMode

logger = logging.getLogger(__name__)

TABLE_NAME = "gamePrefsData"
SOUND = "sound"
SCORE_COLUMNS = {
    GameMode.EASY: "scoreEasy",
    GameMode.NORMAL: "scoreNormal",
    GameMode.UNFAIR: "scoreUnfair",
}
ROW_ID = 1


class Database:
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE):
        # Writes arrive from the score writer thread as well as the client.
        self.conn = sqlite3.connect(db_file, check_same_thread=False)
        self.lock = threading.Lock()
        self.setup()

    def setup(self):
        """Creates the preferences table if it doesn't exist."""
        with self.lock:
            self.conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    _id INTEGER PRIMARY KEY,
                    {SOUND} INTEGER DEFAULT 1,
                    scoreEasy INTEGER DEFAULT 0,
                    scoreNormal INTEGER DEFAULT 0,
                    scoreUnfair INTEGER DEFAULT 0
                )
            """)
            self.conn.commit()
        logger.debug(f"Preferences table ready ({TABLE_NAME})")

    def close(self):
        with self.lock:
            self.conn.close()

    def get_value(self, column: str, default: int) -> int:
        with self.lock:
            row = self.conn.execute(
                f"SELECT {column} FROM {TABLE_NAME} WHERE _id=?", (ROW_ID,)).fetchone()
        return default if row is None else row[0]

    def set_value(self, column: str, value: int):
        """Updates one column of the single row, creating the row if needed."""
        with self.lock:
            cur = self.conn.execute(
                f"UPDATE {TABLE_NAME} SET {column}=? WHERE _id=?", (value, ROW_ID))
            if cur.rowcount < 1:
                self.conn.execute(
                    f"INSERT INTO {TABLE_NAME} (_id, {column}) VALUES (?, ?)", (ROW_ID, value))
            self.conn.commit()

    def is_sound_enabled(self) -> bool:
        return self.get_value(SOUND, 1) == 1

    def set_sound_enabled(self, enabled: bool):
        self.set_value(SOUND, 1 if enabled else 0)

    def get_high_score(self, mode: GameMode) -> int:
        return self.get_value(SCORE_COLUMNS[GameMode(mode)], 0)

    def set_high_score(self, mode: GameMode, score: int):
        self.set_value(SCORE_COLUMNS[GameMode(mode)], score)
