"""
SQLite Preferences Store for StudyBuddy.

Persists the few values that survive a restart:
- logged_in: whether the login gate has been passed
- email: last email used to log in
- weekly_goal: weekly target in minutes

Database location: ~/.studybuddy/prefs.db

Read failures never escape: a missing, corrupt or unreadable value falls
back to its default and a warning is logged.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

KEY_LOGGED_IN = "logged_in"
KEY_EMAIL = "email"
KEY_WEEKLY_GOAL = "weekly_goal"

DEFAULT_WEEKLY_GOAL = 300


@dataclass(frozen=True)
class Preferences:
    """Preference values as read at startup."""

    logged_in: bool = False
    email: str = ""
    weekly_goal: int = DEFAULT_WEEKLY_GOAL


class PreferencesStore:
    """
    Key-value preference persistence backed by SQLite.

    Each setter writes through immediately; there is no transaction across
    keys.
    """

    DEFAULT_DB_PATH = Path.home() / ".studybuddy" / "prefs.db"

    def __init__(self, db_path: Path | None = None, default_weekly_goal: int = DEFAULT_WEEKLY_GOAL):
        """
        Initialize the preferences store.

        Args:
            db_path: Custom database path (defaults to ~/.studybuddy/prefs.db)
            default_weekly_goal: Goal returned when none is stored
        """
        self.db_path = Path(db_path) if db_path else self.DEFAULT_DB_PATH
        self.default_weekly_goal = default_weekly_goal
        self._conn: sqlite3.Connection | None = None

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_schema()
            logger.debug(f"PreferencesStore initialized at {self.db_path}")
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Preferences unavailable at {self.db_path}: {e}")

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_schema(self) -> None:
        cursor = self.conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    # =========================================================================
    # Raw Access
    # =========================================================================

    def _get(self, key: str) -> str | None:
        try:
            cursor = self.conn.cursor()
            cursor.execute("SELECT value FROM preferences WHERE key = ?", (key,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Could not read preference {key}: {e}")
            return None
        return row["value"] if row else None

    def _set(self, key: str, value: str) -> None:
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                INSERT INTO preferences (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
                (key, value),
            )
            self.conn.commit()
            logger.info(f"Saved preference {key}")
        except sqlite3.Error as e:
            logger.warning(f"Could not save preference {key}: {e}")

    # =========================================================================
    # Typed Accessors
    # =========================================================================

    def get_logged_in(self) -> bool:
        return self._get(KEY_LOGGED_IN) == "1"

    def set_logged_in(self, value: bool) -> None:
        self._set(KEY_LOGGED_IN, "1" if value else "0")

    def get_email(self) -> str:
        return self._get(KEY_EMAIL) or ""

    def set_email(self, value: str) -> None:
        self._set(KEY_EMAIL, value)

    def get_weekly_goal(self) -> int:
        raw = self._get(KEY_WEEKLY_GOAL)
        if raw is None:
            return self.default_weekly_goal
        try:
            goal = int(raw)
        except ValueError:
            logger.warning(f"Ignoring stored weekly goal {raw!r}")
            return self.default_weekly_goal
        return goal if goal > 0 else self.default_weekly_goal

    def set_weekly_goal(self, value: int) -> None:
        self._set(KEY_WEEKLY_GOAL, str(int(value)))

    def load(self) -> Preferences:
        """Read all preferences at once."""
        return Preferences(
            logged_in=self.get_logged_in(),
            email=self.get_email(),
            weekly_goal=self.get_weekly_goal(),
        )

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
