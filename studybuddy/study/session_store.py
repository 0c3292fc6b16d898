"""
In-memory Session Store for StudyBuddy.

Holds the study sessions logged during one run of the app. Sessions are kept
in insertion order; display code asks for `recent()` to get newest first.

Invalid input (blank subject, non-positive minutes) is rejected silently:
`add` returns None and `update` returns False, leaving the store untouched.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import date, datetime

from loguru import logger


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class StudySession:
    """A single logged study session."""

    id: int
    subject: str
    minutes: int
    topics: str = ""
    timestamp: datetime = datetime.min

    @property
    def day(self) -> date:
        return self.timestamp.date()


# =============================================================================
# Helpers
# =============================================================================


def start_of_day(day: date | datetime | None = None) -> datetime:
    """Midnight of the given day (today when omitted)."""
    if day is None:
        day = date.today()
    if isinstance(day, datetime):
        day = day.date()
    return datetime(day.year, day.month, day.day)


def parse_minutes(text: str | int | None) -> int:
    """
    Parse a minutes field from user input.

    Anything that is not a whole number maps to 0, which validation rejects.
    """
    if isinstance(text, int):
        return text
    try:
        return int((text or "").strip())
    except ValueError:
        return 0


def is_valid_entry(subject: str | None, minutes: int) -> bool:
    """Check the subject/minutes invariants for a session."""
    return bool((subject or "").strip()) and minutes > 0


def topic_lines(session: StudySession) -> list[str]:
    """Topic notes split into lines, blanks dropped."""
    return [line.strip() for line in session.topics.splitlines() if line.strip()]


def format_day(value: date | datetime) -> str:
    """Format a date like 'Mar 4, 2026'."""
    return f"{value:%b} {value.day}, {value.year}"


# =============================================================================
# Session Store
# =============================================================================


class SessionStore:
    """
    Ordered, mutable collection of study sessions.

    Handles:
    - Validated add/update (silent rejection of bad input)
    - Removal by id and bulk clear
    - Read-only projections in insertion or recency order
    """

    def __init__(self) -> None:
        self._sessions: list[StudySession] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self):
        return iter(list(self._sessions))

    def _next_id(self) -> int:
        # Creation time in ms, bumped so ids stay unique within the store.
        candidate = time.time_ns() // 1_000_000
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    # =========================================================================
    # Commands
    # =========================================================================

    def add(
        self,
        subject: str,
        minutes: int,
        topics: str = "",
        timestamp: datetime | None = None,
    ) -> StudySession | None:
        """
        Add a new session.

        Args:
            subject: Subject studied (trimmed before storing)
            minutes: Duration in minutes, must be positive
            topics: Newline separated topic notes
            timestamp: Session date (defaults to start of today)

        Returns:
            The stored StudySession, or None if the input was rejected
        """
        if not is_valid_entry(subject, minutes):
            logger.debug(f"Rejected session: subject={subject!r} minutes={minutes}")
            return None

        session = StudySession(
            id=self._next_id(),
            subject=subject.strip(),
            minutes=minutes,
            topics=(topics or "").strip(),
            timestamp=timestamp or start_of_day(),
        )
        self._sessions.append(session)
        logger.debug(f"Added session {session.id}: {session.subject} ({session.minutes} min)")
        return session

    def update(
        self,
        session_id: int,
        *,
        subject: str,
        minutes: int,
        topics: str = "",
        timestamp: datetime | None = None,
    ) -> bool:
        """
        Replace the session matching `session_id`.

        Returns:
            True if a record was replaced, False if none matched or the new
            fields are invalid
        """
        if not is_valid_entry(subject, minutes):
            logger.debug(f"Rejected update for session {session_id}")
            return False

        for idx, existing in enumerate(self._sessions):
            if existing.id == session_id:
                self._sessions[idx] = replace(
                    existing,
                    subject=subject.strip(),
                    minutes=minutes,
                    topics=(topics or "").strip(),
                    timestamp=timestamp or existing.timestamp,
                )
                logger.debug(f"Updated session {session_id}")
                return True

        logger.debug(f"Update skipped, no session {session_id}")
        return False

    def remove(self, session_id: int) -> bool:
        """Remove the session with the given id."""
        for idx, existing in enumerate(self._sessions):
            if existing.id == session_id:
                del self._sessions[idx]
                logger.debug(f"Removed session {session_id}")
                return True
        return False

    def clear(self) -> None:
        """Remove every session."""
        count = len(self._sessions)
        self._sessions.clear()
        logger.debug(f"Cleared {count} sessions")

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, session_id: int | None) -> StudySession | None:
        if session_id is None:
            return None
        for existing in self._sessions:
            if existing.id == session_id:
                return existing
        return None

    def list(self) -> list[StudySession]:
        """Sessions in insertion order."""
        return list(self._sessions)

    def recent(self) -> list[StudySession]:
        """Sessions most recent first."""
        return list(reversed(self._sessions))
