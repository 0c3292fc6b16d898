"""
Study Stats: aggregate figures derived from the session list.

Everything here is a pure function of the sessions passed in. Nothing is
cached, so the figures can never go stale after an add, edit or delete.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from studybuddy.study.session_store import StudySession

WEEK_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class StudyStats:
    """Snapshot of the home screen figures."""

    total_minutes: int
    last_7_days_minutes: int
    weekly_goal: int
    progress: float
    top_subject: str | None
    minutes_by_subject: dict[str, int] = field(default_factory=dict)
    session_count: int = 0

    @property
    def progress_percent(self) -> int:
        return int(round(self.progress * 100))


def total_minutes(sessions: Iterable[StudySession]) -> int:
    return sum(s.minutes for s in sessions)


def last_7_days_minutes(sessions: Iterable[StudySession], now: datetime | None = None) -> int:
    """
    Minutes logged in the sliding 7x24h window ending at `now`.

    A session exactly seven days old is still counted.
    """
    now = now or datetime.now()
    cutoff = now - WEEK_WINDOW
    return sum(s.minutes for s in sessions if s.timestamp >= cutoff)


def minutes_by_subject(sessions: Iterable[StudySession]) -> dict[str, int]:
    """Total minutes per subject, keyed in order of first appearance."""
    totals: dict[str, int] = {}
    for s in sessions:
        totals[s.subject] = totals.get(s.subject, 0) + s.minutes
    return totals


def top_subject(sessions: Iterable[StudySession]) -> str | None:
    """
    Subject with the most minutes.

    Ties go to the subject logged first.
    """
    best: str | None = None
    best_minutes = 0
    for subject, minutes in minutes_by_subject(sessions).items():
        if best is None or minutes > best_minutes:
            best, best_minutes = subject, minutes
    return best


def weekly_progress(last_7_days: int, weekly_goal: int) -> float:
    """Fraction of the weekly goal reached, clamped to [0, 1]."""
    if weekly_goal <= 0:
        return 0.0
    return min(1.0, max(0.0, last_7_days / weekly_goal))


def compute_stats(
    sessions: Iterable[StudySession],
    weekly_goal: int,
    now: datetime | None = None,
) -> StudyStats:
    """Compute every home screen figure in one pass over a snapshot."""
    snapshot = list(sessions)
    last7 = last_7_days_minutes(snapshot, now)
    return StudyStats(
        total_minutes=total_minutes(snapshot),
        last_7_days_minutes=last7,
        weekly_goal=weekly_goal,
        progress=weekly_progress(last7, weekly_goal),
        top_subject=top_subject(snapshot),
        minutes_by_subject=minutes_by_subject(snapshot),
        session_count=len(snapshot),
    )


def format_minutes(minutes: int) -> str:
    """Render minutes as '45 min' or '2h 05m'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"
