"""
Study Module for StudyBuddy.

Provides:
- In-memory session store with validated add/edit/delete
- Aggregate stats (totals, 7-day rollup, per-subject, top subject)
- Focus timer countdown
"""

from studybuddy.study.focus_timer import FocusTimer, clamp_minutes, run_timer
from studybuddy.study.session_store import SessionStore, StudySession
from studybuddy.study.stats import StudyStats, compute_stats

__all__ = [
    "SessionStore",
    "StudySession",
    "StudyStats",
    "compute_stats",
    "FocusTimer",
    "clamp_minutes",
    "run_timer",
]
