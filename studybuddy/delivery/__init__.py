"""
Delivery layer for StudyBuddy.

Components:
- PreferencesStore: SQLite persistence for login state and weekly goal
"""

from .state_store import Preferences, PreferencesStore

__all__ = [
    "Preferences",
    "PreferencesStore",
]
