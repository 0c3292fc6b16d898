"""
StudyBuddy application controller.

Owns the session store, preferences, focus timer and advice state, and
threads them through navigation. Terminal rendering lives in
`studybuddy.cli.screens`; this module has no I/O besides the preference
store and the advice request, so it can be driven directly from tests.

Each command returns a `CommandResult`. A rejected command carries the
inline message to show next to the form and leaves the screen unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from loguru import logger

from config import Settings, get_settings
from studybuddy.api_client import AdviceClient, AdviceResult, AdviceStatus
from studybuddy.cli.navigation import (
    NavAction,
    NavEvent,
    NavState,
    Screen,
    dispatch,
    initial_state,
)
from studybuddy.delivery.state_store import PreferencesStore
from studybuddy.study.focus_timer import FocusTimer
from studybuddy.study.session_store import (
    SessionStore,
    StudySession,
    parse_minutes,
    start_of_day,
)
from studybuddy.study.stats import StudyStats, compute_stats

LOGIN_ERROR = "Enter an email + password"
SESSION_ERROR = "Please enter a subject and minutes > 0"
GOAL_ERROR = "Enter a number > 0"


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    error: str | None = None


OK = CommandResult(True)


class AdvicePhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"


@dataclass
class AdviceState:
    """What the motivation screen shows."""

    phase: AdvicePhase = AdvicePhase.IDLE
    text: str | None = None
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.phase is AdvicePhase.LOADING


class StudyBuddyApp:
    """
    Application root: state plus the commands that change it.

    Derived figures (totals, weekly progress) are computed on every call to
    `stats()` from the live session list.
    """

    def __init__(
        self,
        prefs: PreferencesStore | None = None,
        store: SessionStore | None = None,
        advice_client: AdviceClient | None = None,
        settings: Settings | None = None,
    ):
        # SessionStore defines __len__, so an empty one is falsy: test for None.
        self.settings = settings if settings is not None else get_settings()
        if prefs is None:
            prefs = PreferencesStore(
                self.settings.prefs_db_path,
                default_weekly_goal=self.settings.default_weekly_goal,
            )
        self.prefs = prefs
        self.store = store if store is not None else SessionStore()
        if advice_client is None:
            advice_client = AdviceClient(
                base_url=self.settings.advice_base_url,
                timeout=self.settings.advice_timeout_seconds,
            )
        self.advice_client = advice_client

        loaded = self.prefs.load()
        self.weekly_goal = loaded.weekly_goal
        self.email = loaded.email
        self.nav = initial_state(loaded.logged_in)

        self.timer = FocusTimer.from_config(self.settings.get_timer_config())
        self.advice = AdviceState()
        self.dark_mode = False

        logger.info(f"StudyBuddy started on {self.nav.screen.value}")

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def screen(self) -> Screen:
        return self.nav.screen

    def navigate(self, action: NavAction, target_id: int | None = None) -> NavState:
        previous = self.nav
        self.nav = dispatch(self.nav, NavEvent(action, target_id))

        if self.nav.screen is Screen.EDIT and self.edit_target() is None:
            logger.debug(f"Edit target {self.nav.edit_target_id} not found, back to home")
            self.nav = NavState(Screen.HOME)

        if self.nav.screen is Screen.MOTIVATION and previous.screen is not Screen.MOTIVATION:
            self.advice = AdviceState()

        if previous.screen is Screen.FOCUS_TIMER and self.nav.screen is not Screen.FOCUS_TIMER:
            self.timer.pause()

        return self.nav

    def back(self) -> NavState:
        return self.navigate(NavAction.BACK)

    # =========================================================================
    # Login Gate
    # =========================================================================

    def _enter(self, email: str, password: str, action: NavAction) -> CommandResult:
        email = (email or "").strip()
        if not email or not password:
            return CommandResult(False, LOGIN_ERROR)

        self.email = email
        self.prefs.set_email(email)
        self.prefs.set_logged_in(True)
        self.navigate(action)
        logger.info(f"Logged in as {email}")
        return OK

    def login(self, email: str, password: str) -> CommandResult:
        return self._enter(email, password, NavAction.LOGGED_IN)

    def signup(self, email: str, password: str) -> CommandResult:
        return self._enter(email, password, NavAction.SIGNED_UP)

    def logout(self) -> CommandResult:
        self.prefs.set_logged_in(False)
        self.navigate(NavAction.LOGGED_OUT)
        logger.info("Logged out")
        return OK

    # =========================================================================
    # Sessions
    # =========================================================================

    def add_session(
        self,
        subject: str,
        minutes: str | int,
        topics: str = "",
        day: datetime | None = None,
    ) -> CommandResult:
        session = self.store.add(
            subject,
            parse_minutes(minutes),
            topics,
            start_of_day(day) if day else None,
        )
        if session is None:
            return CommandResult(False, SESSION_ERROR)
        self.navigate(NavAction.SAVED)
        return OK

    def begin_edit(self, session_id: int | None) -> NavState:
        return self.navigate(NavAction.OPEN_EDIT, session_id)

    def edit_target(self) -> StudySession | None:
        return self.store.get(self.nav.edit_target_id)

    def save_edit(
        self,
        subject: str,
        minutes: str | int,
        topics: str = "",
        day: datetime | None = None,
    ) -> CommandResult:
        target = self.edit_target()
        if target is None:
            self.nav = NavState(Screen.HOME)
            return OK

        updated = self.store.update(
            target.id,
            subject=subject,
            minutes=parse_minutes(minutes),
            topics=topics,
            timestamp=start_of_day(day) if day else target.timestamp,
        )
        if not updated:
            return CommandResult(False, SESSION_ERROR)
        self.navigate(NavAction.SAVED)
        return OK

    def delete_session(self, session_id: int) -> bool:
        return self.store.remove(session_id)

    def clear_sessions(self) -> None:
        self.store.clear()

    def recent_sessions(self) -> list[StudySession]:
        return self.store.recent()

    def stats(self, now: datetime | None = None) -> StudyStats:
        return compute_stats(self.store.list(), self.weekly_goal, now)

    # =========================================================================
    # Settings
    # =========================================================================

    def save_weekly_goal(self, text: str | int) -> CommandResult:
        goal = parse_minutes(text)
        if goal <= 0:
            return CommandResult(False, GOAL_ERROR)
        self.weekly_goal = goal
        self.prefs.set_weekly_goal(goal)
        return OK

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    # =========================================================================
    # Motivation
    # =========================================================================

    async def fetch_advice(self) -> AdviceResult:
        """Fetch advice, moving the motivation state through loading to done."""
        self.advice = AdviceState(phase=AdvicePhase.LOADING)
        try:
            result = await self.advice_client.get_advice()
        finally:
            self.advice.phase = AdvicePhase.DONE

        if result.status is AdviceStatus.FAILURE:
            self.advice.error = result.text
        else:
            self.advice.text = result.text
        return result
