"""
Unit tests for StudyBuddyApp (the application controller).

Collaborators are real except the advice client, which is faked.
"""

from datetime import datetime

import pytest

from studybuddy.api_client import ADVICE_ERROR_TEXT, NO_ADVICE_TEXT, AdviceResult, AdviceStatus
from studybuddy.cli.controller import (
    GOAL_ERROR,
    LOGIN_ERROR,
    SESSION_ERROR,
    AdvicePhase,
)
from studybuddy.cli.navigation import NavAction, NavState, Screen
from studybuddy.study.session_store import SessionStore
from tests.conftest import FakeAdviceClient


class TestCollaborators:
    def test_keeps_injected_empty_store(self, make_app):
        store = SessionStore()

        app = make_app(store=store)

        assert app.store is store

    def test_sessions_added_through_app_reach_injected_store(self, make_app):
        store = SessionStore()
        app = make_app(store=store)

        app.add_session("Bio", "10")

        assert [s.subject for s in store.list()] == ["Bio"]

    def test_keeps_injected_prefs_and_client(self, make_app, prefs, advice_client):
        app = make_app()

        assert app.prefs is prefs
        assert app.advice_client is advice_client


class TestLogin:
    def test_starts_at_login_when_flag_unset(self, make_app):
        assert make_app().screen is Screen.LOGIN

    def test_starts_home_when_flag_set(self, logged_in_app):
        assert logged_in_app.screen is Screen.HOME
        assert logged_in_app.email == "student@example.com"

    @pytest.mark.parametrize("email,password", [("", "pw"), ("   ", "pw"), ("a@b.c", "")])
    def test_missing_credentials_rejected(self, make_app, prefs, email, password):
        app = make_app()

        result = app.login(email, password)

        assert not result.ok
        assert result.error == LOGIN_ERROR
        assert app.screen is Screen.LOGIN
        assert prefs.get_logged_in() is False

    def test_login_persists_flag_and_trimmed_email(self, make_app, prefs):
        app = make_app()

        assert app.login("  me@example.com ", "secret").ok

        assert app.screen is Screen.HOME
        assert prefs.get_logged_in() is True
        assert prefs.get_email() == "me@example.com"

    def test_signup_flow(self, make_app, prefs):
        app = make_app()
        app.navigate(NavAction.GO_SIGNUP)
        assert app.screen is Screen.SIGNUP

        assert app.signup("new@example.com", "pw").ok

        assert app.screen is Screen.HOME
        assert prefs.get_email() == "new@example.com"

    def test_logout_clears_flag(self, logged_in_app, prefs):
        logged_in_app.navigate(NavAction.OPEN_SETTINGS)

        logged_in_app.logout()

        assert logged_in_app.screen is Screen.LOGIN
        assert prefs.get_logged_in() is False
        # email is kept for the next login
        assert prefs.get_email() == "student@example.com"


class TestSessions:
    def test_add_returns_home(self, logged_in_app, day0):
        app = logged_in_app
        app.navigate(NavAction.OPEN_ADD)

        result = app.add_session("Math", "30", "algebra", day0)

        assert result.ok
        assert app.screen is Screen.HOME
        assert len(app.store) == 1

    def test_invalid_add_stays_on_form(self, logged_in_app):
        app = logged_in_app
        app.navigate(NavAction.OPEN_ADD)

        result = app.add_session("Math", "thirty")

        assert result.error == SESSION_ERROR
        assert app.screen is Screen.ADD
        assert len(app.store) == 0

    def test_add_normalises_day_to_midnight(self, logged_in_app):
        logged_in_app.add_session("Math", 10, "", datetime(2026, 3, 4, 15, 45))

        assert logged_in_app.store.list()[0].timestamp == datetime(2026, 3, 4)

    def test_edit_flow(self, logged_in_app, day0):
        app = logged_in_app
        session = app.store.add("Math", 30, "", day0)

        app.begin_edit(session.id)
        assert app.nav == NavState(Screen.EDIT, session.id)
        assert app.edit_target() == session

        assert app.save_edit("Physics", "40", "optics").ok

        assert app.screen is Screen.HOME
        edited = app.store.get(session.id)
        assert (edited.subject, edited.minutes, edited.topics, edited.timestamp) == ("Physics", 40, "optics", day0)

    def test_invalid_edit_keeps_record(self, logged_in_app):
        app = logged_in_app
        session = app.store.add("Math", 30)
        app.begin_edit(session.id)

        result = app.save_edit("", "40")

        assert result.error == SESSION_ERROR
        assert app.screen is Screen.EDIT
        assert app.store.get(session.id) == session

    def test_edit_without_target_falls_back_home(self, logged_in_app):
        logged_in_app.begin_edit(None)

        assert logged_in_app.nav == NavState(Screen.HOME)

    def test_edit_of_unknown_id_falls_back_home(self, logged_in_app):
        logged_in_app.begin_edit(999)

        assert logged_in_app.nav == NavState(Screen.HOME)

    def test_edit_target_deleted_meanwhile(self, logged_in_app):
        app = logged_in_app
        session = app.store.add("Math", 30)
        app.begin_edit(session.id)
        app.store.remove(session.id)

        assert app.save_edit("Math", "10").ok
        assert app.screen is Screen.HOME
        assert len(app.store) == 0

    def test_delete_and_clear(self, logged_in_app):
        app = logged_in_app
        a = app.store.add("A", 1)
        b = app.store.add("B", 2)

        assert app.delete_session(a.id) is True
        assert app.recent_sessions() == [b]

        app.clear_sessions()
        assert app.recent_sessions() == []

    def test_stats_are_recomputed_on_read(self, logged_in_app, now, day0):
        app = logged_in_app
        app.store.add("Math", 100, "", day0)
        assert app.stats(now).total_minutes == 100

        app.store.add("Art", 250, "", day0)
        stats = app.stats(now)

        assert stats.total_minutes == 350
        assert stats.top_subject == "Art"
        assert stats.progress == 1.0


class TestSettings:
    def test_weekly_goal_saved(self, logged_in_app, prefs):
        assert logged_in_app.save_weekly_goal("450").ok

        assert logged_in_app.weekly_goal == 450
        assert prefs.get_weekly_goal() == 450

    @pytest.mark.parametrize("text", ["0", "-5", "many", ""])
    def test_invalid_goal_rejected(self, logged_in_app, prefs, text):
        result = logged_in_app.save_weekly_goal(text)

        assert result.error == GOAL_ERROR
        assert logged_in_app.weekly_goal == 300
        assert prefs.get_weekly_goal() == 300

    def test_goal_loaded_at_startup(self, prefs, make_app):
        prefs.set_weekly_goal(120)

        assert make_app().weekly_goal == 120

    def test_dark_mode_toggle(self, logged_in_app):
        assert logged_in_app.toggle_dark_mode() is True
        assert logged_in_app.toggle_dark_mode() is False


class TestMotivation:
    @pytest.mark.asyncio
    async def test_success_shows_text(self, logged_in_app):
        logged_in_app.navigate(NavAction.OPEN_MOTIVATION)
        assert logged_in_app.advice.phase is AdvicePhase.IDLE

        await logged_in_app.fetch_advice()

        state = logged_in_app.advice
        assert state.phase is AdvicePhase.DONE
        assert not state.loading
        assert state.text == "Keep going"
        assert state.error is None

    @pytest.mark.asyncio
    async def test_empty_shows_fallback(self, make_app, prefs):
        prefs.set_logged_in(True)
        app = make_app(advice_client=FakeAdviceClient(AdviceResult(AdviceStatus.EMPTY, NO_ADVICE_TEXT)))

        await app.fetch_advice()

        assert app.advice.text == NO_ADVICE_TEXT
        assert app.advice.error is None
        assert not app.advice.loading

    @pytest.mark.asyncio
    async def test_failure_shows_error(self, make_app):
        app = make_app(advice_client=FakeAdviceClient(AdviceResult(AdviceStatus.FAILURE, ADVICE_ERROR_TEXT)))

        await app.fetch_advice()

        assert app.advice.error == ADVICE_ERROR_TEXT
        assert app.advice.text is None
        assert not app.advice.loading

    @pytest.mark.asyncio
    async def test_loading_while_in_flight(self, make_app):
        seen = []

        class ObservingClient:
            async def get_advice(self):
                seen.append(app.advice.phase)
                return AdviceResult(AdviceStatus.SUCCESS, "ok")

        app = make_app(advice_client=ObservingClient())

        await app.fetch_advice()

        assert seen == [AdvicePhase.LOADING]
        assert app.advice.phase is AdvicePhase.DONE

    @pytest.mark.asyncio
    async def test_reentering_screen_resets_state(self, logged_in_app):
        app = logged_in_app
        app.navigate(NavAction.OPEN_MOTIVATION)
        await app.fetch_advice()
        app.back()

        app.navigate(NavAction.OPEN_MOTIVATION)

        assert app.advice.phase is AdvicePhase.IDLE
        assert app.advice.text is None


class TestFocusTimer:
    def test_leaving_timer_screen_pauses(self, logged_in_app):
        app = logged_in_app
        app.navigate(NavAction.OPEN_FOCUS_TIMER)
        app.timer.start()

        app.back()

        assert app.screen is Screen.HOME
        assert app.timer.running is False

    def test_timer_independent_of_sessions(self, logged_in_app):
        app = logged_in_app
        app.timer.set_input("1")
        app.timer.start()
        app.timer.tick(60)

        assert app.timer.finished
        assert len(app.store) == 0
