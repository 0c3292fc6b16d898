"""
Screen navigation for StudyBuddy.

The active screen is a plain value (`NavState`). User actions become
`NavEvent`s and `dispatch(state, event)` returns the next state. Data a
screen needs, like the session being edited, rides along in the state.

There is no back-stack: BACK from each screen goes to one fixed screen.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger


class Screen(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"
    HOME = "home"
    ADD = "add"
    EDIT = "edit"
    SUMMARY = "summary"
    TIPS = "tips"
    SETTINGS = "settings"
    MOTIVATION = "motivation"
    FOCUS_TIMER = "focus_timer"


class NavAction(str, Enum):
    GO_SIGNUP = "go_signup"
    LOGGED_IN = "logged_in"
    SIGNED_UP = "signed_up"
    OPEN_ADD = "open_add"
    OPEN_EDIT = "open_edit"
    OPEN_SUMMARY = "open_summary"
    OPEN_TIPS = "open_tips"
    OPEN_SETTINGS = "open_settings"
    OPEN_MOTIVATION = "open_motivation"
    OPEN_FOCUS_TIMER = "open_focus_timer"
    SAVED = "saved"
    BACK = "back"
    LOGGED_OUT = "logged_out"


@dataclass(frozen=True)
class NavState:
    screen: Screen
    edit_target_id: int | None = None


@dataclass(frozen=True)
class NavEvent:
    action: NavAction
    target_id: int | None = None


# (screen, action) -> next screen. Anything missing is ignored.
TRANSITIONS: dict[tuple[Screen, NavAction], Screen] = {
    (Screen.LOGIN, NavAction.LOGGED_IN): Screen.HOME,
    (Screen.LOGIN, NavAction.GO_SIGNUP): Screen.SIGNUP,
    (Screen.SIGNUP, NavAction.SIGNED_UP): Screen.HOME,
    (Screen.HOME, NavAction.OPEN_ADD): Screen.ADD,
    (Screen.HOME, NavAction.OPEN_EDIT): Screen.EDIT,
    (Screen.HOME, NavAction.OPEN_SUMMARY): Screen.SUMMARY,
    (Screen.HOME, NavAction.OPEN_TIPS): Screen.TIPS,
    (Screen.HOME, NavAction.OPEN_SETTINGS): Screen.SETTINGS,
    (Screen.HOME, NavAction.OPEN_MOTIVATION): Screen.MOTIVATION,
    (Screen.HOME, NavAction.OPEN_FOCUS_TIMER): Screen.FOCUS_TIMER,
    (Screen.ADD, NavAction.SAVED): Screen.HOME,
    (Screen.EDIT, NavAction.SAVED): Screen.HOME,
    (Screen.SETTINGS, NavAction.LOGGED_OUT): Screen.LOGIN,
}

BACK_TARGETS: dict[Screen, Screen] = {
    Screen.SIGNUP: Screen.LOGIN,
    Screen.ADD: Screen.HOME,
    Screen.EDIT: Screen.HOME,
    Screen.SUMMARY: Screen.HOME,
    Screen.TIPS: Screen.HOME,
    Screen.SETTINGS: Screen.HOME,
    Screen.MOTIVATION: Screen.HOME,
    Screen.FOCUS_TIMER: Screen.HOME,
}


def initial_state(logged_in: bool) -> NavState:
    """Login gate: start at home only if the stored flag says so."""
    return NavState(Screen.HOME if logged_in else Screen.LOGIN)


def dispatch(state: NavState, event: NavEvent) -> NavState:
    """
    Compute the next navigation state.

    Args:
        state: Current state
        event: User action

    Returns:
        The next state (the same state when the action does not apply)
    """
    if event.action is NavAction.BACK:
        target = BACK_TARGETS.get(state.screen)
        return NavState(target) if target else state

    target = TRANSITIONS.get((state.screen, event.action))
    if target is None:
        logger.debug(f"Ignoring {event.action.value} on {state.screen.value}")
        return state

    if target is Screen.EDIT:
        # Editing needs a record; without one fall straight back home.
        if event.target_id is None:
            return NavState(Screen.HOME)
        return NavState(Screen.EDIT, edit_target_id=event.target_id)

    return NavState(target)
