"""
Interactive hub: the prompt loop behind `studybuddy` with no subcommand.

Renders the active screen, asks for the next action, and hands it to the
controller. All state lives on `StudyBuddyApp`; handlers here only read
input and print.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date, datetime

from loguru import logger
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from studybuddy.cli.controller import StudyBuddyApp
from studybuddy.cli.navigation import NavAction, Screen
from studybuddy.cli.screens import (
    HOME_MENU,
    error_line,
    render_home,
    render_login,
    render_motivation,
    render_session_card,
    render_settings,
    render_summary,
    render_tips,
    render_timer,
    theme_for,
)
from studybuddy.study.focus_timer import FocusTimer, run_timer
from studybuddy.study.session_store import StudySession, start_of_day
from studybuddy.study.stats import minutes_by_subject

# A handler returns False to leave the hub.
ScreenHandler = Callable[[StudyBuddyApp, Console], bool]


# =============================================================================
# Input Helpers
# =============================================================================


def ask_day(console: Console, default: date) -> datetime:
    """Ask for a date (YYYY-MM-DD) until one parses."""
    while True:
        raw = Prompt.ask("Date (YYYY-MM-DD)", default=default.isoformat(), console=console)
        try:
            return start_of_day(datetime.strptime(raw.strip(), "%Y-%m-%d"))
        except ValueError:
            console.print("[red]Use the form YYYY-MM-DD[/red]")


def ask_topics(console: Console, current: str = "") -> str:
    """Collect topic lines until an empty line. Enter alone keeps `current`."""
    console.print("[dim]Topics covered (optional), one per line, empty line to finish[/dim]")
    if current:
        console.print(f"[dim]Current: {escape(current.replace(chr(10), ' / '))}[/dim]")
    lines = []
    while True:
        line = Prompt.ask(">", default="", show_default=False, console=console)
        if not line.strip():
            break
        lines.append(line)
    if not lines and current:
        return current
    return "\n".join(lines)


def pick_session(app: StudyBuddyApp, console: Console, verb: str) -> StudySession | None:
    """Ask for a session number as shown on the home screen."""
    sessions = app.recent_sessions()
    if not sessions:
        console.print("[dim]No sessions yet.[/dim]")
        return None
    raw = Prompt.ask(f"Session number to {verb}", console=console)
    try:
        index = int(raw)
    except ValueError:
        return None
    if 1 <= index <= len(sessions):
        return sessions[index - 1]
    return None


# =============================================================================
# Screen Handlers
# =============================================================================


def _login_screen(app: StudyBuddyApp, console: Console) -> bool:
    signup = app.screen is Screen.SIGNUP
    console.print(render_login(app.email, signup=signup, theme=theme_for(app)))

    if signup:
        choice = Prompt.ask("(s)ign up or (b)ack", choices=["s", "b"], default="s", console=console)
        if choice == "b":
            app.back()
            return True
    else:
        choice = Prompt.ask(
            "(l)ogin, (s)ign up or (q)uit", choices=["l", "s", "q"], default="l", console=console
        )
        if choice == "q":
            return False
        if choice == "s":
            app.navigate(NavAction.GO_SIGNUP)
            return True

    email = Prompt.ask("Email", default=app.email if not signup else "", console=console)
    password = Prompt.ask("Password", password=True, default="", show_default=False, console=console)
    result = app.signup(email, password) if signup else app.login(email, password)
    if not result.ok:
        console.print(error_line(result.error, theme_for(app)))
    return True


def _home_screen(app: StudyBuddyApp, console: Console) -> bool:
    console.print(render_home(app))
    choice = Prompt.ask("Choose", choices=[key for key, _ in HOME_MENU], default="a", console=console)

    if choice == "q":
        return False
    if choice == "e":
        session = pick_session(app, console, "edit")
        app.begin_edit(session.id if session else None)
    elif choice == "d":
        session = pick_session(app, console, "delete")
        if session and Confirm.ask(f"Delete {escape(session.subject)}?", default=False, console=console):
            app.delete_session(session.id)
    else:
        actions = {
            "a": NavAction.OPEN_ADD,
            "s": NavAction.OPEN_SUMMARY,
            "p": NavAction.OPEN_FOCUS_TIMER,
            "m": NavAction.OPEN_MOTIVATION,
            "t": NavAction.OPEN_TIPS,
            "o": NavAction.OPEN_SETTINGS,
        }
        app.navigate(actions[choice])
    return True


def _session_form(app: StudyBuddyApp, console: Console, target: StudySession | None) -> bool:
    title = "Edit Study Session" if target else "Add Study Session"
    console.print(f"\n[bold]{title}[/bold] [dim](leave subject empty and confirm to cancel)[/dim]")
    if target:
        console.print(render_session_card(target, theme=theme_for(app)))

    subject = Prompt.ask("Subject", default=target.subject if target else "", console=console)
    if not subject.strip() and Confirm.ask("Cancel?", default=True, console=console):
        app.back()
        return True

    minutes = Prompt.ask("Minutes", default=str(target.minutes) if target else "", console=console)
    topics = ask_topics(console, target.topics if target else "")
    day = ask_day(console, target.timestamp.date() if target else date.today())

    if target:
        result = app.save_edit(subject, minutes, topics, day)
    else:
        result = app.add_session(subject, minutes, topics, day)
    if not result.ok:
        console.print(error_line(result.error, theme_for(app)))
    return True


def _add_screen(app: StudyBuddyApp, console: Console) -> bool:
    return _session_form(app, console, None)


def _edit_screen(app: StudyBuddyApp, console: Console) -> bool:
    target = app.edit_target()
    if target is None:
        app.back()
        return True
    return _session_form(app, console, target)


def _summary_screen(app: StudyBuddyApp, console: Console) -> bool:
    console.print(render_summary(minutes_by_subject(app.store.list()), theme_for(app)))
    Prompt.ask("Press Enter to go back", default="", show_default=False, console=console)
    app.back()
    return True


def _tips_screen(app: StudyBuddyApp, console: Console) -> bool:
    console.print(render_tips(theme_for(app)))
    Prompt.ask("Press Enter to go back", default="", show_default=False, console=console)
    app.back()
    return True


def _settings_screen(app: StudyBuddyApp, console: Console) -> bool:
    console.print(render_settings(app))
    choice = Prompt.ask("Choose", choices=["g", "k", "c", "l", "b"], default="b", console=console)

    if choice == "g":
        result = app.save_weekly_goal(Prompt.ask("Weekly goal (minutes)", default=str(app.weekly_goal), console=console))
        if not result.ok:
            console.print(error_line(result.error, theme_for(app)))
    elif choice == "k":
        app.toggle_dark_mode()
    elif choice == "c":
        if Confirm.ask("Clear all sessions?", default=False, console=console):
            app.clear_sessions()
    elif choice == "l":
        app.logout()
    else:
        app.back()
    return True


def _motivation_screen(app: StudyBuddyApp, console: Console) -> bool:
    console.print(render_motivation(app.advice, theme_for(app)))
    choice = Prompt.ask("(g)et advice or (b)ack", choices=["g", "b"], default="g", console=console)
    if choice == "b":
        app.back()
        return True

    with console.status("Loading..."):
        asyncio.run(app.fetch_advice())
    return True


def run_focus_timer(timer: FocusTimer, console: Console, theme: dict[str, str] | None = None) -> None:
    """Run the timer with a live countdown; Ctrl+C pauses."""
    timer.start()
    with Live(render_timer(timer, theme), console=console, refresh_per_second=4) as live:
        try:
            asyncio.run(run_timer(timer, on_tick=lambda t: live.update(render_timer(t, theme))))
        except KeyboardInterrupt:
            timer.pause()
            live.update(render_timer(timer, theme))
    if timer.finished:
        console.bell()


def _focus_timer_screen(app: StudyBuddyApp, console: Console) -> bool:
    timer = app.timer
    console.print(render_timer(timer, theme_for(app)))
    choice = Prompt.ask(
        "(s)tart, (r)eset, set (m)inutes or (b)ack",
        choices=["s", "r", "m", "b"],
        default="s",
        console=console,
    )
    if choice == "s":
        run_focus_timer(timer, console, theme_for(app))
    elif choice == "r":
        timer.reset()
    elif choice == "m":
        timer.set_input(Prompt.ask("Minutes (e.g. 25)", default=timer.minutes_input, console=console))
        if not timer.running:
            timer.reset()
    else:
        app.back()
    return True


SCREEN_HANDLERS: dict[Screen, ScreenHandler] = {
    Screen.LOGIN: _login_screen,
    Screen.SIGNUP: _login_screen,
    Screen.HOME: _home_screen,
    Screen.ADD: _add_screen,
    Screen.EDIT: _edit_screen,
    Screen.SUMMARY: _summary_screen,
    Screen.TIPS: _tips_screen,
    Screen.SETTINGS: _settings_screen,
    Screen.MOTIVATION: _motivation_screen,
    Screen.FOCUS_TIMER: _focus_timer_screen,
}


def run_interactive_hub(app: StudyBuddyApp | None = None, console: Console | None = None) -> None:
    """Main loop: render the current screen until the user quits."""
    app = app or StudyBuddyApp()
    console = console or Console()

    try:
        while SCREEN_HANDLERS[app.screen](app, console):
            console.print()
    except (KeyboardInterrupt, EOFError):
        logger.debug("Hub interrupted")
    finally:
        app.prefs.close()

    console.print("\n[dim]Goodbye! Keep studying.[/dim]\n")
