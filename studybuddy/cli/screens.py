"""
Screen rendering for the StudyBuddy terminal UI.

Each `render_*` function builds a Rich renderable from app state and does
no I/O of its own, so screens can be printed to any Console (including a
recording one in tests).
"""

from __future__ import annotations

from datetime import datetime

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from studybuddy.cli.controller import AdviceState, StudyBuddyApp
from studybuddy.study.focus_timer import FocusTimer
from studybuddy.study.session_store import StudySession, format_day, topic_lines
from studybuddy.study.stats import format_minutes

# =============================================================================
# Styling
# =============================================================================

THEMES = {
    "light": {
        "border": "blue",
        "title": "bold blue",
        "accent": "cyan",
        "muted": "dim",
        "error": "bold red",
        "ok": "green",
    },
    "dark": {
        "border": "magenta",
        "title": "bold magenta",
        "accent": "bright_cyan",
        "muted": "grey50",
        "error": "bold bright_red",
        "ok": "bright_green",
    },
}

STUDY_TIPS = [
    "Break study time into 25–30 minute blocks with short breaks.",
    "Write down topics you don’t understand and review them later.",
    "Mix old material with new material in each session.",
    "Study a little every day instead of cramming.",
    "Turn off notifications during focused study time.",
]

HOME_MENU = [
    ("a", "Add session"),
    ("e", "Edit session"),
    ("d", "Delete session"),
    ("s", "Summary by subject"),
    ("p", "Pomodoro"),
    ("m", "Motivation"),
    ("t", "Study tips"),
    ("o", "Settings"),
    ("q", "Quit"),
]


def theme_for(app: StudyBuddyApp) -> dict[str, str]:
    return THEMES["dark" if app.dark_mode else "light"]


def panel_title(text: str, theme: dict[str, str]) -> str:
    return f"[{theme['title']}]{text}[/{theme['title']}]"


def error_line(message: str | None, theme: dict[str, str] | None = None) -> Text:
    theme = theme or THEMES["light"]
    return Text(message or "", style=theme["error"])


# =============================================================================
# Login / Signup
# =============================================================================


def render_login(
    email: str = "",
    signup: bool = False,
    error: str | None = None,
    theme: dict[str, str] | None = None,
) -> Panel:
    theme = theme or THEMES["light"]
    content = Text()
    if signup:
        content.append("Create an account\n\n", style="bold")
    else:
        content.append("Welcome back\n\n", style="bold")
        if email:
            content.append(f"Last email: {email}\n", style=theme["muted"])
    content.append("Login is local to this machine; nothing is sent anywhere.\n", style=theme["muted"])
    if error:
        content.append(f"\n{error}", style=theme["error"])
    title = "Sign Up" if signup else "Login"
    return Panel(content, title=panel_title(title, theme), border_style=theme["border"])


# =============================================================================
# Home
# =============================================================================


def render_session_card(
    session: StudySession,
    index: int | None = None,
    theme: dict[str, str] | None = None,
) -> Text:
    theme = theme or THEMES["light"]
    card = Text()
    if index is not None:
        card.append(f"[{index}] ", style="bold")
    card.append(session.subject, style="bold")
    card.append(f"  {session.minutes} min", style=theme["accent"])
    card.append(f"  {format_day(session.timestamp)}\n", style=theme["muted"])
    lines = topic_lines(session)
    if lines:
        card.append("    Topics:\n", style=theme["muted"])
        for line in lines:
            card.append(f"    • {line}\n", style=theme["muted"])
    return card


def render_home(app: StudyBuddyApp, now: datetime | None = None) -> Group:
    theme = theme_for(app)
    stats = app.stats(now)

    summary = Table(box=None, show_header=False, padding=(0, 2))
    summary.add_column("Label", style=theme["muted"])
    summary.add_column("Value", style="bold")
    summary.add_row("Total studied", format_minutes(stats.total_minutes))
    summary.add_row("Last 7 days", format_minutes(stats.last_7_days_minutes))
    summary.add_row("Weekly goal", format_minutes(stats.weekly_goal))
    summary.add_row("Top subject", Text(stats.top_subject or "—"))

    progress = Table.grid(padding=(0, 1))
    progress.add_row(
        ProgressBar(total=1.0, completed=stats.progress, width=30),
        Text(f"{stats.progress_percent}% of weekly goal", style=theme["accent"]),
    )

    stats_panel = Panel(
        Group(summary, Text(""), progress),
        title=panel_title("Study Buddy", theme),
        border_style=theme["border"],
    )

    menu = Text()
    for key, label in HOME_MENU:
        menu.append(f" {key}", style=theme["accent"])
        menu.append(f" {label} ")

    sessions = app.recent_sessions()
    if sessions:
        cards = Group(*(render_session_card(s, i, theme) for i, s in enumerate(sessions, 1)))
    else:
        cards = Text("No sessions yet. Press a to add one.", style=theme["muted"])

    recent = Panel(cards, title="Recent sessions", border_style=theme["border"], box=box.ROUNDED)
    return Group(stats_panel, recent, menu)


# =============================================================================
# Summary / Tips
# =============================================================================


def render_summary(
    minutes_by_subject: dict[str, int],
    theme: dict[str, str] | None = None,
) -> RenderableType:
    theme = theme or THEMES["light"]
    if not minutes_by_subject:
        return Panel(
            Text("No study sessions yet.", style=theme["muted"]),
            title=panel_title("Summary by Subject", theme),
            border_style=theme["border"],
        )

    table = Table(title="Summary by Subject", title_style=theme["title"], box=box.SIMPLE_HEAVY)
    table.add_column("Subject", style="bold")
    table.add_column("Minutes", justify="right", style=theme["accent"])
    for subject, minutes in minutes_by_subject.items():
        table.add_row(Text(subject), f"{minutes} min")
    return table


def render_tips(theme: dict[str, str] | None = None) -> Panel:
    theme = theme or THEMES["light"]
    content = Text()
    content.append("Some quick tips:\n\n", style="bold")
    for tip in STUDY_TIPS:
        content.append("• ", style=theme["accent"])
        content.append(f"{tip}\n")
    return Panel(content, title=panel_title("Study Tips", theme), border_style=theme["ok"])


# =============================================================================
# Settings
# =============================================================================


def render_settings(app: StudyBuddyApp, error: str | None = None) -> Panel:
    theme = theme_for(app)
    content = Text()
    content.append(f"Dark mode: {'on' if app.dark_mode else 'off'}\n")
    content.append(f"Weekly goal: {app.weekly_goal} minutes\n")
    content.append(f"Signed in as: {app.email or '—'}\n\n")
    content.append(" g", style=theme["accent"])
    content.append(" Set weekly goal ")
    content.append(" k", style=theme["accent"])
    content.append(" Toggle dark mode ")
    content.append(" c", style=theme["accent"])
    content.append(" Clear all sessions ")
    content.append(" l", style=theme["accent"])
    content.append(" Logout ")
    content.append(" b", style=theme["accent"])
    content.append(" Back\n")
    if error:
        content.append(f"\n{error}", style=theme["error"])
    content.append("\nApp version 1.0", style=theme["muted"])
    return Panel(content, title=panel_title("Settings", theme), border_style=theme["border"])


# =============================================================================
# Motivation / Focus Timer
# =============================================================================


def render_motivation(state: AdviceState, theme: dict[str, str] | None = None) -> Panel:
    theme = theme or THEMES["light"]
    content = Text()
    content.append("Get a quick motivational tip:\n\n", style="bold")
    if state.loading:
        content.append("Loading...\n", style=theme["muted"])
    if state.error:
        content.append(f"{state.error}\n", style=theme["error"])
    if state.text:
        content.append(f"“{state.text}”\n", style="italic")
    return Panel(content, title=panel_title("Motivation", theme), border_style=theme["border"])


def render_timer(timer: FocusTimer, theme: dict[str, str] | None = None) -> Panel:
    theme = theme or THEMES["light"]
    content = Text(justify="center")
    content.append("Focus timer\n\n", style="bold")
    content.append(f"{timer.display()}\n\n", style=f"bold {theme['accent']}")
    if timer.running:
        status = "running (Ctrl+C to pause)"
    elif timer.finished:
        status = "done!"
    else:
        status = "paused" if timer.remaining_seconds < timer.duration_seconds else "ready"
    content.append(f"{timer.input_minutes} min · {status}\n", style=theme["muted"])
    content.append("Tip: Use 25 min focus + 5 min break.", style=theme["muted"])
    return Panel(content, title=panel_title("Pomodoro", theme), border_style=theme["border"])
