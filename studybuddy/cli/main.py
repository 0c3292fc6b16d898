"""
Typer CLI for StudyBuddy.

Commands:
    studybuddy              - Launch the interactive hub (login, sessions, stats)
    studybuddy tips         - Show study tips
    studybuddy advice       - Fetch one piece of advice
    studybuddy timer        - Run a focus timer
    studybuddy prefs        - Show stored preferences

Usage:
    studybuddy --help
    studybuddy timer --minutes 50
"""

from __future__ import annotations

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import get_settings
from studybuddy.api_client import AdviceClient, AdviceStatus
from studybuddy.cli.screens import render_tips, render_timer
from studybuddy.delivery.state_store import PreferencesStore
from studybuddy.study.focus_timer import FocusTimer

app = typer.Typer(
    help="StudyBuddy: log study sessions, track your weekly goal, stay focused",
    no_args_is_help=False,
    invoke_without_command=True,
)
console = Console()


def setup_logging(level: str | None = None) -> None:
    """Configure loguru sinks from settings."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB", retention=3)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    StudyBuddy terminal app.

    Run without arguments to open the interactive hub.
    """
    setup_logging("DEBUG" if verbose else None)

    if ctx.invoked_subcommand is None:
        from studybuddy.cli.hub import run_interactive_hub

        run_interactive_hub(console=console)


@app.command()
def tips() -> None:
    """Show study tips."""
    console.print(render_tips())


@app.command()
def advice() -> None:
    """Fetch a motivational tip from the advice slip API."""
    settings = get_settings()
    client = AdviceClient(
        base_url=settings.advice_base_url,
        timeout=settings.advice_timeout_seconds,
    )
    with console.status("Loading..."):
        result = asyncio.run(client.get_advice())

    if result.status is AdviceStatus.FAILURE:
        console.print(f"[red]{escape(result.text)}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[italic]“{escape(result.text)}”[/italic]")


@app.command()
def timer(
    minutes: str = typer.Option(
        str(get_settings().timer_default_minutes),
        "--minutes",
        "-m",
        help="Focus length in minutes (1-180)",
    ),
) -> None:
    """Run a focus timer in the terminal."""
    from studybuddy.cli.hub import run_focus_timer

    focus = FocusTimer.from_config(get_settings().get_timer_config())
    focus.set_input(minutes)
    run_focus_timer(focus, console)
    console.print(render_timer(focus))


@app.command()
def prefs() -> None:
    """Show stored preferences."""
    settings = get_settings()
    store = PreferencesStore(settings.prefs_db_path, default_weekly_goal=settings.default_weekly_goal)
    loaded = store.load()
    store.close()

    table = Table(title="Preferences")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("logged_in", "yes" if loaded.logged_in else "no")
    table.add_row("email", loaded.email or "—")
    table.add_row("weekly_goal", f"{loaded.weekly_goal} min")
    table.add_row("prefs_db_path", str(settings.prefs_db_path))
    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
