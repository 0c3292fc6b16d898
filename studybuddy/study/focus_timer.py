"""
Focus Timer for StudyBuddy.

A countdown state machine in the Pomodoro style:

    idle --start--> running --pause--> paused
      ^                |                  |
      +-----reset------+------reset-------+

While running, `tick()` is called once per second by `run_timer`; when the
countdown reaches zero the timer stops itself. Starting always reloads the
countdown from the minutes input, so Start after Pause begins a fresh run.

The timer never touches the session store.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

DEFAULT_MINUTES = 25
MIN_MINUTES = 1
MAX_MINUTES = 180


def clamp_minutes(
    text: str | int | None,
    default: int = DEFAULT_MINUTES,
    low: int = MIN_MINUTES,
    high: int = MAX_MINUTES,
) -> int:
    """Parse the minutes input and clamp it to [low, high]."""
    try:
        minutes = int(str(text).strip())
    except (TypeError, ValueError):
        minutes = default
    return max(low, min(high, minutes))


@dataclass
class FocusTimer:
    """Countdown state: input text, seconds left, running flag."""

    minutes_input: str = str(DEFAULT_MINUTES)
    remaining_seconds: int = DEFAULT_MINUTES * 60
    running: bool = False
    default_minutes: int = DEFAULT_MINUTES
    min_minutes: int = MIN_MINUTES
    max_minutes: int = MAX_MINUTES

    @classmethod
    def from_config(cls, timer_config: dict[str, int]) -> FocusTimer:
        default = timer_config.get("default_minutes", DEFAULT_MINUTES)
        return cls(
            minutes_input=str(default),
            remaining_seconds=default * 60,
            default_minutes=default,
            min_minutes=timer_config.get("min_minutes", MIN_MINUTES),
            max_minutes=timer_config.get("max_minutes", MAX_MINUTES),
        )

    @property
    def input_minutes(self) -> int:
        return clamp_minutes(
            self.minutes_input, self.default_minutes, self.min_minutes, self.max_minutes
        )

    @property
    def duration_seconds(self) -> int:
        return self.input_minutes * 60

    @property
    def finished(self) -> bool:
        return self.remaining_seconds == 0 and not self.running

    # =========================================================================
    # Transitions
    # =========================================================================

    def set_input(self, text: str) -> None:
        self.minutes_input = text

    def start(self) -> None:
        """Start counting down from the input. No-op if already running."""
        if self.running:
            return
        self.remaining_seconds = self.duration_seconds
        self.running = True
        logger.debug(f"Focus timer started: {self.input_minutes} min")

    def pause(self) -> None:
        self.running = False

    def reset(self) -> None:
        """Stop and reload the countdown from the current input."""
        self.running = False
        self.remaining_seconds = self.duration_seconds

    def tick(self, seconds: int = 1) -> bool:
        """
        Advance the countdown.

        Returns:
            True while the timer is still running afterwards
        """
        if not self.running:
            return False
        self.remaining_seconds = max(0, self.remaining_seconds - seconds)
        if self.remaining_seconds == 0:
            self.running = False
            logger.info("Focus timer finished")
        return self.running

    def display(self) -> str:
        mins, secs = divmod(self.remaining_seconds, 60)
        return f"{mins:02d}:{secs:02d}"


async def run_timer(
    timer: FocusTimer,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    on_tick: Callable[[FocusTimer], None] | None = None,
) -> FocusTimer:
    """
    Drive a running timer once per second until it stops.

    The loop exits as soon as `timer.running` is cleared, whether by
    reaching zero or by a pause/reset from elsewhere.
    """
    while timer.running and timer.remaining_seconds > 0:
        await sleep(1)
        if not timer.running:
            break
        timer.tick()
        if on_tick is not None:
            on_tick(timer)
    return timer
