"""
Unit tests for the focus timer state machine and its tick loop.
"""

import pytest

from studybuddy.study.focus_timer import FocusTimer, clamp_minutes, run_timer


@pytest.fixture
def timer():
    return FocusTimer()


class TestClamp:
    @pytest.mark.parametrize(
        "text,expected",
        [("25", 25), ("0", 1), ("-3", 1), ("500", 180), ("abc", 25), ("", 25), (None, 25), (" 50 ", 50)],
    )
    def test_clamp_minutes(self, text, expected):
        assert clamp_minutes(text) == expected


class TestTransitions:
    def test_initial_state(self, timer):
        assert timer.running is False
        assert timer.remaining_seconds == 1500
        assert timer.display() == "25:00"

    def test_start_loads_input(self, timer):
        timer.set_input("25")
        timer.start()

        assert timer.running is True
        assert timer.remaining_seconds == 1500

    def test_start_while_running_is_no_op(self, timer):
        timer.start()
        timer.tick(100)
        timer.set_input("10")

        timer.start()

        assert timer.remaining_seconds == 1400

    def test_pause_keeps_remaining(self, timer):
        timer.start()
        timer.tick(60)

        timer.pause()

        assert timer.running is False
        assert timer.remaining_seconds == 1440
        assert timer.tick() is False
        assert timer.remaining_seconds == 1440

    def test_start_after_pause_reloads_from_input(self, timer):
        timer.start()
        timer.tick(60)
        timer.pause()

        timer.start()

        assert timer.remaining_seconds == 1500

    def test_reset_while_running(self, timer):
        timer.start()
        timer.tick(30)
        timer.set_input("10")

        timer.reset()

        assert timer.running is False
        assert timer.remaining_seconds == 600

    def test_full_elapse_auto_stops(self, timer):
        timer.set_input("25")
        timer.start()

        for _ in range(1500):
            timer.tick()

        assert timer.running is False
        assert timer.remaining_seconds == 0
        assert timer.finished
        assert timer.display() == "00:00"

    def test_non_numeric_input_defaults_to_25(self, timer):
        timer.set_input("soon")
        timer.start()

        assert timer.remaining_seconds == 25 * 60

    def test_from_config(self):
        timer = FocusTimer.from_config({"default_minutes": 50, "min_minutes": 5, "max_minutes": 60})
        timer.set_input("2")

        timer.reset()

        assert timer.remaining_seconds == 5 * 60
        assert FocusTimer.from_config({"default_minutes": 50}).display() == "50:00"


class TestRunTimer:
    @pytest.mark.asyncio
    async def test_runs_to_zero_with_simulated_clock(self, timer):
        slept = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        timer.set_input("1")
        timer.start()
        ticks = []

        await run_timer(timer, sleep=fake_sleep, on_tick=lambda t: ticks.append(t.remaining_seconds))

        assert timer.running is False
        assert timer.remaining_seconds == 0
        assert len(slept) == 60
        assert ticks[0] == 59
        assert ticks[-1] == 0

    @pytest.mark.asyncio
    async def test_stops_when_running_flag_clears(self, timer):
        async def fake_sleep(seconds):
            if timer.remaining_seconds == 1490:
                timer.pause()

        timer.start()

        await run_timer(timer, sleep=fake_sleep)

        assert timer.running is False
        assert timer.remaining_seconds == 1490

    @pytest.mark.asyncio
    async def test_not_running_returns_immediately(self, timer):
        async def fake_sleep(seconds):
            raise AssertionError("should not sleep")

        await run_timer(timer, sleep=fake_sleep)

        assert timer.remaining_seconds == 1500
