"""
Unit tests for the daily usage reset schedule.

Timers are replaced with fakes so no test waits on wall-clock time.
"""

from datetime import datetime
from unittest.mock import Mock

import pytest

from multi_api_translator.core.scheduler import (
    RESET_INTERVAL_SECONDS,
    DailyResetScheduler,
    seconds_until_midnight
)


class FakeTimer:
    """Records scheduling instead of spawning a thread."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


class TestSecondsUntilMidnight:
    """Test delay computation."""

    def test_evening(self):
        assert seconds_until_midnight(datetime(2024, 3, 10, 22, 30, 0)) == 90 * 60

    def test_exactly_midnight_waits_full_day(self):
        assert seconds_until_midnight(datetime(2024, 3, 10, 0, 0, 0)) == RESET_INTERVAL_SECONDS

    def test_month_rollover(self):
        assert seconds_until_midnight(datetime(2024, 1, 31, 23, 59, 59)) == 1

    def test_fractional_seconds(self):
        assert seconds_until_midnight(datetime(2024, 2, 28, 23, 59, 59, 500000)) == pytest.approx(0.5)


class TestDailyResetScheduler:
    """Test schedule lifecycle."""

    def setup_method(self):
        """Create a scheduler with a fixed clock and fake timers."""
        self.timers = []
        self.callback = Mock()

        def timer_factory(interval, function):
            timer = FakeTimer(interval, function)
            self.timers.append(timer)
            return timer

        self.scheduler = DailyResetScheduler(
            self.callback,
            clock=lambda: datetime(2024, 5, 1, 18, 0, 0),
            timer_factory=timer_factory
        )

    def test_start_arms_timer_for_midnight(self):
        self.scheduler.start()

        assert self.scheduler.running
        assert len(self.timers) == 1
        assert self.timers[0].interval == 6 * 60 * 60
        assert self.timers[0].started
        assert self.timers[0].daemon

    def test_start_twice_is_noop(self):
        self.scheduler.start()
        self.scheduler.start()

        assert len(self.timers) == 1

    def test_firing_runs_callback_and_rearms_daily(self):
        self.scheduler.start()

        self.timers[0].function()
        self.timers[1].function()

        assert self.callback.call_count == 2
        assert [t.interval for t in self.timers[1:]] == [RESET_INTERVAL_SECONDS] * 2
        assert self.scheduler.running

    def test_stop_cancels_pending_timer(self):
        self.scheduler.start()
        self.scheduler.stop()

        assert not self.scheduler.running
        assert self.timers[0].cancelled

    def test_fire_after_stop_does_nothing(self):
        self.scheduler.start()
        self.scheduler.stop()

        self.timers[0].function()

        self.callback.assert_not_called()
        assert len(self.timers) == 1

    def test_rearms_even_if_callback_fails(self):
        self.callback.side_effect = RuntimeError("disk full")
        self.scheduler.start()

        with pytest.raises(RuntimeError):
            self.timers[0].function()

        assert len(self.timers) == 2
        assert self.timers[1].interval == RESET_INTERVAL_SECONDS

    def test_restart_during_callback_leaves_one_live_timer(self):
        def restart():
            self.scheduler.stop()
            self.scheduler.start()
        self.callback.side_effect = restart
        self.scheduler.start()

        self.timers[0].function()

        assert len(self.timers) == 2
        assert self.timers[1].interval == 6 * 60 * 60
        assert not self.timers[1].cancelled

        self.scheduler.stop()

        assert not self.scheduler.running
        assert all(t.cancelled for t in self.timers)

    def test_stop_during_callback_does_not_rearm(self):
        self.callback.side_effect = self.scheduler.stop
        self.scheduler.start()

        self.timers[0].function()

        assert len(self.timers) == 1
        assert not self.scheduler.running

    def test_replaced_timer_firing_does_nothing(self):
        self.scheduler.start()
        self.scheduler.stop()
        self.scheduler.start()

        self.timers[0].function()

        self.callback.assert_not_called()
        assert len(self.timers) == 2
        assert self.scheduler.running

    def test_stop_without_start(self):
        self.scheduler.stop()

        assert not self.scheduler.running
