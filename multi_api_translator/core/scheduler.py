"""
Daily quota reset schedule.

Fires once at the next local midnight after start(), then every 24 hours.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

logger = logging.getLogger(__name__)

RESET_INTERVAL_SECONDS = 24 * 60 * 60


def seconds_until_midnight(now: datetime) -> float:
    """Seconds from ``now`` to the start of the next local day."""
    tomorrow = datetime(now.year, now.month, now.day) + timedelta(days=1)
    return (tomorrow - now).total_seconds()


class DailyResetScheduler:
    """Runs a callback at local midnight and every 24 hours afterwards.

    The clock and timer factory are injectable so tests can drive the
    schedule without waiting on wall-clock time.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        clock: Callable[[], datetime] = datetime.now,
        timer_factory: Callable[..., threading.Timer] = threading.Timer
    ):
        self.callback = callback
        self.clock = clock
        self.timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Arm the first reset for the next local midnight."""
        with self._lock:
            if self._timer is not None:
                return
            delay = seconds_until_midnight(self.clock())
            logger.info("Daily usage reset scheduled in %.0f seconds", delay)
            self._arm(delay)

    def stop(self) -> None:
        """Cancel the pending reset, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _arm(self, delay: float) -> None:
        # Caller holds the lock
        timer = self.timer_factory(delay, lambda: self._fire(timer))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, timer: threading.Timer) -> None:
        with self._lock:
            if self._timer is not timer:
                return
        try:
            self.callback()
        finally:
            # Only the timer still tracked may re-arm; stop() or a restart
            # during the callback replaces it.
            with self._lock:
                if self._timer is timer:
                    self._arm(RESET_INTERVAL_SECONDS)
