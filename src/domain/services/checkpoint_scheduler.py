"""Periodic checkpoint timer for session trackers."""

import logging
from typing import Callable, Optional

from ..interfaces.timer_scheduler import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)


class CheckpointScheduler:
    """Owns the single repeating checkpoint timer of a session tracker.

    Starting again replaces the previous timer, so at most one timer is
    ever scheduled per tracker.
    """

    def __init__(self, scheduler: TimerScheduler, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f"Checkpoint interval must be positive, got {interval_seconds}")
        self._scheduler = scheduler
        self.interval_seconds = interval_seconds
        self._handle: Optional[TimerHandle] = None

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    def start(self, on_tick: Callable[[], None]) -> None:
        """(Re)start the timer with ``on_tick`` as its callback."""
        self.stop()
        self._handle = self._scheduler.schedule_repeating(self.interval_seconds, on_tick)
        logger.debug(f"Checkpoint timer started, interval {self.interval_seconds}s")

    def stop(self) -> None:
        """Cancel the timer if one is scheduled."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        logger.debug("Checkpoint timer stopped")
