"""Asyncio implementation of the timer scheduler."""

import asyncio
import logging
from typing import Callable, Optional

from ..domain.interfaces.timer_scheduler import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)


class _RepeatingTimer(TimerHandle):
    """Re-arms itself with ``loop.call_later`` after every invocation."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval_seconds: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval_seconds
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False
        self._arm()

    def _arm(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            logger.error(f"Error in timer callback: {e}", exc_info=True)
        if not self._cancelled:
            self._arm()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioTimerScheduler(TimerScheduler):
    """Runs repeating callbacks on an asyncio event loop.

    Callbacks execute on the loop thread between other tasks, so they
    never interleave with synchronous tracker calls made from the loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the loop running
                when ``schedule_repeating`` is called.
        """
        self._loop = loop

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingTimer(loop, interval_seconds, callback)
