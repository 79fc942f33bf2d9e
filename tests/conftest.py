"""Shared fakes for session tracking tests."""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from src.infrastructure.local_session_dispatcher import LocalSessionDispatcher


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 1, 13, 10, 0, 0, tzinfo=timezone.utc)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class ManualTimer:
    def __init__(self, interval_seconds: float, callback: Callable[[], None]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerScheduler:
    """Timer scheduler whose timers fire only through ``fire()``."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval_seconds, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def fire(self) -> None:
        for timer in self.active:
            timer.callback()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return ManualTimerScheduler()


@pytest.fixture
def dispatcher():
    return LocalSessionDispatcher()
