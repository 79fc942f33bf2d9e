"""Domain interfaces for the session tracking service."""

from .clock import Clock
from .session_dispatcher import SessionDispatcher
from .teardown_notifier import TeardownNotifier
from .timer_scheduler import TimerHandle, TimerScheduler

__all__ = ["Clock", "SessionDispatcher", "TeardownNotifier", "TimerHandle", "TimerScheduler"]
