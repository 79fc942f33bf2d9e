"""Infrastructure layer components."""

from .asyncio_timer_scheduler import AsyncioTimerScheduler
from .beacon_sender import BeaconSender
from .connection_teardown_notifier import ConnectionTeardownNotifier
from .http_session_dispatcher import HttpSessionDispatcher
from .local_session_dispatcher import LocalSessionDispatcher
from .process_teardown_notifier import ProcessTeardownNotifier
from .reading_session_api_client import ReadingSessionApiClient
from .system_clock import SystemClock

__all__ = [
    "AsyncioTimerScheduler",
    "BeaconSender",
    "ConnectionTeardownNotifier",
    "HttpSessionDispatcher",
    "LocalSessionDispatcher",
    "ProcessTeardownNotifier",
    "ReadingSessionApiClient",
    "SystemClock",
]
