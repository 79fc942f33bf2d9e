"""Timer scheduler interface."""

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle to a scheduled repeating timer."""

    def cancel(self) -> None:
        """Stop the timer. Cancelling twice is allowed."""
        ...


@runtime_checkable
class TimerScheduler(Protocol):
    """Protocol for scheduling repeating callbacks.

    Callbacks run on the same thread of control as the session tracker,
    never concurrently with tracker operations.
    """

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_seconds`` until cancelled.

        Args:
            interval_seconds: Delay between invocations.
            callback: Synchronous callable to invoke.

        Returns:
            TimerHandle: Handle used to cancel the timer.
        """
        ...
