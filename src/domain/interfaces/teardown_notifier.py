"""Teardown notifier interface."""

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TeardownNotifier(Protocol):
    """Source of "client is going away" notifications."""

    def register(self, callback: Callable[[], None]) -> None:
        """Register a callback to run once when teardown happens.

        Args:
            callback: Synchronous callable; it must not block for long.
        """
        ...
