"""Session Dispatcher interface."""

from typing import Protocol, runtime_checkable

from ..entities.session_summary import SessionSummary


@runtime_checkable
class SessionDispatcher(Protocol):
    """Protocol defining how session summaries reach the backend.

    Both delivery paths accept the same payload so callers never branch
    on transport details.
    """

    def submit(self, summary: SessionSummary) -> None:
        """Send a summary asynchronously without blocking the caller.

        Failures are logged by the implementation and never raised.

        Args:
            summary: The summary to deliver.
        """
        ...

    def send_beacon(self, summary: SessionSummary) -> bool:
        """Queue a summary for fire-and-forget delivery during teardown.

        Args:
            summary: The summary to deliver.

        Returns:
            bool: True if the summary was accepted for sending. This says
            nothing about whether it arrived.
        """
        ...
