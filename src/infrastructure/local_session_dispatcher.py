"""Local in-memory implementation of the Session Dispatcher."""

import logging

from ..domain.entities.session_summary import SessionSummary
from ..domain.interfaces.session_dispatcher import SessionDispatcher

logger = logging.getLogger(__name__)


class LocalSessionDispatcher(SessionDispatcher):
    """Local in-memory implementation of the Session Dispatcher.

    Records summaries instead of sending them, for testing and
    development purposes.
    """

    def __init__(self, accept_beacons: bool = True):
        """Initialize with empty records.

        Args:
            accept_beacons: Result returned by ``send_beacon``.
        """
        self.submitted: list[SessionSummary] = []
        self.beacons: list[SessionSummary] = []
        self.accept_beacons = accept_beacons

    def submit(self, summary: SessionSummary) -> None:
        logger.info(f"Recorded session for book {summary.subject_id} ({summary.duration_seconds}s)")
        self.submitted.append(summary)

    def send_beacon(self, summary: SessionSummary) -> bool:
        if not self.accept_beacons:
            return False
        logger.info(f"Recorded beacon for book {summary.subject_id} ({summary.duration_seconds}s)")
        self.beacons.append(summary)
        return True

    def clear(self) -> None:
        """Forget all recorded summaries."""
        self.submitted.clear()
        self.beacons.clear()

    def all_summaries(self) -> list[SessionSummary]:
        return [*self.submitted, *self.beacons]
