"""HTTP implementation of the Session Dispatcher."""

import asyncio
import logging

import httpx

from ..domain.entities.session_summary import SessionSummary
from ..domain.interfaces.session_dispatcher import SessionDispatcher
from .beacon_sender import BeaconSender
from .reading_session_api_client import ReadingSessionApiClient

logger = logging.getLogger(__name__)


class HttpSessionDispatcher(SessionDispatcher):
    """Delivers session summaries to the backend over HTTP.

    ``submit`` schedules the POST as a task on the running event loop and
    returns immediately. ``send_beacon`` hands the same body to a
    ``BeaconSender`` that delivers it from a background thread.
    """

    def __init__(self, api_client: ReadingSessionApiClient, beacon_sender: BeaconSender):
        self.api_client = api_client
        self.beacon_sender = beacon_sender
        self._pending: set[asyncio.Task] = set()

    def submit(self, summary: SessionSummary) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(f"No running event loop, dropping session for book {summary.subject_id}")
            return

        task = loop.create_task(self._post(summary))
        self._pending.add(task)
        task.add_done_callback(lambda t: self._pending.discard(t))

    def send_beacon(self, summary: SessionSummary) -> bool:
        return self.beacon_sender.send(self.api_client.sessions_url, summary.to_json_bytes())

    async def _post(self, summary: SessionSummary) -> None:
        try:
            await self.api_client.create_session(summary)
            logger.info(f"Session for book {summary.subject_id} saved ({summary.duration_seconds}s)")
        except httpx.HTTPError as e:
            logger.error(f"Failed to save session for book {summary.subject_id}: {e}")

    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every submitted summary to finish sending."""
        while self._pending:
            await asyncio.wait(list(self._pending))
            self._pending = {t for t in self._pending if not t.done()}

    async def aclose(self) -> None:
        """Drain pending sends, then close both transports."""
        await self.drain()
        await self.api_client.aclose()
        self.beacon_sender.close()
