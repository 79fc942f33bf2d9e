"""Session Tracking Controller for wiring trackers to client connections."""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import WebSocket

from ..domain.entities import PageableResponse
from ..domain.interfaces.clock import Clock
from ..domain.interfaces.session_dispatcher import SessionDispatcher
from ..domain.interfaces.teardown_notifier import TeardownNotifier
from ..domain.interfaces.timer_scheduler import TimerScheduler
from ..domain.services import ListeningSessionTracker, ReadingSessionTracker
from ..infrastructure.connection_teardown_notifier import ConnectionTeardownNotifier
from ..infrastructure.process_teardown_notifier import ProcessTeardownNotifier
from ..infrastructure.reading_session_api_client import ReadingSessionApiClient
from .websocket_handler import WebSocketHandler

logger = logging.getLogger(__name__)


@dataclass
class ClientTrackers:
    """Trackers owned by one client connection."""

    reading: ReadingSessionTracker
    listening: ListeningSessionTracker


class SessionTrackingController:
    """
    Controller for coordinating session tracking.

    This controller is injected with all necessary collaborators and builds
    one pair of trackers per client connection, keeping the API layer thin.
    """

    def __init__(
        self,
        dispatcher: SessionDispatcher,
        clock: Clock,
        scheduler: TimerScheduler,
        api_client: Optional[ReadingSessionApiClient] = None,
        process_notifier: Optional[ProcessTeardownNotifier] = None,
        reading_checkpoint_interval_seconds: float = 300,
        listening_checkpoint_interval_seconds: float = 300,
        min_session_seconds: int = 30,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            dispatcher: Delivers session summaries
            clock: Wall-clock source shared by all trackers
            scheduler: Runs checkpoint timers
            api_client: Backend client for session history, if configured
            process_notifier: Flushes open connections when the process exits
            reading_checkpoint_interval_seconds: Checkpoint interval for reading
            listening_checkpoint_interval_seconds: Checkpoint interval for listening
            min_session_seconds: Minimum duration worth reporting
        """
        self.dispatcher = dispatcher
        self.clock = clock
        self.scheduler = scheduler
        self.api_client = api_client
        self.process_notifier = process_notifier
        self.reading_checkpoint_interval_seconds = reading_checkpoint_interval_seconds
        self.listening_checkpoint_interval_seconds = listening_checkpoint_interval_seconds
        self.min_session_seconds = min_session_seconds
        self.open_connections = 0

        logger.info("SessionTrackingController initialized")

    def create_trackers(self, notifier: TeardownNotifier) -> ClientTrackers:
        """Build the trackers of one client, flushing through ``notifier``."""
        reading = ReadingSessionTracker(
            dispatcher=self.dispatcher,
            clock=self.clock,
            scheduler=self.scheduler,
            teardown_notifier=notifier,
            checkpoint_interval_seconds=self.reading_checkpoint_interval_seconds,
            min_session_seconds=self.min_session_seconds,
        )
        listening = ListeningSessionTracker(
            dispatcher=self.dispatcher,
            clock=self.clock,
            scheduler=self.scheduler,
            teardown_notifier=notifier,
            checkpoint_interval_seconds=self.listening_checkpoint_interval_seconds,
            min_session_seconds=self.min_session_seconds,
        )
        return ClientTrackers(reading=reading, listening=listening)

    async def handle_websocket_connection(self, websocket: WebSocket) -> None:
        logger.info(f"Handling new WebSocket connection from {websocket.client}")

        notifier = ConnectionTeardownNotifier()
        trackers = self.create_trackers(notifier)
        handler = WebSocketHandler(reading=trackers.reading, listening=trackers.listening)

        if self.process_notifier is not None:
            self.process_notifier.register(notifier.fire)
        self.open_connections += 1

        try:
            await handler.handle_websocket(websocket)
        finally:
            # Closing the connection is this client's teardown
            notifier.fire()
            if self.process_notifier is not None:
                self.process_notifier.unregister(notifier.fire)
            self.open_connections -= 1
            logger.info(f"Connection {websocket.client} flushed and closed")

    async def get_sessions_for_book(self, book_id: int, page: int = 0, size: int = 5) -> PageableResponse:
        """
        List stored sessions of a book.

        Raises:
            RuntimeError: If no backend client is configured.
            httpx.HTTPError: If the backend call fails.
        """
        if self.api_client is None:
            raise RuntimeError("Session history requires the http dispatcher")
        return await self.api_client.get_sessions_by_book_id(book_id, page=page, size=size)

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "open_connections": self.open_connections,
            "providers": {
                "dispatcher": type(self.dispatcher).__name__,
                "clock": type(self.clock).__name__,
                "scheduler": type(self.scheduler).__name__,
            },
        }
