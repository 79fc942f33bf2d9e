"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException, Query, WebSocket, status
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings
from .controller import SessionTrackingController
from ..domain.interfaces.session_dispatcher import SessionDispatcher
from ..infrastructure.asyncio_timer_scheduler import AsyncioTimerScheduler
from ..infrastructure.beacon_sender import BeaconSender
from ..infrastructure.http_session_dispatcher import HttpSessionDispatcher
from ..infrastructure.local_session_dispatcher import LocalSessionDispatcher
from ..infrastructure.process_teardown_notifier import ProcessTeardownNotifier
from ..infrastructure.reading_session_api_client import ReadingSessionApiClient
from ..infrastructure.system_clock import SystemClock

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _build_dispatcher(config: Settings) -> tuple[SessionDispatcher, Optional[ReadingSessionApiClient]]:
    """Create the dispatcher selected by ``config.dispatcher_type``."""
    if config.dispatcher_type == "local":
        return LocalSessionDispatcher(), None

    api_client = ReadingSessionApiClient(
        base_url=config.backend_base_url,
        sessions_path=config.sessions_path,
        auth_token=config.backend_auth_token,
        timeout_seconds=config.request_timeout_seconds,
    )
    beacon_sender = BeaconSender(
        timeout_seconds=config.beacon_timeout_seconds,
        max_pending=config.beacon_queue_size,
    )
    return HttpSessionDispatcher(api_client, beacon_sender), api_client


def create_app(config: Settings = settings, dispatcher: Optional[SessionDispatcher] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application settings
        dispatcher: Overrides the dispatcher selected by the settings

    Returns:
        The configured application
    """
    api_client: Optional[ReadingSessionApiClient] = None
    if dispatcher is None:
        dispatcher, api_client = _build_dispatcher(config)

    # Created after the dispatcher so its atexit hook runs before the beacon sender closes
    process_notifier = ProcessTeardownNotifier()

    controller = SessionTrackingController(
        dispatcher=dispatcher,
        clock=SystemClock(),
        scheduler=AsyncioTimerScheduler(),
        api_client=api_client,
        process_notifier=process_notifier,
        reading_checkpoint_interval_seconds=config.reading_checkpoint_interval_seconds,
        listening_checkpoint_interval_seconds=config.listening_checkpoint_interval_seconds,
        min_session_seconds=config.min_session_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Open connections are flushed by their own disconnect handling
        if isinstance(dispatcher, HttpSessionDispatcher):
            await dispatcher.aclose()
        process_notifier.close()
        logger.info("Session tracking service stopped")

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.controller = controller

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return controller.get_health_status()

    @app.get("/books/{book_id}/sessions")
    async def get_book_sessions(
        book_id: int,
        page: int = Query(0, ge=0, description="Page number"),
        size: int = Query(5, ge=1, le=100, description="Page size"),
    ):
        """List stored sessions of a book from the backend.

        Args:
            book_id: The book to list sessions for.
            page: Zero-based page number.
            size: Sessions per page.
        """
        try:
            sessions = await controller.get_sessions_for_book(book_id, page=page, size=size)
            return sessions.model_dump(by_alias=True)
        except RuntimeError as e:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
        except httpx.HTTPError as e:
            logger.error(f"Error getting sessions for book {book_id}: {e}")
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Session backend unavailable")

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket endpoint for one reader or player client.

        Connection lifecycle:
        1. Client connects
        2. Client sends JSON control messages (reading.* / listening.*)
        3. Server answers each with session.status or error
        4. On disconnect, open sessions are flushed through the beacon path
        """
        await websocket.accept()
        await controller.handle_websocket_connection(websocket)

    return app


app = create_app()
