import json
import logging

from pydantic import ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect

from ..domain.entities import (
    AudioPosition,
    ErrorCode,
    ErrorMessage,
    ListeningEnd,
    ListeningPause,
    ListeningPosition,
    ListeningRate,
    ListeningResume,
    ListeningStart,
    MediaKind,
    PagePosition,
    ReadingEnd,
    ReadingPause,
    ReadingPosition,
    ReadingResume,
    ReadingStart,
    ReadingVisibility,
    SessionStatus,
    client_message_adapter,
)
from ..domain.services import ListeningSessionTracker, ReadingSessionTracker, SessionTracker

logger = logging.getLogger(__name__)


class WebSocketHandler:
    """Applies client control messages to one client's trackers."""

    def __init__(self, reading: ReadingSessionTracker, listening: ListeningSessionTracker):
        self._reading = reading
        self._listening = listening

    async def handle_websocket(self, websocket: WebSocket) -> None:
        # Note: websocket.accept() is called by the API endpoint before this
        try:
            await self._receive_loop(websocket)
        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected: {websocket.client}")
        finally:
            logger.info(f"WebSocket connection closed: {websocket.client}")

    async def _receive_loop(self, websocket: WebSocket) -> None:
        """Receive messages from client and apply them to the trackers."""
        while True:
            data = await websocket.receive()

            if data.get("type") == "websocket.disconnect":
                logger.info(f"Client disconnected - received disconnect message: {data}")
                break

            if data.get("type") == "websocket.receive" and data.get("text") is not None:
                await self._handle_text(websocket, data["text"])
            else:
                await self._send_error(websocket, "Only JSON text messages are supported")

    async def _handle_text(self, websocket: WebSocket, text: str) -> None:
        try:
            message = client_message_adapter.validate_python(json.loads(text))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON message: {e}")
            await self._send_error(websocket, f"Invalid JSON: {e}")
            return
        except ValidationError as e:
            logger.warning(f"Rejected control message: {e.error_count()} errors")
            await self._send_error(websocket, str(e))
            return

        try:
            tracker_name = self.apply(message)
        except Exception as e:
            logger.error(f"Error applying {message.type}: {e}", exc_info=True)
            await self._send_error(websocket, f"Internal processing error: {e}", ErrorCode.INTERNAL_ERROR)
            return

        tracker = self._reading if tracker_name == "reading" else self._listening
        await websocket.send_text(self._status(tracker_name, tracker).model_dump_json())

    def apply(self, message) -> str:
        """Apply a validated control message. Returns the tracker it addressed."""
        match message:
            case ReadingStart():
                self._reading.start_session(
                    message.book_id,
                    PagePosition(location=message.location, progress=message.progress),
                    auxiliary_id=message.book_file_id,
                    media_kind=MediaKind(message.book_type),
                )
            case ReadingPause():
                self._reading.pause_session(self._page_position(message))
            case ReadingResume():
                self._reading.resume_session(self._page_position(message))
            case ReadingPosition():
                self._reading.update_position(PagePosition(location=message.location, progress=message.progress))
            case ReadingVisibility():
                self._reading.handle_visibility_change(message.hidden)
            case ReadingEnd():
                self._reading.end_session(self._page_position(message))
            case ListeningStart():
                self._listening.start_session(
                    message.book_id,
                    AudioPosition(position_ms=message.position_ms, track_index=message.track_index),
                    rate_multiplier=message.playback_rate,
                    auxiliary_id=message.book_file_id,
                )
            case ListeningPause():
                self._listening.pause_session(AudioPosition(position_ms=message.position_ms))
            case ListeningResume():
                self._listening.resume_session(AudioPosition(position_ms=message.position_ms))
            case ListeningPosition():
                self._listening.update_position(
                    AudioPosition(position_ms=message.position_ms, track_index=message.track_index)
                )
            case ListeningRate():
                self._listening.update_rate(message.playback_rate)
            case ListeningEnd():
                final = None if message.position_ms is None else AudioPosition(position_ms=message.position_ms)
                self._listening.end_session(final)
            case _:
                raise ValueError(f"Unknown control message type: {type(message)}")

        return message.type.split(".", 1)[0]

    def _page_position(self, message) -> PagePosition | None:
        if message.location is not None:
            return PagePosition(location=message.location, progress=message.progress)

        # Progress without a location applies to the last known location
        session = self._reading.session
        if message.progress is None or session is None:
            return None
        return session.current_position.model_copy(update={"progress": message.progress})

    @staticmethod
    def _status(tracker_name: str, tracker: SessionTracker) -> SessionStatus:
        return SessionStatus(
            tracker=tracker_name,
            active=tracker.is_session_active(),
            running=tracker.is_running(),
            engaged_seconds=tracker.current_engaged_seconds(),
        )

    @staticmethod
    async def _send_error(
        websocket: WebSocket, text: str, code: ErrorCode = ErrorCode.INVALID_MESSAGE
    ) -> None:
        error = ErrorMessage(code=code, message=text)
        await websocket.send_text(error.model_dump_json())
