"""Domain entities for the session tracking service."""

from .engagement_session import EngagementSession, MediaKind
from .positions import AudioPosition, PagePosition, Position
from .session_history import PageableResponse, ReadingSessionRecord
from .session_summary import SessionSummary
from .websocket_messages import (
    ClientMessage,
    ErrorCode,
    ErrorMessage,
    ListeningEnd,
    ListeningPause,
    ListeningPosition,
    ListeningRate,
    ListeningResume,
    ListeningStart,
    ReadingEnd,
    ReadingPause,
    ReadingPosition,
    ReadingResume,
    ReadingStart,
    ReadingVisibility,
    SessionStatus,
    client_message_adapter,
)

__all__ = [
    # Session entities
    "EngagementSession",
    "MediaKind",
    # Position entities
    "Position",
    "PagePosition",
    "AudioPosition",
    # Payload entities
    "SessionSummary",
    "ReadingSessionRecord",
    "PageableResponse",
    # WebSocket message entities
    "ClientMessage",
    "ReadingStart",
    "ReadingPause",
    "ReadingResume",
    "ReadingPosition",
    "ReadingVisibility",
    "ReadingEnd",
    "ListeningStart",
    "ListeningPause",
    "ListeningResume",
    "ListeningPosition",
    "ListeningRate",
    "ListeningEnd",
    "SessionStatus",
    "ErrorMessage",
    "ErrorCode",
    "client_message_adapter",
]
