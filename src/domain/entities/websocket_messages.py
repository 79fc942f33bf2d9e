"""WebSocket message models for the session tracking service."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


# ===== Client → Server Messages =====


class ReadingStart(BaseModel):
    """Reader opened a book."""

    type: Literal["reading.start"] = "reading.start"
    book_id: int
    book_type: Literal["TEXT", "PDF", "EPUB", "CBX"] = "TEXT"
    location: str
    progress: Optional[float] = Field(default=None, ge=0, le=100)
    book_file_id: Optional[int] = None


class ReadingPause(BaseModel):
    type: Literal["reading.pause"] = "reading.pause"
    location: Optional[str] = None
    progress: Optional[float] = Field(default=None, ge=0, le=100)


class ReadingResume(BaseModel):
    type: Literal["reading.resume"] = "reading.resume"
    location: Optional[str] = None
    progress: Optional[float] = Field(default=None, ge=0, le=100)


class ReadingPosition(BaseModel):
    """Reader moved to a new location."""

    type: Literal["reading.position"] = "reading.position"
    location: str
    progress: Optional[float] = Field(default=None, ge=0, le=100)


class ReadingVisibility(BaseModel):
    """Reader tab was hidden or shown."""

    type: Literal["reading.visibility"] = "reading.visibility"
    hidden: bool


class ReadingEnd(BaseModel):
    type: Literal["reading.end"] = "reading.end"
    location: Optional[str] = None
    progress: Optional[float] = Field(default=None, ge=0, le=100)


class ListeningStart(BaseModel):
    """Audiobook playback started."""

    type: Literal["listening.start"] = "listening.start"
    book_id: int
    position_ms: int = Field(ge=0)
    playback_rate: float = Field(default=1.0, gt=0)
    book_file_id: Optional[int] = None
    track_index: Optional[int] = Field(default=None, ge=0)


class ListeningPause(BaseModel):
    type: Literal["listening.pause"] = "listening.pause"
    position_ms: int = Field(ge=0)


class ListeningResume(BaseModel):
    type: Literal["listening.resume"] = "listening.resume"
    position_ms: int = Field(ge=0)


class ListeningPosition(BaseModel):
    """Playback progress tick, optionally on another track."""

    type: Literal["listening.position"] = "listening.position"
    position_ms: int = Field(ge=0)
    track_index: Optional[int] = Field(default=None, ge=0)


class ListeningRate(BaseModel):
    type: Literal["listening.rate"] = "listening.rate"
    playback_rate: float = Field(gt=0)


class ListeningEnd(BaseModel):
    type: Literal["listening.end"] = "listening.end"
    position_ms: Optional[int] = Field(default=None, ge=0)


# Union type for all client messages
ClientMessage = Annotated[
    Union[
        ReadingStart,
        ReadingPause,
        ReadingResume,
        ReadingPosition,
        ReadingVisibility,
        ReadingEnd,
        ListeningStart,
        ListeningPause,
        ListeningResume,
        ListeningPosition,
        ListeningRate,
        ListeningEnd,
    ],
    Field(discriminator="type"),
]

client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


# ===== Server → Client Messages =====


class SessionStatus(BaseModel):
    """Tracker state after a command was applied."""

    type: Literal["session.status"] = "session.status"
    tracker: Literal["reading", "listening"]
    active: bool
    running: bool
    engaged_seconds: int


class ErrorCode(str, Enum):
    """Error codes for WebSocket errors."""

    INVALID_MESSAGE = "INVALID_MESSAGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    code: ErrorCode
    message: str
