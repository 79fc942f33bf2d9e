"""Session entities for engagement time accounting."""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .positions import Position

PositionT = TypeVar("PositionT", bound=Position)


class MediaKind(str, Enum):
    """Kind of media a session is tracking."""
    TEXT = "TEXT"
    PDF = "PDF"
    EPUB = "EPUB"
    CBX = "CBX"
    AUDIOBOOK = "AUDIOBOOK"


class EngagementSession(BaseModel, Generic[PositionT]):
    """One in-progress reading or listening session.

    ``running_since`` is set while the user is actively engaged and cleared
    while paused. Engaged time of the current running slice is not part of
    ``accumulated_seconds`` until it is accrued.
    """

    subject_id: int
    media_kind: MediaKind
    start_time: datetime
    accumulated_seconds: float = Field(default=0.0, ge=0)
    running_since: Optional[datetime] = None
    rate_multiplier: float = Field(default=1.0, gt=0)
    start_position: PositionT
    current_position: PositionT
    auxiliary_id: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self.running_since is not None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subject_id": 7,
                "media_kind": "EPUB",
                "start_time": "2026-01-13T10:00:00Z",
                "accumulated_seconds": 42.5,
                "running_since": "2026-01-13T10:01:00Z",
                "rate_multiplier": 1.0,
                "start_position": {"location": "epubcfi(/6/4)", "progress": 12.5},
                "current_position": {"location": "epubcfi(/6/8)", "progress": 14.0},
            }
        }
    )
