"""Session summary payload sent to the reading-session backend."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionSummary(BaseModel):
    """Summary of engaged time for one reporting window.

    Attribute names are Pythonic; the wire format uses the backend's
    camelCase field names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "bookId": 7,
                "bookType": "AUDIOBOOK",
                "startTime": "2026-01-13T10:00:00Z",
                "endTime": "2026-01-13T10:10:00Z",
                "durationSeconds": 600,
                "durationFormatted": "10m 0s",
                "startLocation": "0:00",
                "endLocation": "10:00",
                "bookFileId": 12,
            }
        },
    )

    subject_id: int = Field(alias="bookId")
    media_kind: str = Field(alias="bookType")
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    duration_seconds: int = Field(alias="durationSeconds", ge=0)
    duration_formatted: str = Field(alias="durationFormatted")
    start_location: Optional[str] = Field(default=None, alias="startLocation")
    end_location: Optional[str] = Field(default=None, alias="endLocation")
    auxiliary_id: Optional[int] = Field(default=None, alias="bookFileId")
    start_progress: Optional[float] = Field(default=None, alias="startProgress")
    end_progress: Optional[float] = Field(default=None, alias="endProgress")
    progress_delta: Optional[float] = Field(default=None, alias="progressDelta")

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready request body."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json_bytes(self) -> bytes:
        """Request body as bytes, identical for every delivery path."""
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
