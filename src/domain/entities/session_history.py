"""Session history entities returned by the reading-session backend."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReadingSessionRecord(BaseModel):
    """A stored session as listed by the backend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: int
    book_id: int
    book_title: Optional[str] = None
    book_type: str
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    start_progress: Optional[float] = None
    end_progress: Optional[float] = None
    progress_delta: Optional[float] = None
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    created_at: Optional[datetime] = None


class PageableResponse(BaseModel):
    """One page of session records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    content: list[ReadingSessionRecord] = Field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    number: int = 0
    size: int = 0
    first: bool = True
    last: bool = True
    empty: bool = True
