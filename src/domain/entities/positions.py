"""Position markers recorded by session trackers."""

from abc import abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


def format_ms(ms: int) -> str:
    """Render a millisecond offset as ``H:MM:SS`` or ``M:SS``."""
    total_seconds = ms // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


class Position(BaseModel):
    """Abstract base for an opaque location inside a book.

    Positions are only reported, never used for timing.
    """

    @abstractmethod
    def marker(self) -> str:
        """Location string sent to the backend."""

    def progress_percent(self) -> Optional[float]:
        """Reading progress in percent, if the position carries one."""
        return None

    def carry_over(self, previous: "Position") -> "Position":
        """Merge this position with the previously known one."""
        return self


class PagePosition(Position):
    """Position inside a paged or reflowable book (page number, CFI, ...)."""

    location: str
    progress: Optional[float] = Field(default=None, ge=0, le=100)

    def marker(self) -> str:
        return self.location

    def progress_percent(self) -> Optional[float]:
        return self.progress


class AudioPosition(Position):
    """Position inside an audiobook, optionally split across several tracks."""

    position_ms: int = Field(ge=0)
    track_index: Optional[int] = Field(default=None, ge=0)

    def marker(self) -> str:
        return format_ms(self.position_ms)

    def carry_over(self, previous: Position) -> Position:
        # Offsets without a track index stay on the previous track
        if self.track_index is None and isinstance(previous, AudioPosition):
            return self.model_copy(update={"track_index": previous.track_index})
        return self
