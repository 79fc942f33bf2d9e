"""Clock interface."""

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of wall-clock time for session accounting."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...
