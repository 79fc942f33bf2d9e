"""System clock implementation."""

from datetime import datetime, timezone

from ..domain.interfaces.clock import Clock


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
