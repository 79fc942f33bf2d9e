"""Build session summaries from tracked sessions."""

from datetime import datetime
from typing import Optional

from ..entities.engagement_session import EngagementSession
from ..entities.session_summary import SessionSummary


def format_duration(seconds: int) -> str:
    """Human-readable duration: ``1h 2m 3s``, ``2m 3s`` or ``3s``."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def _progress_delta(start: Optional[float], end: Optional[float]) -> Optional[float]:
    if start is None or end is None:
        return None
    return round(end - start, 2)


def build_summary(session: EngagementSession, end_time: datetime, duration_seconds: int) -> SessionSummary:
    """Summarize ``session`` for the window ending at ``end_time``.

    Args:
        session: The session being reported.
        end_time: End of the reporting window.
        duration_seconds: Engaged seconds to report, already rounded.

    Returns:
        SessionSummary: Payload for either delivery path.
    """
    start_progress = session.start_position.progress_percent()
    end_progress = session.current_position.progress_percent()

    return SessionSummary(
        subject_id=session.subject_id,
        media_kind=session.media_kind.value,
        start_time=session.start_time,
        end_time=end_time,
        duration_seconds=duration_seconds,
        duration_formatted=format_duration(duration_seconds),
        start_location=session.start_position.marker(),
        end_location=session.current_position.marker(),
        auxiliary_id=session.auxiliary_id,
        start_progress=start_progress,
        end_progress=end_progress,
        progress_delta=_progress_delta(start_progress, end_progress),
    )
