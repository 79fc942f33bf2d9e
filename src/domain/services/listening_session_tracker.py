"""Session tracker for audiobook listening."""

from ..entities.engagement_session import MediaKind
from ..entities.positions import AudioPosition
from .session_tracker import SessionTracker


class ListeningSessionTracker(SessionTracker[AudioPosition]):
    """Tracks listening time for audiobooks.

    Positions are millisecond offsets with an optional track index for
    multi-file audiobooks. Track changes arrive through ``update_position``
    and playback speed changes through ``update_rate``.
    """

    default_media_kind = MediaKind.AUDIOBOOK
    allowed_media_kinds = frozenset({MediaKind.AUDIOBOOK})
    label = "listening"
