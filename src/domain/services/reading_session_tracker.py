"""Session tracker for text and page-based reading."""

import logging

from ..entities.engagement_session import MediaKind
from ..entities.positions import PagePosition
from .session_tracker import SessionTracker

logger = logging.getLogger(__name__)


class ReadingSessionTracker(SessionTracker[PagePosition]):
    """Tracks reading time for EPUB, PDF, comic and plain-text readers.

    Reading is paused while the reader is hidden, unlike listening which
    keeps playing in the background.
    """

    default_media_kind = MediaKind.TEXT
    allowed_media_kinds = frozenset({MediaKind.TEXT, MediaKind.PDF, MediaKind.EPUB, MediaKind.CBX})
    label = "reading"

    def handle_visibility_change(self, hidden: bool) -> None:
        """Pause when the reader is hidden, resume when it is shown again."""
        if not self.is_session_active():
            return

        logger.debug(f"Reader visibility changed, hidden={hidden}")
        if hidden:
            self.pause_session()
        else:
            self.resume_session()
