"""Domain services for the session tracking service."""

from .checkpoint_scheduler import CheckpointScheduler
from .listening_session_tracker import ListeningSessionTracker
from .reading_session_tracker import ReadingSessionTracker
from .session_tracker import SessionTracker

__all__ = ["CheckpointScheduler", "ListeningSessionTracker", "ReadingSessionTracker", "SessionTracker"]
