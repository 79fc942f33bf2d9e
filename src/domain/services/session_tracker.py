"""Session tracker managing engaged-time accounting for one client."""

import logging
from typing import FrozenSet, Generic, Optional

from ..entities.engagement_session import EngagementSession, MediaKind, PositionT
from ..interfaces.clock import Clock
from ..interfaces.session_dispatcher import SessionDispatcher
from ..interfaces.teardown_notifier import TeardownNotifier
from ..interfaces.timer_scheduler import TimerScheduler
from .checkpoint_scheduler import CheckpointScheduler
from .engagement_clock import accrue, round_seconds, total_engaged_seconds
from .session_summaries import build_summary

logger = logging.getLogger(__name__)

DEFAULT_CHECKPOINT_INTERVAL_SECONDS = 5 * 60
DEFAULT_MIN_SESSION_SECONDS = 30


class SessionTracker(Generic[PositionT]):
    """
    Per-client service that measures how long a book is actively engaged with.

    This service owns:
    - The current session, if any (at most one at a time)
    - Pause/resume and rate-change accounting
    - The periodic checkpoint timer
    - The final flush, asynchronous on ``end_session`` and beacon-style on teardown

    Every operation except ``start_session`` is a no-op when no session
    exists, so callers may invoke them speculatively from playback or
    reading ticks. The tracker is not thread-safe; all calls must come from
    the thread that runs the timer scheduler.
    """

    default_media_kind: MediaKind = MediaKind.TEXT
    allowed_media_kinds: FrozenSet[MediaKind] = frozenset(MediaKind)
    label: str = "session"

    def __init__(
        self,
        dispatcher: SessionDispatcher,
        clock: Clock,
        scheduler: TimerScheduler,
        teardown_notifier: Optional[TeardownNotifier] = None,
        checkpoint_interval_seconds: float = DEFAULT_CHECKPOINT_INTERVAL_SECONDS,
        min_session_seconds: int = DEFAULT_MIN_SESSION_SECONDS,
    ):
        """
        Initialize the tracker with injected collaborators.

        Args:
            dispatcher: Delivers session summaries to the backend
            clock: Wall-clock source
            scheduler: Runs the periodic checkpoint timer
            teardown_notifier: Optional source of teardown notifications;
                the tracker registers its final flush with it once
            checkpoint_interval_seconds: Seconds between checkpoints
            min_session_seconds: Sessions shorter than this are discarded
        """
        self.dispatcher = dispatcher
        self.clock = clock
        self.checkpoints = CheckpointScheduler(scheduler, checkpoint_interval_seconds)
        self.min_session_seconds = min_session_seconds
        self._session: Optional[EngagementSession[PositionT]] = None

        if teardown_notifier is not None:
            teardown_notifier.register(self.flush_on_teardown)

    @property
    def session(self) -> Optional[EngagementSession[PositionT]]:
        """The current session, or None."""
        return self._session

    # ===== Lifecycle =====

    def start_session(
        self,
        subject_id: int,
        start_position: PositionT,
        rate_multiplier: float = 1.0,
        auxiliary_id: Optional[int] = None,
        media_kind: Optional[MediaKind] = None,
    ) -> None:
        """
        Start a new session, ending the current one first.

        Args:
            subject_id: Book being engaged with
            start_position: Where engagement starts
            rate_multiplier: Playback/reading speed
            auxiliary_id: Specific file variant, passed through unchanged
            media_kind: Overrides the tracker's default media kind
        """
        if self._session is not None:
            self.end_session()

        if rate_multiplier <= 0:
            logger.warning(f"Invalid rate {rate_multiplier} for {self.label} session, using 1.0")
            rate_multiplier = 1.0

        if media_kind is None:
            media_kind = self.default_media_kind
        elif media_kind not in self.allowed_media_kinds:
            logger.warning(
                f"Media kind {media_kind.value} not tracked by {self.label} sessions, "
                f"using {self.default_media_kind.value}"
            )
            media_kind = self.default_media_kind

        now = self.clock.now()
        self._session = EngagementSession(
            subject_id=subject_id,
            media_kind=media_kind,
            start_time=now,
            accumulated_seconds=0.0,
            running_since=now,
            rate_multiplier=rate_multiplier,
            start_position=start_position,
            current_position=start_position,
            auxiliary_id=auxiliary_id,
        )
        self.checkpoints.start(self._on_checkpoint)

        logger.info(
            f"{self.label.capitalize()} session started for book {subject_id} "
            f"at {start_position.marker()} (rate {rate_multiplier})"
        )

    def pause_session(self, current_position: Optional[PositionT] = None) -> None:
        """Stop accruing time. Pausing a paused session does nothing."""
        session = self._session
        if session is None or not session.is_running:
            return

        added = accrue(session, self.clock.now())
        session.running_since = None
        self._move_to(session, current_position)

        logger.info(
            f"{self.label.capitalize()} session paused: +{round_seconds(added)}s, "
            f"total {round_seconds(session.accumulated_seconds)}s at {session.current_position.marker()}"
        )

    def resume_session(self, current_position: Optional[PositionT] = None) -> None:
        """Start accruing time again. Resuming a running session does nothing."""
        session = self._session
        if session is None or session.is_running:
            return

        session.running_since = self.clock.now()
        self._move_to(session, current_position)

        logger.info(f"{self.label.capitalize()} session resumed at {session.current_position.marker()}")

    def update_position(self, current_position: PositionT) -> None:
        """Record the current position. Never affects timing."""
        session = self._session
        if session is None:
            return
        self._move_to(session, current_position)

    def update_rate(self, new_rate: float) -> None:
        """
        Change the rate multiplier.

        Time already elapsed is accrued at the old rate first, so a rate
        change never rescales the past.
        """
        session = self._session
        if session is None:
            return
        if new_rate <= 0:
            logger.warning(f"Ignoring invalid rate {new_rate} for {self.label} session")
            return

        if session.is_running:
            accrue(session, self.clock.now())
        session.rate_multiplier = new_rate

        logger.info(f"{self.label.capitalize()} rate changed to {new_rate}")

    def end_session(self, final_position: Optional[PositionT] = None) -> None:
        """
        End the session and dispatch its summary asynchronously.

        Sessions below the minimum duration are discarded without dispatch.
        The session is cleared in every case.
        """
        session = self._session
        if session is None:
            return

        self.checkpoints.stop()

        now = self.clock.now()
        accrue(session, now)
        self._move_to(session, final_position)
        self._session = None

        total_seconds = round_seconds(session.accumulated_seconds)
        if total_seconds < self.min_session_seconds:
            logger.info(f"{self.label.capitalize()} session too short ({total_seconds}s), discarding")
            return

        summary = build_summary(session, now, total_seconds)
        logger.info(
            f"{self.label.capitalize()} session completed for book {summary.subject_id}: "
            f"{summary.duration_formatted}"
        )
        self.dispatcher.submit(summary)

    def flush_on_teardown(self) -> None:
        """
        Final flush when the client goes away.

        Same accounting as ``end_session`` but delivered through the
        beacon path, since asynchronous delivery may not complete.
        """
        session = self._session
        self.checkpoints.stop()
        if session is None:
            return

        now = self.clock.now()
        accrue(session, now)
        self._session = None

        total_seconds = round_seconds(session.accumulated_seconds)
        if total_seconds < self.min_session_seconds:
            logger.info(f"{self.label.capitalize()} session too short on teardown ({total_seconds}s), discarding")
            return

        summary = build_summary(session, now, total_seconds)
        logger.info(
            f"{self.label.capitalize()} session ended on teardown for book {summary.subject_id}: "
            f"{summary.duration_formatted}"
        )
        if not self.dispatcher.send_beacon(summary):
            logger.error(f"Beacon for {self.label} session of book {summary.subject_id} was not queued")

    # ===== Queries =====

    def is_session_active(self) -> bool:
        return self._session is not None

    def is_running(self) -> bool:
        return self._session is not None and self._session.is_running

    def current_engaged_seconds(self) -> int:
        """Engaged seconds so far, including the running slice."""
        if self._session is None:
            return 0
        return round_seconds(total_engaged_seconds(self._session, self.clock.now()))

    # ===== Checkpoints =====

    def _on_checkpoint(self) -> None:
        """Dispatch the engaged time of the current window and start a new one."""
        session = self._session
        if session is None or not session.is_running:
            return

        now = self.clock.now()
        total = total_engaged_seconds(session, now)
        if total < self.min_session_seconds:
            return

        duration_seconds = round_seconds(total)
        summary = build_summary(session, now, duration_seconds)
        logger.info(f"Sending {self.label} checkpoint for book {session.subject_id}: {duration_seconds}s")
        self.dispatcher.submit(summary)

        # Baseline resets whether or not the dispatch succeeds
        session.accumulated_seconds = 0.0
        session.running_since = now
        session.start_position = session.current_position

    # ===== Helpers =====

    @staticmethod
    def _move_to(session: EngagementSession[PositionT], position: Optional[PositionT]) -> None:
        if position is not None:
            session.current_position = position.carry_over(session.current_position)
