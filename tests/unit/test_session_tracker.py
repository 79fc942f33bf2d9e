"""Tests for SessionTracker lifecycle and time accounting."""

import pytest

from src.domain.entities import AudioPosition, MediaKind, PagePosition
from src.domain.services import ListeningSessionTracker, ReadingSessionTracker


@pytest.fixture
def tracker(dispatcher, clock, scheduler):
    """Create a reading tracker driven by fake time."""
    return ReadingSessionTracker(dispatcher=dispatcher, clock=clock, scheduler=scheduler)


@pytest.fixture
def listening_tracker(dispatcher, clock, scheduler):
    """Create a listening tracker driven by fake time."""
    return ListeningSessionTracker(dispatcher=dispatcher, clock=clock, scheduler=scheduler)


def page(location: str, progress: float = None) -> PagePosition:
    return PagePosition(location=location, progress=progress)


class TestLifecycle:
    """Tests for starting and ending sessions."""

    def test_start_session(self, tracker, clock, scheduler):
        """Test that starting creates a running session and a checkpoint timer."""
        tracker.start_session(7, page("p1"))

        assert tracker.is_session_active()
        assert tracker.is_running()
        assert tracker.session.subject_id == 7
        assert tracker.session.accumulated_seconds == 0
        assert tracker.session.running_since == clock.now()
        assert tracker.session.media_kind == MediaKind.TEXT
        assert len(scheduler.active) == 1

    def test_no_session_initially(self, tracker):
        """Test that a fresh tracker has no session."""
        assert not tracker.is_session_active()
        assert not tracker.is_running()
        assert tracker.current_engaged_seconds() == 0

    def test_end_session_dispatches_summary(self, tracker, dispatcher, clock, scheduler):
        """Test that a long enough session is dispatched asynchronously once."""
        tracker.start_session(7, page("p1"), media_kind=MediaKind.EPUB, auxiliary_id=3)
        clock.advance(60)
        tracker.end_session(page("p9"))

        assert not tracker.is_session_active()
        assert scheduler.active == []
        assert len(dispatcher.submitted) == 1
        assert dispatcher.beacons == []

        summary = dispatcher.submitted[0]
        assert summary.subject_id == 7
        assert summary.media_kind == "EPUB"
        assert summary.duration_seconds == 60
        assert summary.duration_formatted == "1m 0s"
        assert summary.start_location == "p1"
        assert summary.end_location == "p9"
        assert summary.auxiliary_id == 3
        assert summary.end_time == clock.now()

    def test_end_without_session_is_noop(self, tracker, dispatcher):
        """Test that ending without a session does nothing."""
        tracker.end_session(page("p1"))
        assert dispatcher.all_summaries() == []

    def test_start_ends_previous_session(self, tracker, dispatcher, clock, scheduler):
        """Test that starting a new session first ends the current one."""
        tracker.start_session(1, page("a"))
        clock.advance(45)
        tracker.start_session(2, page("b"))

        assert len(dispatcher.submitted) == 1
        assert dispatcher.submitted[0].subject_id == 1
        assert dispatcher.submitted[0].duration_seconds == 45
        assert tracker.session.subject_id == 2
        assert tracker.session.accumulated_seconds == 0
        assert len(scheduler.active) == 1

    def test_start_ends_short_previous_session_without_dispatch(self, tracker, dispatcher, clock):
        """Test that a replaced short session is discarded like any other."""
        tracker.start_session(1, page("a"))
        clock.advance(5)
        tracker.start_session(2, page("b"))

        assert dispatcher.submitted == []
        assert tracker.session.subject_id == 2

    def test_reading_rejects_audio_media_kind(self, tracker, dispatcher, clock):
        """Test that a reading session never reports itself as an audiobook."""
        tracker.start_session(1, page("p1"), media_kind=MediaKind.AUDIOBOOK)
        assert tracker.session.media_kind == MediaKind.TEXT

        clock.advance(60)
        tracker.end_session()

        assert dispatcher.submitted[0].media_kind == "TEXT"

    def test_listening_rejects_text_media_kind(self, listening_tracker):
        listening_tracker.start_session(1, AudioPosition(position_ms=0), media_kind=MediaKind.PDF)
        assert listening_tracker.session.media_kind == MediaKind.AUDIOBOOK


class TestMinimumDuration:
    """Tests for the minimum-duration discard rule."""

    def test_29_seconds_is_discarded(self, tracker, dispatcher, clock):
        tracker.start_session(1, page("a"))
        clock.advance(29)
        tracker.end_session()

        assert dispatcher.all_summaries() == []
        assert not tracker.is_session_active()

    def test_31_seconds_is_dispatched(self, tracker, dispatcher, clock):
        tracker.start_session(1, page("a"))
        clock.advance(31)
        tracker.end_session()

        assert len(dispatcher.submitted) == 1
        assert dispatcher.submitted[0].duration_seconds == 31

    def test_threshold_uses_half_up_rounding(self, tracker, dispatcher, clock):
        """Test that 29.5 engaged seconds round up to the 30 second minimum."""
        tracker.start_session(1, page("a"))
        clock.advance(29.5)
        tracker.end_session()

        assert len(dispatcher.submitted) == 1
        assert dispatcher.submitted[0].duration_seconds == 30

    def test_custom_minimum(self, dispatcher, clock, scheduler):
        tracker = ReadingSessionTracker(dispatcher, clock, scheduler, min_session_seconds=0)
        tracker.start_session(1, page("a"))
        tracker.end_session()

        assert len(dispatcher.submitted) == 1
        assert dispatcher.submitted[0].duration_seconds == 0


class TestPauseResume:
    """Tests for pause/resume accounting."""

    def test_scenario_pause_and_resume(self, tracker, dispatcher, clock):
        """Test 40s running, 10s paused, 5s running reports 45s."""
        tracker.start_session(7, page("p1"), rate_multiplier=1.0)
        clock.advance(40)
        tracker.pause_session(page("p2"))
        clock.advance(10)
        tracker.resume_session(page("p2"))
        clock.advance(5)
        tracker.end_session(page("p3"))

        summary = dispatcher.submitted[0]
        assert summary.duration_seconds == 45
        assert summary.start_location == "p1"
        assert summary.end_location == "p3"

    def test_total_equals_sum_of_running_intervals(self, tracker, dispatcher, clock):
        """Test that only running intervals count, across many pauses."""
        tracker.start_session(1, page("a"))
        running = 0
        for run, idle in [(12, 30), (7.5, 3), (20, 100), (0.5, 1)]:
            clock.advance(run)
            running += run
            tracker.pause_session()
            clock.advance(idle)
            tracker.resume_session()
        clock.advance(10)
        running += 10
        tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == round(running)

    def test_double_pause_accrues_once(self, tracker, clock):
        tracker.start_session(1, page("a"))
        clock.advance(20)
        tracker.pause_session(page("b"))
        clock.advance(20)
        tracker.pause_session(page("c"))

        assert tracker.session.accumulated_seconds == 20
        assert not tracker.is_running()
        # Second pause is a full no-op, position included
        assert tracker.session.current_position.location == "b"

    def test_double_resume_keeps_running_since(self, tracker, dispatcher, clock):
        tracker.start_session(1, page("a"))
        clock.advance(20)
        tracker.resume_session()
        clock.advance(20)
        tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == 40

    def test_paused_end_does_not_count_pause(self, tracker, dispatcher, clock):
        tracker.start_session(1, page("a"))
        clock.advance(35)
        tracker.pause_session()
        clock.advance(600)
        tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == 35

    def test_operations_without_session_are_noops(self, tracker, dispatcher):
        """Test that every operation is safe to call speculatively."""
        tracker.pause_session(page("a"))
        tracker.resume_session(page("a"))
        tracker.update_position(page("a"))
        tracker.update_rate(2.0)
        tracker.end_session(page("a"))
        tracker.flush_on_teardown()

        assert not tracker.is_session_active()
        assert dispatcher.all_summaries() == []

    def test_current_engaged_seconds(self, tracker, clock):
        tracker.start_session(1, page("a"))
        clock.advance(10)
        tracker.pause_session()
        clock.advance(10)
        tracker.resume_session()
        clock.advance(4)

        assert tracker.current_engaged_seconds() == 14
        # Reading it does not accrue
        assert tracker.session.accumulated_seconds == 10


class TestPositionAndRate:
    """Tests for position tracking and rate scaling."""

    def test_update_position_does_not_touch_timing(self, tracker, clock):
        tracker.start_session(1, page("a"))
        since = tracker.session.running_since
        clock.advance(10)
        tracker.update_position(page("b", 12.0))

        assert tracker.session.current_position.location == "b"
        assert tracker.session.running_since == since
        assert tracker.session.accumulated_seconds == 0

    def test_rate_scales_running_time(self, listening_tracker, dispatcher, clock):
        listening_tracker.start_session(1, AudioPosition(position_ms=0), rate_multiplier=1.5)
        clock.advance(40)
        listening_tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == 60

    def test_rate_change_is_piecewise(self, listening_tracker, dispatcher, clock):
        """Test 10s at 1.0 then 10s at 2.0 gives 30 engaged seconds."""
        listening_tracker.start_session(1, AudioPosition(position_ms=0))
        clock.advance(10)
        listening_tracker.update_rate(2.0)
        clock.advance(10)
        listening_tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == 30

    def test_rate_change_while_paused(self, listening_tracker, dispatcher, clock):
        listening_tracker.start_session(1, AudioPosition(position_ms=0))
        clock.advance(10)
        listening_tracker.pause_session()
        listening_tracker.update_rate(3.0)
        clock.advance(50)
        assert listening_tracker.session.accumulated_seconds == 10
        assert not listening_tracker.is_running()

        listening_tracker.resume_session()
        clock.advance(10)
        listening_tracker.end_session()

        assert dispatcher.submitted[0].duration_seconds == 40

    def test_invalid_rate_is_ignored(self, listening_tracker, clock):
        listening_tracker.start_session(1, AudioPosition(position_ms=0), rate_multiplier=1.25)
        listening_tracker.update_rate(0)
        listening_tracker.update_rate(-1)

        assert listening_tracker.session.rate_multiplier == 1.25

    def test_invalid_start_rate_falls_back(self, listening_tracker):
        listening_tracker.start_session(1, AudioPosition(position_ms=0), rate_multiplier=0)
        assert listening_tracker.session.rate_multiplier == 1.0
