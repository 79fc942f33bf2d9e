"""Engaged-time accumulation for session tracking.

Engaged time is wall-clock time spent in the running state scaled by the
rate multiplier in effect at the time. Every helper here measures from
``running_since``; restarting ``running_since`` is therefore the only way
a slice can be closed off, and a closed slice is never measured twice.
"""

import math
from datetime import datetime

from ..entities.engagement_session import EngagementSession


def round_seconds(value: float) -> int:
    """Round to whole seconds, halves up."""
    return int(math.floor(value + 0.5))


def engaged_seconds_between(start: datetime, end: datetime, rate: float) -> float:
    """Engaged seconds for running from ``start`` to ``end`` at ``rate``.

    A clock that moved backwards contributes nothing.
    """
    elapsed = (end - start).total_seconds()
    if elapsed <= 0:
        return 0.0
    return elapsed * rate


def running_slice(session: EngagementSession, now: datetime) -> float:
    """Engaged seconds of the current running slice (0 while paused)."""
    if session.running_since is None:
        return 0.0
    return engaged_seconds_between(session.running_since, now, session.rate_multiplier)


def total_engaged_seconds(session: EngagementSession, now: datetime) -> float:
    """Accumulated plus running engaged seconds, without mutating the session."""
    return session.accumulated_seconds + running_slice(session, now)


def accrue(session: EngagementSession, now: datetime) -> float:
    """Fold the running slice into ``accumulated_seconds``.

    ``running_since`` moves to ``now`` so the slice cannot be counted
    again; callers that pause clear it afterwards.

    Returns:
        float: Engaged seconds added.
    """
    added = running_slice(session, now)
    session.accumulated_seconds += added
    if session.running_since is not None:
        session.running_since = now
    return added
