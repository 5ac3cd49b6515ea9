"""Guided multi-day series: starting and advancing the day pointer."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from moodmuse.activities.models import ActivitySeries, ActivitySession

logger = logging.getLogger(__name__)


def start_series(series: ActivitySeries, now: datetime | None = None) -> ActivitySeries:
    """Reset a series copy to day 1."""
    if now is None:
        now = datetime.now(timezone.utc)
    series.current_day = 1
    series.started_at = now
    series.completed_at = None
    return series


def is_series_complete(series: ActivitySeries) -> bool:
    return series.completed_at is not None


def advance_series(series: ActivitySeries, session: ActivitySession) -> bool:
    """Move to the next day when ``session`` completes today's scheduled activity.

    Completing the last day stamps ``completed_at``. Returns True if the
    pointer moved.
    """
    if is_series_complete(series) or series.current_day is None:
        return False
    today = series.activity_for_day(series.current_day)
    if today is None or today.activity_id != session.activity_id:
        return False

    if series.current_day >= series.duration:
        series.completed_at = session.end_time or datetime.now(timezone.utc)
        logger.info("Series %s completed", series.id)
    else:
        series.current_day += 1
    return True
