"""Daily activity streaks: calendar updates and read-side evaluation."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from moodmuse.activities.models import ActivityStreak

logger = logging.getLogger(__name__)


def get_day_iso(when: date | datetime) -> str:
    """Calendar day string e.g. '2026-03-01'. Aware datetimes are taken in UTC."""
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        return when.date().isoformat()
    return when.isoformat()


def get_previous_day_iso(day_iso: str) -> str:
    """The calendar day before ``day_iso``."""
    return (date.fromisoformat(day_iso) - timedelta(days=1)).isoformat()


def record_activity(streak: ActivityStreak, when: date | datetime) -> ActivityStreak:
    """Record one completed activity on the day of ``when``.

    1. Same day as an already recorded day: bump the day count only
    2. Day after the last active day: extend the current streak
    3. Later day after a gap, or first day ever: start a new streak at 1
    4. Day before the last active day: historical backfill, the streak and
       last active day are left alone

    Mutates and returns ``streak``.
    """
    day = get_day_iso(when)

    if day in streak.activities_per_day:
        streak.activities_per_day[day] += 1
        return streak

    streak.activities_per_day[day] = 1
    streak.total_active_days += 1

    last = streak.last_activity_date
    if last is not None and day < last:
        logger.info("Backfilled activity on %s (last active day %s)", day, last)
        return streak

    if last is not None and get_previous_day_iso(day) == last:
        streak.current_streak += 1
    else:
        streak.current_streak = 1

    streak.longest_streak = max(streak.longest_streak, streak.current_streak)
    streak.last_activity_date = day
    return streak


def effective_streak(streak: ActivityStreak, today: date | datetime | None = None) -> int:
    """Current streak as seen today.

    The stored streak is only rewritten on the next activity, so a streak
    whose last day is neither today nor yesterday has already lapsed.
    """
    if streak.last_activity_date is None:
        return 0
    if today is None:
        today = datetime.now(timezone.utc)
    today_iso = get_day_iso(today)
    if streak.last_activity_date in (today_iso, get_previous_day_iso(today_iso)):
        return streak.current_streak
    return 0
