"""Per-activity progress aggregation."""

from __future__ import annotations

from moodmuse.activities.models import ActivityProgress, ActivitySession, ActivityType
from moodmuse.activities.streaks import get_day_iso, get_previous_day_iso


def effective_duration(activity: ActivityType, session: ActivitySession) -> int:
    """Minutes credited for a session: the customized duration, else the catalog default."""
    if session.customizations is not None and session.customizations.duration:
        return session.customizations.duration
    return activity.duration


def running_mean(average: float, count: int, value: float) -> float:
    """Fold ``value`` into a mean that already covers ``count - 1`` values.

    ``count`` is the number of values including the new one.
    """
    if count <= 1:
        return float(value)
    return average + (value - average) / count


def _next_streak_days(progress: ActivityProgress, session: ActivitySession) -> int:
    if progress.last_completed is None or session.end_time is None:
        return 1
    last_day = get_day_iso(progress.last_completed)
    day = get_day_iso(session.end_time)
    if day == last_day:
        return max(progress.streak_days, 1)
    if get_previous_day_iso(day) == last_day:
        return progress.streak_days + 1
    if day < last_day:
        return progress.streak_days
    return 1


def record_completion(
    progress_map: dict[str, ActivityProgress],
    activity: ActivityType,
    session: ActivitySession,
) -> ActivityProgress:
    """Fold a completed session into the progress record for its activity.

    The record is created on the first completion. Returns the updated record.
    """
    progress = progress_map.get(activity.id)
    if progress is None:
        progress = ActivityProgress(activity_id=activity.id)
        progress_map[activity.id] = progress

    minutes = effective_duration(activity, session)
    delta = session.mood_delta or 0

    progress.total_completions += 1
    progress.total_time += minutes
    progress.average_effectiveness = running_mean(
        progress.average_effectiveness,
        progress.total_completions,
        session.effectiveness or 0.0,
    )
    progress.streak_days = _next_streak_days(progress, session)
    if progress.last_completed is None or (
        session.end_time is not None and session.end_time >= progress.last_completed
    ):
        progress.last_completed = session.end_time

    best = progress.personal_best
    best.longest_session = max(best.longest_session, minutes)
    best.best_mood_improvement = max(best.best_mood_improvement, delta)

    return progress
