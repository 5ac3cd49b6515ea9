"""Badge evaluation against a user's aggregate progress."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from moodmuse.activities.catalog import ActivityCatalog
from moodmuse.activities.models import (
    ActivityBadge,
    BadgeRequirement,
    RequirementType,
    UserActivityData,
)

logger = logging.getLogger(__name__)


def _activities_completed(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    if requirement.category_filter is None:
        return sum(1 for s in data.sessions if s.completed)
    count = 0
    for session in data.sessions:
        if not session.completed:
            continue
        activity = catalog.get_activity_type(session.activity_id)
        if activity is not None and activity.category == requirement.category_filter:
            count += 1
    return count


def _streak_days(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    # Longest streak never decreases, so a streak badge cannot flap.
    return data.streaks.longest_streak


def _category_variety(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    categories = set()
    for session in data.sessions:
        if not session.completed:
            continue
        activity = catalog.get_activity_type(session.activity_id)
        if activity is not None:
            categories.add(activity.category)
    return len(categories)


def _mood_improvement(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    deltas = [s.mood_delta for s in data.sessions if s.completed and s.mood_delta is not None]
    return max(deltas, default=0)


def _total_time(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    return sum(p.total_time for p in data.progress.values())


_METRICS: dict[
    RequirementType,
    Callable[[BadgeRequirement, UserActivityData, ActivityCatalog], float],
] = {
    RequirementType.ACTIVITIES_COMPLETED: _activities_completed,
    RequirementType.STREAK_DAYS: _streak_days,
    RequirementType.CATEGORY_VARIETY: _category_variety,
    RequirementType.MOOD_IMPROVEMENT: _mood_improvement,
    RequirementType.TOTAL_TIME: _total_time,
}


def compute_metric(
    requirement: BadgeRequirement, data: UserActivityData, catalog: ActivityCatalog
) -> float:
    """Current value of the metric a requirement is measured against."""
    return _METRICS[requirement.type](requirement, data, catalog)


def compute_progress(metric: float, target: float) -> float:
    """Percentage towards ``target``, capped at 100."""
    if metric <= 0:
        return 0.0
    return round(min(100.0, 100.0 * metric / target), 1)


def evaluate(
    data: UserActivityData,
    catalog: ActivityCatalog,
    now: datetime | None = None,
) -> list[ActivityBadge]:
    """Refresh badge progress and unlock every badge whose target is met.

    Already unlocked badges are skipped entirely, so calling this twice with
    no new completions changes nothing. Returns the badges unlocked by this
    call, in catalog order.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    unlocked: list[ActivityBadge] = []
    for badge in data.badges:
        if badge.unlocked_at is not None:
            continue
        metric = compute_metric(badge.requirement, data, catalog)
        badge.progress = compute_progress(metric, badge.requirement.target)
        if metric >= badge.requirement.target:
            badge.unlocked_at = now
            badge.progress = 100.0
            unlocked.append(badge)
            logger.info("Badge unlocked: %s (metric=%s)", badge.id, metric)
    return unlocked


def sync_badges(data: UserActivityData, templates: list[ActivityBadge]) -> int:
    """Append catalog badges missing from a stored record.

    Existing badges, and their unlock state, are left untouched. Returns the
    number of badges added.
    """
    known = {b.id for b in data.badges}
    added = 0
    for template in templates:
        if template.id not in known:
            data.badges.append(template.model_copy(deep=True))
            added += 1
    return added
