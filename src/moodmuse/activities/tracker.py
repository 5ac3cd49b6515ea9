"""Activity session lifecycle and everything a completion updates."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from moodmuse.activities.badges import evaluate, sync_badges
from moodmuse.activities.catalog import ActivityCatalog
from moodmuse.activities.errors import (
    PersistenceError,
    UnknownActivityError,
    UnknownSeriesError,
    UnknownSessionError,
    ValidationError,
)
from moodmuse.activities.events import BadgePublisher
from moodmuse.activities.models import (
    ActivityBadge,
    ActivityCustomization,
    ActivityPreferences,
    ActivityProgress,
    ActivitySeries,
    ActivitySession,
    ActivityStreak,
    ActivityType,
    MoodRating,
    SessionState,
    UserActivityData,
)
from moodmuse.activities.mood import calculate_effectiveness, clamp_mood
from moodmuse.activities.progress import record_completion
from moodmuse.activities.series import advance_series, start_series
from moodmuse.activities.store import ActivityStore
from moodmuse.activities.streaks import record_activity

logger = structlog.get_logger()

VALID_TRANSITIONS: dict[SessionState, list[SessionState]] = {
    SessionState.NONE: [SessionState.PENDING],
    SessionState.PENDING: [SessionState.COMPLETED, SessionState.NONE],
    SessionState.COMPLETED: [],
}


def validate_transition(current: SessionState, target: SessionState) -> None:
    """Validate a session state transition. Raises ValueError if invalid."""
    valid = VALID_TRANSITIONS.get(current, [])
    if target not in valid:
        raise ValueError(
            f"Invalid transition: {current.value} -> {target.value}. "
            f"Valid transitions: {[s.value for s in valid]}"
        )


@dataclass
class CompletionResult:
    session: ActivitySession
    newly_unlocked: list[ActivityBadge] = field(default_factory=list)


class ActivityTracker:
    """Owns one user's activity data and every write to it.

    Mutations are applied to the in-memory record first; the save that
    follows is the only suspension point. When a save fails the in-memory
    record stays authoritative and the tracker is flagged ``unsynced`` until
    :meth:`sync` succeeds.
    """

    def __init__(
        self,
        user_key: str,
        data: UserActivityData,
        store: ActivityStore,
        catalog: ActivityCatalog,
        publisher: BadgePublisher | None = None,
    ) -> None:
        self.user_key = user_key
        self.data = data
        self.store = store
        self.catalog = catalog
        self.publisher = publisher
        self.unsynced = False

    @classmethod
    async def load(
        cls,
        store: ActivityStore,
        user_key: str,
        catalog: ActivityCatalog,
        publisher: BadgePublisher | None = None,
    ) -> ActivityTracker:
        """Load a user's record, or start a fresh one with every badge locked."""
        data = await store.load(user_key)
        if data is None:
            data = UserActivityData(badges=catalog.badge_templates())
        else:
            added = sync_badges(data, catalog.badge_templates())
            if added:
                logger.info("badges_synced", user_key=user_key, added=added)
        return cls(user_key, data, store, catalog, publisher)

    # ── Persistence ──

    async def _persist(self) -> None:
        try:
            await self.store.save(self.user_key, self.data)
        except PersistenceError:
            self.unsynced = True
            logger.warning("activity_data_unsynced", user_key=self.user_key)
            raise
        self.unsynced = False

    async def sync(self) -> bool:
        """Retry saving the in-memory record. Returns True if a save was needed."""
        if not self.unsynced:
            return False
        await self._persist()
        logger.info("activity_data_resynced", user_key=self.user_key)
        return True

    def _require_activity(self, activity_id: str) -> ActivityType:
        activity = self.catalog.get_activity_type(activity_id)
        if activity is None:
            raise UnknownActivityError(activity_id)
        return activity

    # ── Lifecycle ──

    async def start_activity(
        self,
        activity_id: str,
        before_mood: float,
        customizations: ActivityCustomization | None = None,
        now: datetime | None = None,
    ) -> str:
        """Open a pending session and return its id.

        Out-of-range moods are clamped. A pending session left over from an
        earlier start is discarded, so at most one session is ever in flight.
        """
        self._require_activity(activity_id)
        if now is None:
            now = datetime.now(timezone.utc)
        if customizations is None:
            customizations = ActivityCustomization(
                focus_mode=self.data.preferences.focus_mode_default,
            )

        previous = self.data.active_session
        if previous is not None:
            validate_transition(previous.state, SessionState.NONE)
            logger.info(
                "pending_session_discarded",
                user_key=self.user_key,
                session_id=previous.id,
                activity_id=previous.activity_id,
            )

        validate_transition(SessionState.NONE, SessionState.PENDING)
        session = ActivitySession(
            activity_id=activity_id,
            start_time=now,
            mood_rating=MoodRating(before=clamp_mood(before_mood), timestamp=now),
            customizations=customizations,
        )
        self.data.active_session = session
        logger.info(
            "activity_started",
            user_key=self.user_key,
            session_id=session.id,
            activity_id=activity_id,
            before=session.mood_rating.before,
        )

        await self._persist()
        return session.id

    async def complete_activity(
        self,
        session_id: str,
        after_mood: float,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> CompletionResult:
        """Finalize the pending session and fold it into every aggregate.

        1. Score effectiveness from the before/after moods
        2. Move the session into history
        3. Update the daily streak and the activity's progress
        4. Advance the active series if this was today's activity
        5. Unlock badges, publish them, persist the record

        Raises UnknownSessionError, leaving the record untouched, if
        ``session_id`` is not the pending session.
        """
        pending = self.data.active_session
        if pending is None or pending.id != session_id:
            logger.info("unknown_session", user_key=self.user_key, session_id=session_id)
            raise UnknownSessionError(session_id)
        activity = self._require_activity(pending.activity_id)
        validate_transition(pending.state, SessionState.COMPLETED)

        if now is None:
            now = datetime.now(timezone.utc)
        difficulty = activity.difficulty
        if pending.customizations is not None and pending.customizations.difficulty is not None:
            difficulty = pending.customizations.difficulty

        session = pending.model_copy(deep=True)
        session.mood_rating.after = clamp_mood(after_mood)
        session.end_time = now
        session.effectiveness = calculate_effectiveness(
            session.mood_rating.before, session.mood_rating.after, difficulty
        )
        session.notes = notes or None
        session.completed = True

        data = self.data
        data.active_session = None
        data.sessions.append(session)
        record_activity(data.streaks, now)
        record_completion(data.progress, activity, session)
        if data.active_series is not None:
            advance_series(data.active_series, session)
        unlocked = evaluate(data, self.catalog, now)

        logger.info(
            "activity_completed",
            user_key=self.user_key,
            session_id=session.id,
            activity_id=activity.id,
            delta=session.mood_delta,
            effectiveness=session.effectiveness,
            current_streak=data.streaks.current_streak,
            unlocked=[b.id for b in unlocked],
        )

        if self.publisher is not None:
            await self.publisher.publish_unlocked(self.user_key, unlocked)
        await self._persist()
        return CompletionResult(session=session, newly_unlocked=unlocked)

    async def discard_active_session(self) -> bool:
        """Drop the pending session, if any. History is untouched."""
        pending = self.data.active_session
        if pending is None:
            return False
        validate_transition(pending.state, SessionState.NONE)
        self.data.active_session = None
        logger.info("pending_session_discarded", user_key=self.user_key, session_id=pending.id)
        await self._persist()
        return True

    # ── Queries ──

    def get_active_session(self) -> ActivitySession | None:
        return self.data.active_session

    def get_sessions(self, activity_id: str | None = None) -> list[ActivitySession]:
        if activity_id is None:
            return list(self.data.sessions)
        return [s for s in self.data.sessions if s.activity_id == activity_id]

    def get_progress(self, activity_id: str) -> ActivityProgress | None:
        return self.data.progress.get(activity_id)

    def get_all_progress(self) -> dict[str, ActivityProgress]:
        return dict(self.data.progress)

    def get_streak(self) -> ActivityStreak:
        return self.data.streaks

    def get_badges(self) -> list[ActivityBadge]:
        return list(self.data.badges)

    # ── Preferences & series ──

    async def update_preferences(self, **changes: Any) -> ActivityPreferences:
        merged = {**self.data.preferences.model_dump(), **changes}
        try:
            preferences = ActivityPreferences.model_validate(merged)
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc
        self.data.preferences = preferences
        await self._persist()
        return preferences

    async def start_series(self, series_id: str, now: datetime | None = None) -> ActivitySeries:
        """Begin a guided series at day 1, replacing any active series."""
        series = self.catalog.get_series(series_id)
        if series is None:
            raise UnknownSeriesError(series_id)
        self.data.active_series = start_series(series, now)
        logger.info("series_started", user_key=self.user_key, series_id=series_id)
        await self._persist()
        return self.data.active_series

    async def abandon_series(self) -> bool:
        if self.data.active_series is None:
            return False
        self.data.active_series = None
        await self._persist()
        return True


class TrackerRegistry:
    """Process-wide map of user key to tracker.

    Holds at most ``max_trackers`` entries in least-recently-used order.
    Only synced trackers are evicted; an unsynced one stays until ``sync``
    succeeds so its pending changes are not lost.
    """

    def __init__(
        self,
        store: ActivityStore,
        catalog: ActivityCatalog,
        publisher: BadgePublisher | None = None,
        max_trackers: int = 1000,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.publisher = publisher
        self.max_trackers = max(1, max_trackers)
        self._trackers: OrderedDict[str, ActivityTracker] = OrderedDict()

    async def get(self, user_key: str) -> ActivityTracker:
        tracker = self._trackers.get(user_key)
        if tracker is None:
            loaded = await ActivityTracker.load(self.store, user_key, self.catalog, self.publisher)
            # Another request may have loaded the same key while we awaited.
            tracker = self._trackers.setdefault(user_key, loaded)
        self._trackers.move_to_end(user_key)
        self._evict()
        return tracker

    def _evict(self) -> None:
        excess = len(self._trackers) - self.max_trackers
        if excess <= 0:
            return
        # The newest entry is the one just requested.
        candidates = [key for key, tracker in list(self._trackers.items())[:-1] if not tracker.unsynced]
        for key in candidates[:excess]:
            del self._trackers[key]
            logger.debug("activity_tracker_evicted", user_key=key)

    def __len__(self) -> int:
        return len(self._trackers)

    def __contains__(self, user_key: str) -> bool:
        return user_key in self._trackers

    def unsynced(self) -> list[str]:
        return [key for key, tracker in self._trackers.items() if tracker.unsynced]

    def clear(self) -> None:
        self._trackers.clear()
