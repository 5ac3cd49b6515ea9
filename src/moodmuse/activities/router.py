"""Activity tracking API endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response

from moodmuse.activities.catalog import ActivityCatalog
from moodmuse.activities.guides import ActivityGuide, build_guide
from moodmuse.activities.models import (
    ActivityCategory,
    ActivityPreferences,
    ActivityProgress,
    ActivityType,
)
from moodmuse.activities.schemas import (
    ActiveSeriesResponse,
    ActiveSessionResponse,
    ActivityListResponse,
    BadgesResponse,
    CompleteActivityRequest,
    CompleteActivityResponse,
    PreferencesUpdateRequest,
    ProgressResponse,
    SeriesListResponse,
    SessionHistoryResponse,
    StartActivityRequest,
    StartActivityResponse,
    StartSeriesRequest,
    StreakResponse,
    SyncResponse,
)
from moodmuse.activities.streaks import effective_streak, get_day_iso
from moodmuse.activities.tracker import ActivityTracker, TrackerRegistry

router = APIRouter(prefix="/api/v1", tags=["Activities"])

UserKey = Path(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.:@-]+$")


def get_registry(request: Request) -> TrackerRegistry:
    """The process-wide tracker registry attached at app creation."""
    return request.app.state.trackers


def get_catalog(registry: TrackerRegistry = Depends(get_registry)) -> ActivityCatalog:
    return registry.catalog


async def get_tracker(
    user_key: str = UserKey,
    registry: TrackerRegistry = Depends(get_registry),
) -> ActivityTracker:
    return await registry.get(user_key)


# ── Catalog ──


@router.get("/activities", response_model=ActivityListResponse)
async def list_activities(
    category: ActivityCategory | None = Query(None),
    catalog: ActivityCatalog = Depends(get_catalog),
):
    """List catalog activities, optionally filtered by category."""
    return ActivityListResponse(activities=catalog.list_activities(category))


@router.get("/activities/{activity_id}", response_model=ActivityType)
async def get_activity(activity_id: str, catalog: ActivityCatalog = Depends(get_catalog)):
    activity = catalog.get_activity_type(activity_id)
    if activity is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.get("/activities/{activity_id}/guide", response_model=ActivityGuide)
async def get_activity_guide(
    activity_id: str,
    duration: int | None = Query(None, ge=1, le=180),
    catalog: ActivityCatalog = Depends(get_catalog),
):
    """Step-by-step guide for an activity at the given duration (minutes)."""
    activity = catalog.get_activity_type(activity_id)
    if activity is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return build_guide(activity, duration)


@router.get("/series", response_model=SeriesListResponse)
async def list_series(catalog: ActivityCatalog = Depends(get_catalog)):
    return SeriesListResponse(series=catalog.list_series())


# ── Sessions ──


@router.post("/users/{user_key}/sessions", response_model=StartActivityResponse, status_code=201)
async def start_activity(
    body: StartActivityRequest,
    tracker: ActivityTracker = Depends(get_tracker),
):
    """Start an activity. Any earlier pending session is discarded."""
    session_id = await tracker.start_activity(
        body.activity_id, body.before_mood, body.customizations
    )
    return StartActivityResponse(session_id=session_id, session=tracker.get_active_session())


@router.get("/users/{user_key}/sessions/active", response_model=ActiveSessionResponse)
async def get_active_session(tracker: ActivityTracker = Depends(get_tracker)):
    return ActiveSessionResponse(session=tracker.get_active_session())


@router.delete("/users/{user_key}/sessions/active", status_code=204)
async def discard_active_session(tracker: ActivityTracker = Depends(get_tracker)):
    """Abandon the pending session."""
    await tracker.discard_active_session()
    return Response(status_code=204)


@router.post(
    "/users/{user_key}/sessions/{session_id}/complete",
    response_model=CompleteActivityResponse,
)
async def complete_activity(
    session_id: str,
    body: CompleteActivityRequest,
    tracker: ActivityTracker = Depends(get_tracker),
):
    """Complete the pending session with the after-activity mood."""
    result = await tracker.complete_activity(session_id, body.after_mood, body.notes)
    return CompleteActivityResponse(
        session=result.session,
        mood_delta=result.session.mood_delta,
        newly_unlocked=result.newly_unlocked,
    )


@router.get("/users/{user_key}/sessions", response_model=SessionHistoryResponse)
async def list_sessions(
    activity_id: str | None = Query(None),
    limit: int = Query(50, ge=1, le=500),
    tracker: ActivityTracker = Depends(get_tracker),
):
    """Completed sessions, newest first."""
    sessions = tracker.get_sessions(activity_id)
    newest_first = list(reversed(sessions))[:limit]
    return SessionHistoryResponse(sessions=newest_first, total=len(sessions))


# ── Progress ──


@router.get("/users/{user_key}/progress", response_model=ProgressResponse)
async def get_all_progress(tracker: ActivityTracker = Depends(get_tracker)):
    return ProgressResponse(progress=tracker.get_all_progress())


@router.get("/users/{user_key}/progress/{activity_id}", response_model=ActivityProgress)
async def get_progress(activity_id: str, tracker: ActivityTracker = Depends(get_tracker)):
    progress = tracker.get_progress(activity_id)
    if progress is None:
        raise HTTPException(status_code=404, detail="No progress recorded for this activity")
    return progress


@router.get("/users/{user_key}/streak", response_model=StreakResponse)
async def get_streak(tracker: ActivityTracker = Depends(get_tracker)):
    """Streak info, including the streak as seen today."""
    streak = tracker.get_streak()
    now = datetime.now(timezone.utc)
    return StreakResponse(
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_activity_date=streak.last_activity_date,
        total_active_days=streak.total_active_days,
        activities_per_day=streak.activities_per_day,
        is_active_today=streak.last_activity_date == get_day_iso(now),
        effective_streak=effective_streak(streak, now),
    )


@router.get("/users/{user_key}/badges", response_model=BadgesResponse)
async def get_badges(tracker: ActivityTracker = Depends(get_tracker)):
    badges = tracker.get_badges()
    return BadgesResponse(
        badges=badges,
        total_available=len(badges),
        total_unlocked=sum(1 for b in badges if b.unlocked_at is not None),
    )


# ── Preferences & series ──


@router.put("/users/{user_key}/preferences", response_model=ActivityPreferences)
async def update_preferences(
    body: PreferencesUpdateRequest,
    tracker: ActivityTracker = Depends(get_tracker),
):
    return await tracker.update_preferences(**body.model_dump(exclude_unset=True))


@router.post("/users/{user_key}/series", response_model=ActiveSeriesResponse, status_code=201)
async def start_series(body: StartSeriesRequest, tracker: ActivityTracker = Depends(get_tracker)):
    series = await tracker.start_series(body.series_id)
    return ActiveSeriesResponse(series=series)


@router.get("/users/{user_key}/series", response_model=ActiveSeriesResponse)
async def get_active_series(tracker: ActivityTracker = Depends(get_tracker)):
    return ActiveSeriesResponse(series=tracker.data.active_series)


@router.delete("/users/{user_key}/series", status_code=204)
async def abandon_series(tracker: ActivityTracker = Depends(get_tracker)):
    await tracker.abandon_series()
    return Response(status_code=204)


@router.post("/users/{user_key}/sync", response_model=SyncResponse)
async def sync(tracker: ActivityTracker = Depends(get_tracker)):
    """Retry saving a record whose last save failed."""
    saved = await tracker.sync()
    return SyncResponse(synced=not tracker.unsynced, saved=saved)
