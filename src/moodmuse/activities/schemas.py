"""Pydantic request/response models for activity endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from moodmuse.activities.models import (
    ActivityBadge,
    ActivityCategory,
    ActivityCustomization,
    ActivityDifficulty,
    ActivityProgress,
    ActivitySeries,
    ActivitySession,
    ActivityType,
)


# --- Catalog ---


class ActivityListResponse(BaseModel):
    activities: list[ActivityType]


class SeriesListResponse(BaseModel):
    series: list[ActivitySeries]


# --- Sessions ---


class StartActivityRequest(BaseModel):
    activity_id: str
    before_mood: float
    customizations: ActivityCustomization | None = None


class StartActivityResponse(BaseModel):
    session_id: str
    session: ActivitySession | None = None


class CompleteActivityRequest(BaseModel):
    after_mood: float
    notes: str | None = Field(default=None, max_length=5000)


class CompleteActivityResponse(BaseModel):
    session: ActivitySession
    mood_delta: int | None
    newly_unlocked: list[ActivityBadge]


class ActiveSessionResponse(BaseModel):
    session: ActivitySession | None = None


class SessionHistoryResponse(BaseModel):
    sessions: list[ActivitySession]
    total: int


# --- Progress ---


class ProgressResponse(BaseModel):
    progress: dict[str, ActivityProgress]


class StreakResponse(BaseModel):
    current_streak: int
    longest_streak: int
    last_activity_date: str | None = None
    total_active_days: int
    activities_per_day: dict[str, int] = {}
    is_active_today: bool = False
    effective_streak: int = 0  # 0 once a day has been missed


class BadgesResponse(BaseModel):
    badges: list[ActivityBadge]
    total_available: int
    total_unlocked: int


# --- Preferences & series ---


class PreferencesUpdateRequest(BaseModel):
    preferred_categories: list[ActivityCategory] | None = None
    preferred_difficulty: ActivityDifficulty | None = None
    default_duration: int | None = None
    reminder_time: str | None = None
    focus_mode_default: bool | None = None


class StartSeriesRequest(BaseModel):
    series_id: str


class ActiveSeriesResponse(BaseModel):
    series: ActivitySeries | None = None


class SyncResponse(BaseModel):
    synced: bool
    saved: bool
