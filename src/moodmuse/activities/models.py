"""Pydantic models for activity tracking state.

``UserActivityData`` is the single persisted root for a user. Everything
else in this module is either immutable reference data (``ActivityType``,
``ActivitySeries`` templates) or a part of that root.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActivityCategory(str, Enum):
    MINDFULNESS = "mindfulness"
    PHYSICAL = "physical"
    SOCIAL = "social"
    CREATIVE = "creative"


class ActivityDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class BadgeCategory(str, Enum):
    EXPLORER = "explorer"
    CONSISTENCY = "consistency"
    MASTERY = "mastery"
    IMPROVEMENT = "improvement"
    TIME = "time"


class RequirementType(str, Enum):
    ACTIVITIES_COMPLETED = "activities_completed"
    STREAK_DAYS = "streak_days"
    CATEGORY_VARIETY = "category_variety"
    MOOD_IMPROVEMENT = "mood_improvement"
    TOTAL_TIME = "total_time"


class SessionState(str, Enum):
    NONE = "none"
    PENDING = "pending"
    COMPLETED = "completed"


# --- Catalog ---


class ActivityType(BaseModel):
    """Catalog entry for a wellness activity."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    icon: str = ""
    category: ActivityCategory
    duration: int = Field(gt=0)  # minutes
    difficulty: ActivityDifficulty = ActivityDifficulty.EASY
    instructions: list[str] = []
    benefits: list[str] = []
    tips: list[str] = []


# --- Sessions ---


class MoodRating(BaseModel):
    before: int
    after: int | None = None
    timestamp: datetime


class ActivityCustomization(BaseModel):
    duration: int | None = Field(default=None, gt=0)
    difficulty: ActivityDifficulty | None = None
    reminders: bool = False
    focus_mode: bool = False


class ActivitySession(BaseModel):
    """One attempt at an activity.

    Created pending at start and finalized exactly once at completion.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    activity_id: str
    start_time: datetime
    end_time: datetime | None = None
    completed: bool = False
    mood_rating: MoodRating
    customizations: ActivityCustomization | None = None
    effectiveness: float | None = None
    notes: str | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.COMPLETED if self.completed else SessionState.PENDING

    @property
    def mood_delta(self) -> int | None:
        if self.mood_rating.after is None:
            return None
        return self.mood_rating.after - self.mood_rating.before


# --- Aggregates ---


class PersonalBest(BaseModel):
    longest_session: int = 0
    best_mood_improvement: int = 0


class ActivityProgress(BaseModel):
    activity_id: str
    total_completions: int = 0
    total_time: int = 0  # minutes
    average_effectiveness: float = 0.0
    last_completed: datetime | None = None
    streak_days: int = 0
    personal_best: PersonalBest = Field(default_factory=PersonalBest)


class ActivityStreak(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: str | None = None  # ISO date
    total_active_days: int = 0
    activities_per_day: dict[str, int] = {}


class BadgeRequirement(BaseModel):
    type: RequirementType
    target: float = Field(gt=0)
    category_filter: ActivityCategory | None = None


class ActivityBadge(BaseModel):
    id: str
    title: str
    description: str = ""
    icon: str = ""
    category: BadgeCategory
    requirement: BadgeRequirement
    unlocked_at: datetime | None = None
    progress: float | None = None  # 0-100


# --- Series ---


class SeriesDay(BaseModel):
    day: int = Field(ge=1)
    activity_id: str
    custom_instructions: str | None = None


class ActivitySeries(BaseModel):
    """A multi-day guided program. ``current_day`` is 1-based."""

    id: str
    title: str
    description: str = ""
    duration: int = Field(gt=0)  # days
    activities: list[SeriesDay]
    current_day: int | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def activity_for_day(self, day: int) -> SeriesDay | None:
        for entry in self.activities:
            if entry.day == day:
                return entry
        return None


# --- Root ---


_REMINDER_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ActivityPreferences(BaseModel):
    preferred_categories: list[ActivityCategory] = []
    preferred_difficulty: ActivityDifficulty = ActivityDifficulty.EASY
    default_duration: int = Field(default=10, gt=0)
    reminder_time: str | None = None  # HH:MM
    focus_mode_default: bool = False

    @field_validator("reminder_time")
    @classmethod
    def _check_reminder_time(cls, value: str | None) -> str | None:
        if value is not None and not _REMINDER_RE.match(value):
            raise ValueError("reminder_time must be HH:MM (24h)")
        return value


class UserActivityData(BaseModel):
    """Everything tracked for one user; persisted as a single document."""

    sessions: list[ActivitySession] = []
    active_session: ActivitySession | None = None
    progress: dict[str, ActivityProgress] = {}
    streaks: ActivityStreak = Field(default_factory=ActivityStreak)
    badges: list[ActivityBadge] = []
    preferences: ActivityPreferences = Field(default_factory=ActivityPreferences)
    active_series: ActivitySeries | None = None
