"""Activity, badge and series reference data.

The catalog is read-only reference data. Badge definitions here are
templates: each user record carries its own copy with unlock state.
"""

from __future__ import annotations

from collections.abc import Iterable

from moodmuse.activities.models import (
    ActivityBadge,
    ActivityCategory,
    ActivitySeries,
    ActivityType,
)

ACTIVITY_SEED_DATA: list[dict] = [
    # Mindfulness
    {
        "id": "breathing",
        "title": "Box Breathing",
        "description": "Slow, even breaths to settle your nervous system",
        "icon": "wind",
        "category": "mindfulness",
        "duration": 10,
        "difficulty": "easy",
        "instructions": [
            "Sit comfortably and relax your shoulders",
            "Breathe in for four counts",
            "Hold for four counts",
            "Breathe out for four counts",
            "Hold for four counts and repeat",
        ],
        "benefits": ["Lowers heart rate", "Reduces anxiety", "Improves focus"],
        "tips": ["Breathe through your nose", "Let your belly rise, not your chest"],
    },
    {
        "id": "gratitude",
        "title": "Gratitude Practice",
        "description": "Write down three things you are grateful for",
        "icon": "heart",
        "category": "mindfulness",
        "duration": 10,
        "difficulty": "easy",
        "instructions": [
            "Think back over the last day",
            "Write three things you are grateful for",
            "For each one, note why it mattered",
        ],
        "benefits": ["Shifts attention to the positive", "Improves sleep"],
        "tips": ["Be specific", "Small things count"],
    },
    {
        "id": "grounding",
        "title": "5-4-3-2-1 Grounding",
        "description": "Use your senses to anchor yourself in the present",
        "icon": "anchor",
        "category": "mindfulness",
        "duration": 5,
        "difficulty": "easy",
        "instructions": [
            "Name five things you can see",
            "Name four things you can touch",
            "Name three things you can hear",
            "Name two things you can smell",
            "Name one thing you can taste",
        ],
        "benefits": ["Interrupts spiralling thoughts", "Eases panic"],
        "tips": ["Say each item out loud if you can"],
    },
    {
        "id": "body-scan",
        "title": "Body Scan",
        "description": "Move your attention slowly from head to toe",
        "icon": "scan",
        "category": "mindfulness",
        "duration": 15,
        "difficulty": "medium",
        "benefits": ["Releases physical tension", "Builds body awareness"],
    },
    # Physical
    {
        "id": "walk",
        "title": "Mindful Walk",
        "description": "A short walk paying attention to each step",
        "icon": "footprints",
        "category": "physical",
        "duration": 15,
        "difficulty": "easy",
        "benefits": ["Boosts mood", "Gets you outside"],
        "tips": ["Leave your phone in your pocket"],
    },
    {
        "id": "exercise",
        "title": "Quick Workout",
        "description": "Bodyweight circuit to raise your heart rate",
        "icon": "dumbbell",
        "category": "physical",
        "duration": 20,
        "difficulty": "hard",
        "instructions": [
            "Jumping jacks for 45 seconds",
            "Squats for 45 seconds",
            "Push-ups for 45 seconds",
            "Rest for 15 seconds between moves",
        ],
        "benefits": ["Releases endorphins", "Burns off stress"],
    },
    {
        "id": "movement",
        "title": "Gentle Stretching",
        "description": "Slow stretches for neck, shoulders and back",
        "icon": "stretch",
        "category": "physical",
        "duration": 10,
        "difficulty": "easy",
        "benefits": ["Loosens tight muscles", "Resets posture"],
    },
    # Social
    {
        "id": "reach-out",
        "title": "Reach Out",
        "description": "Send a message or call someone you care about",
        "icon": "phone",
        "category": "social",
        "duration": 10,
        "difficulty": "medium",
        "benefits": ["Strengthens connection", "Reduces loneliness"],
    },
    {
        "id": "kindness",
        "title": "Act of Kindness",
        "description": "Do one small kind thing for someone else",
        "icon": "gift",
        "category": "social",
        "duration": 15,
        "difficulty": "easy",
    },
    # Creative
    {
        "id": "doodle",
        "title": "Free Doodling",
        "description": "Draw whatever comes to mind without judging it",
        "icon": "pencil",
        "category": "creative",
        "duration": 10,
        "difficulty": "easy",
    },
    {
        "id": "music",
        "title": "Mood Playlist",
        "description": "Build a short playlist that matches how you want to feel",
        "icon": "music",
        "category": "creative",
        "duration": 15,
        "difficulty": "easy",
    },
]


BADGE_SEED_DATA: list[dict] = [
    # Explorer
    {
        "id": "first_steps",
        "title": "First Steps",
        "description": "Complete your first wellness activity",
        "icon": "sprout",
        "category": "explorer",
        "requirement": {"type": "activities_completed", "target": 1},
    },
    {
        "id": "getting_started",
        "title": "Getting Started",
        "description": "Complete 5 activities",
        "icon": "seedling",
        "category": "explorer",
        "requirement": {"type": "activities_completed", "target": 5},
    },
    {
        "id": "wellness_regular",
        "title": "Wellness Regular",
        "description": "Complete 25 activities",
        "icon": "leaf",
        "category": "explorer",
        "requirement": {"type": "activities_completed", "target": 25},
    },
    {
        "id": "well_rounded",
        "title": "Well Rounded",
        "description": "Try an activity from every category",
        "icon": "compass",
        "category": "explorer",
        "requirement": {"type": "category_variety", "target": 4},
    },
    # Consistency
    {
        "id": "streak_3",
        "title": "On a Roll",
        "description": "Be active 3 days in a row",
        "icon": "flame",
        "category": "consistency",
        "requirement": {"type": "streak_days", "target": 3},
    },
    {
        "id": "streak_7",
        "title": "Week of Wellness",
        "description": "Be active 7 days in a row",
        "icon": "calendar",
        "category": "consistency",
        "requirement": {"type": "streak_days", "target": 7},
    },
    {
        "id": "streak_30",
        "title": "Habit Formed",
        "description": "Be active 30 days in a row",
        "icon": "trophy",
        "category": "consistency",
        "requirement": {"type": "streak_days", "target": 30},
    },
    # Mastery
    {
        "id": "mindful_master",
        "title": "Mindful Master",
        "description": "Complete 10 mindfulness activities",
        "icon": "lotus",
        "category": "mastery",
        "requirement": {"type": "activities_completed", "target": 10, "category_filter": "mindfulness"},
    },
    {
        "id": "body_in_motion",
        "title": "Body in Motion",
        "description": "Complete 10 physical activities",
        "icon": "running",
        "category": "mastery",
        "requirement": {"type": "activities_completed", "target": 10, "category_filter": "physical"},
    },
    # Improvement
    {
        "id": "mood_lifter",
        "title": "Mood Lifter",
        "description": "Improve your mood by 3 points in one session",
        "icon": "sun",
        "category": "improvement",
        "requirement": {"type": "mood_improvement", "target": 3},
    },
    {
        "id": "turnaround",
        "title": "Turnaround",
        "description": "Improve your mood by 5 points in one session",
        "icon": "rainbow",
        "category": "improvement",
        "requirement": {"type": "mood_improvement", "target": 5},
    },
    # Time
    {
        "id": "hour_of_calm",
        "title": "Hour of Calm",
        "description": "Spend 60 minutes on wellness activities",
        "icon": "hourglass",
        "category": "time",
        "requirement": {"type": "total_time", "target": 60},
    },
    {
        "id": "ten_hours",
        "title": "Ten Hours In",
        "description": "Spend 600 minutes on wellness activities",
        "icon": "clock",
        "category": "time",
        "requirement": {"type": "total_time", "target": 600},
    },
]


SERIES_SEED_DATA: list[dict] = [
    {
        "id": "calm-start",
        "title": "Seven Days of Calm",
        "description": "A gentle week-long introduction to daily mindfulness",
        "duration": 7,
        "activities": [
            {"day": 1, "activity_id": "breathing"},
            {"day": 2, "activity_id": "gratitude"},
            {"day": 3, "activity_id": "grounding"},
            {"day": 4, "activity_id": "walk", "custom_instructions": "Notice five sounds on your walk"},
            {"day": 5, "activity_id": "body-scan"},
            {"day": 6, "activity_id": "reach-out"},
            {"day": 7, "activity_id": "gratitude", "custom_instructions": "Look back over the whole week"},
        ],
    },
    {
        "id": "move-more",
        "title": "Move More",
        "description": "Three days to get your body moving again",
        "duration": 3,
        "activities": [
            {"day": 1, "activity_id": "movement"},
            {"day": 2, "activity_id": "walk"},
            {"day": 3, "activity_id": "exercise"},
        ],
    },
]


class ActivityCatalog:
    """Read-only lookup over activity, badge and series definitions."""

    def __init__(
        self,
        activities: Iterable[ActivityType],
        badges: Iterable[ActivityBadge] = (),
        series: Iterable[ActivitySeries] = (),
    ) -> None:
        self._activities = {a.id: a for a in activities}
        self._badges = list(badges)
        self._series = {s.id: s for s in series}

    @classmethod
    def default(cls) -> ActivityCatalog:
        """Catalog built from the bundled seed data."""
        return cls(
            activities=[ActivityType.model_validate(a) for a in ACTIVITY_SEED_DATA],
            badges=[ActivityBadge.model_validate(b) for b in BADGE_SEED_DATA],
            series=[ActivitySeries.model_validate(s) for s in SERIES_SEED_DATA],
        )

    def get_activity_type(self, activity_id: str) -> ActivityType | None:
        return self._activities.get(activity_id)

    def list_activities(self, category: ActivityCategory | None = None) -> list[ActivityType]:
        activities = list(self._activities.values())
        if category is not None:
            activities = [a for a in activities if a.category == category]
        return activities

    def badge_templates(self) -> list[ActivityBadge]:
        """Fresh, locked copies of every badge definition."""
        return [b.model_copy(deep=True) for b in self._badges]

    def get_series(self, series_id: str) -> ActivitySeries | None:
        series = self._series.get(series_id)
        return series.model_copy(deep=True) if series is not None else None

    def list_series(self) -> list[ActivitySeries]:
        return [s.model_copy(deep=True) for s in self._series.values()]
