"""Mood delta and effectiveness scoring."""

from __future__ import annotations

import math

from moodmuse.activities.models import ActivityDifficulty

MOOD_MIN = 1
MOOD_MAX = 10
MOOD_NEUTRAL = 5
EFFECTIVENESS_MIN = 0.0
EFFECTIVENESS_MAX = 100.0
EFFECTIVENESS_NEUTRAL = 50.0

# Points per mood step; a full 1 -> 10 swing spans the whole 0-100 range.
_POINTS_PER_STEP = (EFFECTIVENESS_MAX - EFFECTIVENESS_NEUTRAL) / (MOOD_MAX - MOOD_MIN)

DIFFICULTY_WEIGHTS: dict[ActivityDifficulty, float] = {
    ActivityDifficulty.EASY: 1.0,
    ActivityDifficulty.MEDIUM: 1.1,
    ActivityDifficulty.HARD: 1.2,
}


def clamp_mood(value: float) -> int:
    """Round a mood rating and clamp it into 1-10.

    Infinities clamp to the nearest bound; NaN reads as the neutral rating.
    """
    if math.isnan(value):
        return MOOD_NEUTRAL
    return round(max(MOOD_MIN, min(MOOD_MAX, value)))


def mood_delta(before: float, after: float | None) -> int | None:
    """Signed mood change, or None while the after rating is missing."""
    if after is None:
        return None
    return clamp_mood(after) - clamp_mood(before)


def calculate_effectiveness(
    before: float,
    after: float,
    difficulty: ActivityDifficulty | None = None,
) -> float:
    """Score a before/after pair on 0-100, 50 meaning no change.

    Improvements on harder activities count slightly more. The result is
    monotonic in the delta and clipped at the range bounds.
    """
    delta = clamp_mood(after) - clamp_mood(before)
    points = delta * _POINTS_PER_STEP
    if delta > 0 and difficulty is not None:
        points *= DIFFICULTY_WEIGHTS[difficulty]
    score = EFFECTIVENESS_NEUTRAL + points
    return round(max(EFFECTIVENESS_MIN, min(EFFECTIVENESS_MAX, score)), 1)
