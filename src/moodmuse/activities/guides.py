"""Guided activity content, one guide per activity kind.

Each kind turns an activity and a duration into an ordered list of steps the
client walks the user through. Tracking never looks at guides.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from moodmuse.activities.models import ActivityCategory, ActivityType


class ActivityKind(str, Enum):
    BREATHING = "breathing"
    GRATITUDE = "gratitude"
    GROUNDING = "grounding"
    PHYSICAL = "physical"
    TIMER = "timer"


class GuideStep(BaseModel):
    title: str
    prompt: str
    seconds: int


class ActivityGuide(BaseModel):
    activity_id: str
    kind: ActivityKind
    duration: int  # minutes
    steps: list[GuideStep]


class Guide:
    """Base guide: a single timed step covering the whole duration."""

    kind = ActivityKind.TIMER

    def steps(self, activity: ActivityType, duration: int) -> list[GuideStep]:
        return [GuideStep(title=activity.title, prompt=activity.description, seconds=duration * 60)]

    def plan(self, activity: ActivityType, duration: int | None = None) -> ActivityGuide:
        minutes = duration or activity.duration
        return ActivityGuide(
            activity_id=activity.id,
            kind=self.kind,
            duration=minutes,
            steps=self.steps(activity, minutes),
        )


class BreathingGuide(Guide):
    """Box breathing: four 4-second phases repeated until time runs out."""

    kind = ActivityKind.BREATHING
    PHASES = (
        ("Breathe in", 4),
        ("Hold", 4),
        ("Breathe out", 4),
        ("Hold", 4),
    )

    def steps(self, activity: ActivityType, duration: int) -> list[GuideStep]:
        cycle_seconds = sum(seconds for _, seconds in self.PHASES)
        cycles = max(1, (duration * 60) // cycle_seconds)
        steps = []
        for cycle in range(1, cycles + 1):
            for name, seconds in self.PHASES:
                steps.append(GuideStep(title=f"Cycle {cycle}", prompt=name, seconds=seconds))
        return steps


class GratitudeGuide(Guide):
    kind = ActivityKind.GRATITUDE
    PROMPTS = (
        "Something small that made you smile",
        "Someone who helped you recently",
        "Something about yourself you appreciate",
    )

    def steps(self, activity: ActivityType, duration: int) -> list[GuideStep]:
        seconds = (duration * 60) // len(self.PROMPTS)
        return [
            GuideStep(title=f"Gratitude {i}", prompt=prompt, seconds=seconds)
            for i, prompt in enumerate(self.PROMPTS, start=1)
        ]


class GroundingGuide(Guide):
    """5-4-3-2-1: one step per sense, counting down."""

    kind = ActivityKind.GROUNDING
    SENSES = (
        (5, "see"),
        (4, "touch"),
        (3, "hear"),
        (2, "smell"),
        (1, "taste"),
    )

    def steps(self, activity: ActivityType, duration: int) -> list[GuideStep]:
        seconds = (duration * 60) // len(self.SENSES)
        steps = []
        for count, sense in self.SENSES:
            noun = "things" if count > 1 else "thing"
            steps.append(GuideStep(
                title=f"{count} {noun}",
                prompt=f"Name {count} {noun} you can {sense}",
                seconds=seconds,
            ))
        return steps


class PhysicalGuide(Guide):
    """Warm-up, the activity's own instructions as the main block, cool-down."""

    kind = ActivityKind.PHYSICAL
    WARMUP_SECONDS = 120
    COOLDOWN_SECONDS = 120

    def steps(self, activity: ActivityType, duration: int) -> list[GuideStep]:
        total = duration * 60
        warmup = min(self.WARMUP_SECONDS, total // 4)
        cooldown = min(self.COOLDOWN_SECONDS, total // 4)
        main = total - warmup - cooldown
        moves = activity.instructions or [activity.description or activity.title]
        per_move = main // len(moves)
        steps = [GuideStep(title="Warm up", prompt="Loosen up with gentle movement", seconds=warmup)]
        steps += [GuideStep(title=activity.title, prompt=move, seconds=per_move) for move in moves]
        steps.append(GuideStep(title="Cool down", prompt="Slow down and stretch", seconds=cooldown))
        return steps


GUIDES: dict[ActivityKind, Guide] = {
    ActivityKind.BREATHING: BreathingGuide(),
    ActivityKind.GRATITUDE: GratitudeGuide(),
    ActivityKind.GROUNDING: GroundingGuide(),
    ActivityKind.PHYSICAL: PhysicalGuide(),
    ActivityKind.TIMER: Guide(),
}

_KIND_BY_ACTIVITY_ID: dict[str, ActivityKind] = {
    "breathing": ActivityKind.BREATHING,
    "gratitude": ActivityKind.GRATITUDE,
    "grounding": ActivityKind.GROUNDING,
}


def kind_for(activity: ActivityType) -> ActivityKind:
    """Activity kind for a catalog entry; physical activities share one guide."""
    kind = _KIND_BY_ACTIVITY_ID.get(activity.id)
    if kind is not None:
        return kind
    if activity.category == ActivityCategory.PHYSICAL:
        return ActivityKind.PHYSICAL
    return ActivityKind.TIMER


def build_guide(activity: ActivityType, duration: int | None = None) -> ActivityGuide:
    return GUIDES[kind_for(activity)].plan(activity, duration)
