"""Journaling prompts."""

from __future__ import annotations

import random
from enum import Enum

from pydantic import BaseModel


class PromptCategory(str, Enum):
    GRATITUDE = "Gratitude"
    ANXIETY = "Anxiety"
    SELF_WORTH = "Self-worth"
    RELATIONSHIPS = "Relationships"
    WORK = "Work"


class ReflectionPrompt(BaseModel):
    id: str
    text: str
    category: PromptCategory
    emoji: str


PROMPTS: list[ReflectionPrompt] = [
    ReflectionPrompt(id="1", text="What gave you joy today?", category=PromptCategory.GRATITUDE, emoji="✨"),
    ReflectionPrompt(id="2", text="Who challenged your patience today?", category=PromptCategory.RELATIONSHIPS, emoji="\U0001f91d"),
    ReflectionPrompt(id="3", text="What are you most grateful for right now?", category=PromptCategory.GRATITUDE, emoji="\U0001f64f"),
    ReflectionPrompt(id="4", text="What worry feels heaviest on your mind?", category=PromptCategory.ANXIETY, emoji="\U0001f4ad"),
    ReflectionPrompt(id="5", text="How did you show kindness to yourself today?", category=PromptCategory.SELF_WORTH, emoji="\U0001f49d"),
    ReflectionPrompt(id="6", text="What conversation do you keep replaying?", category=PromptCategory.RELATIONSHIPS, emoji="\U0001f4ac"),
    ReflectionPrompt(id="7", text="What accomplishment made you proud recently?", category=PromptCategory.WORK, emoji="\U0001f3af"),
    ReflectionPrompt(id="8", text="What fear is holding you back right now?", category=PromptCategory.ANXIETY, emoji="\U0001f30a"),
    ReflectionPrompt(id="9", text="How has someone surprised you lately?", category=PromptCategory.RELATIONSHIPS, emoji="\U0001f381"),
    ReflectionPrompt(id="10", text="What quality do you admire most about yourself?", category=PromptCategory.SELF_WORTH, emoji="⭐"),
    ReflectionPrompt(id="11", text="What task are you avoiding and why?", category=PromptCategory.WORK, emoji="\U0001f504"),
    ReflectionPrompt(id="12", text="What small moment brought you peace today?", category=PromptCategory.GRATITUDE, emoji="\U0001f54a️"),
]

DEFAULT_PROMPT_COUNT = 5


def pick_prompts(
    count: int = DEFAULT_PROMPT_COUNT,
    category: PromptCategory | None = None,
    rng: random.Random | None = None,
) -> list[ReflectionPrompt]:
    """A random selection of distinct prompts."""
    pool = [p for p in PROMPTS if category is None or p.category == category]
    rng = rng or random.Random()
    return rng.sample(pool, min(count, len(pool)))
