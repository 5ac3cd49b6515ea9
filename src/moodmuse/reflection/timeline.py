"""Reflection timeline built from a journaling conversation."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from enum import Enum

from pydantic import BaseModel

SNIPPET_WORDS = 15
TOP_EMOTIONS = 5


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    id: str
    role: MessageRole
    content: str
    timestamp: datetime


class TimelineEntry(BaseModel):
    id: str
    content: str
    timestamp: datetime
    mood: str
    intensity: int  # 1-5
    snippet: str
    is_pinned: bool = False


class EmotionCount(BaseModel):
    mood: str
    count: int


class Timeline(BaseModel):
    entries: list[TimelineEntry]
    pinned: list[TimelineEntry]
    emotions: list[EmotionCount]


NEUTRAL_MOOD = ("\U0001f610", 3)

# First match wins, so order matters.
MOOD_KEYWORDS: list[tuple[tuple[str, ...], str, int]] = [
    (("happy", "joy", "great"), "\U0001f60a", 4),
    (("sad", "down", "upset"), "\U0001f614", 2),
    (("angry", "mad", "furious"), "\U0001f621", 1),
    (("anxious", "worried", "stress"), "\U0001f61f", 2),
    (("love", "grateful", "blessed"), "\U0001f970", 5),
]


def detect_mood(text: str) -> tuple[str, int]:
    """Keyword mood guess as (emoji, intensity 1-5)."""
    lowered = text.lower()
    for keywords, mood, intensity in MOOD_KEYWORDS:
        if any(k in lowered for k in keywords):
            return mood, intensity
    return NEUTRAL_MOOD


def make_snippet(text: str, max_words: int = SNIPPET_WORDS) -> str:
    words = text.split(" ")
    if len(words) > max_words:
        return " ".join(words[:max_words]) + "..."
    return text


def build_timeline(messages: list[ChatMessage], pinned_ids: set[str] | None = None) -> Timeline:
    """Turn the user's messages into timeline entries.

    Assistant replies are skipped. Pinned entries are also listed separately
    so clients can show them first.
    """
    pinned_ids = pinned_ids or set()
    entries = []
    for message in messages:
        if message.role != MessageRole.USER:
            continue
        mood, intensity = detect_mood(message.content)
        entries.append(TimelineEntry(
            id=message.id,
            content=message.content,
            timestamp=message.timestamp,
            mood=mood,
            intensity=intensity,
            snippet=make_snippet(message.content),
            is_pinned=message.id in pinned_ids,
        ))

    counts = Counter(e.mood for e in entries)
    return Timeline(
        entries=entries,
        pinned=[e for e in entries if e.is_pinned],
        emotions=[EmotionCount(mood=m, count=c) for m, c in counts.most_common(TOP_EMOTIONS)],
    )
