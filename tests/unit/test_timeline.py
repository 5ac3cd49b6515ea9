"""Reflection timeline tests."""

from datetime import datetime, timezone

import pytest

from moodmuse.reflection.timeline import (
    ChatMessage,
    MessageRole,
    build_timeline,
    detect_mood,
    make_snippet,
)


def _msg(id, content, role=MessageRole.USER):
    return ChatMessage(
        id=id, role=role, content=content, timestamp=datetime(2026, 3, 1, tzinfo=timezone.utc)
    )


class TestDetectMood:

    @pytest.mark.parametrize("text,intensity", [
        ("I feel so happy today", 4),
        ("Feeling a bit down", 2),
        ("I was furious at work", 1),
        ("Worried about tomorrow", 2),
        ("So grateful for my friends", 5),
        ("Went to the shop", 3),
    ])
    def test_keywords(self, text, intensity):
        assert detect_mood(text)[1] == intensity

    def test_first_match_wins(self):
        # "happy" is checked before "sad"
        assert detect_mood("happy but also sad") == detect_mood("happy")

    def test_case_insensitive(self):
        assert detect_mood("HAPPY") == detect_mood("happy")


class TestMakeSnippet:

    def test_short_text_unchanged(self):
        assert make_snippet("one two three") == "one two three"

    def test_long_text_truncated(self):
        text = " ".join(f"w{i}" for i in range(20))
        snippet = make_snippet(text)
        assert snippet.endswith("...")
        assert snippet[:-3].split(" ") == [f"w{i}" for i in range(15)]


class TestBuildTimeline:

    def test_only_user_messages(self):
        timeline = build_timeline([
            _msg("1", "I am happy"),
            _msg("2", "That is lovely to hear", MessageRole.ASSISTANT),
            _msg("3", "but work made me sad"),
        ])
        assert [e.id for e in timeline.entries] == ["1", "3"]

    def test_pinned(self):
        timeline = build_timeline([_msg("1", "happy"), _msg("2", "sad")], pinned_ids={"2"})
        assert [e.id for e in timeline.pinned] == ["2"]
        assert timeline.entries[1].is_pinned is True
        assert timeline.entries[0].is_pinned is False

    def test_emotion_counts(self):
        timeline = build_timeline([
            _msg("1", "happy"), _msg("2", "happy again"), _msg("3", "sad"),
        ])
        assert timeline.emotions[0].count == 2
        assert sum(e.count for e in timeline.emotions) == 3

    def test_empty(self):
        timeline = build_timeline([])
        assert timeline.entries == []
        assert timeline.emotions == []
