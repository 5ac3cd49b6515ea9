"""Journaling prompt selection tests."""

import random

from moodmuse.reflection.prompts import PROMPTS, PromptCategory, pick_prompts


class TestPickPrompts:

    def test_default_count(self):
        assert len(pick_prompts()) == 5

    def test_distinct(self):
        picked = pick_prompts(10)
        assert len({p.id for p in picked}) == 10

    def test_count_capped_at_pool(self):
        assert len(pick_prompts(50)) == len(PROMPTS)

    def test_category_filter(self):
        picked = pick_prompts(10, category=PromptCategory.WORK)
        assert picked
        assert all(p.category == PromptCategory.WORK for p in picked)

    def test_seeded_rng_is_repeatable(self):
        first = pick_prompts(3, rng=random.Random(7))
        second = pick_prompts(3, rng=random.Random(7))
        assert [p.id for p in first] == [p.id for p in second]
