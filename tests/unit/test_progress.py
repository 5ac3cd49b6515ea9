"""Per-activity progress aggregation tests."""

import itertools

import pytest
from conftest import at

from moodmuse.activities.models import (
    ActivityCustomization,
    ActivityProgress,
    ActivitySession,
    MoodRating,
)
from moodmuse.activities.progress import effective_duration, record_completion, running_mean


def _completed(activity_id, before, after, effectiveness, end, duration=None):
    return ActivitySession(
        activity_id=activity_id,
        start_time=end,
        end_time=end,
        completed=True,
        mood_rating=MoodRating(before=before, after=after, timestamp=end),
        customizations=ActivityCustomization(duration=duration) if duration else None,
        effectiveness=effectiveness,
    )


class TestRunningMean:

    def test_first_value(self):
        assert running_mean(0.0, 1, 72.5) == 72.5

    def test_two_values(self):
        assert running_mean(80.0, 2, 60.0) == pytest.approx(70.0)

    @pytest.mark.parametrize("order", list(itertools.permutations([80.0, 60.0, 100.0])))
    def test_order_independent(self, order):
        average = 0.0
        for count, value in enumerate(order, start=1):
            average = running_mean(average, count, value)
        assert average == pytest.approx(80.0)


class TestEffectiveDuration:

    def test_catalog_default(self, catalog):
        walk = catalog.get_activity_type("walk")
        session = _completed("walk", 5, 6, 55.6, at(1))
        assert effective_duration(walk, session) == 15

    def test_customized_duration(self, catalog):
        walk = catalog.get_activity_type("walk")
        session = _completed("walk", 5, 6, 55.6, at(1), duration=40)
        assert effective_duration(walk, session) == 40


class TestRecordCompletion:

    def test_first_completion_creates_record(self, catalog):
        breathing = catalog.get_activity_type("breathing")
        progress_map: dict[str, ActivityProgress] = {}

        progress = record_completion(progress_map, breathing, _completed("breathing", 4, 8, 72.2, at(1)))

        assert progress_map["breathing"] is progress
        assert progress.total_completions == 1
        assert progress.total_time == 10
        assert progress.average_effectiveness == pytest.approx(72.2)
        assert progress.last_completed == at(1)
        assert progress.streak_days == 1
        assert progress.personal_best.longest_session == 10
        assert progress.personal_best.best_mood_improvement == 4

    def test_average_over_three_sessions(self, catalog):
        breathing = catalog.get_activity_type("breathing")
        progress_map: dict[str, ActivityProgress] = {}
        for day, score in zip((1, 2, 3), (80.0, 60.0, 100.0)):
            record_completion(progress_map, breathing, _completed("breathing", 5, 6, score, at(day)))

        progress = progress_map["breathing"]
        assert progress.total_completions == 3
        assert progress.total_time == 30
        assert progress.average_effectiveness == pytest.approx(80.0)

    def test_best_improvement_never_negative(self, catalog):
        walk = catalog.get_activity_type("walk")
        progress_map: dict[str, ActivityProgress] = {}
        record_completion(progress_map, walk, _completed("walk", 7, 5, 38.9, at(1)))
        assert progress_map["walk"].personal_best.best_mood_improvement == 0

    def test_personal_bests_are_maxima(self, catalog):
        walk = catalog.get_activity_type("walk")
        progress_map: dict[str, ActivityProgress] = {}
        record_completion(progress_map, walk, _completed("walk", 3, 8, 77.8, at(1), duration=45))
        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(2), duration=10))

        best = progress_map["walk"].personal_best
        assert best.longest_session == 45
        assert best.best_mood_improvement == 5
        assert progress_map["walk"].total_time == 55

    def test_consecutive_days_extend_activity_streak(self, catalog):
        walk = catalog.get_activity_type("walk")
        progress_map: dict[str, ActivityProgress] = {}
        for day in (1, 2, 3):
            record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(day)))
        assert progress_map["walk"].streak_days == 3

        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(6)))
        assert progress_map["walk"].streak_days == 1

    def test_same_day_keeps_activity_streak(self, catalog):
        walk = catalog.get_activity_type("walk")
        progress_map: dict[str, ActivityProgress] = {}
        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(1, hour=8)))
        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(1, hour=18)))
        assert progress_map["walk"].streak_days == 1
        assert progress_map["walk"].total_completions == 2

    def test_older_session_does_not_move_last_completed(self, catalog):
        walk = catalog.get_activity_type("walk")
        progress_map: dict[str, ActivityProgress] = {}
        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(10)))
        record_completion(progress_map, walk, _completed("walk", 5, 6, 55.6, at(4)))
        assert progress_map["walk"].last_completed == at(10)
        assert progress_map["walk"].total_completions == 2

    def test_records_are_per_activity(self, catalog):
        progress_map: dict[str, ActivityProgress] = {}
        record_completion(progress_map, catalog.get_activity_type("walk"), _completed("walk", 5, 6, 55.6, at(1)))
        record_completion(
            progress_map, catalog.get_activity_type("doodle"), _completed("doodle", 5, 6, 55.6, at(1))
        )
        assert set(progress_map) == {"walk", "doodle"}
        assert progress_map["walk"].total_completions == 1
        assert progress_map["doodle"].total_completions == 1
