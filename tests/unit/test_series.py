"""Guided series tests."""

from conftest import at

from moodmuse.activities.models import ActivitySession, MoodRating
from moodmuse.activities.series import advance_series, is_series_complete, start_series


def _done(activity_id, when):
    return ActivitySession(
        activity_id=activity_id,
        start_time=when,
        end_time=when,
        completed=True,
        mood_rating=MoodRating(before=5, after=6, timestamp=when),
    )


class TestStartSeries:

    def test_starts_at_day_one(self, catalog):
        series = start_series(catalog.get_series("move-more"), at(1))
        assert series.current_day == 1
        assert series.started_at == at(1)
        assert not is_series_complete(series)

    def test_catalog_copy_untouched(self, catalog):
        start_series(catalog.get_series("move-more"), at(1))
        assert catalog.get_series("move-more").current_day is None


class TestAdvanceSeries:

    def test_matching_activity_advances(self, catalog):
        series = start_series(catalog.get_series("move-more"), at(1))
        assert advance_series(series, _done("movement", at(1)))
        assert series.current_day == 2

    def test_other_activity_ignored(self, catalog):
        series = start_series(catalog.get_series("move-more"), at(1))
        assert not advance_series(series, _done("doodle", at(1)))
        assert series.current_day == 1

    def test_last_day_completes(self, catalog):
        series = start_series(catalog.get_series("move-more"), at(1))
        for day, activity_id in enumerate(("movement", "walk", "exercise"), start=1):
            assert advance_series(series, _done(activity_id, at(day)))

        assert is_series_complete(series)
        assert series.completed_at == at(3)
        assert series.current_day == 3

    def test_completed_series_is_frozen(self, catalog):
        series = start_series(catalog.get_series("move-more"), at(1))
        for day, activity_id in enumerate(("movement", "walk", "exercise"), start=1):
            advance_series(series, _done(activity_id, at(day)))

        assert not advance_series(series, _done("exercise", at(4)))
        assert series.completed_at == at(3)

    def test_not_started(self, catalog):
        series = catalog.get_series("calm-start")
        assert not advance_series(series, _done("breathing", at(1)))
