"""Tests for the aggregation engine."""

from datetime import date

import pytest

from liftledger.analytics.aggregation import (
    calculate_total_calisthenics_reps,
    calculate_total_cardio_distance,
    calculate_total_cardio_duration,
    calculate_total_reps,
    calculate_total_volume,
    filter_records_by_period,
    find_favorite_exercise,
    get_analytics_summary,
    get_cardio_analytics,
    get_distance_data_points,
    get_last_exercise_data,
    get_strength_analytics,
    get_volume_data_points,
)
from liftledger.models import CatalogExercise, TimePeriod

from conftest import calisthenics, cardio, day, days_ago, strength, workout


class TestTotals:
    """Tests for the total calculations."""

    def test_volume_counts_strength_only(self, mixed_days):
        # 5x100 + 3x120 on the first day, 5x100 on the second
        assert calculate_total_volume(mixed_days) == 1360

    def test_total_reps_counts_strength_and_calisthenics(self, mixed_days):
        assert calculate_total_reps(mixed_days) == 5 + 3 + 10 + 8 + 5

    def test_cardio_totals(self, mixed_days):
        assert calculate_total_cardio_distance(mixed_days) == 5
        assert calculate_total_cardio_duration(mixed_days) == 1800

    def test_cardio_without_distance_adds_zero(self):
        records = [day("2026-03-15", [cardio("bike", duration=1200)])]

        assert calculate_total_cardio_distance(records) == 0
        assert calculate_total_cardio_duration(records) == 1200

    def test_calisthenics_reps(self, mixed_days):
        assert calculate_total_calisthenics_reps(mixed_days) == 18

    def test_empty_input(self):
        assert calculate_total_volume([]) == 0
        assert calculate_total_reps([]) == 0
        assert calculate_total_cardio_distance([]) == 0

    def test_works_on_workouts(self):
        records = [workout("2026-03-15", [strength("bench", [(5, 100)])])]

        assert calculate_total_volume(records) == 500


class TestFavoriteExercise:
    """Tests for find_favorite_exercise."""

    def test_most_frequent_wins(self, mixed_days):
        assert find_favorite_exercise(mixed_days) == "Bench Press"

    def test_first_seen_wins_ties(self):
        records = [day("2026-03-14", [strength("row", [(5, 60)]), strength("bench", [(5, 100)])])]

        assert find_favorite_exercise(records) == "row"

    def test_catalog_name_preferred(self, mixed_days):
        catalog = {"bench": CatalogExercise(id="bench", name="Barbell Bench Press")}

        assert find_favorite_exercise(mixed_days, catalog) == "Barbell Bench Press"

    def test_latest_logged_name_used_without_catalog(self):
        records = [
            day("2026-03-14", [strength("bench", [(5, 100)], name="Bench (new name)")]),
            day("2026-03-01", [strength("bench", [(5, 100)], name="Bench (old name)")]),
        ]

        assert find_favorite_exercise(records) == "Bench (new name)"

    def test_invalid_dates_never_supply_the_name(self):
        records = [
            day("2026-03-14", [strength("bench", [(5, 100)], name="Bench Press")]),
            day("not-a-date", [strength("bench", [(5, 100)], name="old name")]),
        ]

        assert find_favorite_exercise(records) == "Bench Press"

    def test_none_when_nothing_logged(self):
        assert find_favorite_exercise([]) is None
        assert find_favorite_exercise([day("2026-03-14", is_rest_day=True)]) is None


class TestTrendDataPoints:
    """Tests for volume and distance trend buckets."""

    def test_month_buckets_ascending(self, mixed_days):
        records = mixed_days + [day("2026-02-10", [strength("squat", [(1, 100)])])]

        points = get_volume_data_points(records, TimePeriod.MONTH)

        assert [(p.date, p.volume, p.workout_count) for p in points] == [
            ("2026-02-01", 100, 1),
            ("2026-03-01", 1360, 2),
        ]

    def test_week_buckets_start_on_monday(self):
        records = [
            day("2026-03-08", [strength("bench", [(1, 100)])]),  # Sunday
            day("2026-03-09", [strength("bench", [(1, 50)])]),   # Monday
            day("2026-03-15", [strength("bench", [(1, 25)])]),   # Sunday
        ]

        points = get_volume_data_points(records, "week")

        assert [(p.date, p.volume) for p in points] == [("2026-03-02", 100), ("2026-03-09", 75)]

    def test_year_and_exact_buckets(self, mixed_days):
        assert [p.date for p in get_volume_data_points(mixed_days, "year")] == ["2026-01-01"]
        assert [p.date for p in get_volume_data_points(mixed_days, "all")] == ["2026-03-13", "2026-03-14"]

    def test_invalid_dates_are_skipped(self, mixed_days):
        records = mixed_days + [day("not-a-date", [strength("bench", [(1, 1000)])])]

        points = get_volume_data_points(records, "month")

        assert sum(p.volume for p in points) == 1360

    def test_distance_points(self, mixed_days):
        points = get_distance_data_points(mixed_days, "month")

        assert len(points) == 1
        assert points[0].distance == 5
        assert points[0].duration == 1800
        assert points[0].workout_count == 2


class TestFilterByPeriod:
    """Tests for filter_records_by_period."""

    def test_week_is_inclusive(self, today):
        records = [day(days_ago(7)), day(days_ago(8)), day(days_ago(0))]

        kept = filter_records_by_period(records, TimePeriod.WEEK, today=today)

        assert [r.date for r in kept] == [days_ago(7), days_ago(0)]

    def test_month_clamps_to_month_length(self):
        records = [day("2026-02-27"), day("2026-02-28"), day("2026-03-31")]

        kept = filter_records_by_period(records, "month", today=date(2026, 3, 31))

        assert [r.date for r in kept] == ["2026-02-28", "2026-03-31"]

    def test_year(self, today):
        records = [day("2025-03-15"), day("2025-03-14")]

        kept = filter_records_by_period(records, "year", today=today)

        assert [r.date for r in kept] == ["2025-03-15"]

    def test_all_returns_everything(self, today):
        records = [day("2020-01-01"), day("garbage")]

        assert filter_records_by_period(records, "all", today=today) == records

    def test_invalid_dates_are_excluded(self, today, caplog):
        with caplog.at_level("WARNING"):
            kept = filter_records_by_period([day("garbage")], "week", today=today)

        assert kept == []
        assert "Invalid date" in caplog.text

    def test_unknown_period_raises(self, today):
        with pytest.raises(ValueError):
            filter_records_by_period([], "decade", today=today)


class TestAnalyticsSummary:
    """Tests for get_analytics_summary."""

    def test_summary(self, today):
        records = [
            day(days_ago(0), [strength("bench", [(5, 100)], name="Bench Press")]),
            day(days_ago(1), is_rest_day=True),
            day(days_ago(2), [cardio("run", duration=1800, distance=5)]),
            day(days_ago(5), [calisthenics("pullup", [10])]),
        ]

        summary = get_analytics_summary(records, today=today)

        assert summary.total_workouts == 3
        assert summary.current_streak == 3
        assert summary.longest_streak == 3
        assert summary.favorite_exercise == "Bench Press"
        assert summary.total_volume == 500
        assert summary.total_cardio_distance == 5
        assert summary.total_cardio_duration == 1800
        assert summary.total_calisthenics_reps == 10

    def test_empty_summary(self, today):
        summary = get_analytics_summary([], today=today)

        assert summary.total_workouts == 0
        assert summary.current_streak == 0
        assert summary.favorite_exercise is None

    def test_serializes_camel_case(self, mixed_days, today):
        dumped = get_analytics_summary(mixed_days, today=today).model_dump(by_alias=True)

        assert "totalVolume" in dumped
        assert "favoriteExercise" in dumped


class TestStrengthAnalytics:
    """Tests for get_strength_analytics."""

    def test_strength_views(self):
        records = [
            day("2026-03-10", [
                strength("bench", [(5, 100), (3, 120)]),
                strength("squat", [(5, 140)]),
            ]),
            day("2026-03-12", [strength("bench", [(5, 100)])]),
            day("2026-03-13", [cardio("run", duration=1800, distance=5)]),
        ]
        catalog = {"bench": CatalogExercise(id="bench", name="Bench Press", muscle_group="chest")}

        result = get_strength_analytics(records, catalog)

        assert result.total_volume == 2060
        assert result.average_volume_per_workout == 1030
        assert result.max_volume_workout == 1560
        assert [(f.exercise_id, f.count, f.max_weight) for f in result.exercises_by_frequency] == [
            ("bench", 2, 120),
            ("squat", 1, 140),
        ]
        assert [(g.muscle_group, g.volume, g.frequency, g.exercises) for g in result.volume_by_muscle_group] == [
            ("chest", 1360, 2, 1),
            ("unknown", 700, 1, 1),
        ]
        assert [p.date for p in result.volume_trend] == ["2026-03-01"]

    def test_no_strength(self):
        result = get_strength_analytics([day("2026-03-13", [cardio("run", duration=600)])])

        assert result.total_volume == 0
        assert result.average_volume_per_workout == 0
        assert result.exercises_by_frequency == []


class TestCardioAnalytics:
    """Tests for get_cardio_analytics."""

    def test_cardio_views(self):
        records = [
            day("2026-03-10", [cardio("run", duration=1500, distance=5)]),
            day("2026-03-12", [cardio("run", duration=3600, distance=10, pace=350)]),
            day("2026-03-13", [cardio("bike", duration=1200)]),
        ]

        result = get_cardio_analytics(records)

        assert result.total_distance == 15
        assert result.total_duration == 6300
        assert result.average_pace == 420
        assert result.longest_distance == 10
        assert result.longest_duration == 3600
        assert result.best_pace == 300
        assert [(f.exercise_id, f.count, f.total_distance) for f in result.exercises_by_frequency] == [
            ("run", 2, 15),
            ("bike", 1, 0),
        ]

    def test_no_distance_means_zero_paces(self):
        result = get_cardio_analytics([day("2026-03-13", [cardio("bike", duration=1200)])])

        assert result.average_pace == 0
        assert result.best_pace == 0


class TestLastExerciseData:
    """Tests for get_last_exercise_data."""

    def test_returns_most_recent_occurrence(self):
        records = [
            day("2026-03-14", [strength("bench", [(5, 110)])]),
            day("2026-03-01", [strength("bench", [(5, 100)])]),
        ]

        last = get_last_exercise_data(records, "bench")

        assert last.strength_sets[0].weight == 110

    def test_first_match_within_a_record(self):
        records = [day("2026-03-14", [strength("bench", [(5, 110)]), strength("bench", [(5, 90)])])]

        last = get_last_exercise_data(records, "bench")

        assert last.strength_sets[0].weight == 110

    def test_unknown_exercise(self, mixed_days):
        assert get_last_exercise_data(mixed_days, "deadlift") is None
