"""Tests for exercise history extraction and insight gating."""

from datetime import date, timedelta

import pytest

from liftledger.insights.history import (
    exercise_has_distance,
    extract_exercise_history,
    get_metric_name,
    is_new_pr,
    should_fetch_insight,
)
from liftledger.models import Modality, ProgressPoint

from conftest import calisthenics, cardio, day, strength, workout


def spaced_history(points: int, span_days: int):
    """`points` history entries whose first and last dates are `span_days` apart."""
    start = date(2026, 3, 1)
    offsets = [round(i * span_days / (points - 1)) for i in range(points)]
    return [
        ProgressPoint(date=(start + timedelta(days=o)).isoformat(), value=100 + i)
        for i, o in enumerate(offsets)
    ]


class TestExtractExerciseHistory:
    """Tests for extract_exercise_history."""

    def test_strength_uses_heaviest_set_ascending(self):
        records = [
            day("2026-03-05", [strength("bench", [(5, 100), (3, 110)])]),
            day("2026-03-01", [strength("bench", [(5, 95)])]),
        ]

        history = extract_exercise_history(records, "bench", Modality.STRENGTH)

        assert [(p.date, p.value) for p in history] == [("2026-03-01", 95), ("2026-03-05", 110)]

    def test_skips_rest_and_empty_days(self):
        records = [
            day("2026-03-01", [strength("bench", [(5, 95)])]),
            day("2026-03-02", is_rest_day=True),
            day("2026-03-03"),
        ]

        assert len(extract_exercise_history(records, "bench", "strength")) == 1

    def test_matches_by_name_case_insensitive(self):
        records = [
            day("2026-03-01", [strength("", [(5, 95)], name="Bench Press")]),
            day("2026-03-02", [strength("bb-bench", [(5, 100)], name="bench press ")]),
        ]

        history = extract_exercise_history(records, "Bench Press", Modality.STRENGTH)

        assert [p.value for p in history] == [95, 100]

    def test_modality_must_match(self):
        records = [day("2026-03-01", [calisthenics("bench", [10])])]

        assert extract_exercise_history(records, "bench", Modality.STRENGTH) == []

    def test_first_matching_exercise_per_record(self):
        records = [day("2026-03-01", [strength("bench", [(5, 90)]), strength("bench", [(5, 120)])])]

        assert [p.value for p in extract_exercise_history(records, "bench", "strength")] == [90]

    def test_cardio_prefers_distance_then_duration(self):
        records = [
            day("2026-03-01", [cardio("run", duration=1800, distance=5)]),
            day("2026-03-02", [cardio("run", duration=1500)]),
            day("2026-03-03", [cardio("run", duration=0)]),
        ]

        history = extract_exercise_history(records, "run", Modality.CARDIO)

        assert [p.value for p in history] == [5, 1500]

    def test_calisthenics_uses_max_reps(self):
        records = [day("2026-03-01", [calisthenics("pullup", [8, 12, 10])])]

        assert [p.value for p in extract_exercise_history(records, "pullup", "calisthenics")] == [12]

    def test_skips_zero_values(self):
        records = [day("2026-03-01", [strength("pushup", [(20, 0)])])]

        assert extract_exercise_history(records, "pushup", "strength") == []

    def test_works_on_workouts(self):
        records = [workout("2026-03-01", [strength("bench", [(5, 100)])])]

        assert len(extract_exercise_history(records, "bench", "strength")) == 1

    def test_exercise_has_distance(self):
        records = [
            day("2026-03-01", [cardio("run", duration=1800)]),
            day("2026-03-02", [cardio("run", duration=1800, distance=5)]),
        ]

        assert exercise_has_distance(records, "run")
        assert not exercise_has_distance(records[:1], "run")


class TestShouldFetchInsight:
    """Tests for should_fetch_insight gating."""

    @pytest.mark.parametrize(
        "points,span_days,expected",
        [
            (7, 30, False),
            (8, 14, True),
            (10, 10, False),
            (8, 13, False),
            (12, 60, True),
        ],
    )
    def test_gating(self, points, span_days, expected):
        assert should_fetch_insight(spaced_history(points, span_days)) is expected

    def test_empty_history(self):
        assert should_fetch_insight([]) is False

    def test_custom_thresholds(self):
        assert should_fetch_insight(spaced_history(3, 5), min_sessions=3, min_duration_days=5)


class TestIsNewPR:
    """Tests for is_new_pr."""

    def _history(self, *values):
        return [ProgressPoint(date=f"2026-03-{i + 1:02d}", value=v) for i, v in enumerate(values)]

    def test_strictly_greater_than_all_previous(self):
        assert is_new_pr(self._history(100, 110, 120))
        assert is_new_pr(self._history(120, 100, 121))

    def test_equal_is_not_a_pr(self):
        assert not is_new_pr(self._history(100, 120, 120))

    def test_needs_two_points(self):
        assert not is_new_pr(self._history(100))
        assert not is_new_pr([])


class TestMetricName:
    """Tests for get_metric_name."""

    def test_metric_names(self):
        assert get_metric_name(Modality.STRENGTH) == "weight"
        assert get_metric_name("cardio", has_distance=True) == "distance"
        assert get_metric_name("cardio") == "duration"
        assert get_metric_name(Modality.CALISTHENICS) == "reps"
