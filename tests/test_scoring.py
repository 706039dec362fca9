"""Tests for metabolic efficiency scoring."""

from datetime import datetime, timedelta, timezone

import pytest

from fittrack.models import DayEntry
from fittrack.scoring import (
    COLD_START_RECOMMENDATION,
    average_metrics,
    compute_metabolic_score,
    daily_compliance,
    score_activity,
    score_nutrition,
    score_protein,
    score_sleep,
    select_window,
    weight_progress,
)


IDEAL_DAY = {"sleepHours": 8, "calories": 1700, "protein": 150, "steps": 10000}


class TestColdStart:
    """Tests for the empty-window result."""

    def test_empty_metrics(self, now):
        """No entries gives the neutral result."""
        result = compute_metabolic_score({}, now)

        assert result.score == 50
        assert set(result.factors) == {"sleep", "nutrition", "protein", "activity"}
        assert all(f.score == 50 for f in result.factors.values())
        assert result.recommendations == [COLD_START_RECOMMENDATION]
        assert result.avg_data.sleep_hours == 7
        assert result.avg_data.calories == 2000
        assert result.avg_data.protein == 100
        assert result.avg_data.steps == 5000

    def test_none_metrics(self, now):
        """None is treated like an empty mapping."""
        assert compute_metabolic_score(None, now) == compute_metabolic_score({}, now)

    def test_cold_start_impacts(self, now):
        """Impact levels are reported even without data."""
        factors = compute_metabolic_score({}, now).factors
        assert factors["sleep"].impact == "high"
        assert factors["nutrition"].impact == "high"
        assert factors["protein"].impact == "medium"
        assert factors["activity"].impact == "medium"

    def test_only_stale_entries(self, now):
        """Entries older than the window give the cold start result."""
        metrics = {
            "2024-12-01": IDEAL_DAY,
            "2024-12-31": IDEAL_DAY,
            "2025-01-01": IDEAL_DAY,
        }
        assert compute_metabolic_score(metrics, now) == compute_metabolic_score({}, now)


class TestWindow:
    """Tests for window selection."""

    def test_exact_seven_day_cutoff(self, now):
        """Midnight entries before now - 7 days are excluded."""
        metrics = {"2025-01-01": {}, "2025-01-02": {}, "2025-01-08": {}}
        days = [day for day, _ in select_window(metrics, now)]
        # Cutoff is 2025-01-01 10:00, so 2025-01-01 00:00 falls outside
        assert days == ["2025-01-02", "2025-01-08"]

    def test_boundary_is_inclusive(self):
        """An entry exactly 7 days before now is included."""
        now = datetime(2025, 1, 8, 0, 0, 0)
        days = [day for day, _ in select_window({"2025-01-01": {}}, now)]
        assert days == ["2025-01-01"]

    def test_future_entries_included(self, now):
        """There is no upper bound on the window."""
        days = [day for day, _ in select_window({"2025-02-01": {}}, now)]
        assert days == ["2025-02-01"]

    def test_sorted_ascending(self, now):
        metrics = {"2025-01-07": {}, "2025-01-03": {}, "2025-01-05": {}}
        days = [day for day, _ in select_window(metrics, now)]
        assert days == ["2025-01-03", "2025-01-05", "2025-01-07"]

    def test_invalid_keys_skipped(self, now):
        """Keys that are not ISO dates are ignored."""
        days = [day for day, _ in select_window({"yesterday": {}, "2025-01-07": {}}, now)]
        assert days == ["2025-01-07"]

    def test_timezone_aware_now(self):
        """Dates are compared at midnight in now's timezone."""
        now = datetime(2025, 1, 8, 0, 0, 0, tzinfo=timezone.utc)
        days = [day for day, _ in select_window({"2025-01-01": {}}, now)]
        assert days == ["2025-01-01"]

    def test_non_utc_now_uses_local_midnight(self):
        """The cutoff is compared with midnight in now's own timezone."""
        minus_five = timezone(timedelta(hours=-5))
        now = datetime(2025, 1, 8, 0, 0, 0, tzinfo=minus_five)
        days = [day for day, _ in select_window({"2025-01-01": {}, "2024-12-31": {}}, now)]
        # UTC midnight on 2025-01-01 is 19:00 the day before, locally
        assert days == ["2025-01-01"]


class TestAveraging:
    """Tests for default imputation and averaging."""

    def test_missing_fields_use_defaults(self):
        avg = average_metrics([DayEntry(weight=90)])
        assert avg.sleep_hours == 7
        assert avg.calories == 2000
        assert avg.protein == 100
        assert avg.steps == 5000

    def test_defaults_mixed_with_values(self):
        """A missing value pulls the average towards the default."""
        avg = average_metrics([DayEntry(sleep_hours=6), DayEntry()])
        assert avg.sleep_hours == 6.5

    def test_malformed_strings_are_unset(self):
        entry = DayEntry.model_validate({"sleepHours": "abc", "steps": "lots"})
        avg = average_metrics([entry])
        assert avg.sleep_hours == 7
        assert avg.steps == 5000

    def test_numeric_strings_parsed(self):
        entry = DayEntry.model_validate({"sleepHours": "6.5", "calories": "1800"})
        avg = average_metrics([entry])
        assert avg.sleep_hours == 6.5
        assert avg.calories == 1800


class TestFactorScores:
    """Tests for individual factor curves."""

    @pytest.mark.parametrize("hours,expected", [
        (0, 0),
        (4, 50),
        (7, 87.5),
        (8, 100),
        (10, 100),
    ])
    def test_sleep(self, hours, expected):
        assert score_sleep(hours) == expected

    def test_sleep_monotonic(self):
        scores = [score_sleep(h / 2) for h in range(0, 25)]
        assert scores == sorted(scores)

    @pytest.mark.parametrize("calories,expected", [
        (1700, 100),
        (1500, 100),  # 500 deficit is still rewarded
        (1999, 100),
        (2000, 70),   # no deficit
        (1200, 70),   # deficit too large
        (2600, 70),   # surplus
    ])
    def test_nutrition_plateau(self, calories, expected):
        assert score_nutrition(calories) == expected

    def test_protein(self):
        assert score_protein(150) == 100
        assert score_protein(75) == 50
        assert score_protein(300) == 100

    def test_activity(self):
        assert score_activity(10000) == 100
        assert score_activity(5000) == 50
        assert score_activity(20000) == 100


class TestComputeMetabolicScore:
    """Tests for the composite score and recommendations."""

    def test_ideal_week(self, now):
        metrics = {"2025-01-06": IDEAL_DAY, "2025-01-07": IDEAL_DAY}
        result = compute_metabolic_score(metrics, now)

        assert result.score == 100
        assert result.recommendations == []
        assert all(f.score == 100 for f in result.factors.values())

    def test_sparse_entry_uses_defaults(self, now):
        """A day with only weight logged is scored from default values."""
        result = compute_metabolic_score({"2025-01-07": {"weight": 92}}, now)

        # 87.5*0.3 + 70*0.3 + 66.67*0.2 + 50*0.2 = 70.58
        assert result.score == 71
        assert result.factors["sleep"].score == 87.5
        assert result.factors["nutrition"].score == 70
        assert result.factors["protein"].score == pytest.approx(66.667, abs=0.01)
        assert result.factors["activity"].score == 50
        assert result.recommendations == [
            "Increase protein intake",
            "Aim for 10,000+ steps daily",
        ]

    def test_recommendation_order_is_fixed(self, now):
        """Recommendations follow factor order, not score order."""
        metrics = {"2025-01-07": {"sleepHours": 5, "protein": 90, "steps": 1000}}
        result = compute_metabolic_score(metrics, now)

        assert result.recommendations == [
            "Prioritize 8+ hours quality sleep",
            "Increase protein intake",
            "Aim for 10,000+ steps daily",
        ]

    def test_nutrition_never_below_threshold(self, now):
        """The nutrition plateau sits at the threshold, so it never adds a tip."""
        metrics = {"2025-01-07": {"calories": 3500}}
        result = compute_metabolic_score(metrics, now)
        assert "Optimize caloric deficit (300-500 cal)" not in result.recommendations

    def test_accepts_day_entries(self, now):
        metrics = {"2025-01-07": DayEntry.model_validate(IDEAL_DAY)}
        assert compute_metabolic_score(metrics, now).score == 100

    def test_averages_exposed(self, now):
        metrics = {
            "2025-01-06": {"sleepHours": 6, "calories": 1800, "protein": 120, "steps": 8000},
            "2025-01-07": {"sleepHours": 8, "calories": 2200, "protein": 140, "steps": 12000},
        }
        avg = compute_metabolic_score(metrics, now).avg_data
        assert avg.sleep_hours == 7
        assert avg.calories == 2000
        assert avg.protein == 130
        assert avg.steps == 10000

    def test_json_form_uses_camel_case(self, now):
        dumped = compute_metabolic_score({}, now).model_dump(by_alias=True)
        assert "avgData" in dumped
        assert "sleepHours" in dumped["avgData"]

    def test_is_pure(self, now):
        metrics = {"2025-01-07": {"sleepHours": "7"}}
        snapshot = dict(metrics)
        first = compute_metabolic_score(metrics, now)
        second = compute_metabolic_score(metrics, now)
        assert first == second
        assert metrics == snapshot

    def test_score_changes_as_window_moves(self, now):
        """Entries age out of the window."""
        metrics = {"2025-01-07": IDEAL_DAY}
        assert compute_metabolic_score(metrics, now).score == 100
        later = now + timedelta(days=8)
        assert compute_metabolic_score(metrics, later).score == 50


class TestDailyCompliance:
    """Tests for single-day compliance values."""

    def test_partial_day(self):
        compliance = daily_compliance({"sleepHours": 6, "calories": 1800, "steps": 4200})
        assert compliance.sleep == 75
        assert compliance.nutrition == 100
        assert compliance.movement == 42

    def test_targets_met(self):
        compliance = daily_compliance({"sleepHours": 9, "calories": 2000, "steps": 12000})
        assert compliance.sleep == 100
        assert compliance.movement == 100

    def test_nothing_logged(self):
        compliance = daily_compliance(None)
        assert compliance.sleep == 0
        assert compliance.nutrition == 0
        assert compliance.movement == 0


class TestWeightProgress:
    """Tests for the body weight history."""

    def test_empty_log(self):
        progress = weight_progress({})
        assert progress.data_points == 0
        assert progress.latest_weight is None
        assert weight_progress(None).history == []

    def test_sorted_by_date(self):
        metrics = {
            "2025-01-07": {"weight": 91.6},
            "2024-12-30": {"weight": 93.0},
            "2025-01-03": {"weight": "92.2"},
        }
        progress = weight_progress(metrics)

        assert [p.date for p in progress.history] == ["2024-12-30", "2025-01-03", "2025-01-07"]
        assert progress.data_points == 3
        assert progress.latest_weight == 91.6

    def test_entries_without_weight_skipped(self):
        metrics = {
            "2025-01-05": {"weight": 92},
            "2025-01-06": {"sleepHours": 7},
            "2025-01-07": {"weight": ""},
            "2025-01-08": {"weight": 0},
        }
        progress = weight_progress(metrics)
        assert progress.data_points == 1
        assert progress.latest_weight == 92

    def test_not_limited_to_window(self):
        """History covers every logged day, not only the last week."""
        progress = weight_progress({"2020-06-01": {"weight": 100}, "2025-01-07": DayEntry(weight=92)})
        assert progress.data_points == 2

    def test_invalid_keys_skipped(self):
        progress = weight_progress({"someday": {"weight": 90}, "2025-01-07": {"weight": 92}})
        assert [p.date for p in progress.history] == ["2025-01-07"]
