"""Tests for the Tracker host application."""

from datetime import date, datetime, timedelta

from fittrack.db.database import WORKOUTS_KEY
from fittrack.tracker import Tracker


CHECKIN = {"weight": "92.4", "sleep_hours": "6", "calories": "1800", "steps": "4200"}


class TestCheckins:
    """Tests for check-ins through the tracker."""

    def test_submit_today(self, tracker, store):
        entry = tracker.submit_checkin(CHECKIN)

        assert entry is not None
        assert entry.date == "2025-01-08"
        assert entry.steps == 4200
        assert store.load_daily_metrics()["2025-01-08"].is_submitted

    def test_incomplete_not_saved(self, tracker, store):
        assert tracker.submit_checkin({"weight": "90"}) is None
        assert store.load_daily_metrics() == {}

    def test_resubmit_blocked_until_reopened(self, tracker):
        tracker.submit_checkin(CHECKIN)
        assert tracker.submit_checkin({"weight": "91"}) is None

        assert tracker.reopen_checkin()
        entry = tracker.submit_checkin({"weight": "91"})

        # Values not given again are kept from the re-opened entry
        assert entry.weight == 91
        assert entry.steps == 4200
        assert entry.is_submitted

    def test_reopen_without_checkin(self, tracker):
        assert not tracker.reopen_checkin()

    def test_explicit_date(self, tracker):
        tracker.submit_checkin(CHECKIN, "2025-01-05")
        assert tracker.entry(date(2025, 1, 5)).is_submitted
        assert tracker.entry() is None

    def test_compliance(self, tracker):
        tracker.submit_checkin(CHECKIN)
        compliance = tracker.compliance()
        assert compliance.sleep == 75
        assert compliance.nutrition == 100
        assert compliance.movement == 42

    def test_weight_progress(self, tracker):
        tracker.submit_checkin(CHECKIN, "2025-01-07")
        tracker.submit_checkin(dict(CHECKIN, weight="91.8"), "2025-01-05")
        # Submitted with 3 of 4 fields and no weight
        assert tracker.submit_checkin(dict(CHECKIN, weight="")) is not None

        progress = tracker.weight_progress()
        assert [p.date for p in progress.history] == ["2025-01-05", "2025-01-07"]
        assert progress.data_points == 2
        assert progress.latest_weight == 92.4

    def test_score_uses_clock(self, tracker, clock):
        tracker.submit_checkin({"weight": 90, "sleep_hours": 8, "calories": 1700, "steps": 10000, "protein": 150})
        assert tracker.score().score == 100

        clock.current = clock.current + timedelta(days=8)
        assert tracker.score().score == 50


class TestWorkouts:
    """Tests for training operations through the tracker."""

    def test_plan_is_saved_once(self, tracker, store):
        plan = tracker.plan()
        assert plan["monday"].name == "Push Power"

        saved = store.load(WORKOUTS_KEY)
        assert list(saved["weeklyPlan"]) == ["2025-01-06"]
        updated_at = store.get_stats()["last_saved"]

        tracker.plan()
        assert store.get_stats()["last_saved"] == updated_at

    def test_next_week_adds_plan(self, tracker, store, clock):
        tracker.plan()
        clock.current = datetime(2025, 1, 14, 9, 0)
        tracker.plan()
        assert set(store.load_workout_state().weekly_plan) == {"2025-01-06", "2025-01-13"}

    def test_working_weights(self, tracker):
        assert tracker.working_weights("monday") == [61, 41, None]
        assert tracker.working_weights("wednesday") == [None, None]
        assert tracker.working_weights("funday") == []

    def test_log_set(self, tracker, store):
        exercise = tracker.log_set("bench", 5, 100)

        assert exercise.current_1rm == 117
        assert exercise.last_worked == date(2025, 1, 8)
        assert store.load_workout_state().exercises["bench"].current_1rm == 117
        assert tracker.working_weights("monday")[0] == 102  # 117 * 0.87 = 101.79

    def test_log_set_rejected(self, tracker, store):
        assert tracker.log_set("bench", 0, 100) is None
        assert store.load(WORKOUTS_KEY) is None

    def test_complete_today(self, tracker):
        completed = tracker.complete_workout()

        assert completed.name == "Active Recovery"
        assert completed.total_sets == 0
        assert tracker.weekly_summary().completed_days == 1

    def test_complete_twice(self, tracker):
        assert tracker.complete_workout("2025-01-06") is not None
        assert tracker.complete_workout("2025-01-06") is None

    def test_weekly_summary(self, tracker):
        tracker.complete_workout("2025-01-06")
        tracker.complete_workout("2025-01-07")

        summary = tracker.weekly_summary()
        assert summary.completed_days == 2
        assert summary.total_days == 5
        assert summary.total_sets == 25

    def test_strength_levels(self, tracker):
        levels = {level.name: level.progress_pct for level in tracker.strength_levels()}
        assert levels["deadlift"] == 52.6
        assert levels["bench"] == 58.3


class TestTrackerConstruction:
    """Tests for default wiring."""

    def test_default_clock(self, store):
        tracker = Tracker(store)
        assert abs((tracker.now() - datetime.now()).total_seconds()) < 5
