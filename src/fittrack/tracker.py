"""
Host application for the tracker.

Owns persisted state: every operation loads what it needs from the store,
runs the pure engines with the injected clock, and saves the result when
the state actually changed.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from . import checkin, progression
from .db.database import StateStore
from .models.metrics import Compliance, DayEntry, ScoreResult, WeightProgress
from .models.workouts import (
    CompletedWorkout,
    Exercise,
    StrengthLevel,
    WeekPlan,
    WeeklySummary,
)
from .parsing import as_date
from .scoring import compute_metabolic_score, daily_compliance, weight_progress


class Tracker:
    """Runs tracker operations against a StateStore."""

    def __init__(
        self,
        store: StateStore,
        clock: Callable[[], datetime] = datetime.now,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def store(self) -> StateStore:
        return self._store

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    def _resolve_date(self, on_date: Any) -> date:
        return self.today() if on_date is None else as_date(on_date)

    # -------------------------------------------------------------------------
    # Daily metrics
    # -------------------------------------------------------------------------

    def score(self) -> ScoreResult:
        """Metabolic score for the last 7 days."""
        return compute_metabolic_score(self._store.load_daily_metrics(), self.now())

    def entry(self, on_date: Any = None) -> Optional[DayEntry]:
        return checkin.get_entry(self._store.load_daily_metrics(), self._resolve_date(on_date))

    def compliance(self, on_date: Any = None) -> Compliance:
        """Single-day compliance for ``on_date`` (today by default)."""
        return daily_compliance(self.entry(on_date))

    def weight_progress(self) -> WeightProgress:
        """Every logged body weight, oldest first."""
        return weight_progress(self._store.load_daily_metrics())

    def submit_checkin(self, values: Dict[str, Any], on_date: Any = None) -> Optional[DayEntry]:
        """Submit a check-in, merging ``values`` over any unsubmitted entry.

        Returns:
            The stored entry, or None if the day is already submitted or the
            merged entry is not complete enough to submit
        """
        day = self._resolve_date(on_date)
        metrics = self._store.load_daily_metrics()

        existing = checkin.get_entry(metrics, day)
        merged = existing.model_dump(exclude_none=True) if existing else {}
        merged.update({key: value for key, value in values.items() if value is not None})

        updated = checkin.submit_checkin(metrics, merged, day, self.now())
        if updated is metrics:
            self.logger.info(f"Check-in for {day} was not submitted")
            return None

        self._store.save_daily_metrics(updated)
        return updated[day.isoformat()]

    def reopen_checkin(self, on_date: Any = None) -> bool:
        """Re-open a submitted check-in. Returns False if nothing was re-opened."""
        metrics = self._store.load_daily_metrics()
        updated = checkin.reopen_checkin(metrics, self._resolve_date(on_date))
        if updated is metrics:
            return False
        self._store.save_daily_metrics(updated)
        return True

    # -------------------------------------------------------------------------
    # Workouts
    # -------------------------------------------------------------------------

    def plan(self) -> WeekPlan:
        """Plan for the current week, generating and saving it if needed."""
        state = self._store.load_workout_state()
        updated, plan = progression.ensure_weekly_plan(state, self.now())
        if updated is not state:
            self._store.save_workout_state(updated)
        return plan

    def working_weights(self, day_name: str) -> List[Optional[int]]:
        """Working weight for each slot of ``day_name`` in the current plan."""
        state = self._store.load_workout_state()
        workout = self.plan().get(day_name)
        if workout is None:
            return []
        return [progression.working_weight(state, ex) for ex in workout.exercises]

    def log_set(self, exercise_name: str, reps: Any, weight: Any, on_date: Any = None) -> Optional[Exercise]:
        """Log a set. Returns the updated exercise, or None if rejected."""
        state = self._store.load_workout_state()
        updated = progression.log_set(
            state, exercise_name, reps, weight, self._resolve_date(on_date), self.now()
        )
        if updated is state:
            return None
        self._store.save_workout_state(updated)
        return updated.exercises[exercise_name]

    def complete_workout(self, on_date: Any = None) -> Optional[CompletedWorkout]:
        """Complete the planned workout for the weekday of ``on_date``.

        A date that already has a completion is left alone.

        Returns:
            The stored completion, or None if nothing was recorded
        """
        day = self._resolve_date(on_date)
        self.plan()

        state = self._store.load_workout_state()
        if progression.is_completed(state, day):
            self.logger.info(f"Workout for {day} already completed")
            return None

        updated = progression.complete_workout(
            state, progression.weekday_name(day), day, self.now()
        )
        if updated is state:
            return None
        self._store.save_workout_state(updated)
        return updated.completed_workouts[day.isoformat()]

    def weekly_summary(self) -> WeeklySummary:
        return progression.weekly_summary(self._store.load_workout_state(), self.now())

    def strength_levels(self) -> List[StrengthLevel]:
        return progression.strength_levels(self._store.load_workout_state())
