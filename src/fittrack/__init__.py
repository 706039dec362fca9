"""Personal metabolic scoring and strength progression tracker."""

from fittrack.checkin import (
    can_submit,
    checkin_completeness,
    reopen_checkin,
    submit_checkin,
)
from fittrack.db.database import StateStore
from fittrack.models import (
    DailyMetrics,
    DayEntry,
    Exercise,
    ScoreResult,
    WeeklySummary,
    WorkoutState,
)
from fittrack.progression import (
    complete_workout,
    ensure_weekly_plan,
    log_set,
    strength_levels,
    week_start,
    weekly_summary,
    working_weight,
)
from fittrack.scoring import compute_metabolic_score, daily_compliance, weight_progress
from fittrack.tracker import Tracker

__version__ = "0.1.0"

__all__ = [
    "StateStore",
    "Tracker",
    # Models
    "DailyMetrics",
    "DayEntry",
    "Exercise",
    "ScoreResult",
    "WeeklySummary",
    "WorkoutState",
    # Scoring
    "compute_metabolic_score",
    "daily_compliance",
    "weight_progress",
    # Progression
    "complete_workout",
    "ensure_weekly_plan",
    "log_set",
    "strength_levels",
    "week_start",
    "weekly_summary",
    "working_weight",
    # Check-in
    "can_submit",
    "checkin_completeness",
    "reopen_checkin",
    "submit_checkin",
]
