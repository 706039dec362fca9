"""Data models for daily metrics and strength training."""

from .metrics import (
    AverageData,
    Compliance,
    DailyMetrics,
    DayEntry,
    Factor,
    FactorScore,
    Impact,
    ScoreResult,
    WeightPoint,
    WeightProgress,
    as_day_entry,
    daily_metrics_from_dict,
    daily_metrics_to_dict,
    to_camel,
)
from .workouts import (
    ACCESSORY,
    CompletedWorkout,
    DayWorkout,
    Exercise,
    ExercisePrescription,
    SetRecord,
    StrengthLevel,
    WeekPlan,
    WeeklySummary,
    WorkoutState,
    WorkoutType,
)

__all__ = [
    # Metrics
    "AverageData",
    "Compliance",
    "DailyMetrics",
    "DayEntry",
    "Factor",
    "FactorScore",
    "Impact",
    "ScoreResult",
    "WeightPoint",
    "WeightProgress",
    "as_day_entry",
    "daily_metrics_from_dict",
    "daily_metrics_to_dict",
    "to_camel",
    # Workouts
    "ACCESSORY",
    "CompletedWorkout",
    "DayWorkout",
    "Exercise",
    "ExercisePrescription",
    "SetRecord",
    "StrengthLevel",
    "WeekPlan",
    "WeeklySummary",
    "WorkoutState",
    "WorkoutType",
]
