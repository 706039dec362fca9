"""Strength progression: weekly plan, set logging and 1RM tracking.

All functions take a WorkoutState and return a new one; the argument is
never modified. Invalid input leaves the state untouched and the same
object is returned, so callers can detect a no-op with ``is``.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Tuple

from .models.workouts import (
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
from .parsing import as_date, parse_optional_float, parse_optional_int, round_half_up

logger = logging.getLogger(__name__)


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

DEFAULT_INTENSITY = 0.7
ACCESSORY_SETS = 3
ACCESSORY_REPS = 8
WEEKLY_TARGET_DAYS = 5


def _lift(name: str, sets: int, reps: int, intensity: float, variant: Optional[str] = None) -> ExercisePrescription:
    return ExercisePrescription(name=name, sets=sets, reps=reps, intensity=intensity, variant=variant)


def _accessory(description: str, sets: int = ACCESSORY_SETS, reps: int = ACCESSORY_REPS) -> ExercisePrescription:
    return ExercisePrescription(name=ACCESSORY, sets=sets, reps=reps, description=description)


def _recovery(name: str, duration: int, description: str) -> ExercisePrescription:
    return ExercisePrescription(name=name, duration=duration, description=description)


def build_week_template() -> WeekPlan:
    """Fixed push/pull/legs week: power days early, volume days late."""
    return {
        "monday": DayWorkout(
            name="Push Power",
            type=WorkoutType.STRENGTH,
            exercises=[
                _lift("bench", 5, 3, 0.87),
                _lift("ohp", 4, 5, 0.82),
                _accessory("Dips"),
            ],
            estimated_time=45,
        ),
        "tuesday": DayWorkout(
            name="Pull Power",
            type=WorkoutType.STRENGTH,
            exercises=[
                _lift("deadlift", 5, 3, 0.87),
                _lift("pullup", 4, 5, 0.8),
                _lift("row", 4, 5, 0.82),
            ],
            estimated_time=50,
        ),
        "wednesday": DayWorkout(
            name="Active Recovery",
            type=WorkoutType.RECOVERY,
            exercises=[
                _recovery("walk", 30, "Light walking"),
                _recovery("mobility", 15, "Stretching"),
            ],
            estimated_time=45,
        ),
        "thursday": DayWorkout(
            name="Legs Power",
            type=WorkoutType.STRENGTH,
            exercises=[
                _lift("squat", 5, 3, 0.87),
                _lift("deadlift", 3, 5, 0.8, variant="stiff-leg"),
                _accessory("Lunges", reps=10),
            ],
            estimated_time=55,
        ),
        "friday": DayWorkout(
            name="Push Volume",
            type=WorkoutType.HYPERTROPHY,
            exercises=[
                _lift("bench", 4, 8, 0.75),
                _lift("ohp", 4, 8, 0.75),
                _accessory("Tricep work", reps=12),
            ],
            estimated_time=40,
        ),
        "saturday": DayWorkout(
            name="Pull Volume",
            type=WorkoutType.HYPERTROPHY,
            exercises=[
                _lift("row", 4, 8, 0.75),
                _lift("pullup", 4, 8, 0.75),
                _accessory("Bicep work", reps=12),
            ],
            estimated_time=40,
        ),
        "sunday": DayWorkout(
            name="Rest Day",
            type=WorkoutType.REST,
            exercises=[],
            estimated_time=0,
        ),
    }


def week_start(now: Any) -> date:
    """Monday of the week containing ``now``."""
    day = as_date(now)
    return day - timedelta(days=day.weekday())


def week_key(now: Any) -> str:
    """Key of the week containing ``now`` in ``WorkoutState.weekly_plan``."""
    return week_start(now).isoformat()


def week_dates(now: Any) -> List[date]:
    """The seven dates, Monday to Sunday, of the week containing ``now``."""
    start = week_start(now)
    return [start + timedelta(days=i) for i in range(7)]


def weekday_name(day: Any) -> str:
    """Lowercase weekday name, as used for plan keys."""
    return WEEKDAYS[as_date(day).weekday()]


def _copy_plan(plan: WeekPlan) -> WeekPlan:
    return {day: workout.model_copy(deep=True) for day, workout in plan.items()}


def ensure_weekly_plan(state: WorkoutState, now: datetime) -> Tuple[WorkoutState, WeekPlan]:
    """Return the plan for the current week, generating it on first use.

    A cached plan is never regenerated, even if exercise data has changed
    since it was stored. The returned plan is a copy; editing it does not
    change either state.

    Args:
        state: Current workout state
        now: Reference time

    Returns:
        Tuple of (state, plan). The state is the same object when the plan
        was already cached, a new state holding the plan otherwise.
    """
    key = week_key(now)
    cached = state.weekly_plan.get(key)
    if cached is not None:
        return state, _copy_plan(cached)

    plan = build_week_template()
    updated = state.model_copy(deep=True)
    updated.weekly_plan[key] = plan
    logger.info(f"Generated weekly plan for week starting {key}")
    return updated, _copy_plan(plan)


def working_weight(state: WorkoutState, prescription: ExercisePrescription) -> Optional[int]:
    """Load for a prescribed lift, from the lift's current 1RM.

    Returns:
        Rounded working weight, or None when the slot is an accessory or the
        lift is not tracked (nothing to log against)
    """
    if prescription.is_accessory:
        return None

    exercise = state.exercises.get(prescription.name)
    if exercise is None:
        return None

    intensity = prescription.intensity or DEFAULT_INTENSITY
    return round_half_up(exercise.current_1rm * intensity)


def estimate_1rm(weight: float, reps: int) -> float:
    """Epley estimate: weight x (1 + reps / 30)."""
    return weight * (1 + reps / 30)


def log_set(
    state: WorkoutState,
    exercise_name: Optional[str],
    reps: Any,
    weight: Any,
    on_date: Any,
    now: datetime,
) -> WorkoutState:
    """Record a working set and ratchet the exercise's 1RM.

    Unknown exercises are created with a zero 1RM and the default target.
    The stored 1RM only changes when the new estimate beats it, while
    ``last_worked`` moves to ``on_date`` on every logged set.

    Args:
        state: Current workout state
        exercise_name: Lift to log against
        reps: Repetitions performed
        weight: Load in kg
        on_date: Training date the set belongs to
        now: Time the set was logged

    Returns:
        New state, or ``state`` itself if any input is missing or invalid
    """
    reps_value = parse_optional_int(reps)
    weight_value = parse_optional_float(weight)

    if not exercise_name or reps_value is None or weight_value is None:
        logger.debug(f"Ignoring set with missing data: {exercise_name!r} {reps!r}x{weight!r}")
        return state
    if reps_value <= 0 or weight_value <= 0:
        logger.debug(f"Ignoring set with non-positive values: {exercise_name!r} {reps!r}x{weight!r}")
        return state

    day = as_date(on_date)
    updated = state.model_copy(deep=True)
    exercise = updated.exercises.setdefault(exercise_name, Exercise())

    exercise.sets.append(SetRecord(date=day, reps=reps_value, weight=weight_value, timestamp=now))

    estimated = estimate_1rm(weight_value, reps_value)
    if estimated > exercise.current_1rm:
        previous = exercise.current_1rm
        exercise.current_1rm = float(round_half_up(estimated))
        logger.info(f"New {exercise_name} 1RM: {previous:g} -> {exercise.current_1rm:g} kg")

    exercise.last_worked = day
    return updated


def complete_workout(
    state: WorkoutState,
    day_name: str,
    on_date: Any,
    now: datetime,
) -> WorkoutState:
    """Mark the planned workout for ``day_name`` as done on ``on_date``.

    The workout is looked up in the cached plan for the week containing
    ``now``. A prior completion for the same date is overwritten.

    Returns:
        New state, or ``state`` itself when the week has no plan or the plan
        has no entry for ``day_name``
    """
    plan = state.weekly_plan.get(week_key(now))
    workout = plan.get(day_name) if plan else None
    if workout is None:
        logger.debug(f"No planned workout for {day_name!r} in week {week_key(now)}")
        return state

    day = as_date(on_date).isoformat()
    updated = state.model_copy(deep=True)
    updated.completed_workouts[day] = CompletedWorkout(
        name=workout.name,
        type=workout.type,
        completed_at=now,
        total_sets=workout.total_sets,
    )
    logger.info(f"Completed {workout.name} on {day} ({workout.total_sets} sets)")
    return updated


def is_completed(state: WorkoutState, on_date: Any) -> bool:
    """Whether a workout has already been completed on ``on_date``."""
    return as_date(on_date).isoformat() in state.completed_workouts


def weekly_summary(state: WorkoutState, now: datetime) -> WeeklySummary:
    """Completed days and sets for the Monday-to-Sunday week of ``now``.

    ``total_days`` is always the weekly target of 5, whatever the plan holds.
    """
    completed_days = 0
    total_sets = 0

    for day in week_dates(now):
        completed = state.completed_workouts.get(day.isoformat())
        if completed is None:
            continue
        completed_days += 1
        total_sets += completed.total_sets or 0

    return WeeklySummary(
        completed_days=completed_days,
        total_days=WEEKLY_TARGET_DAYS,
        total_sets=total_sets,
    )


def strength_levels(state: WorkoutState) -> List[StrengthLevel]:
    """Progress of every tracked lift towards its target 1RM."""
    levels = []
    for name, exercise in state.exercises.items():
        levels.append(StrengthLevel(
            name=name,
            current_1rm=exercise.current_1rm,
            target=exercise.target,
            progress_pct=round(exercise.current_1rm / exercise.target * 100, 1),
        ))
    return levels
