"""Metabolic efficiency scoring.

Turns the last week of daily check-ins into a single 0-100 score:

- Sleep (high impact): full marks at 8h or more
- Nutrition (high impact): rewards a moderate calorie deficit
- Protein (medium impact): 150g daily target
- Activity (medium impact): 10,000 daily steps target

Missing values are filled with neutral defaults before averaging, so a
sparse log drifts towards a middling score rather than towards zero.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .models.metrics import (
    AverageData,
    Compliance,
    DayEntry,
    Factor,
    FactorScore,
    Impact,
    ScoreResult,
    WeightPoint,
    WeightProgress,
    as_day_entry,
)
from .parsing import round_half_up

logger = logging.getLogger(__name__)


WINDOW_DAYS = 7
RECOMMENDATION_THRESHOLD = 70

SLEEP_TARGET_HOURS = 8
CALORIE_TARGET = 2000
MAX_HEALTHY_DEFICIT = 500
PROTEIN_TARGET_G = 150
STEPS_TARGET = 10000

NUTRITION_PLATEAU_SCORE = 70

# Neutral values used for unset fields and for the cold start averages
FIELD_DEFAULTS = {
    "sleep_hours": 7.0,
    "calories": 2000.0,
    "protein": 100.0,
    "steps": 5000.0,
}

FACTOR_WEIGHTS = {
    Factor.SLEEP: 0.30,
    Factor.NUTRITION: 0.30,
    Factor.PROTEIN: 0.20,
    Factor.ACTIVITY: 0.20,
}

FACTOR_IMPACT = {
    Factor.SLEEP: Impact.HIGH,
    Factor.NUTRITION: Impact.HIGH,
    Factor.PROTEIN: Impact.MEDIUM,
    Factor.ACTIVITY: Impact.MEDIUM,
}

RECOMMENDATIONS = {
    Factor.SLEEP: "Prioritize 8+ hours quality sleep",
    Factor.NUTRITION: "Optimize caloric deficit (300-500 cal)",
    Factor.PROTEIN: "Increase protein intake",
    Factor.ACTIVITY: "Aim for 10,000+ steps daily",
}

COLD_START_SCORE = 50
COLD_START_RECOMMENDATION = "Start logging daily metrics to get personalized recommendations"


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, value))


def select_window(
    metrics: Mapping[str, Union[DayEntry, dict]],
    now: datetime,
    days: int = WINDOW_DAYS,
) -> List[Tuple[str, DayEntry]]:
    """Select entries dated no earlier than ``days`` days before ``now``.

    The bound is exact: an entry dated at midnight is kept when that
    midnight is at or after ``now - days``. There is no upper bound, so
    future-dated entries are included.

    Args:
        metrics: Daily entries keyed by ISO date
        now: Reference time
        days: Window length in days

    Returns:
        (date, entry) pairs sorted by date ascending
    """
    cutoff = now - timedelta(days=days)
    selected = []

    for day in sorted(metrics):
        # Day keys are midnight in now's timezone, not UTC midnight
        try:
            day_start = datetime.combine(date.fromisoformat(day), time.min, tzinfo=now.tzinfo)
        except (TypeError, ValueError):
            logger.warning(f"Skipping daily metrics entry with invalid date key: {day!r}")
            continue

        if day_start >= cutoff:
            selected.append((day, as_day_entry(metrics[day])))

    return selected


def average_metrics(entries: List[DayEntry]) -> AverageData:
    """Average the scored fields over ``entries``, imputing defaults first.

    Args:
        entries: At least one daily entry

    Returns:
        AverageData with per-field means
    """
    totals = {name: 0.0 for name in FIELD_DEFAULTS}

    for entry in entries:
        for name, default in FIELD_DEFAULTS.items():
            value = getattr(entry, name)
            totals[name] += float(value) if value is not None else default

    count = len(entries)
    return AverageData(**{name: total / count for name, total in totals.items()})


def score_sleep(avg_sleep_hours: float) -> float:
    """Linear 0-100 ramp reaching 100 at 8 hours."""
    if avg_sleep_hours >= SLEEP_TARGET_HOURS:
        return 100.0
    return _clamp(avg_sleep_hours * 12.5)


def score_nutrition(avg_calories: float) -> float:
    """100 for a deficit between 0 (exclusive) and 500 kcal, 70 otherwise."""
    deficit = CALORIE_TARGET - avg_calories
    if 0 < deficit <= MAX_HEALTHY_DEFICIT:
        return 100.0
    return float(NUTRITION_PLATEAU_SCORE)


def score_protein(avg_protein: float) -> float:
    return _clamp(avg_protein / PROTEIN_TARGET_G * 100)


def score_activity(avg_steps: float) -> float:
    return _clamp(avg_steps / STEPS_TARGET * 100)


def _factor_scores(avg: AverageData) -> Dict[Factor, float]:
    return {
        Factor.SLEEP: score_sleep(avg.sleep_hours),
        Factor.NUTRITION: score_nutrition(avg.calories),
        Factor.PROTEIN: score_protein(avg.protein),
        Factor.ACTIVITY: score_activity(avg.steps),
    }


def _cold_start_result() -> ScoreResult:
    return ScoreResult(
        score=COLD_START_SCORE,
        factors={
            factor.value: FactorScore(score=COLD_START_SCORE, impact=FACTOR_IMPACT[factor])
            for factor in Factor
        },
        recommendations=[COLD_START_RECOMMENDATION],
        avg_data=AverageData(**FIELD_DEFAULTS),
    )


def compute_metabolic_score(
    metrics: Optional[Mapping[str, Union[DayEntry, dict]]],
    now: datetime,
) -> ScoreResult:
    """Compute the metabolic efficiency score for the week ending at ``now``.

    Args:
        metrics: Daily entries keyed by ISO date
        now: Reference time; the window covers the preceding 7 days

    Returns:
        ScoreResult with composite score, per-factor scores,
        recommendations and the averages used
    """
    window = select_window(metrics or {}, now)

    if not window:
        logger.debug("No daily metrics in scoring window, returning cold start score")
        return _cold_start_result()

    avg = average_metrics([entry for _, entry in window])
    scores = _factor_scores(avg)

    weighted = sum(scores[factor] * weight for factor, weight in FACTOR_WEIGHTS.items())
    overall = int(_clamp(round_half_up(weighted)))

    # Fixed factor order, not score order
    recommendations = [
        RECOMMENDATIONS[factor]
        for factor in Factor
        if scores[factor] < RECOMMENDATION_THRESHOLD
    ]

    logger.debug(f"Metabolic score {overall} from {len(window)} days ({window[0][0]} to {window[-1][0]})")

    return ScoreResult(
        score=overall,
        factors={
            factor.value: FactorScore(score=scores[factor], impact=FACTOR_IMPACT[factor])
            for factor in Factor
        },
        recommendations=recommendations,
        avg_data=avg,
    )


def daily_compliance(entry: Union[DayEntry, dict, None]) -> Compliance:
    """Compliance values for a single day's check-in.

    Unlike the weekly score, unset values count as zero here: a day that
    was not logged is not compliant.
    """
    entry = as_day_entry(entry)

    sleep = entry.sleep_hours or 0
    steps = entry.steps or 0

    return Compliance(
        sleep=100.0 if sleep >= SLEEP_TARGET_HOURS else _clamp(sleep * 12.5),
        nutrition=100.0 if entry.calories else 0.0,
        movement=100.0 if steps >= STEPS_TARGET else _clamp(steps / 100),
    )


def weight_progress(metrics: Optional[Mapping[str, Union[DayEntry, dict]]]) -> WeightProgress:
    """Logged body weights sorted by date.

    Days without a weight are skipped, as are keys that are not ISO dates.
    """
    history = []

    for day in sorted((metrics or {}).keys()):
        try:
            date.fromisoformat(day)
        except (TypeError, ValueError):
            logger.warning(f"Skipping daily metrics entry with invalid date key: {day!r}")
            continue

        weight = as_day_entry(metrics[day]).weight
        if weight is not None and weight > 0:
            history.append(WeightPoint(date=day, weight=weight))

    return WeightProgress(history=history)
