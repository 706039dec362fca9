"""Daily check-in workflow.

One entry per date. An entry becomes read-only once submitted and can only
change again after an explicit re-open.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from .models.metrics import DailyMetrics, DayEntry, as_day_entry
from .parsing import as_date, round_half_up

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = ("weight", "sleep_hours", "calories", "steps")
SUBMIT_THRESHOLD_PCT = 75


def checkin_completeness(entry: Union[DayEntry, Dict[str, Any], None]) -> int:
    """Percentage of required fields (weight, sleep, calories, steps) filled in."""
    entry = as_day_entry(entry)
    # Zero parses as unset, so "0" does not count as filled in
    filled = sum(1 for name in REQUIRED_FIELDS if getattr(entry, name) is not None)
    return round_half_up(filled / len(REQUIRED_FIELDS) * 100)


def can_submit(entry: Union[DayEntry, Dict[str, Any], None]) -> bool:
    """Whether enough of the entry is filled in to submit it."""
    return checkin_completeness(entry) >= SUBMIT_THRESHOLD_PCT


def get_entry(metrics: DailyMetrics, on_date: Any) -> Optional[DayEntry]:
    entry = metrics.get(as_date(on_date).isoformat())
    return None if entry is None else as_day_entry(entry)


def _copy_metrics(metrics: DailyMetrics) -> DailyMetrics:
    """Deep copy, accepting entries in their JSON form as well."""
    return {key: as_day_entry(value).model_copy(deep=True) for key, value in metrics.items()}


def is_submitted(metrics: DailyMetrics, on_date: Any) -> bool:
    entry = get_entry(metrics, on_date)
    return entry is not None and entry.is_submitted


def submit_checkin(
    metrics: DailyMetrics,
    entry: Union[DayEntry, Dict[str, Any]],
    on_date: Any,
    now: datetime,
) -> DailyMetrics:
    """Store ``entry`` as the submitted check-in for ``on_date``.

    Args:
        metrics: Existing daily metrics
        entry: Values entered for the day
        on_date: Day the check-in belongs to
        now: Submission time

    Returns:
        New metrics mapping, or ``metrics`` itself when the day is already
        submitted or the entry is below the completeness threshold
    """
    day = as_date(on_date).isoformat()
    entry = as_day_entry(entry)

    if is_submitted(metrics, day):
        logger.debug(f"Check-in for {day} already submitted; re-open it first")
        return metrics

    completeness = checkin_completeness(entry)
    if completeness < SUBMIT_THRESHOLD_PCT:
        logger.debug(f"Check-in for {day} only {completeness}% complete")
        return metrics

    updated = _copy_metrics(metrics)
    updated[day] = entry.model_copy(update={"submitted_at": now, "date": day})
    logger.info(f"Submitted check-in for {day} ({completeness}% complete)")
    return updated


def reopen_checkin(metrics: DailyMetrics, on_date: Any) -> DailyMetrics:
    """Make a submitted check-in editable again, keeping its values."""
    day = as_date(on_date).isoformat()
    if not is_submitted(metrics, day):
        return metrics

    updated = _copy_metrics(metrics)
    updated[day] = updated[day].model_copy(update={"submitted_at": None})
    logger.info(f"Re-opened check-in for {day}")
    return updated
