"""Lenient numeric parsing for user-entered values.

Form values arrive as strings, numbers or nothing at all. Anything that does
not parse to a usable non-zero number is treated as "unset" (``None``); the
caller decides what default, if any, replaces it.
"""

import math
from datetime import date, datetime
from typing import Any, Optional


def parse_optional_float(value: Any) -> Optional[float]:
    """Parse a value to a float, returning None when it is unset.

    Blank strings, malformed strings, NaN/inf, booleans and zero all count
    as unset.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None

    if math.isnan(parsed) or math.isinf(parsed) or parsed == 0:
        return None
    return parsed


def parse_optional_int(value: Any) -> Optional[int]:
    """Parse a value to an int (truncating decimals), None when unset."""
    parsed = parse_optional_float(value)
    if parsed is None:
        return None
    return int(parsed) or None


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    ``round()`` uses banker's rounding (``round(2.5) == 2``); scores and
    weights here always round .5 upwards.
    """
    return int(math.floor(value + 0.5))


def as_date(value: Any) -> date:
    """Coerce a date, datetime or ISO date string to a date.

    Raises:
        ValueError: If a string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))
