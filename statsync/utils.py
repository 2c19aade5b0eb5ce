"""
statsync/utils.py

Purpose:
    Small shared helpers: timezone-aware clock, UTC parsing, JS-compatible
    rounding and tolerant numeric coercion for provider payloads.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any

_YEAR_RE = re.compile(r"(\d{4})")


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Make a naive datetime timezone-aware (UTC). Already-aware datetimes pass through.

    MongoDB hands back naive datetimes; wrap them before comparing with utcnow().
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_utc(value: str | datetime | date) -> datetime:
    """Parse an ISO 8601 string, date or datetime into a tz-aware UTC datetime."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    text = str(value).strip().replace("Z", "+00:00")
    if " " in text and "T" not in text:
        text = text.replace(" ", "T", 1)
    return ensure_utc(datetime.fromisoformat(text))


def parse_utc_or_none(value: Any) -> datetime | None:
    if value in (None, ""):
        return None
    try:
        return parse_utc(value)
    except (TypeError, ValueError):
        return None


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's Math.round: halves go towards +infinity.

    Python's round() uses banker's rounding (6.25 -> 6.2); consumers of the
    canonical documents expect 6.25 -> 6.3.
    """
    factor = 10 ** digits
    # Trim float noise first so 62.49999999999999 counts as the half it is.
    scaled = round(value * factor, 9)
    return math.floor(scaled + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def to_int(value: Any, default: int = 0) -> int:
    try:
        if value is None or value == "":
            return default
        return int(float(value))
    except (TypeError, ValueError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    try:
        if value is None or value == "":
            return default
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result):
        return default
    return result


def first_non_empty(*values: Any) -> Any:
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def extract_year(value: Any, default: int | None = None) -> int | None:
    """Return the first 4-digit year in a season label like '2024/25'."""
    match = _YEAR_RE.search(str(value or ""))
    if match:
        return int(match.group(1))
    return default


def age_from_dob(dob: Any, today: date | None = None) -> int:
    born = parse_utc_or_none(dob)
    if born is None:
        return 0
    today = today or utcnow().date()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return max(0, age)
