"""Helper functions for score and interval calculations."""

import math
import statistics
from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Optional, Sequence, Union

DAYS_PER_MONTH = 30

DateLike = Union[date, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Coerce a record date to a calendar day.

    Accepts date/datetime objects and ISO strings; a time portion on a
    string (e.g. '2025-01-15T08:30:00') is ignored.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def iso_date(value: DateLike) -> Optional[str]:
    """Record date as an ISO string, whatever form the caller stored."""
    day = parse_date(value)
    return day.isoformat() if day is not None else None


def months_between(start: date, end: date) -> float:
    """Elapsed months between two days, using 30-day months."""
    return (end - start).days / DAYS_PER_MONTH


def interval_score(elapsed: float, interval: float) -> float:
    """
    Linear decay score: 100 when freshly serviced, 0 at one full interval.

    Never negative; may exceed 100 when elapsed is negative (service
    recorded past the current odometer).
    """
    return max(0.0, 100 - (elapsed / interval) * 100)


def clamp_score(score: float) -> float:
    """Clamp a score into [0, 100]."""
    return min(100.0, max(0.0, score))


def round_score(score: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(score + 0.5))


def calc_next_service_miles(
    last_miles: Optional[float], interval: float, current_miles: float = 0
) -> float:
    """
    Calculate next service distance.

    - With history: last_miles + interval
    - Without history: current_miles + interval
    """
    if last_miles is not None:
        return last_miles + interval
    return current_miles + interval


def calc_next_service_date(
    last_date: Optional[date], interval_months: float, current_date: date
) -> date:
    """Calculate next service date: (last or current) + interval months."""
    base = last_date if last_date is not None else current_date
    months = int(interval_months)
    days = int((interval_months - months) * DAYS_PER_MONTH)
    return base + relativedelta(months=months, days=days)


def expected_efficiency(
    age_years: float, base: float = 35, per_year: float = 0.5, floor: float = 20
) -> float:
    """Baseline efficiency expected for a vehicle of the given age."""
    return max(floor, base - per_year * age_years)


def efficiency_spread(values: Sequence[float], min_samples: int = 3) -> Optional[float]:
    """Population standard deviation of efficiency samples, if enough exist."""
    if len(values) < min_samples:
        return None
    return statistics.pstdev(values)
