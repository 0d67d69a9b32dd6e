"""Writing-day calendar predicate and counter.

Pure functions over a goal's weekly pattern (Monday first) and its days off.
A goal with no weekly pattern has no writing days.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta

from wordpace.models import Goal


def weekday_index(sunday_first_weekday: int) -> int:
    """Convert a Sunday=0 weekday number into a Monday=0 pattern index."""
    return 6 if sunday_first_weekday == 0 else sunday_first_weekday - 1


def is_writing_day(day: date, goal: Goal) -> bool:
    """Whether ``day`` counts toward pacing.

    Days off take precedence over the weekly pattern.
    """
    if goal.writing_days is None:
        return False
    if day in goal.days_off:
        return False
    index = weekday_index(day.isoweekday() % 7)
    return goal.writing_days[index]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from ``start`` to ``end`` inclusive."""
    # Offsets from start never step past end, so date.max is a valid end.
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def count_writing_days(start: date, end: date, goal: Goal) -> int:
    """Count writing days in the inclusive range ``[start, end]``.

    Returns 0 when ``start`` is after ``end``.
    """
    if not goal.writing_days or not any(goal.writing_days):
        return 0
    return sum(1 for day in iter_days(start, end) if is_writing_day(day, goal))
