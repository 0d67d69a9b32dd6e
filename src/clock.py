"""Canonical calendar-day helpers.

Every device must agree on which calendar day "today" is, so the date is
computed in one fixed timezone instead of the host's local zone. Uses
``zoneinfo.ZoneInfo`` (stdlib).
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

PACIFIC_TZ = "America/Los_Angeles"


def today_in(tz_name: str, now: datetime | None = None) -> date:
    """Return the calendar date in ``tz_name`` at instant ``now``.

    Naive ``now`` values are treated as UTC so the result never depends on
    the machine's locale.
    """
    tz = ZoneInfo(tz_name)
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))
    return now.astimezone(tz).date()


def pacific_today(now: datetime | None = None) -> date:
    """Today's date in US Pacific time."""
    return today_in(PACIFIC_TZ, now)


def parse_iso_date(value: object) -> date:
    """Coerce a date, datetime or ISO string into a calendar date.

    Strings may carry a time part (``2025-12-31T23:59:59``); only the date
    portion is kept.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip().split("T")[0])
    raise ValueError(f"Not a date: {value!r}")
