from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def as_date(value) -> date:
    """Accept a date, a datetime or an ISO string and return a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value type: {type(value)!r}")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()


def last_n_days(today: date, n: int) -> list[date]:
    """The n calendar days ending at today, oldest first."""
    return [today - timedelta(days=i) for i in range(n - 1, -1, -1)]


def one_month_before(value: date) -> date:
    year, month = (value.year, value.month - 1) if value.month > 1 else (value.year - 1, 12)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def monday_of_week(value: date, week_offset: int = 0) -> date:
    """Monday of the week holding value, shifted by week_offset whole weeks."""
    return value - timedelta(days=value.weekday()) + timedelta(weeks=week_offset)
