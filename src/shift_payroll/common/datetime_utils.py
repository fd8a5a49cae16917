from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_month_start(day: date) -> date:
    first = month_start(day)
    if first.month == 12:
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


def is_weekend(day: date) -> bool:
    # Monday=0 ... Saturday=5, Sunday=6
    return day.weekday() >= 5


def submission_deadline(work_date: date, min_days_before: int) -> datetime:
    """Submission cut-off for a shift on ``work_date``: 00:00 of ``min_days_before`` days earlier."""
    return datetime.combine(work_date - timedelta(days=int(min_days_before)), time.min)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
