from __future__ import annotations

import calendar
import datetime as dt
from typing import List, Tuple


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_sunday_first(year: int, month: int, day: int) -> int:
    """0=Sunday .. 6=Saturday (Python's own weekday() starts on Monday)."""
    return (dt.date(year, month, day).weekday() + 1) % 7


def count_weekday_occurrences(year: int, month: int, weekday: int) -> int:
    """How many times a Sunday-first weekday falls inside the month."""
    return sum(
        1
        for day in range(1, days_in_month(year, month) + 1)
        if weekday_sunday_first(year, month, day) == weekday
    )


def month_key(year: int, month: int) -> str:
    return f"{year}_{month:02d}"


def months_through_next_year(year: int, month: int) -> List[Tuple[int, int]]:
    """(year, month) tuples from the given month through December of next year."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    periods = []
    end_year = year + 1
    while (year, month) <= (end_year, 12):
        periods.append((year, month))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return periods
