"""Calendar-month arithmetic used for monthly snapshots."""

import calendar
from datetime import date
from typing import Iterator


def month_start(d: date) -> date:
    """First day of the month containing d."""
    return d.replace(day=1)


def month_end(d: date) -> date:
    """Last day of the month containing d."""
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def add_months(d: date, months: int) -> date:
    """Shift the first-of-month of d by a number of months."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def iter_months(start: date, end: date) -> Iterator[date]:
    """Yield the first day of every month from start through end, inclusive."""
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        yield current
        current = add_months(current, 1)


def year_month(d: date) -> tuple[int, int]:
    """(year, month) key for month-level comparisons."""
    return (d.year, d.month)
