"""Core utilities and shared functionality."""

from networth.core.timezone import (
    get_timezone,
    now_local,
    today_local,
    parse_iso_date,
)
from networth.core.exceptions import (
    AppError,
    ValidationError,
)
from networth.core.months import (
    month_start,
    month_end,
    add_months,
    iter_months,
    year_month,
)

__all__ = [
    "get_timezone",
    "now_local",
    "today_local",
    "parse_iso_date",
    "AppError",
    "ValidationError",
    "month_start",
    "month_end",
    "add_months",
    "iter_months",
    "year_month",
]
