"""Calendar-day helpers bound to the configured timezone."""

import re
from datetime import date, datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

from networth.config.settings import get_settings
from networth.core.exceptions import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def get_timezone() -> pytz.BaseTzInfo:
    """Return the configured timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the configured timezone."""
    return datetime.now(get_timezone())


def today_local() -> date:
    """Return today's calendar date in the configured timezone."""
    return now_local().date()


def parse_iso_date(value: Optional[str], field: Optional[str] = None) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string.

    Returns None for empty input. Anything that is not a valid calendar
    date in exactly that format raises ValidationError.
    """
    if not value:
        return None
    if not _ISO_DATE.match(value):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD", field=field)
    try:
        return date_parser.isoparse(value).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date '{value}': {exc}", field=field) from exc
