"""Parsing of dates typed on the command line or found in stored records."""

from datetime import date, datetime, timedelta
from typing import Any, Optional
import re

from dateutil import parser as date_parser

_DAYS_AGO = re.compile(r"^(\d+)\s+days?\s+ago$")
_OFFSETS = {"today": 0, "yesterday": -1, "tomorrow": 1}


def parse_date(text: str) -> date:
    """Turn an entry date typed by the user into a calendar day.

    Accepts ISO days ("2024-01-15"), anything dateutil understands
    ("January 15, 2024") and the words today, yesterday, tomorrow and
    "N days ago".

    Raises:
        ValueError: If the text is not a recognizable date
    """
    value = text.strip().lower()
    today = date.today()

    if value in _OFFSETS:
        return today + timedelta(days=_OFFSETS[value])

    match = _DAYS_AGO.match(value)
    if match:
        return today - timedelta(days=int(match.group(1)))

    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def truncate_to_day(value: Any) -> Optional[date]:
    """Reduce a stored date value to calendar-day precision.

    Accepts ``date``/``datetime`` objects and ISO-8601 date or timestamp
    strings. Returns None for anything else, including malformed strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None
