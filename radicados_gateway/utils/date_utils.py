"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Any, Optional

import pytz


def local_today(timezone: str) -> date:
    """Calendar date at the current instant in the given timezone"""
    return datetime.now(pytz.timezone(timezone)).date()


def to_local_iso(value: Optional[date]) -> Optional[str]:
    """YYYY-MM-DD form used by the hosted tables, None for missing dates"""
    return value.isoformat() if value is not None else None


def parse_local_iso(value: Any) -> Optional[date]:
    """
    Parse a stored date without going through an instant.

    Accepts date objects, "YYYY-MM-DD" strings and timestamp strings, whose
    date part is taken as written so no timezone shift can move the day.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
