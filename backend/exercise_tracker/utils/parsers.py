"""Parsing helpers for request values.

Every helper is total: it returns a parsed value (or `None` for an
omitted optional value) and raises `BadInputError` for anything it cannot
interpret. Nothing else escapes from here.
"""

import datetime as dt
import re
from typing import Any, Optional

from ..exceptions import BadInputError

_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_duration(val: Any) -> int:
    """Parse an exercise duration.

    Accepts integers, integral floats (JSON numbers like `30.0`) and
    strings holding a signed decimal integer with optional surrounding
    whitespace.
    """
    if isinstance(val, bool):
        raise BadInputError("Invalid duration")
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str) and _INT_RE.match(val.strip()):
        return int(val.strip())
    raise BadInputError("Invalid duration")


def parse_date(val: Any) -> Optional[dt.date]:
    """Parse a calendar date, returning `None` when the value is omitted.

    `YYYY-MM-DD` and full ISO-8601 datetimes are accepted; for the latter
    only the calendar date is kept.
    """
    if val is None:
        return None
    if not isinstance(val, str):
        raise BadInputError("Invalid date")
    s = val.strip()
    if not s:
        return None
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        pass
    try:
        # fromisoformat only learned the trailing "Z" in 3.11
        return dt.datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        raise BadInputError("Invalid date")


def parse_limit(val: Any) -> Optional[int]:
    """Parse the log `limit` query value.

    Non-numeric and zero values are ignored and mean "no limit". A negative
    value caps the log at its magnitude, as a Mongo-style `limit(-n)` does.
    """
    if val is None:
        return None
    s = str(val).strip()
    if not _INT_RE.match(s):
        return None
    n = abs(int(s))
    return n or None


def clean_text(val: Any) -> Optional[str]:
    """Return a stripped string or `None` for missing/blank values."""
    if val is None:
        return None
    s = str(val).strip()
    return s or None


def format_date(d: dt.date) -> str:
    """Format a date the way the log shows it, e.g. `Mon Jan 01 2024`."""
    return d.strftime("%a %b %d %Y")
