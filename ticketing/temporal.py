import datetime as dt
import re
from typing import Any, Optional, Tuple

from ticketing.errors import UnparseableDateError, UnparseableTimeError

_TIME_24H = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")
_TIME_12H = re.compile(r"^(\d{1,2})(?::(\d{1,2}))?(?::(\d{1,2}))?\s*([AaPp][Mm])$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DISPLAY = re.compile(r"^(\d{4}-\d{2}-\d{2})[ T]\s*(.+)$")
_FRACTION = re.compile(r"\.(\d{3})\d+")

# Tried in order once ISO parsing has failed
_DATE_LAYOUTS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%a %b %d %Y",
)


def parse_time(value: str) -> str:
    """
    Normalize a show time to 24-hour ``HH:MM:SS``.

    Accepts ``H:MM[:SS]`` (24-hour), ``H[:MM[:SS]] AM|PM`` and anything
    ``datetime.fromisoformat`` reads as a time of day on 1970-01-01. That
    includes compact forms ("10" -> 10:00:00, "1030" -> 10:30:00); a UTC
    offset is dropped and the wall-clock time kept as written.
    Raises ``UnparseableTimeError`` otherwise.
    """
    s = (value or "").strip()
    if not s:
        raise UnparseableTimeError(value)

    m = _TIME_24H.match(s)
    if m:
        hour, minute, second = m.group(1), m.group(2), m.group(3) or "00"
        return f"{int(hour):02d}:{int(minute):02d}:{int(second):02d}"

    m = _TIME_12H.match(s)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2) or 0)
        second = int(m.group(3) or 0)
        if 1 <= hour <= 12 and minute < 60 and second < 60:
            is_pm = m.group(4).lower() == "pm"
            if hour == 12:
                hour = 12 if is_pm else 0
            elif is_pm:
                hour += 12
            return f"{hour:02d}:{minute:02d}:{second:02d}"

    try:
        parsed = dt.datetime.fromisoformat(f"1970-01-01T{s}")
    except ValueError:
        raise UnparseableTimeError(value) from None
    return f"{parsed.hour:02d}:{parsed.minute:02d}:{parsed.second:02d}"


def parse_date(value: str) -> str:
    """Normalize a show date to ``YYYY-MM-DD``; raises ``UnparseableDateError``."""
    s = (value or "").strip()
    if not s:
        raise UnparseableDateError(value)
    if _ISO_DATE.match(s):
        return s

    try:
        return dt.datetime.fromisoformat(s).date().isoformat()
    except ValueError:
        pass

    for layout in _DATE_LAYOUTS:
        try:
            return dt.datetime.strptime(s, layout).date().isoformat()
        except ValueError:
            continue

    raise UnparseableDateError(value)


def normalize_timestamp(value: Any) -> Any:
    """
    Truncate fractional seconds to milliseconds:
    2025-12-20T17:14:33.080783 -> 2025-12-20T17:14:33.080
    """
    if not isinstance(value, str):
        return value
    if not value:
        return None
    return _FRACTION.sub(r".\1", value, count=1)


def split_display(value: str) -> Tuple[Optional[str], str]:
    """Split a ``"<date> <time>"`` display string into its parts."""
    s = (value or "").strip()
    m = _DISPLAY.match(s)
    if m:
        return m.group(1), m.group(2).strip()
    return None, s
