"""Timestamp rendering with PHP ``date()`` style patterns.

The default sink pattern is ``Y-m-d H:i:s.u``. Each letter below is a
field; a backslash escapes the next character and anything else is
copied through unchanged.

    d D j l N w z   day         W          ISO week
    F m M n t L     month/year  o Y y      year
    a A g G h H     hour        i s u v    min/sec/usec/msec
    e T P O p Z     zone        U c r      epoch/ISO 8601/RFC 2822

Names are always English; rendering never depends on the process locale.
"""

from __future__ import annotations

import calendar
import functools
import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from debuglog.logging import get_logger

logger = get_logger("debuglog.timefmt")

DEFAULT_DATE_FORMAT = "Y-m-d H:i:s.u"

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_OFFSET_RE = re.compile(r"^([+-])(\d{1,2}):?(\d{2})?$")


@functools.lru_cache(maxsize=64)
def resolve_timezone(name: str | None) -> tzinfo | None:
    """Resolve a zone name (``Europe/Berlin``, ``UTC``, ``+02:00``).

    Returns None when ``name`` is None or can't be resolved; None means
    "use the system local zone".
    """
    if name is None:
        return None
    try:
        m = _OFFSET_RE.match(name.strip())
        if m:
            sign, hours, minutes = m.groups()
            delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
            # timezone() rejects offsets of 24h or more
            return timezone(-delta if sign == "-" else delta)
        return ZoneInfo(name)
    except Exception as exc:
        logger.debug("timefmt.zone.invalid", timezone=name, error=str(exc))
        return None


def to_datetime(timestamp: float, tz: tzinfo | None = None) -> datetime:
    """Convert epoch seconds to an aware datetime, rounded to microseconds."""
    seconds = math.floor(timestamp)
    micros = round((timestamp - seconds) * 1_000_000)
    if micros >= 1_000_000:
        seconds += 1
        micros -= 1_000_000
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(microseconds=micros)
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def _offset(dt: datetime, colon: bool) -> str:
    total = int(dt.utcoffset().total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _zone_id(dt: datetime) -> str:
    key = getattr(dt.tzinfo, "key", None)
    if key:
        return key
    if dt.utcoffset() == timedelta(0):
        return "UTC"
    return _offset(dt, colon=True)


def _field(ch: str, dt: datetime) -> str | None:
    hour12 = dt.hour % 12 or 12
    if ch == "d":
        return f"{dt.day:02d}"
    if ch == "D":
        return _DAY_NAMES[dt.weekday()][:3]
    if ch == "j":
        return str(dt.day)
    if ch == "l":
        return _DAY_NAMES[dt.weekday()]
    if ch == "N":
        return str(dt.isoweekday())
    if ch == "w":
        return str(dt.isoweekday() % 7)
    if ch == "z":
        return str(dt.timetuple().tm_yday - 1)
    if ch == "W":
        return f"{dt.isocalendar()[1]:02d}"
    if ch == "F":
        return _MONTH_NAMES[dt.month - 1]
    if ch == "m":
        return f"{dt.month:02d}"
    if ch == "M":
        return _MONTH_NAMES[dt.month - 1][:3]
    if ch == "n":
        return str(dt.month)
    if ch == "t":
        return str(calendar.monthrange(dt.year, dt.month)[1])
    if ch == "L":
        return "1" if calendar.isleap(dt.year) else "0"
    if ch == "o":
        return str(dt.isocalendar()[0])
    if ch == "Y":
        return f"{dt.year:04d}"
    if ch == "y":
        return f"{dt.year % 100:02d}"
    if ch == "a":
        return "am" if dt.hour < 12 else "pm"
    if ch == "A":
        return "AM" if dt.hour < 12 else "PM"
    if ch == "g":
        return str(hour12)
    if ch == "G":
        return str(dt.hour)
    if ch == "h":
        return f"{hour12:02d}"
    if ch == "H":
        return f"{dt.hour:02d}"
    if ch == "i":
        return f"{dt.minute:02d}"
    if ch == "s":
        return f"{dt.second:02d}"
    if ch == "u":
        return f"{dt.microsecond:06d}"
    if ch == "v":
        return f"{dt.microsecond // 1000:03d}"
    if ch == "e":
        return _zone_id(dt)
    if ch == "T":
        return dt.tzname() or _offset(dt, colon=True)
    if ch == "P":
        return _offset(dt, colon=True)
    if ch == "O":
        return _offset(dt, colon=False)
    if ch == "p":
        return "Z" if dt.utcoffset() == timedelta(0) else _offset(dt, colon=True)
    if ch == "Z":
        return str(int(dt.utcoffset().total_seconds()))
    if ch == "U":
        return str(math.floor(dt.timestamp()))
    if ch == "c":
        return render_datetime(dt, "Y-m-d\\TH:i:sP")
    if ch == "r":
        return render_datetime(dt, "D, d M Y H:i:s O")
    return None


def render_datetime(dt: datetime, pattern: str) -> str:
    """Render an aware datetime with a PHP date pattern."""
    out: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            out.append(next(chars, ""))
            continue
        value = _field(ch, dt)
        out.append(ch if value is None else value)
    return "".join(out)


def format_time(
    timestamp: float,
    pattern: str = DEFAULT_DATE_FORMAT,
    tz_name: str | None = None,
) -> str:
    """Render epoch seconds in ``tz_name`` (system local zone if unset/invalid)."""
    return render_datetime(to_datetime(timestamp, resolve_timezone(tz_name)), pattern)
