"""
Schedule resolution.

Schedules hold one entry per weekday, e.g. ``{"day": "Fri", "time":
"18:00 – 02:00"}``.  Two lookups can come up empty: no entry for today, and
an entry whose time has no en-dash separator.  Both return ``None`` here and
become ``""`` in :func:`close_time`.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

from ..catalog.models import CatalogRecord, ScheduleEntry

Clock = Callable[[], datetime]

EN_DASH = "–"

# Fixed English names so labels do not depend on the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def make_clock(timezone: str = "UTC") -> Clock:
    zone = ZoneInfo(timezone)
    return lambda: datetime.now(zone)


def weekday_abbr(at: datetime) -> str:
    return _WEEKDAYS[at.weekday()]


def current_date(at: datetime) -> str:
    """Short display label like ``"Fri, Oct 16, 2026"``. Returns ``""`` on bad input."""
    try:
        return f"{_WEEKDAYS[at.weekday()]}, {_MONTHS[at.month - 1]} {at.day:02d}, {at.year}"
    except (AttributeError, TypeError, IndexError):
        return ""


def todays_entry(
    schedule: Sequence[ScheduleEntry] | None, at: datetime
) -> ScheduleEntry | None:
    if not schedule:
        return None
    today = weekday_abbr(at).lower()
    for entry in schedule:
        if entry.day.strip().lower() == today:
            return entry
    return None


def closing_part(time: str) -> str | None:
    parts = time.split(EN_DASH)
    if len(parts) < 2:
        return None
    closing = parts[1].strip()
    return closing or None


def close_time(record: CatalogRecord, at: datetime) -> str:
    entry = todays_entry(record.about.schedule, at)
    if entry is None:
        return ""
    closing = closing_part(entry.time)
    if closing is None:
        return ""
    return closing
