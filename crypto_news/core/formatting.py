"""
Derived display fields: relative time, absolute date and read time.

All functions take the current time explicitly so a resolution is a pure
function of its inputs.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
import math
from zoneinfo import ZoneInfo

MINUTE_GRANULARITY = "minute"
HOUR_GRANULARITY = "hour"

WORDS_PER_MINUTE = 200

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_iso8601(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into a timezone-aware datetime.

    Returns None for empty or unparseable input. Naive timestamps are
    assumed to be UTC.
    """
    if not value:
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    """Resolve an IANA timezone name, defaulting to UTC."""
    if not timezone_name or timezone_name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(timezone_name)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def time_ago(
    published_at: str | datetime | None,
    now: datetime,
    granularity: str = MINUTE_GRANULARITY,
) -> str:
    """Describe how long ago published_at was, relative to now.

    Buckets: under an hour (minute count or "Less than an hour ago" depending
    on granularity), hours under a day, days under a week, then weeks.
    Missing or unparseable timestamps read "Recently".
    """
    published = published_at if isinstance(published_at, datetime) else parse_iso8601(published_at)
    if published is None:
        return "Recently"

    diff_seconds = (now - published).total_seconds()
    hours = math.floor(diff_seconds / 3600)
    days = math.floor(diff_seconds / 86400)

    if hours < 1:
        if granularity == HOUR_GRANULARITY:
            return "Less than an hour ago"
        return _plural(max(1, math.floor(diff_seconds / 60)), "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    return _plural(days // 7, "week")


def read_time(content: str | None, default: str = "3 min read") -> str:
    """Estimate reading time at 200 words per minute, never under a minute."""
    if not content:
        return default
    words = len(content.split())
    return f"{max(1, math.ceil(words / WORDS_PER_MINUTE))} min read"


def _format_clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year}, {hour}:{moment.minute:02d} {meridiem}"


def format_published_date(
    published_at: str | datetime | None,
    now: datetime,
    tz: tzinfo | None = None,
) -> str:
    """Format a publication timestamp as e.g. "Oct 17, 2026, 3:04 PM UTC".

    A missing timestamp formats now instead, without the timezone name.
    """
    tz = tz or timezone.utc
    published = published_at if isinstance(published_at, datetime) else parse_iso8601(published_at)
    if published is None:
        return _format_clock(now.astimezone(tz))
    local = published.astimezone(tz)
    return f"{_format_clock(local)} {local.tzname()}"
