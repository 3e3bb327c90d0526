"""
Picks the render date: an explicit override, or "today" in a timezone.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .calendar_math import CalendarDate

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """ZoneInfo for ``name``; unknown or empty names fall back to UTC."""
    if not name or name.upper() == DEFAULT_TIMEZONE:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Unknown timezone %r, falling back to %s", name, DEFAULT_TIMEZONE)
        return timezone.utc


def parse_date(value: str) -> Optional[date]:
    """
    Parse ``YYYY-MM-DD`` (or a full ISO datetime, truncated to its date).
    Returns None when the value is not a date.
    """
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def resolve_date(
    override: Optional[str] = None,
    tz: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CalendarDate:
    """
    Render date for a request.

    An unparseable ``override`` is ignored with a warning rather than
    failing, so the caller always gets a usable date. ``now`` is
    injectable for tests and defaults to the current UTC instant.
    """
    if override:
        parsed = parse_date(override)
        if parsed is not None:
            return CalendarDate.from_date(parsed)
        logger.warning("Ignoring unparseable date %r", override)

    zone = resolve_timezone(tz)
    instant = now or datetime.now(timezone.utc)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return CalendarDate.from_date(instant.astimezone(zone).date())
