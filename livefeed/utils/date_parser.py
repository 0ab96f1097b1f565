"""Date parsing utilities for livefeed.

Centralizes all date handling so both upstream formats resolve to the same
representation: milliseconds since the epoch.
"""

import logging
from email.utils import parsedate_to_datetime

import pendulum

from config.constants import MONTH_NAMES

logger = logging.getLogger(__name__)


def to_epoch_ms(dt: pendulum.DateTime) -> int:
    """Convert a pendulum datetime to milliseconds since the epoch."""
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int, timezone) -> pendulum.DateTime:
    """Convert milliseconds since the epoch to a datetime in ``timezone``."""
    return pendulum.from_timestamp(ms / 1000, tz=timezone)


def resolve_month(name: str) -> int | None:
    """Resolve a month name or abbreviation to its number.

    Matching is a case-insensitive prefix test against the full English
    month names, first hit in calendar order ("Ma" resolves to March).

    Args:
        name: Month name as written upstream (e.g., "Oct", "october").

    Returns:
        Month number 1-12, or None if nothing matches.
    """
    needle = name.lower()
    if not needle:
        return None
    for number, month in enumerate(MONTH_NAMES, start=1):
        if month.lower().startswith(needle):
            return number
    return None


def parse_note_datetime(
    day: str, month: str, time_str: str, now: pendulum.DateTime
) -> pendulum.DateTime | None:
    """Parse a listing note's "<day> <month> at <HH:MM>" parts.

    The year is not part of the note, so the current year of ``now`` is
    used, in ``now``'s timezone.

    Args:
        day: Day of month (e.g., "25").
        month: Month name or prefix (e.g., "October", "Oct").
        time_str: Time in HH:MM format (e.g., "19:30").
        now: Reference instant providing year and timezone.

    Returns:
        Timezone-aware datetime, or None if the month is unknown or the
        resulting date does not exist.
    """
    month_number = resolve_month(month)
    if month_number is None:
        logger.debug(f"Unknown month name '{month}'")
        return None

    try:
        hours, minutes = (int(part) for part in time_str.split(":"))
        return pendulum.datetime(
            year=now.year,
            month=month_number,
            day=int(day),
            hour=hours,
            minute=minutes,
            tz=now.timezone,
        )
    except ValueError as e:
        logger.debug(
            f"Invalid listing date: day='{day}', month='{month}', "
            f"time='{time_str}': {e}"
        )
        return None


def parse_pub_date(value: str) -> pendulum.DateTime | None:
    """Parse a feed ``pubDate`` value.

    RFC 2822 ("Sun, 19 Oct 2026 18:00:00 +0000") is tried first, then
    ISO 8601. Values without an offset are taken as UTC.

    Args:
        value: Raw pubDate text.

    Returns:
        Timezone-aware datetime, or None if the value cannot be parsed.
    """
    value = value.strip()
    if not value:
        return None

    try:
        dt = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        dt = None

    try:
        if dt is not None:
            if dt.tzinfo is None:
                return pendulum.instance(dt, tz="UTC")
            return pendulum.instance(dt)

        parsed = pendulum.parse(value, strict=False)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparsable pubDate '{value}': {e}")
        return None

    if not isinstance(parsed, pendulum.DateTime):
        logger.debug(f"pubDate '{value}' is not a point in time")
        return None
    return parsed


def is_same_day(ms: int, now: pendulum.DateTime) -> bool:
    """Check whether ``ms`` falls on the same calendar day as ``now``.

    The comparison uses ``now``'s timezone.
    """
    return from_epoch_ms(ms, now.timezone).date() == now.date()
