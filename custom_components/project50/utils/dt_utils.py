# File: utils/dt_utils.py
"""Date and time utilities for Project 50.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Uses standard library datetime/zoneinfo plus dateutil for ISO parsing.

Functions:
    - set_default_timezone / get_default_timezone: Configure the local zone
    - dt_now_utc: Get current datetime in UTC
    - as_local: Convert a datetime to local timezone
    - dt_local_date: Local calendar date of a datetime
    - dt_days_between: Whole calendar days between two dates
    - dt_parse_date: Parse date strings
    - dt_parse_datetime: Parse ISO 8601 datetime strings
    - dt_parse_reminder_time: Validate "HH:MM" reminder strings
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil import parser as dt_parser

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

REMINDER_TIME_FORMAT = "%H:%M"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Called during integration setup and again whenever the configured
    time zone changes.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive datetimes are assumed to be UTC.

    Args:
        dt_obj: Datetime object
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def dt_local_date(dt_obj: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date of a datetime.

    Aware datetimes keep their own offset unless `tz` is given, so a value
    produced by the host clock is read in the zone it was produced in.
    """
    if tz is not None or dt_obj.tzinfo is None:
        return as_local(dt_obj, tz).date()
    return dt_obj.date()


def dt_days_between(start: date, end: date) -> int:
    """Return the number of whole calendar days from `start` to `end`.

    Negative when `end` is before `start`.

    Examples:
        dt_days_between(date(2025, 1, 1), date(2025, 1, 4)) → 3
        dt_days_between(date(2025, 1, 4), date(2025, 1, 1)) → -3
    """
    return (end - start).days


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Safely parse a value into a `datetime.date`.

    Accepts ISO dates ("2025-04-07"), ISO datetimes (time part dropped),
    and date/datetime objects.

    Returns:
        datetime.date or None if parsing fails.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return dt_parser.isoparse(value).date()
    except ValueError:
        _LOGGER.debug("Unable to parse date string '%s'", value)
        return None


def dt_parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 datetime string into an aware datetime.

    Naive values are assumed to be in DEFAULT_TIME_ZONE.

    Returns:
        Timezone-aware datetime, or None if the input could not be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, str) and value:
        try:
            result = dt_parser.isoparse(value)
        except ValueError:
            _LOGGER.debug("Unable to parse datetime string '%s'", value)
            return None
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=DEFAULT_TIME_ZONE)
    return result


def dt_parse_reminder_time(value: str | time | None) -> str | None:
    """Normalize a reminder time to "HH:MM".

    Examples:
        dt_parse_reminder_time("7:05") → "07:05"
        dt_parse_reminder_time("07:05:00") → "07:05"
        dt_parse_reminder_time("25:00") → None
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime(REMINDER_TIME_FORMAT)
    if not isinstance(value, str) or not value.strip():
        return None

    for fmt in (REMINDER_TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(value.strip(), fmt).strftime(REMINDER_TIME_FORMAT)
        except ValueError:
            continue

    _LOGGER.debug("Invalid reminder time '%s'", value)
    return None
