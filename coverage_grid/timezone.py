"""
Timezone helpers for bucketing UTC instants into organization-local hours
and dates. Conversions go through ``zoneinfo`` so DST transitions follow the
real tz rules rather than a fixed offset.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/New_York"

HourExtractor = Callable[[datetime], int]
DateStringExtractor = Callable[[datetime], str]


def load_zone(name: str) -> ZoneInfo | None:
    """
    Return the ZoneInfo for ``name``, or None when the key is unknown or
    malformed.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        return None


def _to_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def create_hour_extractor(timezone: str) -> HourExtractor:
    """
    Build a function returning the local hour [0, 23] of an instant.

    If the timezone cannot be loaded the extractor degrades to the UTC hour
    instead of failing the whole grid.
    """
    tz = load_zone(timezone)
    if tz is None:
        logger.warning(
            "timezone %r unavailable, local hours fall back to UTC", timezone
        )

        def utc_hour(instant: datetime) -> int:
            return _to_utc(instant).hour

        return utc_hour

    def local_hour(instant: datetime) -> int:
        utc_instant = _to_utc(instant)
        try:
            return utc_instant.astimezone(tz).hour % 24
        except (OverflowError, ValueError):
            logger.warning(
                "could not convert %s to %s, using UTC hour",
                utc_instant.isoformat(),
                timezone,
            )
            return utc_instant.hour

    return local_hour


def create_date_string_extractor(timezone: str) -> DateStringExtractor:
    """
    Build a function returning the local calendar date (YYYY-MM-DD) of an
    instant.
    """
    tz = load_zone(timezone) or UTC

    def local_date(instant: datetime) -> str:
        utc_instant = _to_utc(instant)
        try:
            return utc_instant.astimezone(tz).date().isoformat()
        except (OverflowError, ValueError):
            logger.warning(
                "could not convert %s to %s, using UTC date",
                utc_instant.isoformat(),
                timezone,
            )
            return utc_instant.date().isoformat()

    return local_date


def format_hour(hour: int) -> str:
    if hour == 0:
        return "12am"
    if hour == 12:
        return "12pm"
    if hour < 12:
        return f"{hour}am"
    return f"{hour - 12}pm"


def to_iso_utc(instant: datetime) -> str:
    """
    ISO-8601 in UTC with millisecond precision and a ``Z`` suffix, e.g.
    ``2025-03-10T10:00:00.000Z``.
    """
    return (
        _to_utc(instant)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
