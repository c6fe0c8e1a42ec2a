"""
Date range handling for schedule requests.

Records are stored with UTC instants while the grid is laid out in local
calendar dates, so the store is queried over a window padded by one day on
each side. The grid's date axis is still exactly the requested range.
"""

import re
from datetime import UTC, date, datetime, time, timedelta
from typing import NamedTuple

from coverage_grid.errors import ScheduleValidationError

PADDING = timedelta(days=1)

DATE_PARAM = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class QueryWindow(NamedTuple):
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def parse_date_param(value: str | None, name: str) -> date:
    if not value:
        raise ScheduleValidationError(f"{name} is required")
    message = f"{name} must be a YYYY-MM-DD date, got {value!r}"
    text = value.strip()
    # strptime alone also accepts unpadded fields such as 2025-3-1
    if not DATE_PARAM.fullmatch(text):
        raise ScheduleValidationError(message)
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ScheduleValidationError(message) from exc


def validate_range(start: date, end: date) -> None:
    if end < start:
        raise ScheduleValidationError(
            f"endDate {end.isoformat()} is before startDate {start.isoformat()}"
        )


def query_window(start: date, end: date) -> QueryWindow:
    """
    UTC window to hand to the record store: from midnight of the day before
    ``start`` to the last millisecond of the day after ``end``.
    """
    validate_range(start, end)
    return QueryWindow(
        start=datetime.combine(start - PADDING, time.min, tzinfo=UTC),
        end=datetime.combine(
            end + PADDING, time(23, 59, 59, 999000), tzinfo=UTC
        ),
    )


def enumerate_dates(start: date, end: date) -> list[str]:
    """
    Inclusive list of YYYY-MM-DD strings from ``start`` to ``end``.
    """
    validate_range(start, end)
    days = (end - start).days
    return [(start + timedelta(days=offset)).isoformat() for offset in range(days + 1)]
