from datetime import UTC, date, datetime

import pytest

from coverage_grid.dates import (
    enumerate_dates,
    parse_date_param,
    query_window,
)
from coverage_grid.errors import ScheduleValidationError


def test_enumerate_dates_is_exactly_the_requested_range() -> None:
    assert enumerate_dates(date(2025, 1, 1), date(2025, 1, 3)) == [
        "2025-01-01",
        "2025-01-02",
        "2025-01-03",
    ]


def test_enumerate_single_day() -> None:
    assert enumerate_dates(date(2025, 3, 10), date(2025, 3, 10)) == ["2025-03-10"]


def test_enumerate_crosses_month_and_dst() -> None:
    dates = enumerate_dates(date(2025, 2, 27), date(2025, 3, 10))
    assert dates[0] == "2025-02-27"
    assert dates[2] == "2025-03-01"
    assert dates[-1] == "2025-03-10"
    assert len(dates) == 12


def test_query_window_pads_one_day_each_side() -> None:
    window = query_window(date(2025, 1, 1), date(2025, 1, 3))
    assert window.start == datetime(2024, 12, 31, tzinfo=UTC)
    assert window.end == datetime(2025, 1, 4, 23, 59, 59, 999000, tzinfo=UTC)
    assert window.contains(datetime(2025, 1, 4, 5, 0, tzinfo=UTC))
    assert not window.contains(datetime(2025, 1, 5, tzinfo=UTC))


def test_end_before_start_is_rejected() -> None:
    with pytest.raises(ScheduleValidationError):
        enumerate_dates(date(2025, 1, 3), date(2025, 1, 1))
    with pytest.raises(ScheduleValidationError):
        query_window(date(2025, 1, 3), date(2025, 1, 1))


@pytest.mark.parametrize(
    "value",
    [None, "", "2025-13-01", "01/02/2025", "soon", "20250310", "2025-W11-1", "2025-3-1"],
)
def test_parse_date_param_rejects_bad_input(value: str | None) -> None:
    with pytest.raises(ScheduleValidationError) as exc_info:
        parse_date_param(value, "startDate")
    assert "startDate" in str(exc_info.value)


def test_parse_date_param() -> None:
    assert parse_date_param(" 2025-03-10 ", "startDate") == date(2025, 3, 10)
