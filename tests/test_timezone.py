import logging
from datetime import UTC, datetime

import pytest

from coverage_grid.timezone import (
    create_date_string_extractor,
    create_hour_extractor,
    format_hour,
    to_iso_utc,
)


def test_hour_uses_tz_rules_not_fixed_offset() -> None:
    hour_of = create_hour_extractor("America/New_York")
    # EST (UTC-5) in January, EDT (UTC-4) in July
    assert hour_of(datetime(2025, 1, 15, 11, 0, tzinfo=UTC)) == 6
    assert hour_of(datetime(2025, 7, 15, 10, 0, tzinfo=UTC)) == 6


@pytest.mark.parametrize(
    "instant, expected",
    [
        # spring forward on 2025-03-09
        (datetime(2025, 3, 8, 11, 0, tzinfo=UTC), 6),
        (datetime(2025, 3, 10, 10, 0, tzinfo=UTC), 6),
        (datetime(2025, 3, 10, 11, 0, tzinfo=UTC), 7),
        # fall back on 2025-11-02
        (datetime(2025, 11, 1, 10, 0, tzinfo=UTC), 6),
        (datetime(2025, 11, 3, 11, 0, tzinfo=UTC), 6),
        (datetime(2025, 11, 3, 10, 0, tzinfo=UTC), 5),
    ],
)
def test_hour_across_dst_transitions(instant: datetime, expected: int) -> None:
    hour_of = create_hour_extractor("America/New_York")
    assert hour_of(instant) == expected


def test_hour_treats_naive_datetimes_as_utc() -> None:
    hour_of = create_hour_extractor("America/New_York")
    assert hour_of(datetime(2025, 1, 15, 11, 0)) == 6


def test_unknown_timezone_falls_back_to_utc_hour(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="coverage_grid.timezone"):
        hour_of = create_hour_extractor("Mars/Olympus_Mons")

    assert hour_of(datetime(2025, 1, 15, 11, 0, tzinfo=UTC)) == 11
    assert "Mars/Olympus_Mons" in caplog.text


def test_date_string_is_local_calendar_date() -> None:
    local_date = create_date_string_extractor("America/New_York")
    # 02:00 UTC is still the previous evening in New York
    assert local_date(datetime(2025, 12, 16, 2, 0, tzinfo=UTC)) == "2025-12-15"
    assert local_date(datetime(2025, 12, 16, 5, 0, tzinfo=UTC)) == "2025-12-16"


@pytest.mark.parametrize(
    "hour, label",
    [(0, "12am"), (6, "6am"), (11, "11am"), (12, "12pm"), (13, "1pm"), (23, "11pm")],
)
def test_format_hour(hour: int, label: str) -> None:
    assert format_hour(hour) == label


def test_to_iso_utc_matches_store_format() -> None:
    assert (
        to_iso_utc(datetime(2025, 3, 10, 10, 0, tzinfo=UTC))
        == "2025-03-10T10:00:00.000Z"
    )


def test_unconvertible_instant_falls_back_to_its_utc_hour(
    caplog: pytest.LogCaptureFixture,
) -> None:
    hour_of = create_hour_extractor("Asia/Tokyo")
    # +09:00 pushes the last representable instant past year 9999
    edge = datetime.max.replace(tzinfo=UTC)

    with caplog.at_level(logging.WARNING, logger="coverage_grid.timezone"):
        assert hour_of(edge) == 23

    assert "using UTC hour" in caplog.text
    assert hour_of(datetime(2025, 1, 15, 0, 0, tzinfo=UTC)) == 9


def test_unconvertible_instant_falls_back_to_its_utc_date(
    caplog: pytest.LogCaptureFixture,
) -> None:
    local_date = create_date_string_extractor("Asia/Tokyo")
    edge = datetime.max.replace(tzinfo=UTC)

    with caplog.at_level(logging.WARNING, logger="coverage_grid.timezone"):
        assert local_date(edge) == "9999-12-31"

    assert "using UTC date" in caplog.text
    assert local_date(datetime(2025, 1, 15, 20, 0, tzinfo=UTC)) == "2025-01-16"
