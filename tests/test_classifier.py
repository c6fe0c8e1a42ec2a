import pytest

from coverage_grid.classifier import (
    classify_cell,
    classify_coverage,
    classify_dispatcher_slot,
    compute_gaps,
)
from coverage_grid.config import DispatcherSchedulingMode
from coverage_grid.schemas import Coverage, ShiftSummary, ZoneCoverage, ZoneLeadRef

ZONE = DispatcherSchedulingMode.ZONE
COUNTY = DispatcherSchedulingMode.COUNTY
REGIONAL = DispatcherSchedulingMode.REGIONAL


def _zone(name: str, *, shifts: int = 1, lead: bool = False) -> ZoneCoverage:
    return ZoneCoverage(
        zone_id=name.lower(),
        zone_name=name,
        zone_leads=[ZoneLeadRef(id="u", name="U", rsvp_id=f"r-{name}")] if lead else [],
        shifts=[ShiftSummary(id=f"{name}-{i}", title="Patrol") for i in range(shifts)],
    )


@pytest.mark.parametrize(
    "has_dispatcher, with_shifts, missing, with_lead, expected",
    [
        (True, 2, 0, 2, Coverage.FULL),
        (True, 0, 0, 0, Coverage.PARTIAL),  # dispatcher, nothing to lead
        (False, 1, 1, 0, Coverage.PARTIAL),
        (False, 1, 0, 1, Coverage.PARTIAL),  # leads but no dispatcher
        (True, 2, 1, 1, Coverage.PARTIAL),
        (False, 0, 0, 0, Coverage.NONE),
    ],
)
def test_zone_mode(
    has_dispatcher: bool, with_shifts: int, missing: int, with_lead: int, expected: Coverage
) -> None:
    assert (
        classify_coverage(
            ZONE,
            has_dispatcher=has_dispatcher,
            zones_with_shifts=with_shifts,
            zones_missing_lead=missing,
            zones_with_lead=with_lead,
        )
        is expected
    )


@pytest.mark.parametrize("mode", [COUNTY, REGIONAL])
@pytest.mark.parametrize("has_dispatcher", [True, False])
@pytest.mark.parametrize(
    "with_shifts, missing, with_lead, expected",
    [
        (2, 0, 2, Coverage.FULL),
        (2, 1, 1, Coverage.PARTIAL),
        (2, 2, 0, Coverage.NONE),
        (0, 0, 0, Coverage.NONE),
    ],
)
def test_county_and_regional_modes_ignore_dispatcher(
    mode: DispatcherSchedulingMode,
    has_dispatcher: bool,
    with_shifts: int,
    missing: int,
    with_lead: int,
    expected: Coverage,
) -> None:
    assert (
        classify_coverage(
            mode,
            has_dispatcher=has_dispatcher,
            zones_with_shifts=with_shifts,
            zones_missing_lead=missing,
            zones_with_lead=with_lead,
        )
        is expected
    )


@pytest.mark.parametrize("mode", list(DispatcherSchedulingMode))
def test_gaps_do_not_depend_on_mode(mode: DispatcherSchedulingMode) -> None:
    zones = [_zone("North", lead=True), _zone("South"), _zone("Idle", shifts=0)]
    coverage, gaps = classify_cell(mode, False, zones)

    assert gaps.needs_dispatcher is True
    assert gaps.zones_needing_leads == ["South"]
    assert coverage is Coverage.PARTIAL


def test_gaps_without_shifts_never_need_dispatcher() -> None:
    gaps = compute_gaps(False, [_zone("Idle", shifts=0)])
    assert gaps.needs_dispatcher is False
    assert gaps.zones_needing_leads == []


def test_county_mode_with_dispatcher_still_flags_missing_leads() -> None:
    coverage, gaps = classify_cell(COUNTY, True, [_zone("North"), _zone("South")])
    assert coverage is Coverage.NONE
    assert gaps.needs_dispatcher is False
    assert gaps.zones_needing_leads == ["North", "South"]


def test_dispatcher_slot_is_binary() -> None:
    assert classify_dispatcher_slot(True) is Coverage.FULL
    assert classify_dispatcher_slot(False) is Coverage.NONE
