"""
Coverage classification for grid cells.

ZONE mode folds dispatcher presence into the cell's coverage. COUNTY and
REGIONAL modes track dispatchers in their own per-slot view, so a cell there
is judged on zone leads alone. The gap descriptor is the same in every mode.
"""

from collections.abc import Sequence
from typing import assert_never

from coverage_grid.config import DispatcherSchedulingMode
from coverage_grid.schemas import Coverage, Gaps, ZoneCoverage


def classify_coverage(
    mode: DispatcherSchedulingMode,
    *,
    has_dispatcher: bool,
    zones_with_shifts: int,
    zones_missing_lead: int,
    zones_with_lead: int,
) -> Coverage:
    all_zones_have_leads = zones_with_shifts > 0 and zones_missing_lead == 0

    match mode:
        case DispatcherSchedulingMode.ZONE:
            if has_dispatcher and all_zones_have_leads:
                return Coverage.FULL
            if has_dispatcher or zones_with_shifts > 0:
                return Coverage.PARTIAL
            return Coverage.NONE
        case DispatcherSchedulingMode.COUNTY | DispatcherSchedulingMode.REGIONAL:
            if zones_with_shifts == 0:
                return Coverage.NONE
            if all_zones_have_leads:
                return Coverage.FULL
            if zones_with_lead > 0:
                return Coverage.PARTIAL
            return Coverage.NONE
        case _:
            assert_never(mode)


def compute_gaps(has_dispatcher: bool, zones: Sequence[ZoneCoverage]) -> Gaps:
    with_shifts = [z for z in zones if z.shifts]
    return Gaps(
        needs_dispatcher=not has_dispatcher and len(with_shifts) > 0,
        zones_needing_leads=[z.zone_name for z in with_shifts if not z.zone_leads],
    )


def classify_cell(
    mode: DispatcherSchedulingMode,
    has_dispatcher: bool,
    zones: Sequence[ZoneCoverage],
) -> tuple[Coverage, Gaps]:
    with_shifts = [z for z in zones if z.shifts]
    with_lead = sum(1 for z in with_shifts if z.zone_leads)
    coverage = classify_coverage(
        mode,
        has_dispatcher=has_dispatcher,
        zones_with_shifts=len(with_shifts),
        zones_missing_lead=len(with_shifts) - with_lead,
        zones_with_lead=with_lead,
    )
    return coverage, compute_gaps(has_dispatcher, zones)


def classify_dispatcher_slot(has_primary: bool) -> Coverage:
    """
    A dispatcher slot is binary: covered or not.
    """
    return Coverage.FULL if has_primary else Coverage.NONE
