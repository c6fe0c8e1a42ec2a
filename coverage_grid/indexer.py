"""
One-pass annotation and indexing of raw records.

Every shift and dispatcher assignment is converted to local hours exactly
once here. The grid assembler only does dictionary lookups against the
resulting indexes, so its cost is linear in the number of cells visited.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, time
from typing import NamedTuple

from coverage_grid.config import ScheduleConfig
from coverage_grid.models import (
    DispatcherAssignment,
    RegionalLeadAssignment,
    Shift,
    ShiftStatus,
    Zone,
)
from coverage_grid.time_blocks import BlockKey
from coverage_grid.timezone import (
    DateStringExtractor,
    create_date_string_extractor,
    create_hour_extractor,
)

logger = logging.getLogger(__name__)


class ZoneSlotKey(NamedTuple):
    zone_id: str
    date: str
    block: BlockKey


class ScopeSlotKey(NamedTuple):
    scope: str  # county name, "ALL" or "REGIONAL"
    date: str
    block: BlockKey


@dataclass(frozen=True, slots=True)
class AnnotatedShift:
    shift: Shift
    date: str
    block: BlockKey

    @property
    def start_time(self) -> datetime:
        return self.shift.start_time

    @property
    def end_time(self) -> datetime:
        return self.shift.end_time


@dataclass(frozen=True, slots=True)
class AnnotatedDispatcher:
    assignment: DispatcherAssignment
    date: str
    block: BlockKey

    @property
    def start_time(self) -> datetime:
        return self.assignment.start_time

    @property
    def end_time(self) -> datetime:
        return self.assignment.end_time


def calendar_date_key(stored: datetime, local_date: DateStringExtractor) -> str:
    """
    Date key for a record's stored calendar date.

    Date-only columns come back as UTC midnight and are read as that UTC
    date; shifting them into a western timezone would land on the previous
    day. Older rows stored local midnight as a real instant, and those are
    converted with the local date extractor.
    """
    utc_value = stored.astimezone(UTC)
    if utc_value.time() == time.min:
        return utc_value.date().isoformat()
    return local_date(utc_value)


class RecordAnnotator:
    def __init__(self, config: ScheduleConfig) -> None:
        self.hour_of = create_hour_extractor(config.timezone)
        self.local_date = create_date_string_extractor(config.timezone)

    def block_of(self, start: datetime, end: datetime) -> BlockKey:
        return BlockKey(self.hour_of(start), self.hour_of(end))

    def date_of(self, stored: datetime) -> str:
        return calendar_date_key(stored, self.local_date)

    def shift(self, shift: Shift) -> AnnotatedShift:
        return AnnotatedShift(
            shift=shift,
            date=self.date_of(shift.date),
            block=self.block_of(shift.start_time, shift.end_time),
        )

    def dispatcher(self, assignment: DispatcherAssignment) -> AnnotatedDispatcher:
        return AnnotatedDispatcher(
            assignment=assignment,
            date=self.date_of(assignment.date),
            block=self.block_of(assignment.start_time, assignment.end_time),
        )


@dataclass
class ScheduleIndex:
    shifts: list[AnnotatedShift] = field(default_factory=list)
    shifts_by_zone_slot: dict[ZoneSlotKey, list[AnnotatedShift]] = field(
        default_factory=lambda: defaultdict(list)
    )
    dispatchers_by_scope_slot: dict[
        ScopeSlotKey, list[AnnotatedDispatcher]
    ] = field(default_factory=lambda: defaultdict(list))
    zones_by_county: dict[str, list[Zone]] = field(
        default_factory=lambda: defaultdict(list)
    )
    leads_by_date: dict[str, list[RegionalLeadAssignment]] = field(
        default_factory=lambda: defaultdict(list)
    )

    def shifts_for(
        self, zone_id: str, date: str, block: BlockKey
    ) -> Sequence[AnnotatedShift]:
        return self.shifts_by_zone_slot.get(ZoneSlotKey(zone_id, date, block), ())

    def dispatchers_for(
        self, scope: str, date: str, block: BlockKey
    ) -> Sequence[AnnotatedDispatcher]:
        return self.dispatchers_by_scope_slot.get(
            ScopeSlotKey(scope, date, block), ()
        )

    def zones_in(self, county: str) -> Sequence[Zone]:
        return self.zones_by_county.get(county, ())


def build_index(
    config: ScheduleConfig,
    *,
    zones: Iterable[Zone],
    shifts: Iterable[Shift],
    dispatcher_sets: Iterable[Iterable[DispatcherAssignment]],
    regional_leads: Iterable[RegionalLeadAssignment] = (),
) -> ScheduleIndex:
    """
    Annotate and index every record once.

    ``dispatcher_sets`` may overlap (a county query without a county filter
    also returns region-wide rows); an assignment id is indexed only the
    first time it is seen.
    """
    annotator = RecordAnnotator(config)
    index = ScheduleIndex()

    for zone in sorted(zones, key=lambda z: z.name):
        if zone.is_active and zone.county:
            index.zones_by_county[zone.county].append(zone)

    for shift in shifts:
        if shift.status != ShiftStatus.PUBLISHED:
            continue
        annotated = annotator.shift(shift)
        index.shifts.append(annotated)
        index.shifts_by_zone_slot[
            ZoneSlotKey(shift.zone_id, annotated.date, annotated.block)
        ].append(annotated)

    seen: set[str] = set()
    for assignments in dispatcher_sets:
        for assignment in assignments:
            if assignment.id in seen:
                continue
            seen.add(assignment.id)
            annotated = annotator.dispatcher(assignment)
            index.dispatchers_by_scope_slot[
                ScopeSlotKey(assignment.county, annotated.date, annotated.block)
            ].append(annotated)

    for lead in regional_leads:
        index.leads_by_date[annotator.date_of(lead.date)].append(lead)

    logger.debug(
        "indexed %d shifts, %d dispatcher assignments, %d zone counties",
        len(index.shifts),
        len(seen),
        len(index.zones_by_county),
    )
    return index
