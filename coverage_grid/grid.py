"""
Grid assembly: county × date × time-block × zone, resolved through the
prebuilt indexes. Cells without any dispatcher or zone activity are not
emitted, so the output grows with actual activity rather than with the full
cross product.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from coverage_grid.classifier import classify_cell
from coverage_grid.config import DispatcherSchedulingMode
from coverage_grid.indexer import AnnotatedDispatcher, AnnotatedShift, ScheduleIndex
from coverage_grid.models import RSVPStatus, Zone
from coverage_grid.schemas import (
    BackupDispatcherRef,
    Cell,
    DispatcherRef,
    ShiftSummary,
    TimeBlock,
    VolunteerRef,
    ZoneCoverage,
    ZoneLeadRef,
)
from coverage_grid.time_blocks import block_key_of

logger = logging.getLogger(__name__)

ACTIVE_RSVP_STATUSES = frozenset({RSVPStatus.CONFIRMED, RSVPStatus.PENDING})


def backup_ref(dispatcher: AnnotatedDispatcher) -> BackupDispatcherRef:
    return BackupDispatcherRef(
        id=dispatcher.assignment.user.id,
        name=dispatcher.assignment.user.name,
        assignment_id=dispatcher.assignment.id,
        notes=dispatcher.assignment.notes,
    )


def resolve_dispatchers(
    dispatchers: Sequence[AnnotatedDispatcher],
) -> tuple[DispatcherRef | None, list[BackupDispatcherRef]]:
    """
    Split a slot's assignments into the primary (first non-backup in input
    order) and the backups.
    """
    primary = next((d for d in dispatchers if not d.assignment.is_backup), None)
    backups = [backup_ref(d) for d in dispatchers if d.assignment.is_backup]
    if primary is None:
        return None, backups
    return (
        DispatcherRef(
            id=primary.assignment.user.id,
            name=primary.assignment.user.name,
            assignment_id=primary.assignment.id,
            is_backup=False,
            notes=primary.assignment.notes,
        ),
        backups,
    )


def aggregate_zone(
    zone: Zone, shifts: Sequence[AnnotatedShift]
) -> ZoneCoverage | None:
    leads: list[ZoneLeadRef] = []
    volunteers: list[VolunteerRef] = []
    for annotated in shifts:
        for rsvp in annotated.shift.volunteers:
            if rsvp.status not in ACTIVE_RSVP_STATUSES:
                continue
            if rsvp.is_zone_lead:
                leads.append(
                    ZoneLeadRef(id=rsvp.user.id, name=rsvp.user.name, rsvp_id=rsvp.id)
                )
            else:
                volunteers.append(
                    VolunteerRef(
                        id=rsvp.user.id,
                        name=rsvp.user.name,
                        rsvp_id=rsvp.id,
                        status=rsvp.status.value,
                    )
                )

    if not shifts and not leads and not volunteers:
        return None

    return ZoneCoverage(
        zone_id=zone.id,
        zone_name=zone.name,
        zone_leads=leads,
        volunteers=volunteers,
        shifts=[
            ShiftSummary(
                id=a.shift.id,
                title=a.shift.title,
                type=a.shift.type.value if a.shift.type else None,
                type_config_name=a.shift.type_config_name,
            )
            for a in shifts
        ],
    )


@dataclass
class CellBuilder:
    county: str
    date: str
    time_block: TimeBlock
    dispatcher: DispatcherRef | None = None
    backup_dispatchers: list[BackupDispatcherRef] = field(default_factory=list)
    zones: list[ZoneCoverage] = field(default_factory=list)

    def add_zone(self, zone: ZoneCoverage | None) -> None:
        if zone is not None:
            self.zones.append(zone)

    @property
    def has_data(self) -> bool:
        return self.dispatcher is not None or bool(self.zones)

    def build(self, mode: DispatcherSchedulingMode) -> Cell:
        coverage, gaps = classify_cell(mode, self.dispatcher is not None, self.zones)
        return Cell(
            county=self.county,
            date=self.date,
            time_block=self.time_block,
            dispatcher=self.dispatcher,
            backup_dispatchers=self.backup_dispatchers,
            zones=self.zones,
            coverage=coverage,
            gaps=gaps,
        )


def assemble_grid(
    index: ScheduleIndex,
    mode: DispatcherSchedulingMode,
    *,
    counties: Sequence[str],
    dates: Sequence[str],
    time_blocks: Sequence[TimeBlock],
) -> list[Cell]:
    cells: list[Cell] = []
    for county in counties:
        county_zones = index.zones_in(county)
        for date in dates:
            for time_block in time_blocks:
                block = block_key_of(time_block)
                dispatcher, backups = resolve_dispatchers(
                    index.dispatchers_for(county, date, block)
                )
                builder = CellBuilder(
                    county=county,
                    date=date,
                    time_block=time_block,
                    dispatcher=dispatcher,
                    backup_dispatchers=backups,
                )
                for zone in county_zones:
                    builder.add_zone(
                        aggregate_zone(zone, index.shifts_for(zone.id, date, block))
                    )
                if builder.has_data:
                    cells.append(builder.build(mode))

    logger.debug(
        "assembled %d cells from %d counties x %d dates x %d blocks",
        len(cells),
        len(counties),
        len(dates),
        len(time_blocks),
    )
    return cells
