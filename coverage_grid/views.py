"""
Lower-cardinality views next to the main grid. Which ones are populated
depends on the dispatcher scheduling mode.
"""

from collections.abc import Sequence

from coverage_grid.classifier import classify_dispatcher_slot
from coverage_grid.config import DispatcherSchedulingMode
from coverage_grid.grid import backup_ref, resolve_dispatchers
from coverage_grid.indexer import ScheduleIndex
from coverage_grid.models import REGION_WIDE_SCOPE, REGIONAL_BACKUP_SCOPE
from coverage_grid.schemas import (
    CountyDispatcherSlot,
    RegionalBackupSlot,
    RegionalDispatcherSlot,
    RegionalLead,
    TimeBlock,
)
from coverage_grid.time_blocks import block_key_of


def build_regional_dispatchers(
    index: ScheduleIndex,
    mode: DispatcherSchedulingMode,
    *,
    dates: Sequence[str],
    time_blocks: Sequence[TimeBlock],
) -> list[RegionalDispatcherSlot]:
    if mode is not DispatcherSchedulingMode.REGIONAL:
        return []

    slots: list[RegionalDispatcherSlot] = []
    for date in dates:
        for time_block in time_blocks:
            dispatcher, backups = resolve_dispatchers(
                index.dispatchers_for(
                    REGION_WIDE_SCOPE, date, block_key_of(time_block)
                )
            )
            slots.append(
                RegionalDispatcherSlot(
                    date=date,
                    time_block=time_block,
                    dispatcher=dispatcher,
                    backup_dispatchers=backups,
                    coverage=classify_dispatcher_slot(dispatcher is not None),
                )
            )
    return slots


def build_county_dispatchers(
    index: ScheduleIndex,
    mode: DispatcherSchedulingMode,
    *,
    counties: Sequence[str],
    dates: Sequence[str],
    time_blocks: Sequence[TimeBlock],
) -> list[CountyDispatcherSlot]:
    if mode is DispatcherSchedulingMode.ZONE:
        return []

    slots: list[CountyDispatcherSlot] = []
    for county in counties:
        for date in dates:
            for time_block in time_blocks:
                dispatcher, backups = resolve_dispatchers(
                    index.dispatchers_for(county, date, block_key_of(time_block))
                )
                slots.append(
                    CountyDispatcherSlot(
                        county=county,
                        date=date,
                        time_block=time_block,
                        dispatcher=dispatcher,
                        backup_dispatchers=backups,
                        coverage=classify_dispatcher_slot(dispatcher is not None),
                    )
                )
    return slots


def build_regional_backups(
    index: ScheduleIndex,
    *,
    dates: Sequence[str],
    time_blocks: Sequence[TimeBlock],
) -> list[RegionalBackupSlot]:
    """
    One entry for every date × block, including ones nobody has signed up
    for.
    """
    slots: list[RegionalBackupSlot] = []
    for date in dates:
        for time_block in time_blocks:
            # every REGIONAL row is a backup whatever its is_backup flag says
            assignments = index.dispatchers_for(
                REGIONAL_BACKUP_SCOPE, date, block_key_of(time_block)
            )
            slots.append(
                RegionalBackupSlot(
                    date=date,
                    time_block=time_block,
                    dispatchers=[backup_ref(a) for a in assignments],
                )
            )
    return slots


def build_regional_leads(
    index: ScheduleIndex, *, dates: Sequence[str]
) -> list[RegionalLead]:
    """
    Whole-day leads for the requested dates, primary before backup within
    each day.
    """
    leads: list[RegionalLead] = []
    for date in dates:
        day = sorted(index.leads_by_date.get(date, ()), key=lambda a: not a.is_primary)
        leads.extend(
            RegionalLead(
                id=a.id,
                user_id=a.user.id,
                user_name=a.user.name,
                date=date,
                is_primary=a.is_primary,
                notes=a.notes,
            )
            for a in day
        )
    return leads
