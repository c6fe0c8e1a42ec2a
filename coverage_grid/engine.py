"""
The schedule engine: fetch → index → assemble → classify → emit.

``build_schedule`` is the async entry point used by the API. The pure part,
``assemble_schedule``, takes already-fetched record sets and can be run on
its own against frozen fixtures.
"""

import logging
from dataclasses import dataclass
from datetime import date

from coverage_grid.config import (
    ScheduleConfig,
    ServiceSettings,
    resolve_schedule_config,
)
from coverage_grid.database import ScheduleRepository
from coverage_grid.dates import enumerate_dates, query_window, validate_range
from coverage_grid.fetch import RecordSets, fetch_record_sets
from coverage_grid.grid import assemble_grid
from coverage_grid.indexer import build_index
from coverage_grid.schemas import ScheduleResponse, ZoneSummary
from coverage_grid.time_blocks import derive_time_blocks
from coverage_grid.views import (
    build_county_dispatchers,
    build_regional_backups,
    build_regional_dispatchers,
    build_regional_leads,
)

logger = logging.getLogger(__name__)

ALL_COUNTIES = "all"


@dataclass(frozen=True)
class ScheduleRequest:
    start_date: date
    end_date: date
    county: str | None = None

    def __post_init__(self) -> None:
        validate_range(self.start_date, self.end_date)

    @property
    def county_filter(self) -> str | None:
        if not self.county or self.county == ALL_COUNTIES:
            return None
        return self.county


def assemble_schedule(
    records: RecordSets, config: ScheduleConfig, request: ScheduleRequest
) -> ScheduleResponse:
    mode = config.dispatcher_mode
    active_zones = [z for z in records.zones if z.is_active]
    counties = sorted({z.county for z in active_zones if z.county})
    target_counties = (
        [request.county_filter] if request.county_filter else counties
    )

    index = build_index(
        config,
        zones=active_zones,
        shifts=records.shifts,
        dispatcher_sets=(
            records.dispatchers,
            records.region_wide_dispatchers,
            records.regional_backups,
        ),
        regional_leads=records.regional_leads,
    )
    time_blocks = derive_time_blocks(index.shifts)
    dates = enumerate_dates(request.start_date, request.end_date)

    schedule = assemble_grid(
        index,
        mode,
        counties=target_counties,
        dates=dates,
        time_blocks=time_blocks,
    )

    return ScheduleResponse(
        counties=counties,
        zones=[
            ZoneSummary(id=z.id, name=z.name, county=z.county)
            for z in sorted(active_zones, key=lambda z: z.name)
        ],
        time_blocks=time_blocks,
        dates=dates,
        schedule=schedule,
        dispatcher_scheduling_mode=mode,
        scheduling_mode=config.scheduling_mode,
        regional_dispatchers=build_regional_dispatchers(
            index, mode, dates=dates, time_blocks=time_blocks
        ),
        county_dispatchers=build_county_dispatchers(
            index,
            mode,
            counties=target_counties,
            dates=dates,
            time_blocks=time_blocks,
        ),
        regional_backup_dispatchers=build_regional_backups(
            index, dates=dates, time_blocks=time_blocks
        ),
        regional_leads=build_regional_leads(index, dates=dates),
    )


async def build_schedule(
    repository: ScheduleRepository,
    request: ScheduleRequest,
    settings: ServiceSettings | None = None,
) -> ScheduleResponse:
    settings = settings or ServiceSettings()
    window = query_window(request.start_date, request.end_date)

    records = await fetch_record_sets(repository, window, request.county_filter)
    config = resolve_schedule_config(
        records.settings, default_timezone=settings.default_timezone
    )
    logger.debug(
        "building schedule %s..%s county=%s: %d zones, %d shifts, %d dispatchers",
        request.start_date,
        request.end_date,
        request.county_filter or ALL_COUNTIES,
        len(records.zones),
        len(records.shifts),
        len(records.dispatchers),
    )
    return assemble_schedule(records, config, request)
