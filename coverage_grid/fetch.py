import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from coverage_grid.database import ScheduleRepository
from coverage_grid.dates import QueryWindow
from coverage_grid.errors import ScheduleFetchError
from coverage_grid.models import (
    REGION_WIDE_SCOPE,
    REGIONAL_BACKUP_SCOPE,
    DispatcherAssignment,
    OrganizationSettings,
    RegionalLeadAssignment,
    Shift,
    Zone,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordSets:
    settings: OrganizationSettings | None
    zones: list[Zone]
    shifts: list[Shift]
    dispatchers: list[DispatcherAssignment]
    region_wide_dispatchers: list[DispatcherAssignment]
    regional_backups: list[DispatcherAssignment]
    regional_leads: list[RegionalLeadAssignment]


async def _gather_all(calls: dict[str, Awaitable[Any]]) -> dict[str, Any]:
    """
    Run every call concurrently. The first failure cancels the rest and is
    re-raised as a single ScheduleFetchError; cancelling the caller cancels
    every in-flight call.
    """
    tasks = {
        name: asyncio.ensure_future(call) for name, call in calls.items()
    }
    try:
        results = await asyncio.gather(*tasks.values())
    except asyncio.CancelledError:
        for task in tasks.values():
            task.cancel()
        raise
    except Exception as exc:
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)

        source = next(
            (
                name
                for name, task in tasks.items()
                if not task.cancelled() and task.exception() is exc
            ),
            "unknown",
        )
        logger.exception("fetching %s for schedule failed", source)
        raise ScheduleFetchError(source) from exc

    return dict(zip(tasks, results, strict=True))


async def fetch_record_sets(
    repository: ScheduleRepository,
    window: QueryWindow,
    county: str | None = None,
) -> RecordSets:
    results = await _gather_all(
        {
            "settings": repository.get_settings(),
            "zones": repository.find_zones(),
            "shifts": repository.find_shifts(window, county),
            "dispatchers": repository.find_dispatcher_assignments(window, county),
            "region_wide_dispatchers": repository.find_dispatcher_assignments(
                window, REGION_WIDE_SCOPE
            ),
            "regional_backups": repository.find_dispatcher_assignments(
                window, REGIONAL_BACKUP_SCOPE
            ),
            "regional_leads": repository.find_regional_leads(window),
        }
    )
    return RecordSets(**results)
