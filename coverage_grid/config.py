import logging
import os
from dataclasses import dataclass
from enum import StrEnum

from coverage_grid.models import OrganizationSettings
from coverage_grid.timezone import DEFAULT_TIMEZONE, load_zone

logger = logging.getLogger(__name__)


class DispatcherSchedulingMode(StrEnum):
    """
    Where dispatcher coverage is tracked: per zone cell (legacy), per
    county, or region-wide.
    """

    ZONE = "ZONE"
    COUNTY = "COUNTY"
    REGIONAL = "REGIONAL"


class SchedulingMode(StrEnum):
    SIMPLE = "SIMPLE"
    FULL = "FULL"


DEFAULT_DISPATCHER_MODE = DispatcherSchedulingMode.ZONE
DEFAULT_SCHEDULING_MODE = SchedulingMode.SIMPLE


@dataclass(frozen=True)
class ServiceSettings:
    default_timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        tz = os.getenv("COVERAGE_DEFAULT_TIMEZONE", "").strip()
        if tz and load_zone(tz) is None:
            logger.warning(
                "COVERAGE_DEFAULT_TIMEZONE=%r is not a known timezone, using %s",
                tz,
                DEFAULT_TIMEZONE,
            )
            tz = ""
        return cls(default_timezone=tz or DEFAULT_TIMEZONE)


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Organization settings resolved once per request. Everything downstream
    reads this instead of re-defaulting the raw settings row.
    """

    timezone: str = DEFAULT_TIMEZONE
    dispatcher_mode: DispatcherSchedulingMode = DEFAULT_DISPATCHER_MODE
    scheduling_mode: SchedulingMode = DEFAULT_SCHEDULING_MODE


def _parse_mode[M: StrEnum](
    enum_cls: type[M], raw: str | None, default: M, field: str
) -> M:
    if not raw:
        return default
    try:
        return enum_cls(raw.strip().upper())
    except ValueError:
        logger.debug("unknown %s %r, using %s", field, raw, default.value)
        return default


def resolve_schedule_config(
    settings: OrganizationSettings | None,
    *,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> ScheduleConfig:
    if settings is None:
        settings = OrganizationSettings()

    timezone = (settings.timezone or "").strip()
    if not timezone or load_zone(timezone) is None:
        if timezone:
            logger.debug(
                "organization timezone %r unknown, using %s",
                timezone,
                default_timezone,
            )
        timezone = default_timezone

    config = ScheduleConfig(
        timezone=timezone,
        dispatcher_mode=_parse_mode(
            DispatcherSchedulingMode,
            settings.dispatcher_scheduling_mode,
            DEFAULT_DISPATCHER_MODE,
            "dispatcherSchedulingMode",
        ),
        scheduling_mode=_parse_mode(
            SchedulingMode,
            settings.scheduling_mode,
            DEFAULT_SCHEDULING_MODE,
            "schedulingMode",
        ),
    )
    logger.debug("resolved schedule config %s", config)
    return config
