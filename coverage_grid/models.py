"""
Input records for the coverage grid. These mirror what the record store
hands back, with relations (participant, zone id) already joined.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShiftStatus(StrEnum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class RSVPStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    NO_SHOW = "NO_SHOW"


class ShiftType(StrEnum):
    PATROL = "PATROL"
    COLLECTION = "COLLECTION"
    ON_CALL_FIELD_SUPPORT = "ON_CALL_FIELD_SUPPORT"


# scope sentinels on DispatcherAssignment.county
REGION_WIDE_SCOPE = "ALL"
REGIONAL_BACKUP_SCOPE = "REGIONAL"


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)


def _as_utc(value: datetime) -> datetime:
    # naive timestamps from the store are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class TimedRecord(Record):
    date: datetime
    start_time: datetime
    end_time: datetime

    @field_validator("date", "start_time", "end_time", mode="after")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Participant(Record):
    id: str
    name: str
    email: str | None = None


class Zone(Record):
    id: str
    name: str
    county: str | None = None
    is_active: bool = True


class ShiftVolunteer(Record):
    id: str  # rsvp id
    user: Participant
    status: RSVPStatus = RSVPStatus.PENDING
    is_zone_lead: bool = False


class Shift(TimedRecord):
    id: str
    title: str
    zone_id: str
    type: ShiftType | None = None
    type_config_name: str | None = None
    status: ShiftStatus = ShiftStatus.DRAFT
    volunteers: tuple[ShiftVolunteer, ...] = Field(default_factory=tuple)


class DispatcherAssignment(TimedRecord):
    id: str
    county: str  # county name, REGION_WIDE_SCOPE or REGIONAL_BACKUP_SCOPE
    user: Participant
    is_backup: bool = False
    notes: str | None = None


class RegionalLeadAssignment(Record):
    id: str
    date: datetime
    user: Participant
    is_primary: bool = True
    notes: str | None = None

    @field_validator("date", mode="after")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class OrganizationSettings(Record):
    """
    Raw settings row. Every field is optional; defaults are applied by
    ``coverage_grid.config.resolve_schedule_config``.
    """

    timezone: str | None = None
    dispatcher_scheduling_mode: str | None = None
    scheduling_mode: str | None = None
