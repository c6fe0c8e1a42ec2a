"""
Response models for the schedule endpoint. Field names serialize to the
camelCase shape the dashboard consumes.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coverage_grid.config import DispatcherSchedulingMode, SchedulingMode


class Coverage(StrEnum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class TimeBlock(Schema):
    start_time: str  # local, "6:00"
    end_time: str
    label: str  # "6am - 10am"
    start_time_utc: str = Field(alias="startTimeUTC")
    end_time_utc: str = Field(alias="endTimeUTC")

    @property
    def start_hour(self) -> int:
        return int(self.start_time.split(":", 1)[0])

    @property
    def end_hour(self) -> int:
        return int(self.end_time.split(":", 1)[0])


class DispatcherRef(Schema):
    id: str
    name: str
    assignment_id: str
    is_backup: bool = False
    notes: str | None = None


class BackupDispatcherRef(Schema):
    id: str
    name: str
    assignment_id: str
    notes: str | None = None


class ZoneLeadRef(Schema):
    id: str
    name: str
    rsvp_id: str


class VolunteerRef(Schema):
    id: str
    name: str
    rsvp_id: str
    status: str


class ShiftSummary(Schema):
    id: str
    title: str
    type: str | None = None
    type_config_name: str | None = None


class ZoneCoverage(Schema):
    zone_id: str
    zone_name: str
    zone_leads: list[ZoneLeadRef] = Field(default_factory=list)
    volunteers: list[VolunteerRef] = Field(default_factory=list)
    shifts: list[ShiftSummary] = Field(default_factory=list)


class Gaps(Schema):
    needs_dispatcher: bool
    zones_needing_leads: list[str] = Field(default_factory=list)


class Cell(Schema):
    county: str
    date: str
    time_block: TimeBlock
    dispatcher: DispatcherRef | None = None
    backup_dispatchers: list[BackupDispatcherRef] = Field(default_factory=list)
    zones: list[ZoneCoverage] = Field(default_factory=list)
    coverage: Coverage
    gaps: Gaps


class RegionalDispatcherSlot(Schema):
    date: str
    time_block: TimeBlock
    dispatcher: DispatcherRef | None = None
    backup_dispatchers: list[BackupDispatcherRef] = Field(default_factory=list)
    coverage: Coverage


class CountyDispatcherSlot(RegionalDispatcherSlot):
    county: str


class RegionalBackupSlot(Schema):
    date: str
    time_block: TimeBlock
    dispatchers: list[BackupDispatcherRef] = Field(default_factory=list)


class RegionalLead(Schema):
    id: str
    user_id: str
    user_name: str
    date: str
    is_primary: bool
    notes: str | None = None


class ZoneSummary(Schema):
    id: str
    name: str
    county: str | None = None


class ScheduleResponse(Schema):
    counties: list[str]
    zones: list[ZoneSummary]
    time_blocks: list[TimeBlock]
    dates: list[str]
    schedule: list[Cell]
    dispatcher_scheduling_mode: DispatcherSchedulingMode
    scheduling_mode: SchedulingMode
    regional_dispatchers: list[RegionalDispatcherSlot] = Field(default_factory=list)
    county_dispatchers: list[CountyDispatcherSlot] = Field(default_factory=list)
    regional_backup_dispatchers: list[RegionalBackupSlot] = Field(
        default_factory=list
    )
    regional_leads: list[RegionalLead] = Field(default_factory=list)
