from collections.abc import Iterator, MutableMapping
from typing import Protocol, TypeVar

from coverage_grid.dates import QueryWindow
from coverage_grid.models import (
    DispatcherAssignment,
    OrganizationSettings,
    RegionalLeadAssignment,
    Shift,
    ShiftStatus,
    Zone,
)

K = TypeVar("K")
V = TypeVar("V")

StoredRecord = (
    Zone | Shift | DispatcherAssignment | RegionalLeadAssignment | OrganizationSettings
)

SETTINGS_KEY = "settings"


class ScheduleRepository(Protocol):
    """
    Read side of the record store, already scoped to the current
    organization. Every method returns records with their relations
    (participant, volunteers) joined in.
    """

    async def get_settings(self) -> OrganizationSettings | None: ...

    async def find_zones(self) -> list[Zone]: ...

    async def find_shifts(
        self, window: QueryWindow, county: str | None = None
    ) -> list[Shift]: ...

    async def find_dispatcher_assignments(
        self, window: QueryWindow, scope: str | None = None
    ) -> list[DispatcherAssignment]: ...

    async def find_regional_leads(
        self, window: QueryWindow
    ) -> list[RegionalLeadAssignment]: ...


class InMemoryKeyValueDatabase[K, V]:
    """
    Simple in-memory key/value database.
    """

    def __init__(self) -> None:
        self._store: MutableMapping[K, V] = {}

    def put(self, key: K, value: V) -> None:
        self._store[key] = value

    def get(self, key: K) -> V | None:
        return self._store.get(key)

    def __iter__(self) -> Iterator[V]:
        return iter(self._store.values())


class InMemoryScheduleRepository:
    """
    ScheduleRepository over an InMemoryKeyValueDatabase, for local runs and
    tests. Queries mirror the filters and ordering of the SQL store.
    """

    def __init__(
        self, db: InMemoryKeyValueDatabase[str, StoredRecord] | None = None
    ) -> None:
        self.db: InMemoryKeyValueDatabase[str, StoredRecord] = (
            db if db is not None else InMemoryKeyValueDatabase()
        )

    def add(self, *records: StoredRecord) -> None:
        for record in records:
            if isinstance(record, OrganizationSettings):
                self.db.put(SETTINGS_KEY, record)
            elif isinstance(record, Zone):
                self.db.put(f"zone:{record.id}", record)
            elif isinstance(record, Shift):
                self.db.put(f"shift:{record.id}", record)
            elif isinstance(record, DispatcherAssignment):
                self.db.put(f"dispatcher:{record.id}", record)
            elif isinstance(record, RegionalLeadAssignment):
                self.db.put(f"regional-lead:{record.id}", record)
            else:
                raise TypeError(f"unsupported record type {type(record).__name__}")

    async def get_settings(self) -> OrganizationSettings | None:
        settings = self.db.get(SETTINGS_KEY)
        return settings if isinstance(settings, OrganizationSettings) else None

    async def find_zones(self) -> list[Zone]:
        zones = [r for r in self.db if isinstance(r, Zone) and r.is_active]
        return sorted(zones, key=lambda z: z.name)

    async def find_shifts(
        self, window: QueryWindow, county: str | None = None
    ) -> list[Shift]:
        zone_county = {
            r.id: r.county for r in self.db if isinstance(r, Zone)
        }
        shifts = [
            r
            for r in self.db
            if isinstance(r, Shift)
            and r.status == ShiftStatus.PUBLISHED
            and window.contains(r.date)
            and (county is None or zone_county.get(r.zone_id) == county)
        ]
        return sorted(shifts, key=lambda s: (s.date, s.start_time))

    async def find_dispatcher_assignments(
        self, window: QueryWindow, scope: str | None = None
    ) -> list[DispatcherAssignment]:
        assignments = [
            r
            for r in self.db
            if isinstance(r, DispatcherAssignment)
            and window.contains(r.date)
            and (scope is None or r.county == scope)
        ]
        return sorted(assignments, key=lambda a: (a.date, a.start_time))

    async def find_regional_leads(
        self, window: QueryWindow
    ) -> list[RegionalLeadAssignment]:
        leads = [
            r
            for r in self.db
            if isinstance(r, RegionalLeadAssignment) and window.contains(r.date)
        ]
        return sorted(leads, key=lambda a: (a.date, not a.is_primary))
