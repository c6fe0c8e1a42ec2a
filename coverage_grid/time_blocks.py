from collections.abc import Iterable
from datetime import datetime
from typing import NamedTuple, Protocol

from coverage_grid.schemas import TimeBlock
from coverage_grid.timezone import format_hour, to_iso_utc


class BlockKey(NamedTuple):
    start_hour: int
    end_hour: int

    def __str__(self) -> str:
        return f"{self.start_hour}-{self.end_hour}"


class BlockSource(Protocol):
    block: BlockKey

    @property
    def start_time(self) -> datetime: ...

    @property
    def end_time(self) -> datetime: ...


def block_key_of(time_block: TimeBlock) -> BlockKey:
    return BlockKey(time_block.start_hour, time_block.end_hour)


def make_time_block(key: BlockKey, start: datetime, end: datetime) -> TimeBlock:
    return TimeBlock(
        start_time=f"{key.start_hour}:00",
        end_time=f"{key.end_hour}:00",
        label=f"{format_hour(key.start_hour)} - {format_hour(key.end_hour)}",
        start_time_utc=to_iso_utc(start),
        end_time_utc=to_iso_utc(end),
    )


def derive_time_blocks(shifts: Iterable[BlockSource]) -> list[TimeBlock]:
    """
    Distinct local (start, end) hour pairs observed on shifts, sorted by
    start hour. The first shift seen for a pair anchors its UTC instants.

    Only shifts feed this; dispatcher assignments recorded with stale hours
    must not open a column of their own.
    """
    blocks: dict[BlockKey, TimeBlock] = {}
    for shift in shifts:
        if shift.block not in blocks:
            blocks[shift.block] = make_time_block(
                shift.block, shift.start_time, shift.end_time
            )
    return [blocks[key] for key in sorted(blocks)]
