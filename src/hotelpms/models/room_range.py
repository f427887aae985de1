"""Room number ranges entered when setting up a hotel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(slots=True, frozen=True)
class RoomRange:
    """
    An inclusive range of room numbers as typed by the user, e.g. "101"-"120".

    Both ends are kept as text; a range is valid only when both parse as
    positive integers and start <= end.
    """

    start_room: str = ""
    end_room: str = ""

    @property
    def int_range(self) -> Optional[range]:
        start = _to_int(self.start_room)
        end = _to_int(self.end_room)
        if start is None or end is None or start <= 0 or end <= 0 or start > end:
            return None
        return range(start, end + 1)

    @property
    def is_valid(self) -> bool:
        return self.int_range is not None

    @property
    def room_count(self) -> int:
        numbers = self.int_range
        return len(numbers) if numbers is not None else 0

    @property
    def display_text(self) -> str:
        if not self.is_valid:
            return "Invalid range"
        return f"{self.start_room.strip()}-{self.end_room.strip()} ({self.room_count} rooms)"


def valid_ranges(ranges: Sequence[RoomRange]) -> list[RoomRange]:
    return [r for r in ranges if r.is_valid]


def total_room_count(ranges: Sequence[RoomRange]) -> int:
    """Rooms covered by the valid ranges; invalid ones count as zero."""
    return sum(r.room_count for r in ranges)


def has_overlapping_ranges(ranges: Sequence[RoomRange]) -> bool:
    bounds = sorted((n.start, n.stop) for n in (r.int_range for r in ranges) if n is not None)
    return any(nxt[0] < prev[1] for prev, nxt in zip(bounds, bounds[1:]))


def is_valid_configuration(ranges: Sequence[RoomRange]) -> bool:
    return (
        bool(ranges)
        and all(r.is_valid for r in ranges)
        and not has_overlapping_ranges(ranges)
        and total_room_count(ranges) > 0
    )


def valid_ranges_display_text(ranges: Sequence[RoomRange]) -> str:
    return ", ".join(r.display_text for r in valid_ranges(ranges))


def _to_int(text: str) -> Optional[int]:
    stripped = text.strip()
    if not stripped.isdigit():
        return None
    return int(stripped)
