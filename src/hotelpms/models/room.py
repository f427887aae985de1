"""Data model for hotel rooms."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import (
    MAINTENANCE_FLAGS,
    CleaningPriority,
    CleaningStatus,
    OccupancyStatus,
    RoomFlag,
)


@dataclass(slots=True, frozen=True)
class Room:
    """
    A room row as held in the local room board.

    Notes:
        - Instances are immutable; updates produce a new Room via
          dataclasses.replace so snapshots taken before a mutation stay intact.
        - For rooms not created on the server yet, id is a locally generated
          UUID that the server never sees.
    """

    id: str
    hotel_id: str
    room_number: int
    floor_number: int

    occupancy_status: OccupancyStatus = OccupancyStatus.VACANT
    cleaning_status: CleaningStatus = CleaningStatus.DIRTY
    flags: tuple[RoomFlag, ...] = ()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def calculate_floor(room_number: int) -> int:
        """Room 205 is on floor 2."""
        return room_number // 100

    @property
    def display_number(self) -> str:
        return str(self.room_number)

    @property
    def has_flags(self) -> bool:
        return bool(self.flags)

    @property
    def has_notes(self) -> bool:
        return self.notes is not None and bool(self.notes.strip())

    @property
    def notes_preview(self) -> Optional[str]:
        if not self.has_notes:
            return None
        trimmed = self.notes.strip()  # type: ignore[union-attr]
        return trimmed[:12] + "..." if len(trimmed) > 15 else trimmed

    @property
    def needs_attention(self) -> bool:
        return self.has_maintenance_flag or self.cleaning_status is CleaningStatus.DIRTY

    # Housekeeping

    @property
    def cleaning_priority(self) -> CleaningPriority:
        if self.occupancy_status is OccupancyStatus.CHECKED_OUT:
            return CleaningPriority.HIGH
        if self.cleaning_status is CleaningStatus.DIRTY:
            return CleaningPriority.MEDIUM
        if self.cleaning_status is CleaningStatus.CLEANING_IN_PROGRESS:
            return CleaningPriority.LOW
        return CleaningPriority.NONE

    def can_start_cleaning(self) -> bool:
        return (
            self.cleaning_status is CleaningStatus.DIRTY
            or self.occupancy_status is OccupancyStatus.CHECKED_OUT
        )

    def can_mark_ready(self) -> bool:
        return self.cleaning_status is CleaningStatus.CLEANING_IN_PROGRESS

    @property
    def needs_cleaning(self) -> bool:
        return self.cleaning_status is not CleaningStatus.READY

    # Maintenance

    @property
    def has_maintenance_flag(self) -> bool:
        return any(flag in MAINTENANCE_FLAGS for flag in self.flags)

    @property
    def is_out_of_service(self) -> bool:
        return RoomFlag.OUT_OF_SERVICE in self.flags

    def maintenance_flags(self) -> list[RoomFlag]:
        return [flag for flag in self.flags if flag in MAINTENANCE_FLAGS]

    # Front desk

    @property
    def is_available(self) -> bool:
        return (
            self.occupancy_status is OccupancyStatus.VACANT
            and self.cleaning_status is CleaningStatus.READY
        )

    def can_check_in(self) -> bool:
        return (
            self.occupancy_status in (OccupancyStatus.VACANT, OccupancyStatus.ASSIGNED)
            and self.cleaning_status is CleaningStatus.READY
        )

    def can_check_out(self) -> bool:
        return self.occupancy_status in (OccupancyStatus.OCCUPIED, OccupancyStatus.STAYOVER)
