"""Public model exports for hotelpms."""

from __future__ import annotations

from .enums import (
    MAINTENANCE_FLAGS,
    CleaningPriority,
    CleaningStatus,
    OccupancyStatus,
    RoomFlag,
)
from .history import AuditEventType, RoomHistoryEntry
from .results import MutationKind, MutationResult, MutationStatus
from .room import Room
from .room_range import (
    RoomRange,
    has_overlapping_ranges,
    is_valid_configuration,
    total_room_count,
    valid_ranges,
    valid_ranges_display_text,
)

__all__ = [
    "Room",
    "RoomRange",
    "total_room_count",
    "has_overlapping_ranges",
    "is_valid_configuration",
    "valid_ranges",
    "valid_ranges_display_text",
    "OccupancyStatus",
    "CleaningStatus",
    "RoomFlag",
    "CleaningPriority",
    "MAINTENANCE_FLAGS",
    "AuditEventType",
    "RoomHistoryEntry",
    "MutationKind",
    "MutationStatus",
    "MutationResult",
]
