"""Room status enums (values are the database representation)."""

from __future__ import annotations

from enum import Enum, IntEnum


class OccupancyStatus(str, Enum):
    VACANT = "vacant"
    ASSIGNED = "assigned"
    OCCUPIED = "occupied"
    STAYOVER = "stayover"
    CHECKED_OUT = "checked_out"

    @property
    def display_name(self) -> str:
        return _OCCUPANCY_NAMES[self]


class CleaningStatus(str, Enum):
    DIRTY = "dirty"
    CLEANING_IN_PROGRESS = "cleaning_in_progress"
    READY = "ready"

    @property
    def display_name(self) -> str:
        return _CLEANING_NAMES[self]


class RoomFlag(str, Enum):
    MAINTENANCE_REQUIRED = "maintenance_required"
    OUT_OF_ORDER = "out_of_order"
    OUT_OF_SERVICE = "out_of_service"
    DND = "dnd"

    @property
    def display_name(self) -> str:
        return _FLAG_NAMES[self]


MAINTENANCE_FLAGS: frozenset[RoomFlag] = frozenset(
    {RoomFlag.MAINTENANCE_REQUIRED, RoomFlag.OUT_OF_ORDER, RoomFlag.OUT_OF_SERVICE}
)


class CleaningPriority(IntEnum):
    """Housekeeping priority; higher value is cleaned first."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def display_name(self) -> str:
        return _PRIORITY_NAMES[self]


_OCCUPANCY_NAMES: dict[OccupancyStatus, str] = {
    OccupancyStatus.VACANT: "Vacant",
    OccupancyStatus.ASSIGNED: "Assigned",
    OccupancyStatus.OCCUPIED: "Occupied",
    OccupancyStatus.STAYOVER: "Stayover",
    OccupancyStatus.CHECKED_OUT: "Checked Out",
}

_CLEANING_NAMES: dict[CleaningStatus, str] = {
    CleaningStatus.DIRTY: "Dirty",
    CleaningStatus.CLEANING_IN_PROGRESS: "Cleaning",
    CleaningStatus.READY: "Ready",
}

_FLAG_NAMES: dict[RoomFlag, str] = {
    RoomFlag.MAINTENANCE_REQUIRED: "Maintenance",
    RoomFlag.OUT_OF_ORDER: "OOO",
    RoomFlag.OUT_OF_SERVICE: "OOS",
    RoomFlag.DND: "DND",
}

_PRIORITY_NAMES: dict[CleaningPriority, str] = {
    CleaningPriority.HIGH: "High Priority",
    CleaningPriority.MEDIUM: "Medium Priority",
    CleaningPriority.LOW: "In Progress",
    CleaningPriority.NONE: "Ready",
}
