"""Room history (audit trail) models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AuditEventType(str, Enum):
    OCCUPANCY_STATUS = "occupancy_status"
    CLEANING_STATUS = "cleaning_status"
    FLAGS = "flags"
    NOTES = "notes"
    CREATED = "created"
    DELETED = "deleted"

    @property
    def display_name(self) -> str:
        return _EVENT_NAMES[self]


_EVENT_NAMES: dict[AuditEventType, str] = {
    AuditEventType.OCCUPANCY_STATUS: "Occupancy Changed",
    AuditEventType.CLEANING_STATUS: "Cleaning Status Changed",
    AuditEventType.FLAGS: "Flags Changed",
    AuditEventType.NOTES: "Notes Changed",
    AuditEventType.CREATED: "Room Created",
    AuditEventType.DELETED: "Room Deleted",
}


@dataclass(slots=True, frozen=True)
class RoomHistoryEntry:
    """One row of the room_history table."""

    id: str
    room_id: str
    change_type: str
    created_at: datetime

    changed_by: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    note: Optional[str] = None

    @property
    def description(self) -> str:
        if self.change_type == AuditEventType.OCCUPANCY_STATUS.value:
            if self.old_value and self.new_value:
                return (
                    f"Set Room from {_humanize(self.old_value)} "
                    f"→ {_humanize(self.new_value)}"
                )
            return "Updated occupancy for Room"

        if self.change_type == AuditEventType.CLEANING_STATUS.value:
            if self.old_value and self.new_value:
                return (
                    f"Set Room from {_humanize(self.old_value)} "
                    f"→ {_humanize(self.new_value)}"
                )
            return "Updated cleaning status for Room"

        if self.change_type == AuditEventType.FLAGS.value:
            if self.new_value:
                return f"Added flag to Room: {self.new_value}"
            return "Updated flags for Room"

        if self.change_type == AuditEventType.NOTES.value:
            return "Added note to Room"
        if self.change_type == AuditEventType.CREATED.value:
            return "Created Room"
        if self.change_type == AuditEventType.DELETED.value:
            return "Deleted Room"
        return "Updated Room"


def _humanize(value: str) -> str:
    # "cleaning_in_progress" -> "Cleaning In Progress"
    return " ".join(part.capitalize() for part in value.split("_"))
