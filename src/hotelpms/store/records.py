"""Row <-> model conversion with strict shape validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from hotelpms.errors import RecordValidationError
from hotelpms.models import (
    AuditEventType,
    CleaningStatus,
    OccupancyStatus,
    Room,
    RoomFlag,
    RoomHistoryEntry,
)
from hotelpms.util.time import parse_timestamp

EnumT = TypeVar("EnumT", bound=Enum)


@dataclass(slots=True, frozen=True)
class CreateRoomRequest:
    """
    Insert payload for the rooms table.

    id is only set when restoring a deleted room under its old id; new rooms
    get a server-assigned id.
    """

    hotel_id: str
    room_number: int
    floor_number: int
    occupancy_status: OccupancyStatus = OccupancyStatus.VACANT
    cleaning_status: CleaningStatus = CleaningStatus.DIRTY
    flags: tuple[RoomFlag, ...] = ()
    notes: Optional[str] = None
    updated_by: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_room(
        cls,
        room: Room,
        *,
        updated_by: Optional[str] = None,
        keep_id: bool = False,
    ) -> CreateRoomRequest:
        return cls(
            hotel_id=room.hotel_id,
            room_number=room.room_number,
            floor_number=room.floor_number,
            occupancy_status=room.occupancy_status,
            cleaning_status=room.cleaning_status,
            flags=tuple(room.flags),
            notes=room.notes,
            updated_by=updated_by,
            id=room.id if keep_id else None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "hotel_id": self.hotel_id,
            "room_number": self.room_number,
            "floor_number": self.floor_number,
            "occupancy_status": self.occupancy_status.value,
            "cleaning_status": self.cleaning_status.value,
            "flags": [flag.value for flag in self.flags],
        }
        if self.notes is not None:
            payload["notes"] = self.notes
        if self.updated_by is not None:
            payload["updated_by"] = self.updated_by
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(slots=True, frozen=True)
class CreateAuditRequest:
    """Insert payload for the room_history table."""

    room_id: str
    changed_by: str
    change_type: AuditEventType
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    note: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "room_id": self.room_id,
            "changed_by": self.changed_by,
            "change_type": self.change_type.value,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "note": self.note,
        }


def room_from_row(data: Any) -> Room:
    """Decode one rooms row. Raises RecordValidationError on unexpected shapes."""
    row = _require_mapping(data, "rooms")
    flags_raw = _required(row, "flags", list, "rooms")

    return Room(
        id=_required_str(row, "id", "rooms"),
        hotel_id=_required_str(row, "hotel_id", "rooms"),
        room_number=_required_int(row, "room_number", "rooms"),
        floor_number=_required_int(row, "floor_number", "rooms"),
        occupancy_status=_enum_value(OccupancyStatus, row.get("occupancy_status"), "occupancy_status"),
        cleaning_status=_enum_value(CleaningStatus, row.get("cleaning_status"), "cleaning_status"),
        flags=tuple(_enum_value(RoomFlag, raw, "flags") for raw in flags_raw),
        notes=_optional(row, "notes", str, "rooms"),
        created_at=_optional_timestamp(row, "created_at", "rooms"),
        updated_at=_optional_timestamp(row, "updated_at", "rooms"),
    )


def rooms_from_rows(data: Any) -> list[Room]:
    if not isinstance(data, list):
        raise RecordValidationError(
            "Expected a list of rooms rows",
            details={"type": type(data).__name__},
        )
    return [room_from_row(row) for row in data]


def history_entry_from_row(data: Any) -> RoomHistoryEntry:
    row = _require_mapping(data, "room_history")
    created_at = _optional_timestamp(row, "created_at", "room_history")
    if created_at is None:
        raise RecordValidationError(
            "room_history.created_at is required",
            details={"row": row},
        )

    return RoomHistoryEntry(
        id=_required_str(row, "id", "room_history"),
        room_id=_required_str(row, "room_id", "room_history"),
        change_type=_required_str(row, "change_type", "room_history"),
        created_at=created_at,
        changed_by=_optional(row, "changed_by", str, "room_history"),
        old_value=_optional(row, "old_value", str, "room_history"),
        new_value=_optional(row, "new_value", str, "room_history"),
        note=_optional(row, "note", str, "room_history"),
    )


def _require_mapping(data: Any, table: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise RecordValidationError(
            f"Expected a {table} row object",
            details={"type": type(data).__name__},
        )
    return data


def _required(row: dict[str, Any], key: str, kind: type, table: str) -> Any:
    if key not in row or row[key] is None:
        raise RecordValidationError(
            f"{table}.{key} is required",
            details={"column": key},
        )
    value = row[key]
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
        raise RecordValidationError(
            f"{table}.{key} has unexpected type",
            details={"column": key, "type": type(value).__name__},
        )
    return value


def _required_str(row: dict[str, Any], key: str, table: str) -> str:
    value = _required(row, key, str, table)
    if not value.strip():
        raise RecordValidationError(f"{table}.{key} is empty", details={"column": key})
    return value


def _required_int(row: dict[str, Any], key: str, table: str) -> int:
    return _required(row, key, int, table)


def _optional(row: dict[str, Any], key: str, kind: type, table: str) -> Any:
    if row.get(key) is None:
        return None
    return _required(row, key, kind, table)


def _optional_timestamp(row: dict[str, Any], key: str, table: str) -> Optional[datetime]:
    raw = _optional(row, key, str, table)
    if raw is None:
        return None
    try:
        return parse_timestamp(raw)
    except ValueError as exc:
        raise RecordValidationError(
            f"{table}.{key} is not a timestamp",
            details={"column": key, "value": raw},
            cause=exc,
        ) from exc


def _enum_value(enum_cls: Type[EnumT], raw: Any, column: str) -> EnumT:
    try:
        return enum_cls(raw)
    except ValueError as exc:
        raise RecordValidationError(
            f"Unknown {column} value: {raw!r}",
            details={"column": column, "value": raw},
            cause=exc,
        ) from exc
