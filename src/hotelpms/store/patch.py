"""Typed field patch for room updates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Sequence

from hotelpms.models import CleaningStatus, OccupancyStatus, RoomFlag
from hotelpms.util.time import now_utc, to_timestamp


@dataclass(slots=True, frozen=True)
class RoomPatch:
    """
    The subset of room columns an update writes.

    Fields left as None are not sent. Builder methods return new patches:

        RoomPatch().occupancy(OccupancyStatus.OCCUPIED).by(user_id).stamped()
    """

    occupancy_status: Optional[OccupancyStatus] = None
    cleaning_status: Optional[CleaningStatus] = None
    flags: Optional[tuple[RoomFlag, ...]] = None
    notes: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.occupancy_status,
                self.cleaning_status,
                self.flags,
                self.notes,
                self.updated_by,
                self.updated_at,
            )
        )

    def occupancy(self, status: OccupancyStatus) -> RoomPatch:
        return replace(self, occupancy_status=status)

    def cleaning(self, status: CleaningStatus) -> RoomPatch:
        return replace(self, cleaning_status=status)

    def with_flags(self, flags: Sequence[RoomFlag]) -> RoomPatch:
        return replace(self, flags=tuple(flags))

    def with_notes(self, notes: str) -> RoomPatch:
        return replace(self, notes=notes)

    def by(self, user_id: Optional[str]) -> RoomPatch:
        return replace(self, updated_by=user_id)

    def stamped(self, when: Optional[datetime] = None) -> RoomPatch:
        return replace(self, updated_at=when or now_utc())

    def to_payload(self) -> dict[str, Any]:
        """Column -> JSON value mapping for PostgREST."""
        payload: dict[str, Any] = {}
        if self.occupancy_status is not None:
            payload["occupancy_status"] = self.occupancy_status.value
        if self.cleaning_status is not None:
            payload["cleaning_status"] = self.cleaning_status.value
        if self.flags is not None:
            payload["flags"] = [flag.value for flag in self.flags]
        if self.notes is not None:
            payload["notes"] = self.notes
        if self.updated_by is not None:
            payload["updated_by"] = self.updated_by
        if self.updated_at is not None:
            payload["updated_at"] = to_timestamp(self.updated_at)
        return payload

    # Shortcuts for the three board mutations.

    @classmethod
    def occupancy_update(cls, status: OccupancyStatus, updated_by: Optional[str]) -> RoomPatch:
        return cls().occupancy(status).by(updated_by).stamped()

    @classmethod
    def cleaning_update(cls, status: CleaningStatus, updated_by: Optional[str]) -> RoomPatch:
        return cls().cleaning(status).by(updated_by).stamped()

    @classmethod
    def flags_update(cls, flags: Sequence[RoomFlag], updated_by: Optional[str]) -> RoomPatch:
        return cls().with_flags(flags).by(updated_by).stamped()

    @classmethod
    def notes_update(cls, notes: str, updated_by: Optional[str]) -> RoomPatch:
        return cls().with_notes(notes).by(updated_by).stamped()
