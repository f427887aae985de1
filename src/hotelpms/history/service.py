"""Room history logging backed by the room_history table."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from hotelpms.errors import InvalidArgumentError
from hotelpms.models import AuditEventType, CleaningStatus, OccupancyStatus, RoomFlag, RoomHistoryEntry
from hotelpms.store.executor import RetryPolicy, execute, response_rows
from hotelpms.store.fields import ROOM_HISTORY_COLUMNS, ROOM_HISTORY_TABLE
from hotelpms.store.records import CreateAuditRequest, history_entry_from_row

logger = logging.getLogger(__name__)

# Embeds the parent room so rows can be filtered by its hotel.
_HOTEL_HISTORY_COLUMNS: str = ROOM_HISTORY_COLUMNS + ",rooms!inner(hotel_id)"


class RoomHistoryService:
    """
    Append and read audit records for rooms.

    Reads retry like every other read; inserts are sent once.
    """

    def __init__(self, client: Any, *, retry_policy: Optional[RetryPolicy] = None) -> None:
        self._client = client
        self._retry_policy = retry_policy or RetryPolicy()

    # ----------------------------
    # Writes
    # ----------------------------
    async def record(
        self,
        event_type: Union[AuditEventType, str],
        entity_id: str,
        actor_id: str,
        *,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None,
        note: Optional[str] = None,
    ) -> None:
        """
        Append one history row.

        Raises:
            InvalidArgumentError: unknown event type or empty ids.
            RemoteOperationFailedError: if the insert fails.
        """
        request = _audit_request(event_type, entity_id, actor_id, old_value, new_value, note)
        payload = request.to_payload()
        await execute(lambda: self._table().insert(payload).execute())
        logger.debug("Recorded %s for room %s", request.change_type.value, entity_id)

    async def record_bulk(self, records: Sequence[CreateAuditRequest]) -> None:
        """
        Append several rows in one insert. Nothing is sent if any record is invalid.
        """
        if not records:
            return
        payloads = [
            _audit_request(
                r.change_type, r.room_id, r.changed_by, r.old_value, r.new_value, r.note
            ).to_payload()
            for r in records
        ]
        await execute(lambda: self._table().insert(payloads).execute())
        logger.debug("Recorded %d history rows", len(payloads))

    # Typed shortcuts for the changes a room board makes.

    async def log_occupancy_change(
        self,
        room_id: str,
        actor_id: str,
        old: OccupancyStatus,
        new: OccupancyStatus,
        note: Optional[str] = None,
    ) -> None:
        await self.record(
            AuditEventType.OCCUPANCY_STATUS,
            room_id,
            actor_id,
            old_value=old.value,
            new_value=new.value,
            note=note,
        )

    async def log_cleaning_change(
        self,
        room_id: str,
        actor_id: str,
        old: CleaningStatus,
        new: CleaningStatus,
        note: Optional[str] = None,
    ) -> None:
        await self.record(
            AuditEventType.CLEANING_STATUS,
            room_id,
            actor_id,
            old_value=old.value,
            new_value=new.value,
            note=note,
        )

    async def log_flag_added(
        self, room_id: str, actor_id: str, flag: RoomFlag, note: Optional[str] = None
    ) -> None:
        await self.record(
            AuditEventType.FLAGS, room_id, actor_id, new_value=f"added: {flag.value}", note=note
        )

    async def log_flag_removed(
        self, room_id: str, actor_id: str, flag: RoomFlag, note: Optional[str] = None
    ) -> None:
        await self.record(
            AuditEventType.FLAGS, room_id, actor_id, old_value=f"removed: {flag.value}", note=note
        )

    async def log_note_added(
        self, room_id: str, actor_id: str, text: str, note: Optional[str] = None
    ) -> None:
        await self.record(
            AuditEventType.NOTES, room_id, actor_id, new_value=text, note=note or "Note added"
        )

    async def log_note_updated(
        self,
        room_id: str,
        actor_id: str,
        old_text: str,
        new_text: str,
        note: Optional[str] = None,
    ) -> None:
        await self.record(
            AuditEventType.NOTES,
            room_id,
            actor_id,
            old_value=old_text,
            new_value=new_text,
            note=note or "Note updated",
        )

    async def log_note_deleted(
        self, room_id: str, actor_id: str, text: str, note: Optional[str] = None
    ) -> None:
        await self.record(
            AuditEventType.NOTES, room_id, actor_id, old_value=text, note=note or "Note deleted"
        )

    # ----------------------------
    # Reads (newest first)
    # ----------------------------
    async def get_room_history(self, room_id: str, limit: int = 50) -> list[RoomHistoryEntry]:
        """History of one room."""
        return await self._select(limit, ("room_id", room_id))

    async def get_recent_activity(self, limit: int = 100) -> list[RoomHistoryEntry]:
        """Latest history rows across all rooms the caller can see."""
        return await self._select(limit)

    async def get_recent_history_for_hotel(
        self, hotel_id: str, limit: int = 50
    ) -> list[RoomHistoryEntry]:
        """Latest history rows of the rooms of one hotel."""
        return await self._select(limit, ("rooms.hotel_id", hotel_id), columns=_HOTEL_HISTORY_COLUMNS)

    async def get_activity_by_type(
        self, event_type: Union[AuditEventType, str], limit: int = 50
    ) -> list[RoomHistoryEntry]:
        event = _event_type(event_type)
        return await self._select(limit, ("change_type", event.value))

    async def get_activity_by_change_type(
        self, change_type: str, limit: int = 30
    ) -> list[RoomHistoryEntry]:
        """Like get_activity_by_type, but also matches change types this library does not know."""
        return await self._select(limit, ("change_type", change_type))

    async def get_activity_by_actor(self, actor_id: str, limit: int = 50) -> list[RoomHistoryEntry]:
        return await self._select(limit, ("changed_by", actor_id))

    async def _select(
        self,
        limit: int,
        *filters: tuple[str, str],
        columns: str = ROOM_HISTORY_COLUMNS,
    ) -> list[RoomHistoryEntry]:
        _check_limit(limit)

        def run() -> Any:
            query = self._table().select(columns)
            for column, value in filters:
                query = query.eq(column, value)
            return query.order("created_at", desc=True).limit(limit).execute()

        response = await execute(run, retry=self._retry_policy)
        return [history_entry_from_row(row) for row in response_rows(response)]

    def _table(self) -> Any:
        return self._client.table(ROOM_HISTORY_TABLE)


def _audit_request(
    event_type: Union[AuditEventType, str],
    entity_id: str,
    actor_id: str,
    old_value: Optional[str],
    new_value: Optional[str],
    note: Optional[str],
) -> CreateAuditRequest:
    event = _event_type(event_type)
    if not isinstance(entity_id, str) or not entity_id.strip():
        raise InvalidArgumentError("entity_id must be a non-empty string")
    if not isinstance(actor_id, str) or not actor_id.strip():
        raise InvalidArgumentError("actor_id must be a non-empty string")
    return CreateAuditRequest(
        room_id=entity_id,
        changed_by=actor_id,
        change_type=event,
        old_value=old_value,
        new_value=new_value,
        note=note,
    )


def _event_type(value: Union[AuditEventType, str]) -> AuditEventType:
    if isinstance(value, AuditEventType):
        return value
    try:
        return AuditEventType(value)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Unknown history event type: {value!r}",
            details={"event_type": value},
            cause=exc,
        ) from exc


def _check_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidArgumentError("limit must be a positive integer", details={"limit": limit})
