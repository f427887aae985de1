"""Supabase-backed room store."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from hotelpms.auth.settings import SupabaseSettings
from hotelpms.auth.supabase_client import create_supabase_client
from hotelpms.errors import InvalidArgumentError, NotFoundError, RecordValidationError
from hotelpms.models import Room, RoomRange, has_overlapping_ranges

from .executor import RetryPolicy, execute, response_rows
from .fields import ROOM_COLUMNS, ROOMS_TABLE
from .patch import RoomPatch
from .records import CreateRoomRequest, room_from_row, rooms_from_rows

logger = logging.getLogger(__name__)


class SupabaseRoomStore:
    """
    RecordStore for the `rooms` table.

    Notes:
        - The Supabase client is NOT exposed.
        - Reads retry on rate limits, network errors and 5xx; writes never do.
    """

    def __init__(self, client: Any, *, retry_policy: Optional[RetryPolicy] = None) -> None:
        self._client = client
        self._retry_policy = retry_policy or RetryPolicy()

    @classmethod
    async def connect(
        cls,
        settings: SupabaseSettings,
        *,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> "SupabaseRoomStore":
        """Create a store with a fresh async Supabase client."""
        client = await create_supabase_client(settings)
        return cls(client, retry_policy=retry_policy)

    # ----------------------------
    # Reads
    # ----------------------------
    async def get(self, hotel_id: str) -> list[Room]:
        """All rooms of a hotel, ordered by room number."""
        response = await execute(
            lambda: self._rooms()
            .select(ROOM_COLUMNS)
            .eq("hotel_id", hotel_id)
            .order("room_number")
            .execute(),
            retry=self._retry_policy,
        )
        rooms = rooms_from_rows(response_rows(response))
        logger.debug("Fetched %d rooms for hotel %s", len(rooms), hotel_id)
        return rooms

    async def get_one(self, room_id: str) -> Room:
        response = await execute(
            lambda: self._rooms().select(ROOM_COLUMNS).eq("id", room_id).limit(1).execute(),
            retry=self._retry_policy,
        )
        rows = response_rows(response)
        if not rows:
            raise NotFoundError("Room not found", details={"room_id": room_id})
        return room_from_row(rows[0])

    # ----------------------------
    # Writes
    # ----------------------------
    async def update(self, room_id: str, patch: RoomPatch) -> None:
        if patch.is_empty:
            return
        payload = patch.to_payload()
        await execute(lambda: self._rooms().update(payload).eq("id", room_id).execute())
        logger.debug("Updated room %s (%s)", room_id, ", ".join(sorted(payload)))

    async def create(self, fields: CreateRoomRequest) -> Room:
        """Insert a room and return the row as stored by the server."""
        payload = fields.to_payload()
        response = await execute(lambda: self._rooms().insert(payload).execute())
        rows = response_rows(response)
        if not rows:
            raise RecordValidationError(
                "Insert returned no row",
                details={"room_number": fields.room_number},
            )
        room = room_from_row(rows[0])
        logger.debug("Created room %s (number %d)", room.id, room.room_number)
        return room

    async def create_rooms(
        self,
        hotel_id: str,
        ranges: Sequence[RoomRange],
        *,
        updated_by: Optional[str] = None,
    ) -> list[Room]:
        """
        Insert every room covered by the valid ranges in one request.

        Invalid ranges are skipped. Rooms start vacant and dirty, with the
        floor derived from the room number.

        Raises:
            InvalidArgumentError: ranges overlap, or none of them is valid.
        """
        if has_overlapping_ranges(ranges):
            raise InvalidArgumentError(
                "Room ranges overlap",
                details={"ranges": [r.display_text for r in ranges]},
            )

        payloads: list[dict[str, Any]] = []
        for room_range in ranges:
            numbers = room_range.int_range
            if numbers is None:
                continue
            for number in numbers:
                request = CreateRoomRequest(
                    hotel_id=hotel_id,
                    room_number=number,
                    floor_number=Room.calculate_floor(number),
                    updated_by=updated_by,
                )
                payloads.append(request.to_payload())
        if not payloads:
            raise InvalidArgumentError("Invalid room ranges provided")

        response = await execute(lambda: self._rooms().insert(payloads).execute())
        rooms = rooms_from_rows(response_rows(response))
        logger.info("Created %d rooms for hotel %s", len(rooms), hotel_id)
        return rooms

    async def delete(self, room_id: str) -> None:
        await execute(lambda: self._rooms().delete().eq("id", room_id).execute())
        logger.debug("Deleted room %s", room_id)

    async def restore(self, room: Room, *, updated_by: Optional[str] = None) -> Room:
        """Re-insert a deleted room under its previous id."""
        return await self.create(CreateRoomRequest.from_room(room, updated_by=updated_by, keep_id=True))

    def _rooms(self) -> Any:
        return self._client.table(ROOMS_TABLE)

