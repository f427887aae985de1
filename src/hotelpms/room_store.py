"""Room board: the rooms of one hotel, kept in sync optimistically."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Optional, Sequence

from hotelpms.auth import Session
from hotelpms.errors import HotelPmsError
from hotelpms.history import RoomHistoryService
from hotelpms.local import LocalCollection
from hotelpms.models import (
    CleaningStatus,
    MutationResult,
    OccupancyStatus,
    Room,
    RoomFlag,
    RoomRange,
)
from hotelpms.mutation import FeedbackState, OptimisticMutationCoordinator, UndoAffordance
from hotelpms.store import CreateRoomRequest, RoomPatch, SupabaseRoomStore
from hotelpms.util.ids import new_local_id
from hotelpms.util.time import now_utc

logger = logging.getLogger(__name__)

# Writes the history row for one update, given the service and the acting user.
_Audit = Callable[[RoomHistoryService, str], Awaitable[None]]


class RoomStore:
    """
    Local room list for one hotel plus the mutations a room board needs.

    Every mutation changes the local list first and is confirmed against the
    record store in the background; see OptimisticMutationCoordinator.
    With a history service, confirmed updates also get an audit row.

    Example:
        store = await SupabaseRoomStore.connect(SupabaseSettings.from_env())
        board = RoomStore(
            store,
            OptimisticMutationCoordinator(LocalCollection()),
            Session(user_id),
            hotel_id,
        )
        await board.load_rooms()
        board.update_occupancy_status(room_id, OccupancyStatus.OCCUPIED)
    """

    def __init__(
        self,
        store: SupabaseRoomStore,
        coordinator: OptimisticMutationCoordinator[Room],
        session: Session,
        hotel_id: str,
        *,
        history: Optional[RoomHistoryService] = None,
    ) -> None:
        self._store = store
        self._history = history
        self._coordinator = coordinator
        self._session = session
        self._hotel_id = hotel_id
        self.is_loading = False

    @property
    def hotel_id(self) -> str:
        return self._hotel_id

    @property
    def coordinator(self) -> OptimisticMutationCoordinator[Room]:
        return self._coordinator

    @property
    def feedback(self) -> FeedbackState:
        return self._coordinator.feedback

    @property
    def error_message(self) -> Optional[str]:
        return self.feedback.error_message

    @property
    def showing_error(self) -> bool:
        return self.feedback.showing_error

    @property
    def current_undo(self) -> Optional[UndoAffordance]:
        return self._coordinator.current_undo

    @property
    def _rooms(self) -> LocalCollection[Room]:
        return self._coordinator.collection

    # ----------------------------
    # Loading
    # ----------------------------
    async def load_rooms(self) -> bool:
        """Replace the local list with the hotel's rooms. Returns False on failure."""
        self.is_loading = True
        self.clear_error()
        try:
            rooms = await self._store.get(self._hotel_id)
        except HotelPmsError as exc:
            logger.warning("Loading rooms for %s failed: %s", self._hotel_id, exc)
            self.feedback.report_error(f"Failed to load rooms: {exc}")
            return False
        finally:
            self.is_loading = False

        self._rooms.reset(rooms)
        logger.info("Loaded %d rooms for hotel %s", len(rooms), self._hotel_id)
        return True

    # ----------------------------
    # Updates
    # ----------------------------
    def update_occupancy_status(
        self,
        room_id: str,
        status: OccupancyStatus,
    ) -> "asyncio.Task[MutationResult]":
        patch = RoomPatch.occupancy_update(status, self._session.current_user_id)
        room = self._rooms.get(room_id)
        audit: Optional[_Audit] = None
        if room is not None and room.occupancy_status is not status:
            old = room.occupancy_status
            audit = lambda history, user: history.log_occupancy_change(room_id, user, old, status)
        return self._coordinator.apply_update(
            room_id,
            lambda r: replace(r, occupancy_status=status, updated_at=patch.updated_at),
            lambda: self._save(room_id, patch, audit),
            label="Failed to update room",
        )

    def update_cleaning_status(
        self,
        room_id: str,
        status: CleaningStatus,
    ) -> "asyncio.Task[MutationResult]":
        patch = RoomPatch.cleaning_update(status, self._session.current_user_id)
        room = self._rooms.get(room_id)
        audit: Optional[_Audit] = None
        if room is not None and room.cleaning_status is not status:
            old = room.cleaning_status
            audit = lambda history, user: history.log_cleaning_change(room_id, user, old, status)
        return self._coordinator.apply_update(
            room_id,
            lambda r: replace(r, cleaning_status=status, updated_at=patch.updated_at),
            lambda: self._save(room_id, patch, audit),
            label="Failed to update room",
        )

    def toggle_flag(self, room_id: str, flag: RoomFlag) -> "asyncio.Task[MutationResult]":
        """Add the flag if the room lacks it, remove it otherwise."""
        room = self._rooms.get(room_id)
        flags = _toggled(room.flags if room is not None else (), flag)
        patch = RoomPatch.flags_update(flags, self._session.current_user_id)
        audit: Optional[_Audit] = None
        if room is not None:
            if flag in flags:
                audit = lambda history, user: history.log_flag_added(room_id, user, flag)
            else:
                audit = lambda history, user: history.log_flag_removed(room_id, user, flag)
        return self._coordinator.apply_update(
            room_id,
            lambda r: replace(r, flags=flags, updated_at=patch.updated_at),
            lambda: self._save(room_id, patch, audit),
            label="Failed to update room",
        )

    def update_notes(self, room_id: str, notes: str) -> "asyncio.Task[MutationResult]":
        patch = RoomPatch.notes_update(notes, self._session.current_user_id)
        room = self._rooms.get(room_id)
        audit: Optional[_Audit] = None
        if room is not None:
            audit = _notes_audit(room_id, room.notes or "", notes)
        return self._coordinator.apply_update(
            room_id,
            lambda r: replace(r, notes=notes, updated_at=patch.updated_at),
            lambda: self._save(room_id, patch, audit),
            label="Failed to update room",
        )

    async def _save(self, room_id: str, patch: RoomPatch, audit: Optional[_Audit]) -> None:
        await self._store.update(room_id, patch)
        if audit is None or self._history is None or patch.updated_by is None:
            return
        # The update already went through; a missing history row must not revert it.
        try:
            await audit(self._history, patch.updated_by)
        except HotelPmsError as exc:
            logger.warning("Recording history for room %s failed: %s", room_id, exc)

    # ----------------------------
    # Create / delete
    # ----------------------------
    def add_room(
        self,
        room_number: int,
        floor_number: Optional[int] = None,
    ) -> "asyncio.Task[MutationResult]":
        """
        Show a new room right away and create it remotely.

        The placeholder carries a local id until the server row arrives.
        Undo removes the room again, remotely too once it was created.
        """
        floor = floor_number if floor_number is not None else Room.calculate_floor(room_number)
        user_id = self._session.current_user_id
        now = now_utc()
        placeholder = Room(
            id=new_local_id(),
            hotel_id=self._hotel_id,
            room_number=room_number,
            floor_number=floor,
            created_at=now,
            updated_at=now,
        )
        request = CreateRoomRequest(
            hotel_id=self._hotel_id,
            room_number=room_number,
            floor_number=floor,
            updated_by=user_id,
        )
        return self._coordinator.apply_insert(
            placeholder,
            lambda: self._store.create(request),
            actor_id=user_id,
            label="Failed to create room",
            toast_message=f"Room {room_number} added",
            undo_message=f"Added room {room_number}",
            undo_remote_call=lambda created: self._store.delete(created.id),
        )

    async def create_rooms(self, ranges: Sequence[RoomRange]) -> bool:
        """
        Create every room in the ranges at once (hotel setup).

        Not optimistic: the rooms are added locally once the server returned
        them. Returns False and reports the error on failure.
        """
        user_id = self._session.current_user_id
        if user_id is None:
            self.feedback.report_error("User not authenticated")
            return False

        self.clear_error()
        try:
            created = await self._store.create_rooms(self._hotel_id, ranges, updated_by=user_id)
        except HotelPmsError as exc:
            logger.warning("Creating rooms for %s failed: %s", self._hotel_id, exc)
            self.feedback.report_error(f"Failed to create rooms: {exc}")
            return False

        for room in created:
            if room.id not in self._rooms:
                self._rooms.append(room)
        self.feedback.show_toast(f"{len(created)} rooms created")
        return True

    def delete_room(self, room_id: str) -> "asyncio.Task[MutationResult]":
        """
        Hide the room right away and delete it remotely.

        Undo puts it back at its old position and re-creates the row under the
        same id once the delete went through.
        """
        user_id = self._session.current_user_id
        room = self._rooms.get(room_id)
        number = room.display_number if room is not None else room_id
        return self._coordinator.apply_delete(
            room_id,
            lambda: self._store.delete(room_id),
            actor_id=user_id,
            label="Failed to delete room",
            toast_message=f"Room {number} deleted",
            undo_message=f"Deleted room {number}",
            undo_remote_call=lambda deleted: self._store.restore(deleted, updated_by=user_id),
        )

    def execute_undo(self) -> bool:
        return self._coordinator.undo()

    def clear_error(self) -> None:
        self.feedback.clear_error()

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def rooms(self) -> list[Room]:
        return self._rooms.to_list()

    @property
    def has_rooms(self) -> bool:
        return len(self._rooms) > 0

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    def rooms_by_floor(self) -> dict[int, list[Room]]:
        """Rooms grouped by floor; floors ascending, rooms by number."""
        grouped: dict[int, list[Room]] = {}
        for room in sorted(self._rooms, key=lambda r: (r.floor_number, r.room_number)):
            grouped.setdefault(room.floor_number, []).append(room)
        return grouped

    def rooms_for_floor(self, floor: int) -> list[Room]:
        return [room for room in self._rooms if room.floor_number == floor]

    def rooms_with_status(self, status: OccupancyStatus) -> list[Room]:
        return [room for room in self._rooms if room.occupancy_status is status]

    def rooms_with_cleaning_status(self, status: CleaningStatus) -> list[Room]:
        return [room for room in self._rooms if room.cleaning_status is status]

    def rooms_with_flag(self, flag: RoomFlag) -> list[Room]:
        return [room for room in self._rooms if flag in room.flags]

    def rooms_by_cleaning_priority(self) -> list[Room]:
        """Rooms needing cleaning most urgently first, then by room number."""
        return sorted(
            self._rooms,
            key=lambda r: (-int(r.cleaning_priority), r.room_number),
        )


def _toggled(flags: tuple[RoomFlag, ...], flag: RoomFlag) -> tuple[RoomFlag, ...]:
    if flag in flags:
        return tuple(f for f in flags if f is not flag)
    return flags + (flag,)


def _notes_audit(room_id: str, old: str, new: str) -> Optional[_Audit]:
    if old == new:
        return None
    if not old:
        return lambda history, user: history.log_note_added(room_id, user, new)
    if not new:
        return lambda history, user: history.log_note_deleted(room_id, user, old)
    return lambda history, user: history.log_note_updated(room_id, user, old, new)
