from .base import RecordStore
from .executor import RetryPolicy
from .patch import RoomPatch
from .records import (
    CreateAuditRequest,
    CreateRoomRequest,
    history_entry_from_row,
    room_from_row,
    rooms_from_rows,
)
from .supabase_store import SupabaseRoomStore

__all__ = [
    "RecordStore",
    "RetryPolicy",
    "RoomPatch",
    "CreateRoomRequest",
    "CreateAuditRequest",
    "room_from_row",
    "rooms_from_rows",
    "history_entry_from_row",
    "SupabaseRoomStore",
]
