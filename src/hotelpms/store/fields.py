"""Table and column names of the Supabase schema."""

from __future__ import annotations

ROOMS_TABLE: str = "rooms"
ROOM_HISTORY_TABLE: str = "room_history"

ROOM_COLUMNS: str = (
    "id,"
    "hotel_id,"
    "room_number,"
    "floor_number,"
    "occupancy_status,"
    "cleaning_status,"
    "flags,"
    "notes,"
    "created_at,"
    "updated_at"
)

ROOM_HISTORY_COLUMNS: str = (
    "id,"
    "room_id,"
    "changed_by,"
    "change_type,"
    "old_value,"
    "new_value,"
    "note,"
    "created_at"
)
