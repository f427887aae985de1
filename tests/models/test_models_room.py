import unittest
from dataclasses import replace

from hotelpms.models import (
    CleaningPriority,
    CleaningStatus,
    OccupancyStatus,
    Room,
    RoomFlag,
)


def _room(**kwargs) -> Room:
    base = Room(id="R1", hotel_id="H1", room_number=205, floor_number=2)
    return replace(base, **kwargs)


class TestRoom(unittest.TestCase):
    def test_defaults(self) -> None:
        room = _room()
        self.assertIs(room.occupancy_status, OccupancyStatus.VACANT)
        self.assertIs(room.cleaning_status, CleaningStatus.DIRTY)
        self.assertEqual(room.flags, ())
        self.assertEqual(room.display_number, "205")

    def test_calculate_floor(self) -> None:
        self.assertEqual(Room.calculate_floor(205), 2)
        self.assertEqual(Room.calculate_floor(1012), 10)
        self.assertEqual(Room.calculate_floor(7), 0)

    def test_notes_preview(self) -> None:
        self.assertIsNone(_room().notes_preview)
        self.assertIsNone(_room(notes="   ").notes_preview)
        self.assertFalse(_room(notes="   ").has_notes)
        self.assertEqual(_room(notes="  short note ").notes_preview, "short note")
        self.assertEqual(_room(notes="exactly 15 char").notes_preview, "exactly 15 char")
        self.assertEqual(
            _room(notes="Guest asked for extra towels").notes_preview,
            "Guest asked ...",
        )

    def test_cleaning_priority(self) -> None:
        self.assertIs(
            _room(occupancy_status=OccupancyStatus.CHECKED_OUT, cleaning_status=CleaningStatus.READY).cleaning_priority,
            CleaningPriority.HIGH,
        )
        self.assertIs(_room(cleaning_status=CleaningStatus.DIRTY).cleaning_priority, CleaningPriority.MEDIUM)
        self.assertIs(
            _room(cleaning_status=CleaningStatus.CLEANING_IN_PROGRESS).cleaning_priority,
            CleaningPriority.LOW,
        )
        self.assertIs(_room(cleaning_status=CleaningStatus.READY).cleaning_priority, CleaningPriority.NONE)
        self.assertGreater(CleaningPriority.HIGH, CleaningPriority.MEDIUM)

    def test_housekeeping_helpers(self) -> None:
        dirty = _room(cleaning_status=CleaningStatus.DIRTY)
        self.assertTrue(dirty.can_start_cleaning())
        self.assertFalse(dirty.can_mark_ready())
        self.assertTrue(dirty.needs_cleaning)

        in_progress = _room(cleaning_status=CleaningStatus.CLEANING_IN_PROGRESS)
        self.assertTrue(in_progress.can_mark_ready())

        ready = _room(cleaning_status=CleaningStatus.READY)
        self.assertFalse(ready.needs_cleaning)
        self.assertFalse(ready.can_start_cleaning())

    def test_maintenance_helpers(self) -> None:
        room = _room(flags=(RoomFlag.DND, RoomFlag.OUT_OF_SERVICE), cleaning_status=CleaningStatus.READY)
        self.assertTrue(room.has_flags)
        self.assertTrue(room.has_maintenance_flag)
        self.assertTrue(room.is_out_of_service)
        self.assertTrue(room.needs_attention)
        self.assertEqual(room.maintenance_flags(), [RoomFlag.OUT_OF_SERVICE])

        dnd_only = _room(flags=(RoomFlag.DND,), cleaning_status=CleaningStatus.READY)
        self.assertFalse(dnd_only.has_maintenance_flag)
        self.assertFalse(dnd_only.needs_attention)

    def test_front_desk_helpers(self) -> None:
        ready = _room(cleaning_status=CleaningStatus.READY)
        self.assertTrue(ready.is_available)
        self.assertTrue(ready.can_check_in())
        self.assertFalse(ready.can_check_out())

        assigned = _room(occupancy_status=OccupancyStatus.ASSIGNED, cleaning_status=CleaningStatus.READY)
        self.assertFalse(assigned.is_available)
        self.assertTrue(assigned.can_check_in())

        occupied = _room(occupancy_status=OccupancyStatus.OCCUPIED)
        self.assertTrue(occupied.can_check_out())
        self.assertTrue(_room(occupancy_status=OccupancyStatus.STAYOVER).can_check_out())
        self.assertFalse(_room(cleaning_status=CleaningStatus.DIRTY).can_check_in())

    def test_room_is_frozen(self) -> None:
        room = _room()
        with self.assertRaises(Exception):
            room.notes = "x"  # type: ignore[misc]


class TestEnums(unittest.TestCase):
    def test_wire_values_and_display_names(self) -> None:
        self.assertEqual(OccupancyStatus("checked_out"), OccupancyStatus.CHECKED_OUT)
        self.assertEqual(OccupancyStatus.CHECKED_OUT.display_name, "Checked Out")
        self.assertEqual(CleaningStatus("cleaning_in_progress").display_name, "Cleaning")
        self.assertEqual(RoomFlag("dnd").display_name, "DND")
        self.assertEqual(CleaningPriority.HIGH.display_name, "High Priority")

    def test_every_member_has_display_name(self) -> None:
        for enum_cls in (OccupancyStatus, CleaningStatus, RoomFlag, CleaningPriority):
            for member in enum_cls:
                self.assertTrue(member.display_name)


if __name__ == "__main__":
    unittest.main()
