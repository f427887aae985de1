import unittest

from hotelpms.models import (
    RoomRange,
    has_overlapping_ranges,
    is_valid_configuration,
    total_room_count,
    valid_ranges,
    valid_ranges_display_text,
)


class TestRoomRange(unittest.TestCase):
    def test_valid_range(self) -> None:
        r = RoomRange("101", "110")
        self.assertTrue(r.is_valid)
        self.assertEqual(r.room_count, 10)
        self.assertEqual(r.int_range, range(101, 111))
        self.assertEqual(r.display_text, "101-110 (10 rooms)")

    def test_single_room_range(self) -> None:
        self.assertEqual(RoomRange("7", "7").room_count, 1)

    def test_invalid_ranges(self) -> None:
        for start, end in [("", ""), ("abc", "5"), ("0", "5"), ("-1", "5"), ("9", "1"), ("1.5", "3")]:
            with self.subTest(start=start, end=end):
                r = RoomRange(start, end)
                self.assertFalse(r.is_valid)
                self.assertEqual(r.room_count, 0)
                self.assertIsNone(r.int_range)
                self.assertEqual(r.display_text, "Invalid range")

    def test_default_range_is_blank_and_invalid(self) -> None:
        self.assertFalse(RoomRange().is_valid)


class TestRoomRangeSets(unittest.TestCase):
    def test_totals_ignore_invalid_ranges(self) -> None:
        ranges = [RoomRange("101", "105"), RoomRange("x", "y"), RoomRange("201", "202")]
        self.assertEqual(total_room_count(ranges), 7)
        self.assertEqual(len(valid_ranges(ranges)), 2)
        self.assertEqual(
            valid_ranges_display_text(ranges), "101-105 (5 rooms), 201-202 (2 rooms)"
        )

    def test_overlap_detection(self) -> None:
        self.assertTrue(has_overlapping_ranges([RoomRange("201", "210"), RoomRange("101", "201")]))
        self.assertTrue(
            has_overlapping_ranges(
                [RoomRange("100", "300"), RoomRange("120", "130"), RoomRange("150", "160")]
            )
        )
        self.assertFalse(has_overlapping_ranges([RoomRange("101", "110"), RoomRange("111", "120")]))
        self.assertFalse(has_overlapping_ranges([RoomRange("101", "110"), RoomRange("105", "x")]))

    def test_configuration_validity(self) -> None:
        self.assertTrue(is_valid_configuration([RoomRange("101", "110"), RoomRange("201", "210")]))
        self.assertFalse(is_valid_configuration([]))
        self.assertFalse(is_valid_configuration([RoomRange("101", "110"), RoomRange("", "")]))
        self.assertFalse(is_valid_configuration([RoomRange("101", "110"), RoomRange("110", "115")]))


if __name__ == "__main__":
    unittest.main()
