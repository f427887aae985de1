import unittest
from datetime import datetime, timedelta, timezone

from hotelpms.util.time import normalize_dt, now_utc, parse_timestamp, to_timestamp


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_parse_timestamp_z_suffix(self) -> None:
        dt = parse_timestamp("2025-01-01T12:34:56Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_timestamp_converts_offset_to_utc(self) -> None:
        dt = parse_timestamp("2025-01-01T09:00:00+09:00")
        self.assertEqual(dt, datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc))
        self.assertEqual(dt.utcoffset(), timedelta(0))

    def test_parse_timestamp_short_and_long_fractions(self) -> None:
        dt = parse_timestamp("2025-01-01 12:00:00.12+00:00")
        self.assertEqual(dt.microsecond, 120000)

        dt = parse_timestamp("2025-01-01T12:00:00.123456789Z")
        self.assertEqual(dt.microsecond, 123456)

    def test_parse_timestamp_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            parse_timestamp("")
        with self.assertRaises(ValueError):
            parse_timestamp("yesterday")
        with self.assertRaises(ValueError):
            parse_timestamp("2025-01-01T00:00:00")

    def test_to_timestamp_uses_z(self) -> None:
        dt = datetime(2025, 1, 1, 0, 0, 0, 5, tzinfo=timezone.utc)
        self.assertEqual(to_timestamp(dt), "2025-01-01T00:00:00.000005Z")
        self.assertEqual(parse_timestamp(to_timestamp(dt)), dt)

    def test_normalize_dt_rejects_naive(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dt(datetime(2025, 1, 1))
        with self.assertRaises(TypeError):
            normalize_dt("2025-01-01")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
