import unittest

from hotelpms.auth import SupabaseSettings
from hotelpms.errors import ConfigurationError


class TestSupabaseSettings(unittest.TestCase):
    def test_valid(self) -> None:
        settings = SupabaseSettings(url="https://abc.supabase.co", key="anon-key")
        self.assertEqual(settings.url, "https://abc.supabase.co")
        self.assertNotIn("anon-key", repr(settings))

    def test_invalid_values(self) -> None:
        with self.assertRaises(ConfigurationError):
            SupabaseSettings(url="", key="k")
        with self.assertRaises(ConfigurationError):
            SupabaseSettings(url="https://abc.supabase.co", key="  ")
        with self.assertRaises(ConfigurationError):
            SupabaseSettings(url="abc.supabase.co", key="k")

    def test_from_env(self) -> None:
        settings = SupabaseSettings.from_env(
            {"SUPABASE_URL": " https://abc.supabase.co ", "SUPABASE_KEY": "k"}
        )
        self.assertEqual(settings.url, "https://abc.supabase.co")
        self.assertEqual(settings.key, "k")

    def test_from_env_reports_missing(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            SupabaseSettings.from_env({"SUPABASE_URL": "https://abc.supabase.co"})
        self.assertEqual(ctx.exception.details["missing"], ["SUPABASE_KEY"])


if __name__ == "__main__":
    unittest.main()
