import unittest

from hotelpms.models import MutationResult


class TestModelsResults(unittest.TestCase):
    def test_ok_only_when_confirmed(self) -> None:
        confirmed = MutationResult(intent_id="I1", kind="update", entity_id="R1", status="confirmed")
        self.assertTrue(confirmed.ok)
        self.assertIsNone(confirmed.error_message)

        reverted = MutationResult(
            intent_id="I2",
            kind="delete",
            entity_id="R1",
            status="reverted",
            error_type="NetworkError",
            error_message="Failed to delete room: Network error",
        )
        self.assertFalse(reverted.ok)

        skipped = MutationResult(intent_id="I3", kind="insert", entity_id="R9", status="skipped")
        self.assertFalse(skipped.ok)


if __name__ == "__main__":
    unittest.main()
