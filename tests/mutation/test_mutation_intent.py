import unittest

from hotelpms.mutation import MutationAction, MutationIntent


async def _noop():
    return None


def _intent(action: MutationAction, **kwargs) -> MutationIntent:
    fields = {
        "intent_id": "I1",
        "action": action,
        "entity_id": "R1",
        "remote_call": _noop,
        "label": "Failed",
    }
    fields.update(kwargs)
    return MutationIntent(**fields)


class TestMutationIntent(unittest.TestCase):
    def test_update_requires_transform(self) -> None:
        with self.assertRaises(ValueError):
            _intent(MutationAction.UPDATE).validate_required_fields()
        _intent(MutationAction.UPDATE, transform=lambda x: x).validate_required_fields()

    def test_insert_requires_entity(self) -> None:
        with self.assertRaises(ValueError):
            _intent(MutationAction.INSERT).validate_required_fields()
        _intent(MutationAction.INSERT, entity=object()).validate_required_fields()

    def test_entity_id_and_remote_call_required(self) -> None:
        with self.assertRaises(ValueError):
            _intent(MutationAction.DELETE, entity_id=" ").validate_required_fields()
        with self.assertRaises(ValueError):
            _intent(MutationAction.DELETE, remote_call=None).validate_required_fields()


if __name__ == "__main__":
    unittest.main()
