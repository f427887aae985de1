import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

from hotelpms.errors import InvalidArgumentError
from hotelpms.history import RoomHistoryService
from hotelpms.models import AuditEventType, CleaningStatus, OccupancyStatus, RoomFlag
from hotelpms.store import CreateAuditRequest


class FakeClient:
    def __init__(self, data=None) -> None:
        self.builder = Mock()
        for method in ("select", "insert", "eq", "order", "limit"):
            getattr(self.builder, method).return_value = self.builder
        self.builder.execute = AsyncMock(return_value=SimpleNamespace(data=data or []))
        self.table = Mock(return_value=self.builder)


def _history_row(entry_id: str, change_type: str = "created"):
    return {
        "id": entry_id,
        "room_id": "R1",
        "changed_by": "U1",
        "change_type": change_type,
        "old_value": None,
        "new_value": None,
        "note": None,
        "created_at": "2025-01-01T00:00:00Z",
    }


class TestRoomHistoryService(unittest.IsolatedAsyncioTestCase):
    async def test_record_inserts_row(self) -> None:
        client = FakeClient()
        service = RoomHistoryService(client)

        await service.record(
            AuditEventType.CLEANING_STATUS,
            "R1",
            "U1",
            old_value="dirty",
            new_value="ready",
        )

        client.table.assert_called_with("room_history")
        client.builder.insert.assert_called_once_with(
            {
                "room_id": "R1",
                "changed_by": "U1",
                "change_type": "cleaning_status",
                "old_value": "dirty",
                "new_value": "ready",
                "note": None,
            }
        )

    async def test_record_accepts_wire_value(self) -> None:
        client = FakeClient()
        await RoomHistoryService(client).record("deleted", "R1", "U1")
        self.assertEqual(client.builder.insert.call_args.args[0]["change_type"], "deleted")

    async def test_record_rejects_unknown_event(self) -> None:
        client = FakeClient()
        with self.assertRaises(InvalidArgumentError):
            await RoomHistoryService(client).record("renamed", "R1", "U1")
        client.table.assert_not_called()

    async def test_record_requires_ids(self) -> None:
        service = RoomHistoryService(FakeClient())
        with self.assertRaises(InvalidArgumentError):
            await service.record(AuditEventType.CREATED, "", "U1")
        with self.assertRaises(InvalidArgumentError):
            await service.record(AuditEventType.CREATED, "R1", " ")

    async def test_get_room_history_newest_first(self) -> None:
        client = FakeClient([_history_row("E2", "notes"), _history_row("E1")])
        entries = await RoomHistoryService(client).get_room_history("R1")

        self.assertEqual([e.id for e in entries], ["E2", "E1"])
        client.builder.eq.assert_called_with("room_id", "R1")
        client.builder.order.assert_called_with("created_at", desc=True)
        client.builder.limit.assert_called_with(50)

    async def test_get_recent_activity(self) -> None:
        client = FakeClient([_history_row("E1")])
        entries = await RoomHistoryService(client).get_recent_activity(limit=10)

        self.assertEqual(len(entries), 1)
        client.builder.eq.assert_not_called()
        client.builder.limit.assert_called_with(10)

    async def test_get_recent_history_for_hotel_filters_through_rooms(self) -> None:
        row = dict(_history_row("E1"), rooms={"hotel_id": "H1"})
        client = FakeClient([row])
        entries = await RoomHistoryService(client).get_recent_history_for_hotel("H1")

        self.assertEqual([e.id for e in entries], ["E1"])
        self.assertIn("rooms!inner(hotel_id)", client.builder.select.call_args.args[0])
        client.builder.eq.assert_called_once_with("rooms.hotel_id", "H1")
        client.builder.limit.assert_called_with(50)

    async def test_activity_filters(self) -> None:
        client = FakeClient([_history_row("E1", "flags")])
        service = RoomHistoryService(client)

        await service.get_activity_by_type(AuditEventType.FLAGS)
        client.builder.eq.assert_called_with("change_type", "flags")
        client.builder.limit.assert_called_with(50)

        await service.get_activity_by_change_type("maintenance")
        client.builder.eq.assert_called_with("change_type", "maintenance")
        client.builder.limit.assert_called_with(30)

        await service.get_activity_by_actor("U1", limit=5)
        client.builder.eq.assert_called_with("changed_by", "U1")
        client.builder.limit.assert_called_with(5)

        with self.assertRaises(InvalidArgumentError):
            await service.get_activity_by_type("renamed")

    async def test_record_bulk_sends_one_insert(self) -> None:
        client = FakeClient()
        await RoomHistoryService(client).record_bulk(
            [
                CreateAuditRequest("R1", "U1", AuditEventType.CREATED),
                CreateAuditRequest("R2", "U1", AuditEventType.CREATED, note="setup"),
            ]
        )

        client.builder.insert.assert_called_once()
        payloads = client.builder.insert.call_args.args[0]
        self.assertEqual([p["room_id"] for p in payloads], ["R1", "R2"])
        self.assertEqual(payloads[1]["note"], "setup")

    async def test_record_bulk_validates_before_sending(self) -> None:
        client = FakeClient()
        service = RoomHistoryService(client)

        await service.record_bulk([])
        with self.assertRaises(InvalidArgumentError):
            await service.record_bulk(
                [
                    CreateAuditRequest("R1", "U1", AuditEventType.CREATED),
                    CreateAuditRequest("R2", "U1", "renamed"),  # type: ignore[arg-type]
                ]
            )
        client.table.assert_not_called()

    async def test_typed_log_helpers(self) -> None:
        client = FakeClient()
        service = RoomHistoryService(client)

        def last_insert():
            row = client.builder.insert.call_args.args[0]
            return (row["change_type"], row["old_value"], row["new_value"], row["note"])

        await service.log_occupancy_change("R1", "U1", OccupancyStatus.VACANT, OccupancyStatus.OCCUPIED)
        self.assertEqual(last_insert(), ("occupancy_status", "vacant", "occupied", None))

        await service.log_cleaning_change(
            "R1", "U1", CleaningStatus.DIRTY, CleaningStatus.READY, note="inspected"
        )
        self.assertEqual(last_insert(), ("cleaning_status", "dirty", "ready", "inspected"))

        await service.log_flag_added("R1", "U1", RoomFlag.DND)
        self.assertEqual(last_insert(), ("flags", None, "added: dnd", None))

        await service.log_flag_removed("R1", "U1", RoomFlag.DND)
        self.assertEqual(last_insert(), ("flags", "removed: dnd", None, None))

        await service.log_note_added("R1", "U1", "Extra towels")
        self.assertEqual(last_insert(), ("notes", None, "Extra towels", "Note added"))

        await service.log_note_updated("R1", "U1", "Extra towels", "No towels")
        self.assertEqual(last_insert(), ("notes", "Extra towels", "No towels", "Note updated"))

        await service.log_note_deleted("R1", "U1", "No towels", note="guest left")
        self.assertEqual(last_insert(), ("notes", "No towels", None, "guest left"))

    async def test_limit_must_be_positive(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            await RoomHistoryService(FakeClient()).get_recent_activity(limit=0)


if __name__ == "__main__":
    unittest.main()
