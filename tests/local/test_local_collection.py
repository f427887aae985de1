import unittest
from dataclasses import dataclass

from hotelpms.errors import LocalValidationError
from hotelpms.local import LocalCollection


@dataclass(frozen=True)
class Item:
    id: str
    value: int = 0


class TestLocalCollection(unittest.TestCase):
    def setUp(self) -> None:
        self.col = LocalCollection([Item("a"), Item("b"), Item("c")])

    def test_read_apis(self) -> None:
        self.assertEqual(len(self.col), 3)
        self.assertEqual(self.col.ids(), ["a", "b", "c"])
        self.assertIn("b", self.col)
        self.assertNotIn("z", self.col)
        self.assertEqual(self.col.get("b"), Item("b"))
        self.assertIsNone(self.col.get("z"))
        self.assertEqual(self.col.index_of("c"), 2)
        self.assertIsNone(self.col.index_of("z"))

    def test_reset_rejects_duplicate_ids(self) -> None:
        with self.assertRaises(LocalValidationError):
            self.col.reset([Item("x"), Item("x")])
        self.assertEqual(self.col.ids(), ["a", "b", "c"])

    def test_append_rejects_duplicate(self) -> None:
        with self.assertRaises(LocalValidationError):
            self.col.append(Item("a"))

    def test_insert_in_and_out_of_bounds(self) -> None:
        self.assertEqual(self.col.insert(1, Item("x")), 1)
        self.assertEqual(self.col.ids(), ["a", "x", "b", "c"])

        self.assertEqual(self.col.insert(99, Item("y")), 4)
        self.assertEqual(self.col.ids(), ["a", "x", "b", "c", "y"])

    def test_replace_keeps_position(self) -> None:
        self.assertTrue(self.col.replace("b", Item("b", 5)))
        self.assertEqual(self.col.ids(), ["a", "b", "c"])
        self.assertEqual(self.col.get("b").value, 5)

    def test_replace_with_new_id(self) -> None:
        self.assertTrue(self.col.replace("b", Item("server-b")))
        self.assertEqual(self.col.ids(), ["a", "server-b", "c"])
        self.assertNotIn("b", self.col)

    def test_replace_rejects_id_collision(self) -> None:
        with self.assertRaises(LocalValidationError):
            self.col.replace("b", Item("c"))

    def test_replace_absent_is_noop(self) -> None:
        self.assertFalse(self.col.replace("z", Item("z")))
        self.assertEqual(self.col.ids(), ["a", "b", "c"])

    def test_remove(self) -> None:
        self.assertEqual(self.col.remove("b"), (1, Item("b")))
        self.assertEqual(self.col.ids(), ["a", "c"])
        self.assertIsNone(self.col.remove("b"))

    def test_iteration_is_over_a_copy(self) -> None:
        for item in self.col:
            self.col.remove(item.id)
        self.assertEqual(len(self.col), 0)

    def test_clear(self) -> None:
        self.col.clear()
        self.assertEqual(self.col.to_list(), [])
        self.assertNotIn("a", self.col)


if __name__ == "__main__":
    unittest.main()
