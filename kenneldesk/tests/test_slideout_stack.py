import unittest

from kenneldesk.slideout.registry import (
    DEFAULT_BACK_LABEL,
    SlideoutType,
    config_for,
    label_for_type,
)
from kenneldesk.slideout.stack import PanelState, SlideoutStack


def panel(panel_type="ownerEdit", **props) -> PanelState:
    return PanelState(type=panel_type, props=props)


class RegistryTestCase(unittest.TestCase):
    def test_every_type_has_config_and_label(self) -> None:
        for panel_type in SlideoutType:
            self.assertIsNotNone(config_for(panel_type))
            self.assertNotEqual(label_for_type(panel_type), DEFAULT_BACK_LABEL)

    def test_lookup_accepts_raw_strings(self) -> None:
        self.assertEqual(config_for("bookingCreate").title, "New Booking")
        self.assertEqual(config_for("bookingCreate").width, "max-w-3xl")
        self.assertEqual(label_for_type("ownerEdit"), "Customer")

    def test_unknown_type(self) -> None:
        self.assertIsNone(config_for("unknown-type"))
        self.assertEqual(label_for_type("unknown-type"), "Previous")


class SlideoutStackTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.stack = SlideoutStack()
        self.snapshots = []
        self.unsubscribe = self.stack.subscribe(self.snapshots.append)

    def test_push_and_peek(self) -> None:
        first = panel("ownerEdit")
        second = panel("bookingCreate")
        self.stack.push(first)
        self.stack.push(second)
        self.assertEqual(len(self.stack), 2)
        self.assertIs(self.stack.peek(), second)
        self.assertIs(self.stack.peek_below_top(), first)
        self.assertTrue(self.stack.is_open)

    def test_pop_removes_only_top(self) -> None:
        first = panel("ownerEdit")
        self.stack.push(first)
        self.stack.push(panel("bookingCreate"))
        self.stack.pop()
        self.assertEqual(self.stack.snapshot(), (first,))

    def test_pop_last_entry_empties_stack(self) -> None:
        self.stack.push(panel())
        self.stack.pop()
        self.assertEqual(len(self.stack), 0)
        self.assertFalse(self.stack.is_open)
        self.assertIsNone(self.stack.peek())
        self.assertIsNone(self.stack.peek_below_top())

    def test_clear_any_depth(self) -> None:
        for depth in (1, 2, 5):
            for _ in range(depth):
                self.stack.push(panel())
            self.stack.clear()
            self.assertEqual(len(self.stack), 0)

    def test_listeners_see_each_mutation(self) -> None:
        self.stack.push(panel("ownerEdit"))
        self.stack.push(panel("bookingCreate"))
        self.stack.pop()
        self.stack.clear()
        self.assertEqual([len(snapshot) for snapshot in self.snapshots], [1, 2, 1, 0])

    def test_empty_stack_operations_do_not_notify(self) -> None:
        self.stack.pop()
        self.stack.clear()
        self.assertEqual(self.snapshots, [])

    def test_unsubscribe(self) -> None:
        self.unsubscribe()
        self.unsubscribe()
        self.stack.push(panel())
        self.assertEqual(self.snapshots, [])

    def test_return_to_accessors(self) -> None:
        calls = []
        entry = panel("taskCreate", returnTo={"label": "Booking", "onBack": lambda: calls.append(1)})
        self.assertEqual(entry.return_label, "Booking")
        entry.return_callback()
        self.assertEqual(calls, [1])
        self.assertIsNone(panel().return_callback)
        self.assertIsNone(panel(returnTo={"label": "Detail"}).return_callback)


if __name__ == "__main__":
    unittest.main()
