"""Tests for mouse routing onto the search row, tree rows, and detail pane."""

from __future__ import annotations

import unittest

from glossview.entries import Entry
from glossview.input import KeyContext, KeyDispatcher, TreeMouseHandler, parse_mouse_col_row
from glossview.runtime import FOCUS_SEARCH, FOCUS_TREE, BrowserController


def _controller() -> BrowserController:
    return BrowserController(
        [
            Entry("Chemistry", "Acids", "Acid", "d"),
            Entry("Physics", "Mechanics", "Force", "d"),
        ]
    )


class MouseHandlerTests(unittest.TestCase):
    def test_parse_mouse_col_row(self) -> None:
        self.assertEqual(parse_mouse_col_row("MOUSE_LEFT_DOWN:4:9"), (4, 9))
        self.assertEqual(parse_mouse_col_row("MOUSE"), (None, None))
        self.assertEqual(parse_mouse_col_row("MOUSE_LEFT_DOWN:x:9"), (None, None))

    def test_click_on_group_row_toggles_it(self) -> None:
        controller = _controller()
        handler = TreeMouseHandler(controller)

        self.assertTrue(handler.handle("MOUSE_LEFT_DOWN:3:2"))
        self.assertEqual(controller.focused_idx, 0)
        self.assertTrue(controller.state.disclosure.is_group_open("Chemistry"))
        self.assertEqual(controller.state.focus, FOCUS_TREE)

        handler.handle("MOUSE_LEFT_DOWN:3:2")
        self.assertFalse(controller.state.disclosure.is_group_open("Chemistry"))

    def test_click_on_item_selects_it(self) -> None:
        controller = _controller()
        controller.expand_group_fully("Chemistry")
        handler = TreeMouseHandler(controller)

        handler.handle("MOUSE_LEFT_DOWN:6:4")

        self.assertEqual(controller.selected.term, "Acid")

    def test_click_on_search_row_focuses_search(self) -> None:
        controller = _controller()
        controller.focus_tree()
        handler = TreeMouseHandler(controller)

        self.assertTrue(handler.handle("MOUSE_LEFT_DOWN:10:1"))

        self.assertEqual(controller.state.focus, FOCUS_SEARCH)

    def test_clicks_outside_rows_are_ignored(self) -> None:
        controller = _controller()
        handler = TreeMouseHandler(controller)

        self.assertFalse(handler.handle("MOUSE_LEFT_DOWN:3:9"))
        self.assertFalse(handler.handle("MOUSE_LEFT_DOWN:70:2"))
        self.assertEqual(controller.focused_idx, -1)

    def test_release_is_consumed(self) -> None:
        self.assertTrue(TreeMouseHandler(_controller()).handle("MOUSE_LEFT_UP:3:2"))

    def test_wheel_over_tree_moves_cursor(self) -> None:
        controller = _controller()
        handler = TreeMouseHandler(controller)

        handler.handle("MOUSE_WHEEL_DOWN:3:5")
        handler.handle("MOUSE_WHEEL_DOWN:3:5")

        self.assertEqual(controller.focused_idx, 1)

    def test_wheel_over_detail_scrolls_detail(self) -> None:
        controller = _controller()
        handler = TreeMouseHandler(controller)

        handler.handle("MOUSE_WHEEL_DOWN:60:5")
        self.assertEqual(controller.state.detail_start, 3)
        handler.handle("MOUSE_WHEEL_UP:60:5")
        handler.handle("MOUSE_WHEEL_UP:60:5")
        self.assertEqual(controller.state.detail_start, 0)

    def test_dispatcher_routes_mouse_and_clears_type_ahead(self) -> None:
        controller = _controller()
        handler = TreeMouseHandler(controller)
        dispatcher = KeyDispatcher(KeyContext(controller=controller, handle_mouse=handler.handle))
        dispatcher.handle("DOWN")
        dispatcher.handle("p")
        self.assertTrue(controller.type_ahead.active)

        self.assertTrue(dispatcher.handle("MOUSE_LEFT_DOWN:3:2").handled)

        self.assertFalse(controller.type_ahead.active)
        self.assertTrue(controller.state.disclosure.is_group_open("Chemistry"))


if __name__ == "__main__":
    unittest.main()
