"""Tests for layout bookkeeping and read-timeout scheduling in the event loop."""

from __future__ import annotations

import contextlib
import unittest
from unittest import mock

from glossview.entries import Entry
from glossview.runtime import BrowserController, DeadlineTimer
from glossview.runtime.layout import clamp_scroll, compute_left_width, follow_cursor
from glossview.runtime.app import build_session
from glossview.runtime.loop import (
    IDLE_POLL_MS,
    RenderOptions,
    build_render_context,
    next_read_timeout_ms,
    run_main_loop,
    update_layout,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 10.0

    def __call__(self) -> float:
        return self.now


def _controller(timer: DeadlineTimer | None = None) -> BrowserController:
    entries = [Entry("G", "C", f"Term {idx:02d}", "d") for idx in range(30)]
    controller = BrowserController(entries, timer=timer)
    controller.expand_group_fully("G")
    return controller


class LayoutHelperTests(unittest.TestCase):
    def test_left_width_bounds(self) -> None:
        self.assertEqual(compute_left_width(40), 20)
        self.assertEqual(compute_left_width(90), 30)
        self.assertEqual(compute_left_width(300), 40)

    def test_follow_cursor_scrolls_both_ways(self) -> None:
        self.assertEqual(follow_cursor(0, 12, 10, 40), 3)
        self.assertEqual(follow_cursor(10, 4, 10, 40), 4)
        self.assertEqual(follow_cursor(5, 7, 10, 40), 5)

    def test_follow_cursor_without_cursor_clamps(self) -> None:
        self.assertEqual(follow_cursor(50, -1, 10, 12), 2)

    def test_clamp_scroll(self) -> None:
        self.assertEqual(clamp_scroll(20, 15, 10), 5)
        self.assertEqual(clamp_scroll(-1, 15, 10), 0)


class LoopHelperTests(unittest.TestCase):
    def test_update_layout_keeps_cursor_visible(self) -> None:
        controller = _controller()
        controller.move_cursor_to(25)

        update_layout(controller, columns=80, lines=12, options=RenderOptions())

        state = controller.state
        self.assertEqual(state.tree_rows, 10)
        self.assertTrue(state.tree_start <= 25 < state.tree_start + state.tree_rows)

    def test_idle_read_timeout(self) -> None:
        self.assertEqual(next_read_timeout_ms(_controller()), IDLE_POLL_MS)

    def test_read_timeout_waits_for_type_ahead_deadline(self) -> None:
        clock = FakeClock()
        controller = _controller(DeadlineTimer(clock))
        controller.type_ahead_char("t")
        clock.now += 0.5

        timeout = next_read_timeout_ms(controller)

        self.assertLessEqual(timeout, IDLE_POLL_MS)
        self.assertGreaterEqual(timeout, 0)

    def test_render_context_reflects_state(self) -> None:
        controller = _controller()
        controller.type_ahead_char("t")

        context = build_render_context(controller, 100, 30, RenderOptions(no_color=True))

        self.assertEqual(context.type_ahead, "t")
        self.assertEqual(context.focused_idx, controller.focused_idx)
        self.assertTrue(context.no_color)


class FakeTerminal:
    stdin_fd = 0

    def __init__(self) -> None:
        self.entered = 0

    @contextlib.contextmanager
    def raw_mode(self):
        self.entered += 1
        yield


class MainLoopTests(unittest.TestCase):
    def test_loop_renders_dispatches_and_quits(self) -> None:
        controller, dispatcher = build_session(
            [Entry("Chemistry", "Acids", "Acid", "d"), Entry("Physics", "Mechanics", "Force", "d")]
        )
        terminal = FakeTerminal()
        frames: list[str] = []
        keys = iter(["DOWN", "", "p", "CTRL_C"])

        with mock.patch("glossview.runtime.loop.read_key", side_effect=lambda _fd, timeout_ms: next(keys)):
            run_main_loop(controller, terminal, dispatcher, RenderOptions(no_color=True), frames.append)

        self.assertEqual(terminal.entered, 1)
        self.assertGreaterEqual(len(frames), 2)
        self.assertEqual(controller.focused_node().label, "Physics")
        self.assertIn("Physics", frames[-1])

    def test_build_session_wires_mouse_handler(self) -> None:
        controller, dispatcher = build_session([Entry("G", "C", "T", "d")], search_fields=("term", "tags"))

        self.assertTrue(dispatcher.handle("MOUSE_LEFT_DOWN:2:2").handled)
        self.assertTrue(controller.state.disclosure.is_group_open("G"))


if __name__ == "__main__":
    unittest.main()
