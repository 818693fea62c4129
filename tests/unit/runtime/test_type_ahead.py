"""Tests for the deadline timer and the type-ahead buffer it expires."""

from __future__ import annotations

import unittest

from glossview.runtime import DeadlineTimer, TypeAheadBuffer


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DeadlineTimerTests(unittest.TestCase):
    def test_callback_runs_once_after_deadline(self) -> None:
        clock = FakeClock()
        timer = DeadlineTimer(clock)
        calls: list[str] = []
        timer.schedule(0.5, lambda: calls.append("fired"))

        self.assertFalse(timer.fire_due())
        clock.advance(0.5)
        self.assertTrue(timer.fire_due())
        self.assertFalse(timer.fire_due())

        self.assertEqual(calls, ["fired"])
        self.assertFalse(timer.pending)

    def test_schedule_replaces_previous_callback(self) -> None:
        clock = FakeClock()
        timer = DeadlineTimer(clock)
        calls: list[str] = []
        timer.schedule(0.5, lambda: calls.append("first"))
        clock.advance(0.25)
        timer.schedule(0.5, lambda: calls.append("second"))
        clock.advance(0.25)

        self.assertFalse(timer.fire_due())
        clock.advance(0.25)
        self.assertTrue(timer.fire_due())

        self.assertEqual(calls, ["second"])

    def test_cancel_prevents_firing(self) -> None:
        clock = FakeClock()
        timer = DeadlineTimer(clock)
        calls: list[str] = []
        timer.schedule(0.1, lambda: calls.append("fired"))
        timer.cancel()
        clock.advance(1.0)

        self.assertFalse(timer.fire_due())
        self.assertEqual(calls, [])
        self.assertIsNone(timer.seconds_until_due())

    def test_seconds_until_due_never_negative(self) -> None:
        clock = FakeClock()
        timer = DeadlineTimer(clock)
        timer.schedule(0.25, lambda: None)

        self.assertAlmostEqual(timer.seconds_until_due(), 0.25)
        clock.advance(1.0)
        self.assertEqual(timer.seconds_until_due(), 0.0)


class TypeAheadBufferTests(unittest.TestCase):
    def test_buffer_expires_after_inactivity(self) -> None:
        clock = FakeClock()
        timer = DeadlineTimer(clock)
        buffer = TypeAheadBuffer(timer, timeout_ms=500)

        buffer.push("a")
        clock.advance(0.25)
        buffer.push("c")
        clock.advance(0.25)
        timer.fire_due()
        self.assertEqual(buffer.chars, "ac")

        clock.advance(0.25)
        timer.fire_due()
        self.assertEqual(buffer.chars, "")
        self.assertFalse(buffer.active)

    def test_pop_to_empty_disarms_timer(self) -> None:
        timer = DeadlineTimer(FakeClock())
        buffer = TypeAheadBuffer(timer)

        buffer.push("a")
        self.assertEqual(buffer.pop(), "")

        self.assertFalse(timer.pending)

    def test_clear_cancels_timer(self) -> None:
        timer = DeadlineTimer(FakeClock())
        buffer = TypeAheadBuffer(timer)
        buffer.push("x")

        buffer.clear()

        self.assertFalse(timer.pending)
        self.assertEqual(buffer.chars, "")


if __name__ == "__main__":
    unittest.main()
