"""Type-to-select buffer and its single cancellable expiry timer.

The event loop is single-threaded, so the "timer" is a deadline polled by the
loop: ``DeadlineTimer.fire_due`` runs the pending callback once its deadline
has passed. Scheduling always replaces the previous callback.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

TYPE_AHEAD_TIMEOUT_MS = 700


class DeadlineTimer:
    """At most one deferred callback keyed to a monotonic deadline."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._deadline: float | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        """Arm ``callback`` after ``delay_seconds``, cancelling any earlier one."""
        self.cancel()
        self._deadline = self._clock() + max(0.0, delay_seconds)
        self._callback = callback

    def cancel(self) -> None:
        self._deadline = None
        self._callback = None

    def seconds_until_due(self) -> float | None:
        """Return remaining seconds (never negative) or ``None`` when idle."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def fire_due(self) -> bool:
        """Run the pending callback if its deadline passed; return whether it ran."""
        if self._callback is None or self._deadline is None:
            return False
        if self._clock() < self._deadline:
            return False
        callback = self._callback
        # Disarm first so a callback that reschedules keeps its new deadline.
        self.cancel()
        callback()
        return True


class TypeAheadBuffer:
    """Accumulates quickly typed characters until an inactivity timeout."""

    def __init__(self, timer: DeadlineTimer, timeout_ms: int = TYPE_AHEAD_TIMEOUT_MS) -> None:
        self.timer = timer
        self.timeout_seconds = max(1, timeout_ms) / 1000.0
        self.chars = ""

    @property
    def active(self) -> bool:
        return bool(self.chars)

    def push(self, ch: str) -> str:
        """Append ``ch``, restart the expiry timer, and return the buffer."""
        if not self.chars:
            logger.debug("type-ahead armed")
        self.chars += ch
        self.timer.schedule(self.timeout_seconds, self.clear)
        return self.chars

    def pop(self) -> str:
        """Drop the last character; an emptied buffer disarms the timer."""
        self.chars = self.chars[:-1]
        if self.chars:
            self.timer.schedule(self.timeout_seconds, self.clear)
        else:
            self.timer.cancel()
        return self.chars

    def clear(self) -> None:
        if self.chars:
            logger.debug("type-ahead cleared (%r)", self.chars)
        self.chars = ""
        self.timer.cancel()
