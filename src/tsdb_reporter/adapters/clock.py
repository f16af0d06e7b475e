"""
System Clock.

Default ClockProtocol implementation backed by the time module.
"""

from __future__ import annotations

import time


class SystemClock:
    """Wall-clock time and monotonic ticks from the host."""

    def get_time(self) -> int:
        """Current time in epoch milliseconds."""
        return time.time_ns() // 1_000_000

    def get_tick(self) -> int:
        """Monotonic nanoseconds."""
        return time.monotonic_ns()


DEFAULT_CLOCK = SystemClock()
