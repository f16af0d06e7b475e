"""
Clock Protocol.

Injectable time source. Reporting cycles stamp their tuples from get_time();
meters and timers measure elapsed time with get_tick().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockProtocol(Protocol):
    """Abstract time source."""

    def get_time(self) -> int:
        """Current wall-clock time in epoch milliseconds."""
        ...

    def get_tick(self) -> int:
        """Monotonic time in nanoseconds, for measuring intervals."""
        ...
