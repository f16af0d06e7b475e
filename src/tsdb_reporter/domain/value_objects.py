"""
Value Objects for Domain Layer.

Time units used for rate and duration conversion.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class TimeUnit(str, Enum):
    """Unit of time for rate and duration conversion."""

    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @classmethod
    def parse(cls, value: object) -> "TimeUnit":
        """Parse a unit name case-insensitively (e.g. "SECONDS", "ms")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown time unit: {value!r}") from None

    def to_nanos(self) -> int:
        """Number of nanoseconds in one unit."""
        return _NANOS_PER_UNIT[self]

    def to_seconds(self) -> float:
        """Number of seconds in one unit (fractional below one second)."""
        return _NANOS_PER_UNIT[self] / _NANOS_PER_UNIT[TimeUnit.SECONDS]


_NANOS_PER_UNIT: Dict[TimeUnit, int] = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MINUTES: 60 * 1_000_000_000,
    TimeUnit.HOURS: 3600 * 1_000_000_000,
    TimeUnit.DAYS: 86400 * 1_000_000_000,
}

_ALIASES: Dict[str, str] = {
    "ns": "nanoseconds",
    "us": "microseconds",
    "ms": "milliseconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}
