"""
Metric Protocols.

Defines the read-side interface the reporter expects from each metric kind.
Any registry whose metrics expose these accessors can be reported, whether
it is the in-memory registry shipped with this package or a third-party one.

Design Notes:
    - Read-only accessors; the reporter never mutates a metric
    - Rates are per second, durations are in nanoseconds
    - Accessors are assumed reliable; no defensive checks are made
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Snapshot(Protocol):
    """Statistical summary of a sample of values."""

    def get_max(self) -> int:
        ...

    def get_min(self) -> int:
        ...

    def get_mean(self) -> float:
        ...

    def get_std_dev(self) -> float:
        ...

    def get_median(self) -> float:
        ...

    def get_75th_percentile(self) -> float:
        ...

    def get_95th_percentile(self) -> float:
        ...

    def get_98th_percentile(self) -> float:
        ...

    def get_99th_percentile(self) -> float:
        ...

    def get_999th_percentile(self) -> float:
        ...


@runtime_checkable
class Gauge(Protocol):
    """Instantaneous value supplied by external code."""

    def get_value(self) -> Any:
        ...


@runtime_checkable
class Counter(Protocol):
    """Adjustable integer accumulator."""

    def get_count(self) -> int:
        ...


@runtime_checkable
class Histogram(Protocol):
    """Distribution of observed values."""

    def get_count(self) -> int:
        ...

    def get_snapshot(self) -> Snapshot:
        ...


@runtime_checkable
class Meter(Protocol):
    """Event rate over several moving-average windows."""

    def get_count(self) -> int:
        ...

    def get_mean_rate(self) -> float:
        ...

    def get_one_minute_rate(self) -> float:
        ...

    def get_five_minute_rate(self) -> float:
        ...

    def get_fifteen_minute_rate(self) -> float:
        ...


@runtime_checkable
class Timer(Meter, Protocol):
    """Histogram of durations combined with a meter of occurrences."""

    def get_snapshot(self) -> Snapshot:
        ...
