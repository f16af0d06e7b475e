"""
Metric Registry Protocol.

The registry is the source of every reporting cycle. At call time it must
return one ordered mapping per metric kind, keyed by the raw dotted name.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from tsdb_reporter.interfaces.metrics import Counter, Gauge, Histogram, Meter, Timer


@runtime_checkable
class MetricRegistryProtocol(Protocol):
    """Read access to the metrics of a registry, grouped by kind."""

    def get_gauges(self) -> Mapping[str, Gauge]:
        ...

    def get_counters(self) -> Mapping[str, Counter]:
        ...

    def get_histograms(self) -> Mapping[str, Histogram]:
        ...

    def get_meters(self) -> Mapping[str, Meter]:
        ...

    def get_timers(self) -> Mapping[str, Timer]:
        ...
