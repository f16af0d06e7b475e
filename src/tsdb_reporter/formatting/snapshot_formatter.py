"""
Snapshot Formatter - Projection of Metrics into Output Tuples.

Each metric kind expands into a fixed set of suffixed data points:

    gauge      -> <name>
    counter    -> <name>.count
    histogram  -> <name>.{count,max,mean,min,stddev,median,p75,p95,p98,p99,p999}
    meter      -> <name>.{count,mean_rate,m1,m5,m15}
    timer      -> histogram suffixes (durations) + meter rate suffixes

Design Notes:
    - Rates are per second internally; multiplied by the seconds per rate unit
    - Durations are nanoseconds internally; divided by nanos per duration unit
    - Counts and histogram values are never converted
    - Gauge values pass through as returned by the gauge
    - Pure: no state, safe to call from several threads
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Set, Tuple

from tsdb_reporter.config.models import ReporterConfig
from tsdb_reporter.domain.entities import MetricKind, OutputTuple
from tsdb_reporter.formatting.name_resolver import NameResolver
from tsdb_reporter.interfaces.metrics import (
    Counter,
    Gauge,
    Histogram,
    Meter,
    Snapshot,
    Timer,
)

COUNT = "count"

# Suffix -> accessor name, in emission order.
_SNAPSHOT_ACCESSORS: Tuple[Tuple[str, str], ...] = (
    ("max", "get_max"),
    ("mean", "get_mean"),
    ("min", "get_min"),
    ("stddev", "get_std_dev"),
    ("median", "get_median"),
    ("p75", "get_75th_percentile"),
    ("p95", "get_95th_percentile"),
    ("p98", "get_98th_percentile"),
    ("p99", "get_99th_percentile"),
    ("p999", "get_999th_percentile"),
)

_RATE_ACCESSORS: Tuple[Tuple[str, str], ...] = (
    ("mean_rate", "get_mean_rate"),
    ("m1", "get_one_minute_rate"),
    ("m5", "get_five_minute_rate"),
    ("m15", "get_fifteen_minute_rate"),
)

SNAPSHOT_SUFFIXES: Tuple[str, ...] = tuple(s for s, _ in _SNAPSHOT_ACCESSORS)

RATE_SUFFIXES: Tuple[str, ...] = tuple(s for s, _ in _RATE_ACCESSORS)


def snapshot_values(snapshot: Snapshot) -> List[Tuple[str, Any]]:
    """Suffix/value pairs of a snapshot, in SNAPSHOT_SUFFIXES order."""
    return [(suffix, getattr(snapshot, name)()) for suffix, name in _SNAPSHOT_ACCESSORS]


def rate_values(meter: Meter) -> List[Tuple[str, float]]:
    """Suffix/value pairs of a meter's per-second rates, in RATE_SUFFIXES order."""
    return [(suffix, getattr(meter, name)()) for suffix, name in _RATE_ACCESSORS]


class _TupleCollector:
    """Builds tuples sharing one base name, timestamp and tag set."""

    def __init__(self, base_name: str, timestamp: int, tags: Dict[str, str]) -> None:
        self._base_name = base_name
        self._timestamp = timestamp
        self._tags = tags
        self.tuples: Set[OutputTuple] = set()

    def add(self, suffix: str, value: Any) -> "_TupleCollector":
        metric = f"{self._base_name}.{suffix}" if suffix else self._base_name
        self.tuples.add(
            OutputTuple(
                metric=metric,
                timestamp=self._timestamp,
                value=value,
                tags=self._tags,
            )
        )
        return self


class SnapshotFormatter:
    """Converts one metric instance into its set of output tuples."""

    def __init__(self, config: ReporterConfig) -> None:
        """
        Initialize formatter.

        Args:
            config: Reporter configuration (prefix, trimming, units, tags)
        """
        self.config = config
        self.resolver = NameResolver(config.prefix, config.keep_path_segments)
        self._rate_factor = config.rate_factor
        self._duration_factor = config.duration_factor
        self._dispatch: Dict[MetricKind, Callable[[str, Any, int], Set[OutputTuple]]] = {
            MetricKind.GAUGE: self.format_gauge,
            MetricKind.COUNTER: self.format_counter,
            MetricKind.HISTOGRAM: self.format_histogram,
            MetricKind.METER: self.format_meter,
            MetricKind.TIMER: self.format_timer,
        }

    def format(
        self, kind: MetricKind, name: str, metric: Any, timestamp: int
    ) -> Set[OutputTuple]:
        """
        Format a metric of the given kind.

        Args:
            kind: Metric kind selecting the projection
            name: Raw registry name
            metric: Metric instance
            timestamp: Cycle timestamp in epoch seconds

        Returns:
            Set of output tuples for this metric
        """
        return self._dispatch[MetricKind(kind)](name, metric, timestamp)

    def convert_rate(self, rate: float) -> float:
        """Per-second rate to per-rate-unit rate."""
        return rate * self._rate_factor

    def convert_duration(self, duration: float) -> float:
        """Nanoseconds to duration unit."""
        return duration * self._duration_factor

    def format_gauge(self, name: str, gauge: Gauge, timestamp: int) -> Set[OutputTuple]:
        return self._collector(name, timestamp).add("", gauge.get_value()).tuples

    def format_counter(
        self, name: str, counter: Counter, timestamp: int
    ) -> Set[OutputTuple]:
        return self._collector(name, timestamp).add(COUNT, counter.get_count()).tuples

    def format_histogram(
        self, name: str, histogram: Histogram, timestamp: int
    ) -> Set[OutputTuple]:
        collector = self._collector(name, timestamp).add(COUNT, histogram.get_count())
        for suffix, value in snapshot_values(histogram.get_snapshot()):
            collector.add(suffix, value)
        return collector.tuples

    def format_meter(self, name: str, meter: Meter, timestamp: int) -> Set[OutputTuple]:
        collector = self._collector(name, timestamp).add(COUNT, meter.get_count())
        for suffix, rate in rate_values(meter):
            collector.add(suffix, self.convert_rate(rate))
        return collector.tuples

    def format_timer(self, name: str, timer: Timer, timestamp: int) -> Set[OutputTuple]:
        collector = self._collector(name, timestamp).add(COUNT, timer.get_count())
        for suffix, rate in rate_values(timer):
            collector.add(suffix, self.convert_rate(rate))
        for suffix, duration in snapshot_values(timer.get_snapshot()):
            collector.add(suffix, self.convert_duration(duration))
        return collector.tuples

    def _collector(self, name: str, timestamp: int) -> _TupleCollector:
        return _TupleCollector(self.resolver.base_name(name), timestamp, self.config.tags)
