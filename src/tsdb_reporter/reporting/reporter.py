"""
TSDB Reporter - Reporting Cycle Driver.

On each cycle the reporter reads the clock once, walks the five metric-kind
mappings, projects every accepted metric into output tuples, and hands the
resulting set to the sender in batches of at most ``batch_size`` tuples.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any, Collection, Iterable, List, Mapping, Optional, Set, Tuple

import structlog

from tsdb_reporter.adapters.clock import DEFAULT_CLOCK
from tsdb_reporter.config.models import ReporterConfig
from tsdb_reporter.domain.entities import CycleResult, MetricKind, OutputTuple
from tsdb_reporter.formatting.snapshot_formatter import SnapshotFormatter
from tsdb_reporter.interfaces.clock import ClockProtocol
from tsdb_reporter.interfaces.metrics import Counter, Gauge, Histogram, Meter, Timer
from tsdb_reporter.interfaces.registry import MetricRegistryProtocol
from tsdb_reporter.interfaces.sender import SenderProtocol

logger = logging.getLogger(__name__)


def partition(
    tuples: Collection[OutputTuple], batch_size: Optional[int] = None
) -> List[List[OutputTuple]]:
    """
    Split tuples into batches of at most ``batch_size``.

    Tuples are ordered by metric name so batches are deterministic. An empty
    input yields no batches; ``None`` yields a single batch.

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size is not None and batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    ordered = sorted(tuples, key=lambda t: (t.metric, str(t.value)))
    if not ordered:
        return []
    if batch_size is None:
        return [ordered]

    count = math.ceil(len(ordered) / batch_size)
    return [ordered[i * batch_size:(i + 1) * batch_size] for i in range(count)]


class TsdbReporter:
    """Reports the state of a metric registry to a time-series database."""

    def __init__(
        self,
        registry: MetricRegistryProtocol,
        sender: SenderProtocol,
        config: Optional[ReporterConfig] = None,
        clock: Optional[ClockProtocol] = None,
    ) -> None:
        """
        Initialize reporter with all dependencies.

        Args:
            registry: Source of the metrics to report
            sender: Transport receiving each batch
            config: Reporter configuration (defaults apply if omitted)
            clock: Time source for cycle timestamps
        """
        self.registry = registry
        self.sender = sender
        self.config = config or ReporterConfig()
        self.clock = clock or DEFAULT_CLOCK
        self.formatter = SnapshotFormatter(self.config)

    def report_now(self) -> CycleResult:
        """Run one cycle over the registry's current metrics."""
        return self.report(
            self.registry.get_gauges(),
            self.registry.get_counters(),
            self.registry.get_histograms(),
            self.registry.get_meters(),
            self.registry.get_timers(),
        )

    def report(
        self,
        gauges: Mapping[str, Gauge],
        counters: Mapping[str, Counter],
        histograms: Mapping[str, Histogram],
        meters: Mapping[str, Meter],
        timers: Mapping[str, Timer],
    ) -> CycleResult:
        """
        Run one reporting cycle over the given metrics.

        Args:
            gauges: Gauges by raw name
            counters: Counters by raw name
            histograms: Histograms by raw name
            meters: Meters by raw name
            timers: Timers by raw name

        Returns:
            CycleResult with the tuples and batches of this cycle

        Raises:
            TransportError: If the sender fails to deliver a batch
        """
        with structlog.contextvars.bound_contextvars(cycle_id=uuid.uuid4().hex[:12]):
            timestamp = self.clock.get_time() // 1000
            tuples = self.collect(
                timestamp,
                (
                    (MetricKind.GAUGE, gauges),
                    (MetricKind.COUNTER, counters),
                    (MetricKind.HISTOGRAM, histograms),
                    (MetricKind.METER, meters),
                    (MetricKind.TIMER, timers),
                ),
            )

            batches = partition(tuples, self.config.batch_size)
            for index, batch in enumerate(batches, start=1):
                logger.debug(f"Sending batch {index}/{len(batches)} ({len(batch)} tuples)")
                self.sender.send(batch)

            if batches:
                logger.debug(
                    f"Reported {len(tuples)} tuples in {len(batches)} batches "
                    f"at {timestamp}"
                )
            else:
                logger.debug("No metrics to report")

            return CycleResult(
                timestamp=timestamp,
                tuples=frozenset(tuples),
                batches=batches,
            )

    def collect(
        self,
        timestamp: int,
        metrics_by_kind: Iterable[Tuple[MetricKind, Mapping[str, Any]]],
    ) -> Set[OutputTuple]:
        """Format every accepted metric into one set of tuples."""
        tuples: Set[OutputTuple] = set()
        metric_filter = self.config.metric_filter
        for kind, metrics in metrics_by_kind:
            for name, metric in metrics.items():
                if not metric_filter(name, metric):
                    continue
                tuples |= self.formatter.format(kind, name, metric, timestamp)
        return tuples
