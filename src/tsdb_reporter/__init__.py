"""
TSDB Reporter - Periodic Metrics Reporting to OpenTSDB.

Reads the current state of an in-process metric registry (gauges, counters,
histograms, meters, timers) and projects it into flat
(metric, timestamp, value, tags) tuples sent in batches to an
OpenTSDB-compatible time-series database.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Configuration-driven behavior via YAML

Main Components:
    - domain: OutputTuple, TimeUnit, errors
    - interfaces: Protocols for metrics, registry, clock and sender
    - formatting: Name resolution and per-kind snapshot projection
    - reporting: Cycle driver, batching and scheduler
    - adapters: HTTP sender, in-memory registry, system clock
    - config: Configuration models and loaders

Example:
    >>> from tsdb_reporter import HttpTsdbSender, MetricRegistry, ReporterConfig, TsdbReporter
    >>> registry = MetricRegistry()
    >>> registry.counter("app.requests").inc()
    >>> reporter = TsdbReporter(registry, HttpTsdbSender(), ReporterConfig(prefix="svc"))
    >>> reporter.report_now()
"""

import logging

from tsdb_reporter.adapters import HttpTsdbSender, MetricRegistry, RecordingSender
from tsdb_reporter.config import ReporterConfig, ReporterSettings, load_config
from tsdb_reporter.domain import OutputTuple, TimeUnit
from tsdb_reporter.reporting import (
    ScheduledReporter,
    TsdbReporter,
    create_reporter,
    create_scheduled_reporter,
)

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure plain-text logging for TSDB Reporter.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible. For JSON output use
    tsdb_reporter.observability.configure_structured_logging instead.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import tsdb_reporter
        >>> tsdb_reporter.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("tsdb_reporter").setLevel(level)


__all__ = [
    "HttpTsdbSender",
    "MetricRegistry",
    "RecordingSender",
    "ReporterConfig",
    "ReporterSettings",
    "load_config",
    "OutputTuple",
    "TimeUnit",
    "ScheduledReporter",
    "TsdbReporter",
    "create_reporter",
    "create_scheduled_reporter",
    "configure_logging",
]
