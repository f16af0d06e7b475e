"""
Domain Layer - Output Tuples, Time Units and Errors.

This package contains the core domain model of the reporter.

Entities:
    - OutputTuple: One (metric, timestamp, value, tags) data point
    - MetricKind: Enum of the five registry metric kinds
    - CycleResult: Summary of one reporting cycle

Value Objects:
    - TimeUnit: Units for rate and duration conversion

Errors:
    - ReporterError, ConfigurationError, TransportError
"""

from tsdb_reporter.domain.entities import CycleResult, MetricKind, OutputTuple
from tsdb_reporter.domain.errors import (
    ConfigurationError,
    ReporterError,
    TransportError,
)
from tsdb_reporter.domain.value_objects import TimeUnit

__all__ = [
    "CycleResult",
    "MetricKind",
    "OutputTuple",
    "TimeUnit",
    "ReporterError",
    "ConfigurationError",
    "TransportError",
]
