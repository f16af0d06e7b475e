"""
Interfaces Layer - Abstract Protocols for Collaborators.

This package defines the abstract interfaces (using typing.Protocol) for the
collaborators of the reporter. The reporting core depends on these
abstractions, not on concrete implementations.

Protocols:
    - Gauge, Counter, Histogram, Meter, Timer, Snapshot: metric read access
    - MetricRegistryProtocol: source of the five metric-kind mappings
    - ClockProtocol: injectable time source
    - SenderProtocol: transport for batches of output tuples
"""

from tsdb_reporter.interfaces.clock import ClockProtocol
from tsdb_reporter.interfaces.metrics import (
    Counter,
    Gauge,
    Histogram,
    Meter,
    Snapshot,
    Timer,
)
from tsdb_reporter.interfaces.registry import MetricRegistryProtocol
from tsdb_reporter.interfaces.sender import SenderProtocol

__all__ = [
    "ClockProtocol",
    "Counter",
    "Gauge",
    "Histogram",
    "Meter",
    "Snapshot",
    "Timer",
    "MetricRegistryProtocol",
    "SenderProtocol",
]
