"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Senders:
    - HttpTsdbSender: OpenTSDB /api/put over HTTP (httpx)
    - RecordingSender: Keeps batches in memory

Registry:
    - MetricRegistry: Thread-safe in-memory registry with counters,
      gauges, histograms, meters and timers

Clock:
    - SystemClock: Wall-clock time and monotonic ticks

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No projection logic in adapters
"""

from tsdb_reporter.adapters.clock import SystemClock
from tsdb_reporter.adapters.http_sender import HttpTsdbSender
from tsdb_reporter.adapters.memory_registry import (
    Counter,
    FunctionGauge,
    Histogram,
    Meter,
    MetricRegistry,
    Timer,
    UniformSnapshot,
)
from tsdb_reporter.adapters.recording_sender import RecordingSender

__all__ = [
    "SystemClock",
    "HttpTsdbSender",
    "RecordingSender",
    "MetricRegistry",
    "Counter",
    "FunctionGauge",
    "Histogram",
    "Meter",
    "Timer",
    "UniformSnapshot",
]
