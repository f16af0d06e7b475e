"""
Reporting Package - Cycle Driver and Scheduler.

Components:
    - TsdbReporter: Runs one reporting cycle (collect, batch, send)
    - ScheduledReporter: Runs cycles periodically on a background thread
    - partition: Splits a cycle's tuples into bounded batches
    - create_reporter: Wires a reporter from loaded settings
"""

from tsdb_reporter.reporting.factory import create_reporter, create_scheduled_reporter
from tsdb_reporter.reporting.reporter import TsdbReporter, partition
from tsdb_reporter.reporting.scheduler import ScheduledReporter

__all__ = [
    "TsdbReporter",
    "ScheduledReporter",
    "partition",
    "create_reporter",
    "create_scheduled_reporter",
]
