"""
Reporter Factory - Wiring from Settings.

Example:
    >>> settings = load_config("reporter.yaml")
    >>> registry = MetricRegistry()
    >>> with create_scheduled_reporter(settings, registry):
    ...     run_application()
"""

from __future__ import annotations

from typing import Optional

from tsdb_reporter.adapters.http_sender import HttpTsdbSender
from tsdb_reporter.config.models import ReporterSettings
from tsdb_reporter.interfaces.clock import ClockProtocol
from tsdb_reporter.interfaces.registry import MetricRegistryProtocol
from tsdb_reporter.interfaces.sender import SenderProtocol
from tsdb_reporter.reporting.reporter import TsdbReporter
from tsdb_reporter.reporting.scheduler import ScheduledReporter


def create_reporter(
    settings: ReporterSettings,
    registry: MetricRegistryProtocol,
    sender: Optional[SenderProtocol] = None,
    clock: Optional[ClockProtocol] = None,
) -> TsdbReporter:
    """
    Build a reporter from settings.

    Args:
        settings: Loaded settings
        registry: Registry to report
        sender: Overrides the HTTP sender built from ``settings.transport``
        clock: Time source (system clock if omitted)
    """
    return TsdbReporter(
        registry=registry,
        sender=sender or HttpTsdbSender(settings.transport),
        config=settings.reporter_config(),
        clock=clock,
    )


def create_scheduled_reporter(
    settings: ReporterSettings,
    registry: MetricRegistryProtocol,
    sender: Optional[SenderProtocol] = None,
    clock: Optional[ClockProtocol] = None,
) -> ScheduledReporter:
    """Build a reporter and wrap it in a scheduler using ``settings.schedule``."""
    reporter = create_reporter(settings, registry, sender=sender, clock=clock)
    return ScheduledReporter(reporter, settings.schedule)
