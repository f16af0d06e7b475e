"""
Configuration Package - Models, Filters and Loaders.

This package handles all configuration aspects of the reporter:
    - Pydantic models for type-safe configuration
    - Name-based metric filters
    - YAML loader with profile overlays and environment overrides

Configuration Structure:
    - ReporterSettings: Root configuration object
    - ReporterConfig: Prefix, units, tags, path trimming, batch size, filter
    - FilterConfig: Name-based filter criteria
    - TransportConfig: OpenTSDB endpoint, timeouts, retries
    - ScheduleConfig: Reporting period
"""

from tsdb_reporter.config.filters import MetricFilter, accept_all
from tsdb_reporter.config.loader import ConfigLoader, load_config
from tsdb_reporter.config.models import (
    FilterConfig,
    ReporterConfig,
    ReporterSettings,
    ScheduleConfig,
    TransportConfig,
)

__all__ = [
    "MetricFilter",
    "accept_all",
    "ConfigLoader",
    "load_config",
    "FilterConfig",
    "ReporterConfig",
    "ReporterSettings",
    "ScheduleConfig",
    "TransportConfig",
]
