"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at construction/load time using Pydantic.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from tsdb_reporter.config.filters import (
    MetricFilter,
    accept_all,
    all_of,
    contains,
    matching,
    starts_with,
)
from tsdb_reporter.domain.value_objects import TimeUnit


def _tag_text(value: object) -> object:
    """OpenTSDB tag keys and values are strings; YAML may hand us ints or bools."""
    if value is None:
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ReporterConfig(BaseModel):
    """Immutable configuration of the reporting core."""

    prefix: str = Field(default="", description="Prepended to every metric name")
    rate_unit: TimeUnit = Field(default=TimeUnit.SECONDS)
    duration_unit: TimeUnit = Field(default=TimeUnit.MILLISECONDS)
    tags: Dict[str, str] = Field(default_factory=dict)
    keep_path_segments: int = Field(
        default=0, ge=0, description="Trailing name segments to keep (0 = all)"
    )
    batch_size: Optional[int] = Field(
        default=None, ge=1, description="Max tuples per send (None = unbounded)"
    )
    metric_filter: MetricFilter = Field(default=accept_all, exclude=True)

    model_config = {"frozen": True}

    @field_validator("rate_unit", "duration_unit", mode="before")
    @classmethod
    def _parse_unit(cls, value: object) -> TimeUnit:
        return TimeUnit.parse(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _stringify_tags(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        return {_tag_text(k): _tag_text(v) for k, v in value.items()}

    @property
    def rate_factor(self) -> float:
        """Multiplier turning a per-second rate into a per-``rate_unit`` rate."""
        return self.rate_unit.to_seconds()

    @property
    def duration_factor(self) -> float:
        """Multiplier turning nanoseconds into ``duration_unit``."""
        return 1.0 / self.duration_unit.to_nanos()


class FilterConfig(BaseModel):
    """Name-based filter settings; all given criteria must match."""

    starts_with: Optional[str] = None
    contains: Optional[str] = None
    pattern: Optional[str] = None

    def build(self) -> MetricFilter:
        """Build the combined filter predicate."""
        filters = []
        if self.starts_with:
            filters.append(starts_with(self.starts_with))
        if self.contains:
            filters.append(contains(self.contains))
        if self.pattern:
            filters.append(matching(self.pattern))
        return all_of(*filters)


class TransportConfig(BaseModel):
    """Configuration for the HTTP transport to OpenTSDB."""

    base_url: str = Field(default="http://localhost:4242")
    connect_timeout_seconds: float = Field(default=5.0, gt=0)
    read_timeout_seconds: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=1, ge=1)
    base_delay_seconds: float = Field(default=0.5, ge=0)
    max_delay_seconds: float = Field(default=10.0, ge=0)
    details: bool = False
    summary: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ScheduleConfig(BaseModel):
    """Configuration for periodic reporting."""

    period_seconds: float = Field(default=60.0, gt=0)
    report_on_stop: bool = False


class ReporterSettings(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
    metric_filter: FilterConfig = Field(default_factory=FilterConfig, alias="filter")
    transport: TransportConfig = Field(default_factory=TransportConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    model_config = {"populate_by_name": True}

    def reporter_config(self) -> ReporterConfig:
        """ReporterConfig with the configured filter attached."""
        return self.reporter.model_copy(
            update={"metric_filter": self.metric_filter.build()}
        )
