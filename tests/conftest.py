"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path
from unittest.mock import Mock

import pytest

from tests.fixtures.metrics import FakeClock
from tsdb_reporter.adapters.recording_sender import RecordingSender
from tsdb_reporter.config.models import ReporterConfig
from tsdb_reporter.domain.value_objects import TimeUnit
from tsdb_reporter.reporting.reporter import TsdbReporter


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at TIMESTAMP seconds."""
    return FakeClock()


@pytest.fixture
def sender() -> RecordingSender:
    """Sender that records batches."""
    return RecordingSender()


@pytest.fixture
def registry() -> Mock:
    """Registry stub; reporter tests pass metric mappings directly."""
    return Mock()


@pytest.fixture
def reporter_config() -> ReporterConfig:
    """Prefix "prefix", per-second rates, millisecond durations, foo=bar tag."""
    return ReporterConfig(
        prefix="prefix",
        rate_unit=TimeUnit.SECONDS,
        duration_unit=TimeUnit.MILLISECONDS,
        tags={"foo": "bar"},
        batch_size=100,
    )


@pytest.fixture
def reporter(
    registry: Mock,
    sender: RecordingSender,
    reporter_config: ReporterConfig,
    clock: FakeClock,
) -> TsdbReporter:
    """Reporter wired to the recording sender and fake clock."""
    return TsdbReporter(registry, sender, reporter_config, clock)
