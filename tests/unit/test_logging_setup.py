"""
Unit Tests for Structured Logging Setup.

Test Aspects Covered:
    ✅ Business Logic: JSON rendering of standard-library records
    ✅ Context: cycle_id bound through structlog contextvars
"""

from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import pytest
import structlog

from tsdb_reporter.observability.logging_setup import configure_structured_logging


@pytest.fixture
def stream() -> Iterator[io.StringIO]:
    """Capture the package logger's structured output."""
    handler = configure_structured_logging(logging.DEBUG, use_json=True)
    buffer = io.StringIO()
    handler.setStream(buffer)
    yield buffer

    package_logger = logging.getLogger("tsdb_reporter")
    package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestStructuredLogging:
    """Test cases for configure_structured_logging."""

    def test_renders_json_with_context(self, stream: io.StringIO) -> None:
        """
        SCENARIO: Package module logs inside a bound cycle_id
        EXPECTED: One JSON line carrying event, level, logger and cycle_id
        """
        # Arrange
        module_logger = logging.getLogger("tsdb_reporter.reporting.reporter")

        # Act
        with structlog.contextvars.bound_contextvars(cycle_id="abc123"):
            module_logger.info("Reported 3 tuples")

        # Assert
        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "Reported 3 tuples"
        assert record["level"] == "info"
        assert record["logger"] == "tsdb_reporter.reporting.reporter"
        assert record["cycle_id"] == "abc123"
        assert "timestamp" in record

    def test_reconfigure_replaces_handler(self, stream: io.StringIO) -> None:
        second = configure_structured_logging(logging.INFO)

        handlers = logging.getLogger("tsdb_reporter").handlers

        assert handlers.count(second) == 1
        assert len(
            [h for h in handlers if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)]
        ) == 1
        logging.getLogger("tsdb_reporter").removeHandler(second)
