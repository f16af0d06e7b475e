"""
Integration Test: Registry to OpenTSDB over HTTP.

Tests:
    - Settings loaded from YAML drive naming, tags and filtering
    - Real in-memory registry feeding the reporter
    - JSON batches POSTed through HttpTsdbSender
    - Scheduled reporter running a final cycle on stop
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import httpx
import pytest

from tests.fixtures.metrics import TIMESTAMP, FakeClock
from tsdb_reporter.adapters.http_sender import HttpTsdbSender
from tsdb_reporter.adapters.memory_registry import MetricRegistry
from tsdb_reporter.adapters.recording_sender import RecordingSender
from tsdb_reporter.config.loader import ConfigLoader, load_config
from tsdb_reporter.config.models import ReporterSettings
from tsdb_reporter.reporting.factory import create_reporter, create_scheduled_reporter


@pytest.fixture
def settings(sample_config_path: Path) -> ReporterSettings:
    """Settings from the sample YAML file."""
    return load_config(sample_config_path)


@pytest.fixture
def registry(clock: FakeClock) -> MetricRegistry:
    """Registry with one accepted metric of three kinds and one rejected."""
    registry = MetricRegistry(clock)
    registry.counter("app.http.requests").inc(3)
    registry.register_gauge("app.queue.depth", lambda: 7)
    registry.histogram("app.payload.size").update(42)
    registry.counter("jvm.gc.runs").inc()
    return registry


@pytest.fixture
def posted() -> List[httpx.Request]:
    return []


@pytest.fixture
def http_sender(settings: ReporterSettings, posted: List[httpx.Request]) -> HttpTsdbSender:
    """HTTP sender whose client records requests instead of sending them."""

    def handler(request: httpx.Request) -> httpx.Response:
        posted.append(request)
        return httpx.Response(204)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpTsdbSender(settings.transport, client=client)


def points_by_metric(requests: List[httpx.Request]) -> Dict[str, dict]:
    return {
        point["metric"]: point
        for request in requests
        for point in json.loads(request.content)
    }


class TestHttpReporting:
    """Reporter wired from settings, posting to a mocked OpenTSDB."""

    def test_single_cycle(
        self,
        settings: ReporterSettings,
        registry: MetricRegistry,
        http_sender: HttpTsdbSender,
        posted: List[httpx.Request],
        clock: FakeClock,
    ) -> None:
        """
        SCENARIO: Counter, gauge and histogram under app.*, one jvm.* counter
        EXPECTED: One POST with 13 points, trimmed and prefixed names
        """
        # Arrange
        reporter = create_reporter(settings, registry, sender=http_sender, clock=clock)

        # Act
        result = reporter.report_now()

        # Assert
        assert result.tuple_count == 13
        assert result.batch_count == 1
        assert len(posted) == 1
        assert posted[0].url.host == "tsdb.internal"
        assert posted[0].url.path == "/api/put"
        assert "details" in posted[0].url.params

        points = points_by_metric(posted)
        assert set(points) >= {
            "svc.http.requests.count",
            "svc.queue.depth",
            "svc.payload.size.count",
            "svc.payload.size.p99",
        }
        assert not any("gc" in metric for metric in points)
        assert points["svc.http.requests.count"] == {
            "metric": "svc.http.requests.count",
            "timestamp": TIMESTAMP,
            "value": 3,
            "tags": {"host": "web-01", "env": "prod"},
        }
        assert points["svc.queue.depth"]["value"] == 7
        assert points["svc.payload.size.max"]["value"] == 42

    def test_batches_split_across_posts(
        self,
        registry: MetricRegistry,
        posted: List[httpx.Request],
        clock: FakeClock,
    ) -> None:
        """
        SCENARIO: 13 accepted tuples with batch_size 5
        EXPECTED: Three POSTs of 5, 5 and 3 points, no point lost
        """
        # Arrange
        settings = ConfigLoader().load_from_dict(
            {
                "reporter": {"prefix": "svc", "keep_path_segments": 2, "batch_size": 5},
                "filter": {"starts_with": "app."},
            }
        )
        client = httpx.Client(
            transport=httpx.MockTransport(
                lambda request: posted.append(request) or httpx.Response(204)
            )
        )
        sender = HttpTsdbSender(settings.transport, client=client)
        reporter = create_reporter(settings, registry, sender=sender, clock=clock)

        # Act
        reporter.report_now()

        # Assert
        sizes = [len(json.loads(request.content)) for request in posted]
        assert sizes == [5, 5, 3]
        assert len(points_by_metric(posted)) == 13


class TestScheduledReporting:
    """Scheduler wired from settings."""

    def test_final_cycle_on_stop(
        self,
        settings: ReporterSettings,
        registry: MetricRegistry,
        clock: FakeClock,
    ) -> None:
        """
        SCENARIO: Long period with report_on_stop
        EXPECTED: Exactly one cycle recorded when the scheduler stops
        """
        # Arrange
        sender = RecordingSender()
        scheduler = create_scheduled_reporter(
            settings.model_copy(
                update={
                    "schedule": settings.schedule.model_copy(
                        update={"report_on_stop": True}
                    )
                }
            ),
            registry,
            sender=sender,
            clock=clock,
        )

        # Act
        with scheduler:
            pass

        # Assert
        assert len(sender.batches) == 1
        assert len(sender.tuples) == 13
        assert scheduler.cycles_run == 1
