"""
Unit Tests for ScheduledReporter.

Test Aspects Covered:
    ✅ Business Logic: Periodic cycles on a background thread
    ✅ Error Handling: Failing cycles are logged and skipped
    ✅ Lifecycle: Double start, idempotent stop, final report on stop
"""

from __future__ import annotations

import logging
import threading
from unittest.mock import Mock

import pytest

from tsdb_reporter.config.models import ScheduleConfig
from tsdb_reporter.domain.errors import ReporterError, TransportError
from tsdb_reporter.reporting.scheduler import ScheduledReporter


def counting_reporter(target: int, side_effect: object = None) -> tuple:
    """Reporter mock that sets an event after ``target`` cycles."""
    done = threading.Event()
    calls = {"n": 0}

    def report_now() -> None:
        calls["n"] += 1
        if calls["n"] >= target:
            done.set()
        if side_effect is not None:
            raise side_effect

    reporter = Mock()
    reporter.report_now.side_effect = report_now
    return reporter, done


class TestScheduling:
    """Test cases for periodic execution."""

    def test_runs_cycles_periodically(self) -> None:
        """
        SCENARIO: Period of 10 ms
        EXPECTED: At least three cycles within a second
        """
        # Arrange
        reporter, done = counting_reporter(3)
        scheduler = ScheduledReporter(reporter, ScheduleConfig(period_seconds=0.01))

        # Act
        scheduler.start()
        completed = done.wait(timeout=1.0)
        scheduler.stop(timeout=1.0)

        # Assert
        assert completed
        assert reporter.report_now.call_count >= 3
        assert scheduler.is_running is False

    def test_failing_cycle_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """
        SCENARIO: Every cycle raises TransportError
        EXPECTED: Scheduler keeps ticking, failures logged
        """
        # Arrange
        reporter, done = counting_reporter(3, side_effect=TransportError("down"))
        scheduler = ScheduledReporter(reporter, ScheduleConfig(period_seconds=0.01))

        # Act
        with caplog.at_level(logging.ERROR, logger="tsdb_reporter.reporting.scheduler"):
            with scheduler:
                completed = done.wait(timeout=1.0)

        # Assert
        assert completed
        assert scheduler.cycles_failed >= 3
        assert "Reporting cycle failed" in caplog.text


class TestLifecycle:
    """Test cases for start/stop behaviour."""

    def test_double_start_raises(self) -> None:
        scheduler = ScheduledReporter(Mock(), ScheduleConfig(period_seconds=60))
        scheduler.start()
        try:
            with pytest.raises(ReporterError):
                scheduler.start()
        finally:
            scheduler.stop()

    def test_stop_without_start_is_noop(self) -> None:
        reporter = Mock()
        scheduler = ScheduledReporter(reporter, ScheduleConfig(report_on_stop=True))

        scheduler.stop()

        reporter.report_now.assert_not_called()

    def test_report_on_stop(self) -> None:
        """
        SCENARIO: Long period, report_on_stop enabled
        EXPECTED: Exactly one cycle, run by stop()
        """
        reporter = Mock()
        scheduler = ScheduledReporter(
            reporter, ScheduleConfig(period_seconds=60, report_on_stop=True)
        )

        scheduler.start()
        scheduler.stop(timeout=1.0)

        reporter.report_now.assert_called_once_with()

    def test_can_restart_after_stop(self) -> None:
        scheduler = ScheduledReporter(Mock(), ScheduleConfig(period_seconds=60))

        scheduler.start()
        scheduler.stop(timeout=1.0)
        scheduler.start()

        assert scheduler.is_running
        scheduler.stop(timeout=1.0)

    def test_final_cycle_skipped_while_loop_busy(self) -> None:
        """
        SCENARIO: A cycle is still running when stop()'s join times out
        EXPECTED: No overlapping final cycle, even with report_on_stop
        """
        # Arrange
        entered = threading.Event()
        release = threading.Event()

        def slow_report() -> None:
            entered.set()
            release.wait(timeout=2.0)

        reporter = Mock()
        reporter.report_now.side_effect = slow_report
        scheduler = ScheduledReporter(
            reporter, ScheduleConfig(period_seconds=0.01, report_on_stop=True)
        )

        # Act
        scheduler.start()
        assert entered.wait(timeout=1.0)
        scheduler.stop(timeout=0.05)
        calls_at_stop = reporter.report_now.call_count
        release.set()

        # Assert
        assert calls_at_stop == 1

    def test_counters_consistent_across_threads(self) -> None:
        """
        SCENARIO: 8 threads each run 200 cycles, every other one failing
        EXPECTED: Exactly 1600 cycles run and 800 failed
        """
        # Arrange
        reporter = Mock()
        outcomes = iter([True, False] * 800)
        lock = threading.Lock()

        def report_now() -> None:
            with lock:
                succeeded = next(outcomes)
            if not succeeded:
                raise ValueError("bad gauge")

        reporter.report_now.side_effect = report_now
        scheduler = ScheduledReporter(reporter)

        def work() -> None:
            for _ in range(200):
                scheduler.run_cycle()

        # Act
        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert
        assert scheduler.cycles_run == 1600
        assert scheduler.cycles_failed == 800

    def test_run_cycle_reports_success(self) -> None:
        reporter = Mock()
        reporter.report_now.side_effect = [None, ValueError("bad gauge")]
        scheduler = ScheduledReporter(reporter)

        assert scheduler.run_cycle() is True
        assert scheduler.run_cycle() is False
        assert scheduler.cycles_run == 2
        assert scheduler.cycles_failed == 1
