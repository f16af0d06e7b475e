"""
Scheduled Reporter - Periodic Reporting on a Background Thread.

Runs ``report_now()`` every ``period_seconds``. A failing cycle is logged
and skipped; the next tick runs as usual since the reporter keeps no state
between cycles.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from tsdb_reporter.config.models import ScheduleConfig
from tsdb_reporter.domain.errors import ReporterError
from tsdb_reporter.reporting.reporter import TsdbReporter

logger = logging.getLogger(__name__)


class ScheduledReporter:
    """Drives a TsdbReporter at a fixed period."""

    def __init__(
        self,
        reporter: TsdbReporter,
        config: Optional[ScheduleConfig] = None,
        thread_name: str = "tsdb-reporter",
    ) -> None:
        """
        Initialize scheduler.

        Args:
            reporter: Reporter whose cycles are scheduled
            config: Period and stop behaviour
            thread_name: Name of the background thread
        """
        self.reporter = reporter
        self.config = config or ScheduleConfig()
        self._thread_name = thread_name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._counter_lock = threading.Lock()
        self.cycles_run = 0
        self.cycles_failed = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Start periodic reporting.

        Raises:
            ReporterError: If already started
        """
        with self._lock:
            if self._thread is not None:
                raise ReporterError("Scheduled reporter already started")
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name=self._thread_name, daemon=True
            )
            self._thread.start()
        logger.info(f"Reporting every {self.config.period_seconds}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop periodic reporting and wait for the thread to exit.

        Runs one final cycle when ``report_on_stop`` is configured.
        """
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return

        self._stop_event.set()
        thread.join(timeout)
        if thread.is_alive():
            logger.warning(
                f"Reporting thread still busy after {timeout}s, skipping final cycle"
            )
        elif self.config.report_on_stop:
            self.run_cycle()
        logger.info("Scheduled reporting stopped")

    def run_cycle(self) -> bool:
        """
        Run one cycle, logging instead of raising on failure.

        Returns:
            True if the cycle completed
        """
        with self._counter_lock:
            self.cycles_run += 1
        try:
            self.reporter.report_now()
            return True
        except Exception:
            with self._counter_lock:
                self.cycles_failed += 1
            logger.exception("Reporting cycle failed, skipping to next tick")
            return False

    def _run(self) -> None:
        while not self._stop_event.wait(self.config.period_seconds):
            self.run_cycle()

    def __enter__(self) -> "ScheduledReporter":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
