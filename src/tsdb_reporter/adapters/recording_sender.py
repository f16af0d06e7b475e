"""
Recording Sender.

A sender that keeps every batch in memory instead of transmitting it.
Useful for development, dry runs and tests.
"""

from __future__ import annotations

from threading import Lock
from typing import Collection, List

from tsdb_reporter.domain.entities import OutputTuple


class RecordingSender:
    """Simple in-memory sender."""

    def __init__(self) -> None:
        """Initialize the sender."""
        self._batches: List[List[OutputTuple]] = []
        self._lock = Lock()

    def send(self, batch: Collection[OutputTuple]) -> None:
        """Record a batch."""
        with self._lock:
            self._batches.append(list(batch))

    @property
    def batches(self) -> List[List[OutputTuple]]:
        with self._lock:
            return [list(b) for b in self._batches]

    @property
    def tuples(self) -> List[OutputTuple]:
        """All recorded tuples, across batches, in send order."""
        with self._lock:
            return [t for batch in self._batches for t in batch]

    def clear(self) -> None:
        """Forget all recorded batches."""
        with self._lock:
            self._batches.clear()
