"""
Sender Protocol.

The transport receives one batch of output tuples per call. The reporter
guarantees a batch never exceeds the configured maximum size and that the
batches of a cycle partition its tuples. Timeouts and retries are the
sender's business.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tsdb_reporter.domain.entities import OutputTuple


@runtime_checkable
class SenderProtocol(Protocol):
    """Delivers batches of output tuples."""

    def send(self, batch: Collection["OutputTuple"]) -> None:
        """
        Deliver one batch.

        Raises:
            TransportError: If the batch could not be delivered
        """
        ...
