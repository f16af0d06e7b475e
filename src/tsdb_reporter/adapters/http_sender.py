"""
HTTP Sender - OpenTSDB /api/put Transport.

Posts each batch as a JSON array of data points:

    POST {base_url}/api/put[?details][&summary]
    [{"metric": "...", "timestamp": 1000198, "value": 1, "tags": {...}}, ...]

Design Notes:
    - One HTTP request per batch; empty batches are not sent
    - Non-2xx responses and network failures raise TransportError
    - Optional retry of network errors and 5xx responses via RetryPolicy
"""

from __future__ import annotations

import logging
from typing import Collection, Dict, Optional

import httpx

from tsdb_reporter.config.models import TransportConfig
from tsdb_reporter.domain.entities import OutputTuple
from tsdb_reporter.domain.errors import TransportError
from tsdb_reporter.resilience.retry import RetryConfig, RetryPolicy

logger = logging.getLogger(__name__)

PUT_PATH = "/api/put"


class HttpTsdbSender:
    """Sends batches of output tuples to an OpenTSDB HTTP endpoint."""

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        client: Optional[httpx.Client] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        """
        Initialize HTTP sender.

        Args:
            config: Endpoint, timeouts and retry settings
            client: Pre-built httpx client (owned by the caller if given)
            retry_policy: Overrides the policy derived from config
        """
        self.config = config or TransportConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(
                self.config.read_timeout_seconds,
                connect=self.config.connect_timeout_seconds,
            )
        )
        self._retry = retry_policy or RetryPolicy(
            RetryConfig(
                max_attempts=self.config.max_attempts,
                base_delay_seconds=self.config.base_delay_seconds,
                max_delay_seconds=self.config.max_delay_seconds,
            )
        )

    @property
    def url(self) -> str:
        return f"{self.config.base_url}{PUT_PATH}"

    def send(self, batch: Collection[OutputTuple]) -> None:
        """
        Deliver one batch.

        Raises:
            TransportError: If the request fails or returns a non-2xx status
        """
        if not batch:
            return
        payload = [t.to_payload() for t in batch]
        self._retry.call(lambda: self._post(payload), operation_name="opentsdb put")
        logger.debug(f"Sent {len(payload)} data points to {self.url}")

    def _post(self, payload: list) -> httpx.Response:
        try:
            response = self._client.post(self.url, json=payload, params=self._params())
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"OpenTSDB rejected batch of {len(payload)} data points: "
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def _params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.config.details:
            params["details"] = ""
        if self.config.summary:
            params["summary"] = ""
        return params

    def close(self) -> None:
        """Close the underlying client if this sender created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTsdbSender":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
