"""
Retry Policy - Exponential Backoff for Transport Calls.

The reporting core never retries. Senders may wrap their network call in a
RetryPolicy; with the default of one attempt the call runs exactly once and
its failure propagates unchanged.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from tsdb_reporter.domain.errors import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry logic."""
    max_attempts: int = 1
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 10.0
    exponential_base: float = 2.0


class RetryPolicy:
    """Retries retryable TransportErrors with exponential backoff."""

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize retry policy.

        Args:
            config: Attempts and backoff settings
            sleep: Sleep function (replaced in tests)
        """
        self.config = config or RetryConfig()
        self._sleep = sleep

    def call(self, func: Callable[[], T], operation_name: str = "send") -> T:
        """
        Execute function, retrying retryable transport errors.

        Args:
            func: Function to execute
            operation_name: Name for logging

        Returns:
            Result of successful execution

        Raises:
            TransportError: The last error once attempts are exhausted, or
                immediately for non-retryable errors (4xx)
        """
        attempt = 1
        while True:
            try:
                result = func()
            except TransportError as e:
                if not e.is_retryable or attempt >= self.config.max_attempts:
                    if attempt > 1:
                        logger.error(
                            f"{operation_name} failed after {attempt} attempts: {e}"
                        )
                    raise
                delay = self.calculate_delay(attempt)
                logger.warning(
                    f"{operation_name} failed (attempt {attempt}/{self.config.max_attempts}), "
                    f"retrying in {delay:.2f}s: {e}"
                )
                self._sleep(delay)
                attempt += 1
                continue

            if attempt > 1:
                logger.info(f"{operation_name} succeeded on attempt {attempt}")
            return result

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay with exponential backoff."""
        delay = self.config.base_delay_seconds * (
            self.config.exponential_base ** (attempt - 1)
        )
        return min(delay, self.config.max_delay_seconds)
