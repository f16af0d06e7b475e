"""
Resilience Package - Retry for Transport Calls.

    - RetryPolicy: Exponential backoff for retryable transport errors

Design Principles:
    - Fail fast for permanent errors (4xx)
    - Retry with backoff for transient errors (network, 5xx)
    - The reporting core itself never retries
"""

from tsdb_reporter.resilience.retry import RetryConfig, RetryPolicy

__all__ = ["RetryConfig", "RetryPolicy"]
