"""
Observability Package - Structured Logging.

    - configure_structured_logging: structlog rendering for package logs,
      including the cycle_id bound by each reporting cycle
"""

from tsdb_reporter.observability.logging_setup import configure_structured_logging

__all__ = ["configure_structured_logging"]
