"""
Reporter Exceptions.

All errors raised by the reporter derive from ReporterError so callers
(usually the scheduler) can catch a single base class.
"""

from __future__ import annotations

from typing import Optional


class ReporterError(Exception):
    """Base class for reporter errors."""
    pass


class ConfigurationError(ReporterError, ValueError):
    """Raised when reporter configuration is invalid."""
    pass


class TransportError(ReporterError):
    """Raised when a batch could not be delivered to the time-series database."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_retryable(self) -> bool:
        """Network failures and server-side (5xx) errors may succeed on retry."""
        return self.status_code is None or self.status_code >= 500
