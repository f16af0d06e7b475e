"""
Structured Logging Setup.

Routes the package's standard-library log records through structlog so
they render as JSON (or coloured console lines) and carry context bound
with ``structlog.contextvars``, such as the ``cycle_id`` of a reporting
cycle.
"""

from __future__ import annotations

import logging
from typing import Any, List

import structlog


def _shared_processors() -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_structured_logging(
    level: int = logging.INFO,
    use_json: bool = True,
    logger_name: str = "tsdb_reporter",
) -> logging.Handler:
    """
    Attach a structlog-rendering handler to the package logger.

    Args:
        level: Logging level for the package logger
        use_json: Render JSON lines (console renderer otherwise)
        logger_name: Logger to configure

    Returns:
        The installed handler
    """
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    structlog.configure(
        processors=_shared_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return handler
