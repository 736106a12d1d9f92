"""
Structured logging for slo-report.

Events are structlog key/value records bridged onto the standard logging
module. The report run is usually scheduled, so JSON lines are the default;
``console`` renders the same events for a human at a terminal. Per-threshold
context (``slo_id``, ``timeframe``) is bound with :func:`bind_context`.
"""

import logging
from typing import Any

import structlog

LOG_FORMATS = ("json", "console")


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    raise ValueError(f"unknown log format {log_format!r}, expected one of {', '.join(LOG_FORMATS)}")


def configure_logging(level: int | str = logging.INFO, *, log_format: str = "json") -> None:
    """Configure structlog/standard logging bridge."""

    renderer = _renderer(log_format)
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format="%(message)s")


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Return a logger carrying ``kwargs`` on every event, e.g. slo_id and timeframe."""

    return structlog.get_logger().bind(**kwargs)
