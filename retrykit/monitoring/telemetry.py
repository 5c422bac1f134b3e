"""structlog configuration for retry event output."""

from __future__ import annotations

import logging
from typing import Any, Optional

import structlog

from retrykit.config.settings import RetrySettings


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure structlog to render retry events as JSON or console lines."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
    )


def configure_from_settings(settings: Optional[RetrySettings] = None) -> None:
    settings = settings or RetrySettings()
    configure_logging(settings.log_level, settings.log_format)


def get_logger(name: Optional[str] = None, **initial_values: Any) -> Any:
    """Return a structlog logger usable as ``RetryPolicy.logger``."""
    if name is None:
        return structlog.get_logger(**initial_values)
    return structlog.get_logger(name, **initial_values)
