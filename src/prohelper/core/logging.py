"""Structured logging for the ProHelper client.

This module configures structlog for JSON logging in production and
colored console output during development.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from prohelper.core.config import get_settings


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    Args:
        logger: Logger instance.
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with logger name.
    """
    event_dict["logger"] = logger.name if hasattr(logger, "name") else "prohelper"
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for compatibility."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(settings: Any | None = None) -> None:
    """Configure structured logging for the client.

    Sets up structlog with JSON formatting for production and
    console formatting for development.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        # structlog.stdlib.add_logger_name doesn't work with PrintLogger
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        rename_message_field,
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    else:
        renderer = structlog.processors.JSONRenderer()

    # Logs go to stderr so CLI output on stdout stays clean; the stream is
    # looked up per logger so redirected stderr is honored
    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    # Configure standard logging for third-party libraries (httpx)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'prohelper'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "prohelper")


class LoggingContext:
    """Context manager for adding logging context.

    Example:
        with LoggingContext(invitation_token="abc123"):
            logger.info("Accepting invitation")  # Will include invitation_token
    """

    def __init__(self, **kwargs: str) -> None:
        self.context = kwargs

    def __enter__(self) -> "LoggingContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def clear_context() -> None:
    """Clear all context variables from the current logging context."""
    structlog.contextvars.clear_contextvars()
