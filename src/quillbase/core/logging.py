"""Structured logging with correlation IDs.

structlog renders to the console in development and to JSON lines
elsewhere. The request middleware binds a correlation ID so every line
written while serving a collections request can be traced back to it.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from quillbase.core.config import get_settings

NO_CORRELATION_ID = "-"


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mark lines written outside a request with a placeholder correlation ID."""
    event_dict.setdefault("correlation_id", NO_CORRELATION_ID)
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["logger"] = getattr(logger, "name", "quillbase")
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Emit the event text under ``message`` in JSON output."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Any | None = None) -> None:
    """Configure structlog and the standard logging used by uvicorn.

    Args:
        settings: Optional settings instance; loaded from the environment if omitted.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)
    console = settings.is_development or settings.log_format == "console"

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
    ]
    if console:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors += [rename_message_field, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not console,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or "quillbase")


def bind_correlation_id(correlation_id: str) -> None:
    """Bind the request's correlation ID to the current logging context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
