"""
Structured logging configuration for the Amplitude client.

Uses structlog for structured, context-aware logging with:
- JSON output for production
- Pretty console output for development
- Per-submission context (insert_id, request path) propagation

The library never configures logging on import; applications call
configure_logging() once at startup if they want the client's log lines
rendered.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator, TextIO

import structlog
from structlog.types import Processor

from .config import get_settings

# Context variables for submission-scoped data
_insert_id: ContextVar[str | None] = ContextVar('insert_id', default=None)
_request_path: ContextVar[str | None] = ContextVar('request_path', default=None)


def get_insert_id() -> str | None:
    """Get the insert_id of the event currently being submitted."""
    return _insert_id.get()


def get_request_path() -> str | None:
    """Get the API path of the submission in progress."""
    return _request_path.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    insert_id = get_insert_id()
    request_path = get_request_path()

    if insert_id:
        event_dict['insert_id'] = insert_id
    if request_path:
        event_dict['request_path'] = request_path

    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog rendering for the client's log lines.

    Only structlog is configured; the application's stdlib logging setup
    is left alone.

    Args:
        json_output: If True, one JSON object per line (for log shippers).
                    If False, pretty console lines (for local runs).
        log_level: Minimum level (defaults to AMPLITUDE_LOG_LEVEL)
        stream: Where lines are written (defaults to stdout)
    """
    level = log_level or get_settings().LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=stream is None),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    insert_id: str | None = None,
    request_path: str | None = None,
) -> Generator[None, None, None]:
    """
    Context manager for setting logging context variables.

    Usage:
        with logging_context(insert_id="1700000000000_123", request_path="/httpapi"):
            logger.info("request.dispatched")  # Includes insert_id and request_path
    """
    old_insert_id = _insert_id.get()
    old_path = _request_path.get()

    try:
        if insert_id is not None:
            _insert_id.set(insert_id)
        if request_path is not None:
            _request_path.set(request_path)
        yield
    finally:
        _insert_id.set(old_insert_id)
        _request_path.set(old_path)
