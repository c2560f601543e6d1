"""Logging configuration for Dockyard.

Dockyard never configures logging on import. Applications call
:func:`setup_logging` once; library code only obtains loggers through
:func:`get_logger` and binds per-request context with :func:`request_context`.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

import structlog
from structlog.types import EventDict, Processor

from dockyard.config import Settings, get_settings

REDACTED = "***REDACTED***"

# Substrings of keys whose values must never reach a log sink. Covers the
# X-Registry-Auth / X-Registry-Config headers and registry credentials.
SENSITIVE_KEY_PARTS = ("auth", "password", "secret", "token", "registry-config")


def _is_sensitive(key: str) -> bool:
    key = key.lower()
    return any(part in key for part in SENSITIVE_KEY_PARTS)


def _censor(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: REDACTED if _is_sensitive(str(key)) else _censor(item)
            for key, item in value.items()
        }
    return value


def censor_sensitive_keys(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact credentials, including inside nested mappings such as request headers."""
    for key in list(event_dict.keys()):
        if _is_sensitive(key):
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _censor(event_dict[key])

    return event_dict


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for an application using Dockyard."""
    if settings is None:
        settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        censor_sensitive_keys,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
    )

    # httpx logs every request at INFO; the dispatcher already does at DEBUG.
    if settings.log_level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


@contextmanager
def request_context(operation: str, endpoint: str) -> Iterator[None]:
    """Bind the operation and daemon endpoint to every event logged inside."""
    with structlog.contextvars.bound_contextvars(
        docker_operation=operation, docker_endpoint=endpoint
    ):
        yield


def log_operation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    resource_id: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a completed state change on the daemon (container created, ...)."""
    context = {"operation": operation}
    if resource_id:
        context["resource_id"] = resource_id
    context.update(kwargs)

    logger.info("operation", **context)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    error: Exception,
    operation: str,
    resource_id: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a failed operation with its error type and message."""
    context = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    if resource_id:
        context["resource_id"] = resource_id
    context.update(kwargs)

    logger.error("operation_failed", **context)
