"""
Structured logging for the showcase API, built on structlog.

Manifesto:
    Fallback and provisioning decisions happen silently from the caller's
    point of view (the envelope only says ``source: fallback``).  The logs
    are where operators learn *why*: "store never connected" and "query
    failed" are distinct events here even though the response is the same.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="showcase-api",
                          log_file=None)
            ↓
        structlog processor chain:
          1. merge_contextvars     (request_id bound by middleware)
          2. add_log_level (logger name bound by get_logger)
          3. TimeStamper(iso)
          4. service metadata
          5. JSONRenderer (non-tty / file) or ConsoleRenderer (tty)

Examples:
    >>> from showcase.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", service="showcase-api")
    >>> logger = get_logger(__name__)
    >>> logger.info("fallback_served", kind="team", reason="store_unavailable")

Tags:
    logging, structlog, observability, showcase

Doc-Types:
    api-reference
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "showcase-api"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names ECS compatible (``@timestamp``, ``log.level``)."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "showcase-api",
    log_file: str | Path | None = None,
) -> None:
    """Configure structured logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto
            (JSON when stdout is not a tty or when writing to a file)
        service: Service name attached to every event
        log_file: Optional path; when given, events are appended there
            instead of stdout
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = log_file is not None or not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(_elasticsearch_compatible)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    if log_file is not None:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory: Any = structlog.WriteLoggerFactory(file=path.open("a", encoding="utf-8"))
    else:
        logger_factory = structlog.PrintLoggerFactory()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )

    # stdlib loggers (uvicorn, sqlalchemy) keep their own handlers
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog bound logger (usually ``get_logger(__name__)``)."""
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name, logger_name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind key/values into every subsequent log event of this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
