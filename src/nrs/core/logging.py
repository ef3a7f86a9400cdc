"""
NRS Logging - structured logging for the name resolution core.

Configures structlog once at process start and hands out loggers to the
modules that need them. Library code only ever calls :func:`get_logger`;
applications (the CLI, a naming client) call :func:`configure_logging`.

Architecture:
    ::

        configure_logging(level="INFO", json_format=True, service="nrs")
            │
            ▼
        structlog processor chain:
          1. TimeStamper (iso)
          2. merge_contextvars
          3. add_logger_name
          4. add_log_level
          5. _add_service_metadata
          6. _elasticsearch_compatible (JSON only)
          7. JSONRenderer | ConsoleRenderer

        logger = get_logger(__name__)
        logger.info("nrs.update", name="sub.example", subname="sub")

Examples:
    >>> from nrs.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.debug("nrs.resolve", subname="sub")

Tags:
    logging, structlog, observability, nrs-core
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


# Store service name for metadata
_SERVICE_NAME = "nrs"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


class _NamedPrintLogger(structlog.PrintLogger):
    """PrintLogger on stderr that carries the name given to get_logger()."""

    def __init__(self, name: str | None = None):
        # stderr keeps CLI stdout clean for piping resolved links; looked up
        # per call so redirected streams are honoured
        super().__init__(file=sys.stderr)
        self.name = name or _SERVICE_NAME


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "nrs",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=_NamedPrintLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "get_logger",
]
