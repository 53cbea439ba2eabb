"""Structured logging for the filter engines.

Every event is one JSON line tagged with the service name, so filter events
can be told apart from the crawl worker's own output.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ..config.settings import FilterSettings, get_settings


def _service_tagger(service: str) -> Processor:
    def tag_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return tag_service


def _level_number(name: str) -> int:
    # Unknown names fall back to INFO; FilterSettings.validate rejects them earlier.
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: Optional[str] = None, settings: Optional[FilterSettings] = None) -> None:
    """Route filter events to stdout as JSON.

    ``log_level`` overrides the configured ``log_level`` setting.
    """
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _service_tagger(settings.service_name),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(log_level or settings.log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
