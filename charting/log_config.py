"""structlog setup for chart components.

Modules log through `structlog.get_logger(__name__)` with snake_case event
names and keyword context. Hosts call `configure_logging()` once at startup;
events are then written to stderr. Without it structlog's defaults apply.
"""

from __future__ import annotations

import logging
import sys

import structlog

from .settings import ChartSettings, load_settings


def configure_logging(settings: ChartSettings | None = None) -> None:
    """Configure structlog processors and level filtering.

    Args:
        settings: Settings to apply; defaults to `load_settings()`.
    """

    settings = settings or load_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.types.Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
