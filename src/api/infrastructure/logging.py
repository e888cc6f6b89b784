"""Structlog configuration for the application.

Events are rendered either as colored console lines or as one JSON object
per line. ``auto`` picks the console renderer for terminals (or when
FORCE_COLOR is set) and JSON everywhere else.
"""

import logging
import os
import sys
from typing import Literal

import structlog

LogFormat = Literal["auto", "console", "json"]


def _use_console(log_format: LogFormat) -> bool:
    if log_format != "auto":
        return log_format == "console"
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def resolve_level(level: str) -> int:
    """Map a level name to its numeric value, INFO when unknown."""
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(
    level: str = "INFO",
    log_format: LogFormat = "auto",
    service: str | None = None,
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name; events below it are dropped
        log_format: Renderer selection
        service: Name bound to every event when given
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if _use_console(log_format):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    if service is not None:
        structlog.contextvars.bind_contextvars(service=service)
