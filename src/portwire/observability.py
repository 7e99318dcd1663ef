"""Structured logging configuration with structlog.

Usage:
    # At application start-up, before building the component graph
    from portwire.observability import configure_logging
    from portwire.diagnostics import log_diagnostics

    configure_logging()
    log_diagnostics()

    # Then wire as usual; each wiring is logged as a "wiring" event.
"""

import logging
from typing import Optional

import structlog
from structlog.typing import Processor

from portwire.config import WiringSettings, get_settings

__all__ = ["configure_logging"]


def _get_log_level(settings: WiringSettings) -> int:
    return getattr(logging, settings.log_level)


def configure_logging(settings: Optional[WiringSettings] = None) -> None:
    """Configure structlog for an application that wires components.

    Args:
        settings: Settings to configure from. Defaults to :func:`get_settings`.

    Configuration:
        json:
            - JSON output for machine parsing
            - ISO 8601 timestamps
        console:
            - Colored console output for readability
            - ISO 8601 timestamps
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(settings)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
