"""
Logging setup - Revyn Audit Platform
revyn_audit/core/logging_config.py

Configures structlog once at startup. LOG_FORMAT picks JSON lines
(deployed) or the colored console renderer (local development).
"""

import logging
import sys
from typing import Optional

import structlog

from revyn_audit.config import settings

_configured = False


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog. Safe to call more than once."""
    global _configured
    if _configured:
        return

    level_name = level or settings.LOG_LEVEL
    fmt = log_format or settings.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True
