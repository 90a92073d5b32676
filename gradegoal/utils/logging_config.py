"""Structured logging setup using structlog"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog

LOG_LEVEL_ENV = "GRADEGOAL_LOG_LEVEL"
LOG_FORMAT_ENV = "GRADEGOAL_LOG_FORMAT"

_configured = False


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog and the standard library root logger

    Args:
        log_level: Level name (defaults to GRADEGOAL_LOG_LEVEL or INFO)
        log_format: "json" for JSON lines, anything else for console output
            (defaults to GRADEGOAL_LOG_FORMAT)
    """
    global _configured

    if log_level is None:
        log_level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if log_format is None:
        log_format = os.getenv(LOG_FORMAT_ENV, "console")

    level = getattr(logging, log_level.upper(), logging.INFO)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_format.lower() == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=level,
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def is_configured() -> bool:
    return _configured
