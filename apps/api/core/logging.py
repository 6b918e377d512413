"""Structured logging with structlog.

JSON lines in production, colorized console in development. API keys are
secrets: log them only through mask_key().

Usage:
    import structlog
    logger = structlog.get_logger()
    logger.info("transactions_stored", api_key=mask_key(key), count=3)
"""

import logging
import sys

import structlog

_VISIBLE_KEY_CHARS = 8


def mask_key(api_key: str) -> str:
    """Keep a short prefix of a secret for correlation in logs."""
    if not api_key:
        return ""
    return api_key[:_VISIBLE_KEY_CHARS] + "..."


def setup_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging for the API and the extraction engine.

    Args:
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: JSON renderer when True, console renderer otherwise.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
