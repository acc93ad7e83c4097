"""
Structured logging configuration using structlog.

stdout carries merged rows and summaries, so every log line, including
those from the HTTP stack, is written to stderr.
"""

import logging
import sys
from typing import Any, TextIO

import structlog

# Loggers of the HTTP stack; they report every request at INFO
HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output logs as JSON lines.
        stream: Where to write logs. Defaults to the current sys.stderr.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    stream = stream or sys.stderr

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)
    http_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    # not cached: the CLI reconfigures per invocation and stderr may be swapped
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger for a module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind values to every log line emitted within the block.

    Example:
        with log_context(day="2015-02-03"):
            log.info("Fetching source", quantity="wind_speed")
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
