"""Structured logging configuration using structlog.

Console output for development, JSON lines for production. Modules log
through get_logger() rather than print().
"""

import logging
import sys

import structlog


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog processors and bridge stdlib logging.

    Args:
        json_output: If True, render JSON (production). Otherwise console format.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Werkzeug and mysql-connector log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a lazy logger carrying the module name.

    Module-level loggers are created at import time, before setup_logging()
    runs; the proxy resolves the configuration on each use.
    """
    return structlog.get_logger(name, module=name)
