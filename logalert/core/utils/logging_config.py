"""Structured logging configuration for the log alert service.

Uses structlog with context variables, ISO timestamps, and console rendering.
Provides get_logger() for named loggers and configure_logging() for one-time
setup. Debug-level events are dropped unless ``debug`` is requested.
"""

import logging

import structlog

_configured = False


def configure_logging(debug: bool = False) -> None:
    """Configure structlog processors once.

    Safe to call multiple times -- only the first invocation takes effect.

    Args:
        debug: Emit debug-level events (every Zabbix call) when True.
    """
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a lazily bound logger with the given name.

    The logger picks up whatever configuration is in place when it first
    logs, so modules can create loggers at import time.

    Args:
        name: Logger name, typically the module or connector name.

    Returns:
        A structlog BoundLogger instance bound with the given name.
    """
    return structlog.get_logger(logger_name=name)
