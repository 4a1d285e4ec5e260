"""Logging configuration using structlog.

Every application log call goes through structlog. The pipeline renders
JSON to the console through stdlib logging and, via ``log_capture``, also
records the event in the server log store shown on the admin panel.
"""

import logging
from typing import Any, Iterable, Optional

import structlog
from structlog import contextvars as structlog_contextvars

from college_api.features.logs.capture import LogStoreHandler, LogStoreProcessor
from college_api.features.logs.store import LogStore

# Stays in the processor chain for the life of the process; see setup_logging
log_capture = LogStoreProcessor()


def setup_logging(
    store: Optional[LogStore] = None,
    log_level: str = "INFO",
    capture_loggers: Iterable[str] = (),
) -> None:
    """
    Configure structlog for structured logging and route output to ``store``.

    :param store: Log store receiving captured events (None disables capture)
    :param log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :param capture_loggers: Stdlib logger names whose records are also captured
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    log_capture.bind(store)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog_contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            log_capture,  # Capture logs after all context is added
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in capture_loggers:
        _attach_store_handler(logging.getLogger(name), store)


def _attach_store_handler(target: logging.Logger, store: Optional[LogStore]) -> None:
    for handler in list(target.handlers):
        if isinstance(handler, LogStoreHandler):
            target.removeHandler(handler)
    if store is not None:
        target.addHandler(LogStoreHandler(store))


def get_logger(name: str) -> Any:
    """
    Get a configured structlog logger.

    :param name: Logger name (usually __name__)
    :returns: Configured logger instance
    """
    return structlog.get_logger(name)
