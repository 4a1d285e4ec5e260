"""Adapters that route log output into the server log store.

Application code logs through structlog; ``LogStoreProcessor`` sits in the
structlog pipeline and copies every event into the store before it is
rendered to the console. ``LogStoreHandler`` does the same for stdlib
loggers that bypass structlog (uvicorn, for example).
"""

import logging
from typing import Any, Dict, MutableMapping, Optional

from .store import LogStore, to_text

_METHOD_LEVELS = {
    "debug": "debug",
    "info": "info",
    "msg": "info",
    "warn": "warn",
    "warning": "warn",
    "error": "error",
    "exception": "error",
    "critical": "error",
    "fatal": "error",
}

# Keys added by the structlog pipeline itself; not useful as entry metadata
_RESERVED_KEYS = frozenset({"event", "level", "timestamp", "positional_args"})


def format_log_args(*args: Any) -> str:
    """Serialize each argument on its own and join them with single spaces."""
    return " ".join(to_text(arg) for arg in args)


def level_for_method(method_name: str) -> str:
    """Map a logging channel name to a store level."""
    name = str(method_name).lower()
    return _METHOD_LEVELS.get(name, name)


def level_for_status(status_code: int) -> str:
    """Classify an HTTP response status."""
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warn"
    return "info"


class LogStoreProcessor:
    """Structlog processor that appends every event to a ``LogStore``.

    The processor object stays in the structlog configuration for the life of
    the process; ``bind`` re-points it at a store, so cached loggers keep
    capturing after the application is rebuilt.
    """

    def __init__(self, store: Optional[LogStore] = None):
        self.store = store

    def bind(self, store: Optional[LogStore]) -> None:
        """Direct captured events to ``store`` (None stops capturing)."""
        self.store = store

    def __call__(
        self, _: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        """Capture the event (structlog processor interface) and return it unchanged."""
        store = self.store
        if store is None:
            return event_dict

        try:
            parts = [event_dict.get("event", "")]
            parts.extend(event_dict.get("positional_args", ()))
            meta: Dict[str, Any] = {
                key: value
                for key, value in event_dict.items()
                if key not in _RESERVED_KEYS
            }
            store.append(level_for_method(method_name), format_log_args(*parts), meta)
        except Exception:
            # Logging must never fail because of the capture
            pass

        return event_dict


class LogStoreHandler(logging.Handler):
    """Stdlib logging handler that appends records to a ``LogStore``."""

    def __init__(self, store: LogStore, level: int = logging.INFO):
        super().__init__(level)
        self.store = store

    def emit(self, record: logging.LogRecord) -> None:
        """Capture a log record."""
        try:
            meta: Dict[str, Any] = {"logger": record.name}
            if record.exc_info and record.exc_info[0] is not None:
                meta["exception"] = record.exc_info[0].__name__
            self.store.append(
                level_for_method(record.levelname), record.getMessage(), meta
            )
        except Exception:
            self.handleError(record)
