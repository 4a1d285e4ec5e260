"""Bounded in-memory store of recent server log entries.

The store keeps the newest ``capacity`` entries, newest first, and is shared
by the logging facade, the request middleware and the admin logs endpoints.
Contents live for the lifetime of the process only.
"""

import json
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Deque, List, Mapping, Optional, Union

MAX_CAPACITY = 200
DEFAULT_QUERY_LIMIT = 50

_EMPTY_META: Mapping[str, Any] = MappingProxyType({})

_JSON_SCALARS = (str, int, float, bool, type(None))


@dataclass(frozen=True)
class LogEntry:
    """A single captured log record. Never mutated after creation."""

    id: str
    timestamp: datetime
    level: str
    message: str
    meta: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_META)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry for JSON responses."""
        return {
            "id": self.id,
            "timestamp": format_timestamp(self.timestamp),
            "level": self.level,
            "message": self.message,
            "meta": dict(self.meta),
        }


def format_timestamp(value: datetime) -> str:
    """Format an instant as ISO-8601 UTC with millisecond precision."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def to_text(value: Any) -> str:
    """Reduce any value to text; strings pass through, the rest become JSON."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return str(value)


def json_safe(value: Any) -> Any:
    """Reduce a metadata value to something JSON can encode."""
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    if isinstance(value, dict):
        return {str(key): json_safe(item) for key, item in value.items()}
    return str(value)


def parse_since(since: Union[datetime, str, None]) -> Optional[datetime]:
    """Parse a ``since`` filter value into an aware UTC datetime.

    Returns None when the value is empty or cannot be parsed, which disables
    the filter.
    """
    if since is None or since == "":
        return None

    if isinstance(since, datetime):
        parsed = since
    else:
        text = str(since).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class LogStore:
    """Thread-safe, fixed-capacity, newest-first log buffer.

    A single lock guards every operation so readers never observe a torn
    insertion or a length above capacity.
    """

    def __init__(self, capacity: int = MAX_CAPACITY):
        """Initialize an empty store holding at most ``capacity`` entries."""
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        # appendleft on a full deque drops the rightmost (oldest) entry
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Maximum number of entries retained."""
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(
        self,
        level: str,
        message: Any,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> LogEntry:
        """Record a new entry at the head of the store.

        Never raises: this is called from inside logging, where a failure
        would itself need to be logged.
        """
        try:
            level_name = str(level)
        except Exception:
            level_name = "info"

        try:
            text = to_text(message)
        except Exception:
            text = "<unprintable message>"

        try:
            frozen_meta = (
                MappingProxyType(
                    {str(key): json_safe(value) for key, value in meta.items()}
                )
                if meta
                else _EMPTY_META
            )
        except Exception:
            frozen_meta = _EMPTY_META

        with self._lock:
            timestamp = _now()
            if self._entries and self._entries[0].timestamp > timestamp:
                # Wall clock stepped backwards; keep insertion order monotonic.
                timestamp = self._entries[0].timestamp
            entry = LogEntry(
                id=uuid.uuid4().hex,
                timestamp=timestamp,
                level=level_name,
                message=text,
                meta=frozen_meta,
            )
            self._entries.appendleft(entry)
        return entry

    def query(
        self,
        level: Optional[str] = None,
        limit: Optional[int] = DEFAULT_QUERY_LIMIT,
        since: Union[datetime, str, None] = None,
    ) -> List[LogEntry]:
        """Return entries newest first, filtered by level and ``since``.

        ``limit`` is clamped to the store capacity. An unparseable ``since``
        is ignored rather than rejected.
        """
        if limit is None:
            limit = DEFAULT_QUERY_LIMIT
        limit = max(0, min(limit, self._capacity))
        since_at = parse_since(since)

        with self._lock:
            snapshot = list(self._entries)

        results: List[LogEntry] = []
        for entry in snapshot:
            if len(results) >= limit:
                break
            if level and entry.level != level:
                continue
            if since_at is not None and entry.timestamp <= since_at:
                continue
            results.append(entry)
        return results

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
