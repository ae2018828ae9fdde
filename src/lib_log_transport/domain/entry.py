"""Immutable log entry travelling from the dispatcher to the transports.

Purpose
-------
Keep a single, serialisable record shape so file and database sinks persist
the same ``timestamp/level/message/meta`` fields.

Contents
--------
* :class:`LogEntry` dataclass with record/JSON helpers.
* ``_ensure_aware`` for timestamp validation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Record produced by :meth:`lib_log_transport.Log.log`.

    Attributes
    ----------
    timestamp:
        Instant of the log call, timezone-aware UTC.
    level:
        :class:`LogLevel` already validated by the dispatcher.
    message:
        Text payload.
    meta:
        Read-only copy of the caller's payload; ``None`` when nothing was
        supplied. Nested values are shared with the caller.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    meta: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if self.meta is not None:
            object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    @property
    def date_key(self) -> str:
        """Return ``YYYY-MM-DD`` of the UTC timestamp (daily file name)."""

        return self.timestamp.date().isoformat()

    def to_record(self) -> dict[str, Any]:
        """Return the persisted shape.

        Examples
        --------
        >>> entry = LogEntry(datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc), LogLevel.INFO, "hi")
        >>> entry.to_record()
        {'timestamp': '2025-01-02T03:04:05+00:00', 'level': 'info', 'message': 'hi', 'meta': None}
        """

        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
            "meta": dict(self.meta) if self.meta is not None else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_record(), default=str, ensure_ascii=False)

    def meta_json(self) -> str | None:
        """Serialise ``meta`` for sinks that store it as text."""

        if self.meta is None:
            return None
        return json.dumps(dict(self.meta), default=str, ensure_ascii=False)

    def replace(self, **changes: Any) -> "LogEntry":
        return replace(self, **changes)


__all__ = ["LogEntry"]
