"""Domain value objects used by the logging pipeline."""

from __future__ import annotations

from .entry import LogEntry
from .errors import TransportClosedError, TransportConfigError, TransportNotReadyError, UnknownLevelError
from .levels import SEVERITY_SCALE, LogLevel, SeverityScale

__all__ = [
    "LogEntry",
    "LogLevel",
    "SEVERITY_SCALE",
    "SeverityScale",
    "TransportClosedError",
    "TransportConfigError",
    "TransportNotReadyError",
    "UnknownLevelError",
]
