"""Structured logging dispatcher with pluggable transports.

``Log`` stamps each entry and fans it out to every registered transport;
each transport applies its own severity threshold and reports failures
through a diagnostic hook instead of raising into the caller. Console,
daily-file, SQLite, PostgreSQL, MySQL and MongoDB transports ship with the
package; the database drivers beyond :mod:`sqlite3` are optional extras.
"""

from __future__ import annotations

from .adapters import (
    BaseTransport,
    ConsoleTransport,
    DailyFileTransport,
    DatabaseTransport,
    MongoDBTransport,
    MySQLTransport,
    PostgresTransport,
    SQLiteTransport,
    SystemClock,
)
from .application.ports import TransportPort
from .domain import (
    SEVERITY_SCALE,
    LogEntry,
    LogLevel,
    SeverityScale,
    TransportClosedError,
    TransportConfigError,
    TransportNotReadyError,
    UnknownLevelError,
)
from .log import Log
from .runtime import RuntimeConfig, get, init, is_initialised, shutdown, shutdown_async

__all__ = [
    "BaseTransport",
    "ConsoleTransport",
    "DailyFileTransport",
    "DatabaseTransport",
    "Log",
    "LogEntry",
    "LogLevel",
    "MongoDBTransport",
    "MySQLTransport",
    "PostgresTransport",
    "RuntimeConfig",
    "SEVERITY_SCALE",
    "SQLiteTransport",
    "SeverityScale",
    "SystemClock",
    "TransportClosedError",
    "TransportConfigError",
    "TransportNotReadyError",
    "TransportPort",
    "UnknownLevelError",
    "get",
    "init",
    "is_initialised",
    "shutdown",
    "shutdown_async",
]
