"""Adapters implementing the transport port and the clock port."""

from __future__ import annotations

from ._transport import BaseTransport
from .clock import SystemClock
from .console import ConsoleTransport
from .database import DatabaseTransport, MongoDBTransport, MySQLTransport, PostgresTransport, SQLiteTransport
from .file import DailyFileTransport

__all__ = [
    "BaseTransport",
    "ConsoleTransport",
    "DailyFileTransport",
    "DatabaseTransport",
    "MongoDBTransport",
    "MySQLTransport",
    "PostgresTransport",
    "SQLiteTransport",
    "SystemClock",
]
