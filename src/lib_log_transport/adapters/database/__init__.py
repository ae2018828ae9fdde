"""Database-backed transports.

Drivers are imported lazily, so importing this package never requires
``asyncpg``, ``aiomysql`` or ``pymongo`` to be installed.
"""

from __future__ import annotations

from ._base import DatabaseTransport
from .mongodb import MongoDBTransport
from .mysql import MySQLTransport
from .postgres import PostgresTransport
from .sqlite import SQLiteTransport

__all__ = [
    "DatabaseTransport",
    "MongoDBTransport",
    "MySQLTransport",
    "PostgresTransport",
    "SQLiteTransport",
]
