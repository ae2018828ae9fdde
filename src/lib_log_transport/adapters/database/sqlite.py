"""Embedded SQL transport backed by SQLite.

The stdlib :mod:`sqlite3` driver is blocking, so every statement runs via
:func:`asyncio.to_thread`. The connection is opened with
``check_same_thread=False``; the base transport lock guarantees only one
statement is in flight per instance.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale

from ._base import DatabaseTransport, index_name, normalise_sql_indexes, require_option, validate_identifier


class SQLiteTransport(DatabaseTransport):
    """Insert entries into a SQLite table (default ``logs``).

    Parameters
    ----------
    database:
        Filesystem path, ``":memory:"`` or a ``file:`` URI.
    table:
        Target table name.
    indexes:
        Extra indexes as column names or column tuples.
    connect_options:
        Extra keyword arguments for :func:`sqlite3.connect` (e.g. ``timeout``).
    """

    driver_module = "sqlite3"
    driver_hint = "this Python build lacks sqlite3"

    def __init__(
        self,
        database: str | None = None,
        *,
        table: str = "logs",
        indexes: Sequence[str | Sequence[str]] | None = None,
        connect_options: Mapping[str, Any] | None = None,
        driver: Any = None,
        level: LogLevel | str = LogLevel.LOG,
        name: str = "sqlite",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        label = type(self).__name__
        self.database = str(require_option(label, "database", database))
        self.table = validate_identifier(label, "table", table)
        self.indexes = normalise_sql_indexes(label, indexes)
        super().__init__(
            name,
            target=f"{self.database}:{self.table}",
            driver=driver,
            connect_options=connect_options,
            level=level,
            scale=scale,
            diagnostic_hook=diagnostic_hook,
        )

    async def _connect(self, driver: Any) -> Any:
        options = {"check_same_thread": False, "uri": self.database.startswith("file:"), **self.connect_options}
        return await asyncio.to_thread(driver.connect, self.database, **options)

    async def _execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        def run() -> None:
            self._client.execute(sql, tuple(params))
            self._client.commit()

        await asyncio.to_thread(run)

    async def _ensure_schema(self) -> None:
        await self._execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                message TEXT NOT NULL,
                meta TEXT
            )
            """
        )

    async def _ensure_indexes(self) -> None:
        await self._execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_timestamp ON {self.table}(timestamp DESC)")
        await self._execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_level ON {self.table}(level)")
        for columns in self.indexes:
            await self._execute(
                f"CREATE INDEX IF NOT EXISTS {index_name(self.table, columns)} ON {self.table}({', '.join(columns)})"
            )

    async def _insert(self, entry: LogEntry) -> None:
        await self._execute(
            f"INSERT INTO {self.table} (timestamp, level, message, meta) VALUES (?, ?, ?, ?)",
            (entry.timestamp.isoformat(), entry.level.severity, entry.message, entry.meta_json()),
        )

    async def _disconnect(self, client: Any) -> None:
        await asyncio.to_thread(client.close)


__all__ = ["SQLiteTransport"]
