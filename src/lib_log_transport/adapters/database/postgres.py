"""PostgreSQL transport using :mod:`asyncpg`.

Connection parameters come either as a DSN or as ``host``/``user``/
``database`` (plus optional ``port``, ``password``, ``ssl``); one of the two
forms is required at construction time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.errors import TransportConfigError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from lib_log_transport.domain.messages import OPTIONS_REQUIRED_ONE_OF

from ._base import DatabaseTransport, index_name, normalise_sql_indexes, validate_identifier


class PostgresTransport(DatabaseTransport):
    """Insert entries into a PostgreSQL table with TIMESTAMPTZ and JSONB columns."""

    driver_module = "asyncpg"
    driver_hint = "pip install 'lib_log_transport[postgres]'"

    def __init__(
        self,
        dsn: str | None = None,
        *,
        host: str | None = None,
        port: int = 5432,
        user: str | None = None,
        password: str | None = None,
        database: str | None = None,
        ssl: Any = False,
        table: str = "logs",
        indexes: Sequence[str | Sequence[str]] | None = None,
        connect_options: Mapping[str, Any] | None = None,
        driver: Any = None,
        level: LogLevel | str = LogLevel.LOG,
        name: str = "postgres",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        label = type(self).__name__
        if not dsn and not (host and user and database):
            raise TransportConfigError(
                OPTIONS_REQUIRED_ONE_OF.format(transport=label, first="'dsn'", second="'host'/'user'/'database'")
            )
        if dsn:
            self.config: dict[str, Any] = {"dsn": dsn}
            target = "dsn"
        else:
            self.config = {
                "host": host,
                "port": port,
                "user": user,
                "password": password,
                "database": database,
                "ssl": ssl,
            }
            target = f"{host}:{port}/{database}"
        self.table = validate_identifier(label, "table", table)
        self.indexes = normalise_sql_indexes(label, indexes)
        super().__init__(
            name,
            target=f"{target}:{self.table}",
            driver=driver,
            connect_options=connect_options,
            level=level,
            scale=scale,
            diagnostic_hook=diagnostic_hook,
        )

    async def _connect(self, driver: Any) -> Any:
        return await driver.connect(**self.config, **self.connect_options)

    async def _ensure_schema(self) -> None:
        await self._client.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id BIGSERIAL PRIMARY KEY,
                timestamp TIMESTAMPTZ NOT NULL,
                level TEXT NOT NULL,
                message TEXT NOT NULL,
                meta JSONB
            )
            """
        )

    async def _ensure_indexes(self) -> None:
        await self._client.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_timestamp ON {self.table}(timestamp DESC)")
        await self._client.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_level ON {self.table}(level)")
        for columns in self.indexes:
            await self._client.execute(
                f"CREATE INDEX IF NOT EXISTS {index_name(self.table, columns)} ON {self.table}({', '.join(columns)})"
            )

    async def _insert(self, entry: LogEntry) -> None:
        await self._client.execute(
            f"INSERT INTO {self.table} (timestamp, level, message, meta) VALUES ($1, $2, $3, $4::jsonb)",
            entry.timestamp,
            entry.level.severity,
            entry.message,
            entry.meta_json(),
        )

    async def _disconnect(self, client: Any) -> None:
        await client.close()


__all__ = ["PostgresTransport"]
