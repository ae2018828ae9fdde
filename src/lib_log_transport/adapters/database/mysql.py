"""MySQL transport using :mod:`aiomysql`.

MySQL has no ``CREATE INDEX IF NOT EXISTS``; the transport reads the table's
index names from ``information_schema.STATISTICS`` and creates only the
missing ones, so tables created elsewhere gain the indexes too.
DATETIME(6) carries no zone, so timestamps are stored as naive UTC.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale

from ._base import DatabaseTransport, index_name, normalise_sql_indexes, require_option, validate_identifier


class MySQLTransport(DatabaseTransport):
    """Insert entries into a MySQL table with a JSON ``meta`` column."""

    driver_module = "aiomysql"
    driver_hint = "pip install 'lib_log_transport[mysql]'"

    def __init__(
        self,
        host: str | None = None,
        *,
        user: str | None = None,
        database: str | None = None,
        password: str = "",
        port: int = 3306,
        table: str = "logs",
        indexes: Sequence[str | Sequence[str]] | None = None,
        connect_options: Mapping[str, Any] | None = None,
        driver: Any = None,
        level: LogLevel | str = LogLevel.LOG,
        name: str = "mysql",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        label = type(self).__name__
        self.config: dict[str, Any] = {
            "host": require_option(label, "host", host),
            "user": require_option(label, "user", user),
            "db": require_option(label, "database", database),
            "password": password,
            "port": port,
            "autocommit": True,
        }
        self.table = validate_identifier(label, "table", table)
        self.indexes = normalise_sql_indexes(label, indexes)
        super().__init__(
            name,
            target=f"{host}:{port}/{database}:{self.table}",
            driver=driver,
            connect_options=connect_options,
            level=level,
            scale=scale,
            diagnostic_hook=diagnostic_hook,
        )

    async def _connect(self, driver: Any) -> Any:
        return await driver.connect(**{**self.config, **self.connect_options})

    async def _execute(self, sql: str, params: Sequence[Any] | None = None) -> None:
        async with self._client.cursor() as cursor:
            await cursor.execute(sql, params)

    async def _fetch_column(self, sql: str, params: Sequence[Any] | None = None) -> list[Any]:
        async with self._client.cursor() as cursor:
            await cursor.execute(sql, params)
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    async def _ensure_schema(self) -> None:
        await self._execute(
            f"""
            CREATE TABLE IF NOT EXISTS `{self.table}` (
                id BIGINT AUTO_INCREMENT PRIMARY KEY,
                `timestamp` DATETIME(6) NOT NULL,
                `level` VARCHAR(16) NOT NULL,
                message TEXT NOT NULL,
                meta JSON NULL
            )
            """
        )

    def _wanted_indexes(self) -> list[tuple[str, str]]:
        wanted = [
            (f"idx_{self.table}_timestamp", "`timestamp` DESC"),
            (f"idx_{self.table}_level", "`level`"),
        ]
        wanted.extend(
            (index_name(self.table, columns), ", ".join(f"`{column}`" for column in columns)) for columns in self.indexes
        )
        return wanted

    async def _ensure_indexes(self) -> None:
        """Create every index the table lacks, including on pre-existing tables."""

        existing = set(
            await self._fetch_column(
                "SELECT DISTINCT INDEX_NAME FROM information_schema.STATISTICS "
                "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s",
                (self.table,),
            )
        )
        for name, columns in self._wanted_indexes():
            if name not in existing:
                await self._execute(f"CREATE INDEX {name} ON `{self.table}` ({columns})")

    async def _insert(self, entry: LogEntry) -> None:
        await self._execute(
            f"INSERT INTO `{self.table}` (`timestamp`, `level`, message, meta) VALUES (%s, %s, %s, %s)",
            (entry.timestamp.replace(tzinfo=None), entry.level.severity, entry.message, entry.meta_json()),
        )

    async def _disconnect(self, client: Any) -> None:
        await client.ensure_closed()


__all__ = ["MySQLTransport"]
