"""MongoDB transport using PyMongo's asyncio client.

Documents keep ``timestamp`` as a native datetime and ``meta`` as an embedded
document. Besides the timestamp and level indexes a text index on
``message`` is created; callers add more through ``indexes``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.errors import TransportConfigError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from lib_log_transport.domain.messages import INVALID_IDENTIFIER

from ._base import DatabaseTransport, require_option

IndexSpec = Mapping[str, Any]
# {"fields": [("user", 1)] or {"user": 1}, "options": {"sparse": True}}

_DEFAULT_INDEXES: tuple[list[tuple[str, Any]], ...] = (
    [("timestamp", -1)],
    [("level", 1)],
    [("message", "text")],
)


def _normalise_index(transport: str, spec: IndexSpec) -> tuple[list[tuple[str, Any]], dict[str, Any]]:
    fields = spec.get("fields") if isinstance(spec, Mapping) else None
    if isinstance(fields, Mapping):
        keys = list(fields.items())
    elif isinstance(fields, str):
        keys = [(fields, 1)]
    elif fields:
        keys = [(item, 1) if isinstance(item, str) else (item[0], item[1]) for item in fields]
    else:
        raise TransportConfigError(INVALID_IDENTIFIER.format(transport=transport, option="index", value=spec))
    return keys, dict(spec.get("options") or {})


class MongoDBTransport(DatabaseTransport):
    """Insert entries as documents into ``<db_name>.<collection>``."""

    driver_module = "pymongo"
    driver_hint = "pip install 'lib_log_transport[mongodb]'"

    def __init__(
        self,
        uri: str | None = None,
        *,
        db_name: str | None = None,
        collection: str = "logs",
        indexes: Sequence[IndexSpec] | None = None,
        connect_options: Mapping[str, Any] | None = None,
        driver: Any = None,
        level: LogLevel | str = LogLevel.LOG,
        name: str = "mongodb",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        label = type(self).__name__
        self.uri = require_option(label, "uri", uri)
        self.db_name = require_option(label, "db_name", db_name)
        self.collection_name = require_option(label, "collection", collection)
        self.indexes = [_normalise_index(label, spec) for spec in indexes or ()]
        self._collection: Any = None
        super().__init__(
            name,
            target=f"{self.db_name}.{self.collection_name}",
            driver=driver,
            connect_options=connect_options,
            level=level,
            scale=scale,
            diagnostic_hook=diagnostic_hook,
        )

    async def _connect(self, driver: Any) -> Any:
        client = driver.AsyncMongoClient(self.uri, **self.connect_options)
        try:
            await client.admin.command("ping")
        except Exception:
            # the client is not stored yet, so close() would never reach it
            await client.close()
            raise
        self._collection = client[self.db_name][self.collection_name]
        return client

    async def _ensure_indexes(self) -> None:
        for keys in _DEFAULT_INDEXES:
            await self._collection.create_index(keys)
        for keys, options in self.indexes:
            await self._collection.create_index(keys, **options)

    async def _insert(self, entry: LogEntry) -> None:
        await self._collection.insert_one(
            {
                "timestamp": entry.timestamp,
                "level": entry.level.severity,
                "message": entry.message,
                "meta": dict(entry.meta) if entry.meta is not None else None,
            }
        )

    async def _disconnect(self, client: Any) -> None:
        self._collection = None
        await client.close()


__all__ = ["MongoDBTransport"]
