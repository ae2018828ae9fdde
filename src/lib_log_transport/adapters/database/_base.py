"""Common lifecycle for database-backed transports.

Purpose
-------
Share what the SQLite, MongoDB, PostgreSQL and MySQL sinks have in common:
identifier validation, deferred driver acquisition, connect, idempotent
schema and index creation, the ``transport_connected`` notice and a close
that is safe before initialisation.

Contents
--------
* :func:`require_option` / :func:`validate_identifier` - synchronous option checks.
* :class:`DatabaseTransport` - abstract base for the concrete sinks.

System Role
-----------
The heavy driver import happens inside the readiness work of each instance
(``importlib`` caches the module process-wide), so installing a sink's
driver is only needed when that sink is actually constructed and used.
"""

from __future__ import annotations

import importlib
import re
from abc import abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.errors import TransportConfigError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from lib_log_transport.domain.messages import DRIVER_MISSING, INVALID_IDENTIFIER, OPTION_REQUIRED

from .._transport import BaseTransport

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def require_option(transport: str, option: str, value: Any) -> Any:
    """Return ``value`` or raise :class:`TransportConfigError` when it is empty."""

    if value is None or value == "":
        raise TransportConfigError(OPTION_REQUIRED.format(transport=transport, option=option))
    return value


def validate_identifier(transport: str, option: str, value: str) -> str:
    """Reject table/column names that cannot be interpolated safely.

    Examples
    --------
    >>> validate_identifier("T", "table", "logs")
    'logs'
    >>> validate_identifier("T", "table", "logs; drop")
    Traceback (most recent call last):
    ...
    lib_log_transport.domain.errors.TransportConfigError: T: table 'logs; drop' is not a valid identifier
    """

    if not isinstance(value, str) or not _IDENTIFIER.match(value):
        raise TransportConfigError(INVALID_IDENTIFIER.format(transport=transport, option=option, value=value))
    return value


class DatabaseTransport(BaseTransport):
    """Readiness = load driver, connect, ensure schema, ensure indexes."""

    #: Module imported on first initialisation when no driver is injected.
    driver_module: str = ""
    #: Installation hint shown when the driver import fails.
    driver_hint: str = ""

    def __init__(
        self,
        name: str,
        *,
        target: str,
        driver: Any = None,
        connect_options: Mapping[str, Any] | None = None,
        level: LogLevel | str = LogLevel.LOG,
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self.target = target
        self._driver = driver
        self.connect_options = dict(connect_options or {})
        self._client: Any = None
        super().__init__(name, level=level, scale=scale, diagnostic_hook=diagnostic_hook)

    @property
    def connected(self) -> bool:
        return self._client is not None

    def load_driver(self) -> Any:
        """Return the injected driver or import :attr:`driver_module`."""

        if self._driver is None:
            try:
                self._driver = importlib.import_module(self.driver_module)
            except ImportError as exc:
                raise RuntimeError(
                    DRIVER_MISSING.format(transport=type(self).__name__, module=self.driver_module, hint=self.driver_hint)
                ) from exc
        return self._driver

    async def _initialise(self) -> None:
        driver = self.load_driver()
        self._client = await self._connect(driver)
        await self._ensure_schema()
        await self._ensure_indexes()
        self._report("transport_connected", target=self.target)

    async def _write(self, entry: LogEntry) -> None:
        await self._insert(entry)

    async def _release(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await self._disconnect(client)

    @abstractmethod
    async def _connect(self, driver: Any) -> Any:
        """Open and return the client/connection."""

    async def _ensure_schema(self) -> None:
        """Create the table/collection when missing."""

    @abstractmethod
    async def _ensure_indexes(self) -> None:
        """Create timestamp, level and caller-supplied indexes when missing."""

    @abstractmethod
    async def _insert(self, entry: LogEntry) -> None:
        """Insert one record for ``entry``."""

    @abstractmethod
    async def _disconnect(self, client: Any) -> None:
        """Close ``client``."""


def normalise_sql_indexes(transport: str, indexes: Sequence[str | Sequence[str]] | None) -> list[tuple[str, ...]]:
    """Turn ``["message", ("level", "timestamp")]`` into validated column tuples."""

    normalised: list[tuple[str, ...]] = []
    for spec in indexes or ():
        columns = (spec,) if isinstance(spec, str) else tuple(spec)
        if not columns:
            raise TransportConfigError(INVALID_IDENTIFIER.format(transport=transport, option="index", value=spec))
        normalised.append(tuple(validate_identifier(transport, "index column", column) for column in columns))
    return normalised


def index_name(table: str, columns: Sequence[str]) -> str:
    return f"idx_{table}_{'_'.join(columns)}"


__all__ = [
    "DatabaseTransport",
    "index_name",
    "normalise_sql_indexes",
    "require_option",
    "validate_identifier",
]
