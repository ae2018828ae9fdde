"""Transport port describing the contract every sink satisfies.

Purpose
-------
Let the dispatcher depend on a narrow structural protocol instead of a base
class: anything exposing ``name``, ``level``, ``out`` and ``close`` can be
registered.

Contents
--------
* :class:`TransportPort` - runtime-checkable protocol.

System Role
-----------
Boundary between the application layer (fan-out, shutdown) and the adapters
(console, file, databases).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import LogLevel


@runtime_checkable
class TransportPort(Protocol):
    """Accept one entry at a time and release owned resources on close."""

    name: str
    level: LogLevel

    async def out(self, entry: LogEntry) -> bool:
        """Deliver ``entry``; return ``True`` when it was written."""

    async def close(self) -> None:
        """Release resources; calling twice must be harmless."""


__all__ = ["TransportPort"]
