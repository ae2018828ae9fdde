"""Use case delivering one entry to every registered transport.

Purpose
-------
Run each transport's ``out`` concurrently so a slow sink delays only itself,
while keeping exceptions from one transport away from its siblings and from
the caller of :meth:`lib_log_transport.Log.log`.

Contents
--------
* :func:`fan_out` - coroutine returning a :data:`FanOutResult`.

System Role
-----------
Scheduled by the dispatcher for each log call. Coroutines are started in
registration order, which together with the per-transport lock keeps entries
from one caller in issue order at every transport. Entries below a
transport's threshold are skipped without calling ``out``; any other
``False`` from ``out`` counts as a failed delivery.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticEmitter
from lib_log_transport.application.ports.transport import TransportPort
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import SEVERITY_SCALE

FanOutResult = dict[str, Any]


def _admits(transport: TransportPort, entry: LogEntry) -> bool:
    accepts = getattr(transport, "accepts", None)
    if callable(accepts):
        return bool(accepts(entry.level))
    threshold = getattr(transport, "level", None)
    if threshold is None:
        return True
    return SEVERITY_SCALE.allows(entry.level, threshold)


async def _deliver(transport: TransportPort, entry: LogEntry, emit: DiagnosticEmitter) -> str:
    name = getattr(transport, "name", repr(transport))
    if not _admits(transport, entry):
        return "skipped"
    try:
        result = transport.out(entry)
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:  # noqa: BLE001
        emit(
            "transport_failed",
            {"transport": name, "level": entry.level.severity, "exception": exc},
        )
        return "failed"
    # past the threshold a False return means the write did not land
    return "delivered" if result else "failed"


async def fan_out(
    transports: Sequence[TransportPort],
    entry: LogEntry,
    *,
    emit: DiagnosticEmitter,
) -> FanOutResult:
    """Deliver ``entry`` to ``transports`` in parallel with failure isolation.

    Examples
    --------
    >>> class Sink:
    ...     name = "memo"
    ...     def __init__(self):
    ...         self.entries = []
    ...     async def out(self, entry):
    ...         self.entries.append(entry)
    ...         return True
    >>> from datetime import datetime, timezone
    >>> from lib_log_transport.domain.levels import LogLevel
    >>> entry = LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, "hello")
    >>> result = asyncio.run(fan_out([Sink()], entry, emit=lambda name, payload: None))
    >>> result["ok"], result["delivered"]
    (True, ['memo'])
    """

    outcomes = await asyncio.gather(*(_deliver(transport, entry, emit) for transport in transports))
    delivered: list[str] = []
    failed: list[str] = []
    for transport, outcome in zip(transports, outcomes):
        name = getattr(transport, "name", repr(transport))
        if outcome == "delivered":
            delivered.append(name)
        elif outcome == "failed":
            failed.append(name)
    return {"ok": not failed, "delivered": delivered, "failed": failed}


__all__ = ["FanOutResult", "fan_out"]
