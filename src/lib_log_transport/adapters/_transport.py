"""Shared behaviour for concrete transports.

Purpose
-------
Implement the transport contract once: level filtering against the shared
severity scale, the readiness gate, per-instance write serialisation, failure
reporting and idempotent close. Concrete sinks only provide
``_initialise``, ``_write`` and ``_release``.

Contents
--------
* :class:`BaseTransport` - abstract base implementing :class:`TransportPort`.

System Role
-----------
Every adapter in :mod:`lib_log_transport.adapters` derives from this class so
the dispatcher can rely on ``out`` never raising and ``close`` being safe to
call twice.
"""

from __future__ import annotations

import asyncio
from abc import abstractmethod
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.application.ports.transport import TransportPort
from lib_log_transport.application.use_cases._diagnostics import build_diagnostic_emitter
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.errors import TransportClosedError, TransportNotReadyError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from lib_log_transport.domain.messages import TRANSPORT_CLOSED, TRANSPORT_NOT_READY


class BaseTransport(TransportPort):
    """Level-filtered, readiness-gated sink with failure isolation.

    Readiness work (``_initialise``) is scheduled immediately when an event
    loop is running at construction time, otherwise on the first call to
    :meth:`ready`. It runs exactly once. Writes queue behind it instead of
    failing, and writes on one instance are serialised by an
    :class:`asyncio.Lock`, which is FIFO, so entries keep their issue order.

    Parameters
    ----------
    name:
        Stable identifier used by :meth:`Log.remove_transport_by_name`.
    level:
        Least severe level accepted; defaults to ``"log"``.
    scale:
        Severity scale shared with the dispatcher.
    diagnostic_hook:
        Callable receiving ``(event_name, payload)`` for lifecycle notices
        and failures. Defaults to the :mod:`logging` forwarder.
    """

    def __init__(
        self,
        name: str,
        *,
        level: LogLevel | str = LogLevel.LOG,
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self.name = name
        self._scale = scale
        self.level = scale.require(level)
        self._emit = build_diagnostic_emitter(diagnostic_hook)
        self._lock = asyncio.Lock()
        self._ready_task: asyncio.Task[None] | None = None
        self._init_error: BaseException | None = None
        self._closed = False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._ready_task = loop.create_task(self._run_initialise())

    @property
    def closed(self) -> bool:
        return self._closed

    def accepts(self, level: LogLevel | str) -> bool:
        """Return ``True`` when ``level`` passes this transport's threshold."""

        return self._scale.allows(level, self.level)

    async def ready(self) -> None:
        """Wait for the readiness work; raise when it failed."""

        if self._ready_task is None:
            self._ready_task = asyncio.get_running_loop().create_task(self._run_initialise())
        await self._ready_task
        if self._init_error is not None:
            raise TransportNotReadyError(TRANSPORT_NOT_READY.format(transport=self.name)) from self._init_error

    async def out(self, entry: LogEntry) -> bool:
        """Write ``entry`` when its level passes; never raises on I/O errors."""

        if not self.accepts(entry.level):
            return False
        async with self._lock:
            try:
                if self._closed:
                    raise TransportClosedError(TRANSPORT_CLOSED.format(transport=self.name))
                await self.ready()
                await self._write(entry)
            except TransportClosedError as exc:
                self._report("transport_closed", exc, entry)
                return False
            except Exception as exc:  # noqa: BLE001
                self._report("transport_write_failed", exc, entry)
                return False
        return True

    async def close(self) -> None:
        """Release owned resources; later calls return immediately."""

        if self._closed:
            return
        self._closed = True
        async with self._lock:
            if self._ready_task is not None:
                await self._ready_task
            try:
                await self._release()
            except Exception as exc:  # noqa: BLE001
                self._report("transport_close_failed", exc)

    async def __aenter__(self) -> "BaseTransport":
        await self.ready()
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    async def _run_initialise(self) -> None:
        try:
            await self._initialise()
        except Exception as exc:  # noqa: BLE001
            self._init_error = exc
            self._report("transport_init_failed", exc)

    async def _initialise(self) -> None:
        """Acquire external resources; the default needs none."""

    @abstractmethod
    async def _write(self, entry: LogEntry) -> None:
        """Persist ``entry`` to the backing medium."""

    async def _release(self) -> None:
        """Release external resources acquired by :meth:`_initialise`."""

    def _report(self, name: str, exc: BaseException | None = None, entry: LogEntry | None = None, **extra: Any) -> None:
        payload: dict[str, Any] = {"transport": self.name, **extra}
        if entry is not None:
            payload["level"] = entry.level.severity
        if exc is not None:
            payload["exception"] = exc
        self._emit(name, payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, level={self.level.severity!r})"


__all__ = ["BaseTransport"]
