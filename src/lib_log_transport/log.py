"""Dispatcher owning the registered transports.

Purpose
-------
Validate severities, stamp :class:`LogEntry` objects and fan them out to every
registered transport, keeping transport failures away from the caller.

Contents
--------
* :class:`Log` - registration, ``log`` and its level shortcuts, timers,
  ``flush`` and ``close``.

System Role
-----------
Outermost API of the pipeline. ``log`` is synchronous up to scheduling: an
unknown level raises immediately and dispatches nothing; a valid call
snapshots the registration list and schedules
:func:`~lib_log_transport.application.use_cases.fan_out.fan_out` on the
running event loop. The returned task may be awaited but never has to be.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable, Mapping
from typing import Any

from .adapters.clock import SystemClock
from .application.ports.diagnostic import DiagnosticHook
from .application.ports.time import ClockPort
from .application.ports.transport import TransportPort
from .application.use_cases import FanOutResult, build_diagnostic_emitter, create_shutdown, fan_out
from .domain.entry import LogEntry
from .domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from .domain.messages import NO_RUNNING_LOOP, NO_SUCH_TIMER, TIMER_ELAPSED


class Log:
    """Fan log entries out to pluggable transports.

    Parameters
    ----------
    transports:
        Initial transports, in fan-out order.
    scale:
        Severity scale; must be the one the transports use.
    clock:
        Timestamp source for new entries.
    diagnostic_hook:
        Receives ``transport_failed`` / ``transport_close_failed`` reports for
        transports that raise despite the contract.

    Examples
    --------
    >>> class Memory:
    ...     name, level = "memory", LogLevel.DEBUG
    ...     def __init__(self):
    ...         self.messages = []
    ...     async def out(self, entry):
    ...         self.messages.append(entry.message)
    ...         return True
    ...     async def close(self):
    ...         pass
    >>> async def demo():
    ...     sink = Memory()
    ...     log = Log([sink])
    ...     await log.info("started")
    ...     return sink.messages
    >>> asyncio.run(demo())
    ['started']
    """

    def __init__(
        self,
        transports: Iterable[TransportPort] = (),
        *,
        scale: SeverityScale = SEVERITY_SCALE,
        clock: ClockPort | None = None,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self._transports: list[TransportPort] = list(transports)
        self._scale = scale
        self._clock = clock or SystemClock()
        self._emit = build_diagnostic_emitter(diagnostic_hook)
        self._timers: dict[str, float] = {}
        self._pending: set[asyncio.Task[FanOutResult]] = set()
        self._shutdown = create_shutdown(transports=lambda: self._transports, emit=self._emit)

    @property
    def scale(self) -> SeverityScale:
        return self._scale

    @property
    def transports(self) -> tuple[TransportPort, ...]:
        """Return a snapshot of the registered transports."""

        return tuple(self._transports)

    def add_transport(self, transport: TransportPort) -> None:
        self._transports.append(transport)

    def remove_transport_by_name(self, name: str) -> None:
        """Remove every transport called ``name``; unknown names are ignored."""

        # rebinding keeps snapshots taken by in-flight fan-outs intact
        self._transports = [transport for transport in self._transports if transport.name != name]

    def log(self, level: LogLevel | str, message: str, meta: Mapping[str, Any] | None = None) -> asyncio.Task[FanOutResult]:
        """Build an entry and schedule its delivery.

        Raises
        ------
        UnknownLevelError
            When ``level`` is not part of the scale; nothing is dispatched.
        RuntimeError
            When no event loop is running.
        """

        resolved = self._scale.require(level)
        loop = self._running_loop("log")
        entry = LogEntry(timestamp=self._clock.now(), level=resolved, message=message, meta=meta)
        return self._dispatch(loop, entry)

    def info(self, message: str, meta: Mapping[str, Any] | None = None) -> asyncio.Task[FanOutResult]:
        return self.log(LogLevel.INFO, message, meta)

    def warn(self, message: str, meta: Mapping[str, Any] | None = None) -> asyncio.Task[FanOutResult]:
        return self.log(LogLevel.WARN, message, meta)

    def error(self, message: str, meta: Mapping[str, Any] | None = None) -> asyncio.Task[FanOutResult]:
        return self.log(LogLevel.ERROR, message, meta)

    def debug(self, message: str, meta: Mapping[str, Any] | None = None) -> asyncio.Task[FanOutResult]:
        return self.log(LogLevel.DEBUG, message, meta)

    def time(self, label: str) -> None:
        """Start (or restart) the timer ``label``."""

        self._timers[label] = time.perf_counter()

    def time_end(self, label: str) -> asyncio.Task[FanOutResult]:
        """Stop timer ``label`` and log the elapsed milliseconds at ``info``."""

        start = self._timers.pop(label, None)
        if start is None:
            return self.warn(NO_SUCH_TIMER.format(label=label))
        elapsed_ms = (time.perf_counter() - start) * 1e3
        return self.info(TIMER_ELAPSED.format(label=label, elapsed_ms=elapsed_ms))

    async def flush(self) -> None:
        """Wait until every scheduled fan-out has finished."""

        while self._pending:
            await asyncio.gather(*tuple(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Flush pending deliveries, then close every registered transport."""

        await self.flush()
        await self._shutdown()

    async def __aenter__(self) -> "Log":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    def _dispatch(self, loop: asyncio.AbstractEventLoop, entry: LogEntry) -> asyncio.Task[FanOutResult]:
        targets = tuple(self._transports)
        task = loop.create_task(fan_out(targets, entry, emit=self._emit))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @staticmethod
    def _running_loop(method: str) -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RuntimeError(NO_RUNNING_LOOP.format(method=method)) from exc


__all__ = ["Log"]
