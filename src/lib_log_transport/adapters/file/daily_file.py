"""Append-only file transport rotating to a new file every UTC day.

Purpose
-------
Persist entries as JSON lines into ``<folder>/<YYYY-MM-DD>.log`` using
:mod:`aiofiles`, so file I/O suspends the writing coroutine instead of
blocking the event loop.

Contents
--------
* :class:`DailyFileTransport` - the sink.
* :func:`open_unbound` - default opener; the handle follows the running loop.
* ``Opener`` - signature of the file-opening callable.

System Role
-----------
State machine over the currently open date: ``Uninitialised`` until the
readiness work opens today's file, then ``Open(date)``. A write whose entry
date differs closes the current handle completely before opening the next
one; the base lock keeps that rollover exclusive with other writes.

Alignment Notes
---------------
After ``close()`` the transport does not reopen; later writes are reported
as ``transport_closed`` by :class:`BaseTransport`.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable

import aiofiles.os
import aiofiles.threadpool

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.application.ports.time import ClockPort
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.errors import TransportConfigError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale
from lib_log_transport.domain.messages import OPTION_REQUIRED

from .._transport import BaseTransport
from ..clock import SystemClock

Opener = Callable[..., Awaitable[Any]]


async def open_unbound(path: str | Path, *, mode: str = "a", encoding: str = "utf-8") -> Any:
    """Open ``path`` in a worker thread and wrap it without pinning a loop.

    ``aiofiles.open`` binds the handle to the loop running at open time, so a
    handle opened under one ``asyncio.run`` cannot be closed under the next.
    The wrapper returned here dispatches each call to the loop running when
    the call is made.
    """

    handle = await asyncio.to_thread(open, path, mode, encoding=encoding)
    return aiofiles.threadpool.wrap(handle)


class DailyFileTransport(BaseTransport):
    """Write one JSON record per line into a per-day file.

    Parameters
    ----------
    folder_path:
        Directory holding the daily files; created when missing.
    level:
        Minimum severity accepted (default ``"log"``).
    clock:
        Source of "today" for the file opened during initialisation.
    opener:
        Coroutine function with the :func:`open_unbound` signature; tests inject
        wrappers to observe open/close ordering.
    """

    def __init__(
        self,
        folder_path: str | Path | None = None,
        *,
        level: LogLevel | str = LogLevel.LOG,
        clock: ClockPort | None = None,
        opener: Opener | None = None,
        encoding: str = "utf-8",
        name: str = "file",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        if not folder_path:
            raise TransportConfigError(OPTION_REQUIRED.format(transport=type(self).__name__, option="folder_path"))
        self.folder_path = Path(folder_path)
        self._clock = clock or SystemClock()
        self._opener = opener or open_unbound
        self._encoding = encoding
        self._stream: Any = None
        self._current_date: str | None = None
        super().__init__(name, level=level, scale=scale, diagnostic_hook=diagnostic_hook)

    @property
    def current_date(self) -> str | None:
        """Return the date of the open file (``YYYY-MM-DD``) or ``None``."""

        return self._current_date

    def path_for(self, day: date | datetime) -> Path:
        if isinstance(day, datetime):
            day = day.astimezone(timezone.utc).date()
        return self.folder_path / f"{day.isoformat()}.log"

    async def _initialise(self) -> None:
        await aiofiles.os.makedirs(self.folder_path, exist_ok=True)
        await self._open_for(self._clock.now())

    async def _open_for(self, moment: datetime) -> None:
        await self._close_stream()
        day = moment.astimezone(timezone.utc).date()
        self._stream = await self._opener(self.path_for(day), mode="a", encoding=self._encoding)
        self._current_date = day.isoformat()

    async def _close_stream(self) -> None:
        stream, self._stream = self._stream, None
        self._current_date = None
        if stream is not None:
            await stream.close()

    async def _write(self, entry: LogEntry) -> None:
        if entry.date_key != self._current_date:
            await self._open_for(entry.timestamp)
        await self._stream.write(entry.to_json() + "\n")
        # flush hands the record to the OS before the write is reported done
        await self._stream.flush()

    async def _release(self) -> None:
        await self._close_stream()


__all__ = ["DailyFileTransport", "open_unbound"]
