"""Rich-powered console transport.

Purpose
-------
Render each accepted entry as one ``timestamp [LEVEL] message`` line on the
process's diagnostic streams, routing severe levels to stderr.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :data:`_STDERR_LEVELS` - levels written to the error console.
* :class:`ConsoleTransport` - :class:`BaseTransport` without external state.

System Role
-----------
Human-facing sink. It has no connection to establish, so its readiness gate
resolves immediately while still following the shared contract.
"""

from __future__ import annotations

import json
from typing import Mapping, MutableMapping

from rich.console import Console
from rich.text import Text

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale

from .._transport import BaseTransport

#: Default Rich styles keyed by :class:`LogLevel`.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.ERROR: "bold red",
    LogLevel.WARN: "yellow",
    LogLevel.INFO: "cyan",
    LogLevel.LOG: "",
    LogLevel.DEBUG: "dim",
}

_STDERR_LEVELS = frozenset({LogLevel.ERROR, LogLevel.WARN})


class ConsoleTransport(BaseTransport):
    """Print entries with Rich, one line per entry.

    Examples
    --------
    >>> import asyncio
    >>> from datetime import datetime, timezone
    >>> from io import StringIO
    >>> out = Console(file=StringIO(), record=True)
    >>> async def demo():
    ...     transport = ConsoleTransport(console=out, error_console=out, level="debug")
    ...     entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, "msg")
    ...     return await transport.out(entry)
    >>> asyncio.run(demo())
    True
    >>> '[INFO] msg' in out.export_text()
    True
    """

    def __init__(
        self,
        *,
        level: LogLevel | str = LogLevel.LOG,
        console: Console | None = None,
        error_console: Console | None = None,
        colorize: bool = True,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
        name: str = "console",
        scale: SeverityScale = SEVERITY_SCALE,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self._console = console if console is not None else Console(force_terminal=force_color or None, no_color=no_color)
        if error_console is not None:
            self._error_console = error_console
        else:
            self._error_console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._colorize = colorize and not no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            resolved = scale.require(key)
            merged[resolved] = value
        self._style_map = merged
        super().__init__(name, level=level, scale=scale, diagnostic_hook=diagnostic_hook)

    async def _write(self, entry: LogEntry) -> None:
        style = self._style_map.get(entry.level, "") if self._colorize else ""
        target = self._error_console if entry.level in _STDERR_LEVELS else self._console
        target.print(Text(self.format_line(entry), style=style), highlight=False, soft_wrap=True)

    @staticmethod
    def format_line(entry: LogEntry) -> str:
        """Return the console line for ``entry``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.WARN, 'disk', {'free': 3})
        >>> ConsoleTransport.format_line(entry)
        '2025-09-30T12:00:00+00:00 [WARN] disk {"free": 3}'
        """
        line = f"{entry.timestamp.isoformat()} [{entry.level.severity.upper()}] {entry.message}"
        if entry.meta:
            line = f"{line} {json.dumps(dict(entry.meta), default=str, ensure_ascii=False)}"
        return line


__all__ = ["ConsoleTransport"]
