from __future__ import annotations

from datetime import datetime, timedelta, timezone
from io import StringIO
from typing import Any, Callable

import pytest
from rich.console import Console

from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import LogLevel


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **delta: float) -> None:
        self.moment = self.moment + timedelta(**delta)


class DiagnosticsRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, name: str, payload: dict[str, Any]) -> None:
        self.events.append((name, payload))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


class MemoryTransport:
    """Minimal transport honouring the port: level filter, async out and close."""

    def __init__(self, name: str = "memory", level: LogLevel = LogLevel.DEBUG) -> None:
        self.name = name
        self.level = level
        self.entries: list[LogEntry] = []
        self.closed = 0

    async def out(self, entry: LogEntry) -> bool:
        if entry.level.rank > self.level.rank:
            return False
        self.entries.append(entry)
        return True

    async def close(self) -> None:
        self.closed += 1

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, force_terminal=False, color_system=None, width=240)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def diagnostics() -> DiagnosticsRecorder:
    return DiagnosticsRecorder()


@pytest.fixture
def memory_transport_factory() -> Callable[..., MemoryTransport]:
    return MemoryTransport


@pytest.fixture
def make_entry() -> Callable[..., LogEntry]:
    def factory(
        level: LogLevel | str = LogLevel.INFO,
        message: str = "hello",
        meta: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> LogEntry:
        resolved = level if isinstance(level, LogLevel) else LogLevel.from_name(level)
        return LogEntry(
            timestamp=timestamp or datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc),
            level=resolved,
            message=message,
            meta=meta,
        )

    return factory
