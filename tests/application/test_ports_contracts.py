from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from lib_log_transport.adapters import (
    ConsoleTransport,
    DailyFileTransport,
    MongoDBTransport,
    MySQLTransport,
    PostgresTransport,
    SQLiteTransport,
    SystemClock,
)
from lib_log_transport.application.ports.time import ClockPort
from lib_log_transport.application.ports.transport import TransportPort
from lib_log_transport.domain.entry import LogEntry
from lib_log_transport.domain.levels import LogLevel


class _FakeTransport(TransportPort):
    def __init__(self) -> None:
        self.name = "fake"
        self.level = LogLevel.INFO
        self.seen: list[str] = []

    async def out(self, entry: LogEntry) -> bool:
        self.seen.append(entry.message)
        return True

    async def close(self) -> None:
        self.seen.append("<closed>")


class _DuckTransport:
    name = "duck"
    level = LogLevel.DEBUG

    async def out(self, entry: LogEntry) -> bool:
        return True

    async def close(self) -> None:
        return None


def test_transport_port_accepts_explicit_and_structural_implementations() -> None:
    assert isinstance(_FakeTransport(), TransportPort)
    assert isinstance(_DuckTransport(), TransportPort)
    assert not isinstance(object(), TransportPort)


def test_fake_transport_contract_round_trip() -> None:
    transport = _FakeTransport()
    entry = LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, "hello")

    async def scenario() -> None:
        assert await transport.out(entry) is True
        await transport.close()

    asyncio.run(scenario())
    assert transport.seen == ["hello", "<closed>"]


def test_bundled_transports_satisfy_the_port(tmp_path, record_console) -> None:
    transports = [
        ConsoleTransport(console=record_console, error_console=record_console),
        DailyFileTransport(tmp_path),
        SQLiteTransport(":memory:"),
        PostgresTransport("postgresql://localhost/logs"),
        MySQLTransport("localhost", user="root", database="logs"),
        MongoDBTransport("mongodb://localhost", db_name="app"),
    ]

    for transport in transports:
        assert isinstance(transport, TransportPort), transport
        assert transport.level is LogLevel.LOG


def test_system_clock_satisfies_clock_port() -> None:
    clock = SystemClock()

    assert isinstance(clock, ClockPort)
    now = clock.now()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 0
