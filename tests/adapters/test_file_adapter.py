from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import pytest

from lib_log_transport.adapters.file.daily_file import DailyFileTransport
from lib_log_transport.domain.errors import TransportConfigError

_LATE = datetime(2025, 3, 9, 23, 59, 59, 900000, tzinfo=timezone.utc)
_EARLY = datetime(2025, 3, 10, 0, 0, 0, 100000, tzinfo=timezone.utc)


class _JournalingOpener:
    """Wrap ``aiofiles.open`` and record open/close order."""

    def __init__(self) -> None:
        self.journal: list[str] = []

    async def __call__(self, path, **kwargs):
        journal = self.journal
        handle = await aiofiles.open(path, **kwargs)
        original_close = handle.close
        name = Path(path).name

        async def close() -> None:
            journal.append(f"close:{name}")
            await original_close()

        handle.close = close
        journal.append(f"open:{name}")
        return handle


def _records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.mark.parametrize("folder", [None, ""])
def test_missing_folder_raises_synchronously(folder) -> None:
    with pytest.raises(TransportConfigError, match="folder_path"):
        DailyFileTransport(folder)


def test_file_adapter_creates_folder_and_todays_file(tmp_path, fixed_clock) -> None:
    folder = tmp_path / "nested" / "logs"

    async def scenario() -> DailyFileTransport:
        transport = DailyFileTransport(folder, clock=fixed_clock)
        await transport.ready()
        await transport.close()
        return transport

    transport = asyncio.run(scenario())

    assert (folder / "2025-09-30.log").exists()
    assert transport.current_date is None


def test_file_adapter_writes_json_lines(tmp_path, fixed_clock, make_entry) -> None:
    async def scenario() -> None:
        async with DailyFileTransport(tmp_path, clock=fixed_clock, level="debug") as transport:
            assert transport.current_date == "2025-09-30"
            await transport.out(make_entry(level="info", message="first", meta={"k": "v"}))
            await transport.out(make_entry(level="debug", message="second"))

    asyncio.run(scenario())

    assert _records(tmp_path / "2025-09-30.log") == [
        {"timestamp": "2025-09-30T12:00:00+00:00", "level": "info", "message": "first", "meta": {"k": "v"}},
        {"timestamp": "2025-09-30T12:00:00+00:00", "level": "debug", "message": "second", "meta": None},
    ]


def test_file_adapter_appends_to_existing_file(tmp_path, fixed_clock, make_entry) -> None:
    existing = tmp_path / "2025-09-30.log"
    existing.write_text('{"previous": true}\n', encoding="utf-8")

    async def scenario() -> None:
        async with DailyFileTransport(tmp_path, clock=fixed_clock) as transport:
            await transport.out(make_entry(message="appended"))

    asyncio.run(scenario())

    lines = existing.read_text(encoding="utf-8").splitlines()
    assert lines[0] == '{"previous": true}'
    assert json.loads(lines[1])["message"] == "appended"


def test_file_adapter_rotates_on_date_boundary(tmp_path, fixed_clock, make_entry) -> None:
    fixed_clock.moment = _LATE
    opener = _JournalingOpener()

    async def scenario() -> DailyFileTransport:
        transport = DailyFileTransport(tmp_path, clock=fixed_clock, opener=opener)
        await transport.out(make_entry(message="before midnight", timestamp=_LATE))
        await transport.out(make_entry(message="after midnight", timestamp=_EARLY))
        await transport.close()
        return transport

    asyncio.run(scenario())

    assert [record["message"] for record in _records(tmp_path / "2025-03-09.log")] == ["before midnight"]
    assert [record["message"] for record in _records(tmp_path / "2025-03-10.log")] == ["after midnight"]
    assert opener.journal == [
        "open:2025-03-09.log",
        "close:2025-03-09.log",
        "open:2025-03-10.log",
        "close:2025-03-10.log",
    ]


def test_file_adapter_rotation_keeps_order_for_concurrent_writes(tmp_path, fixed_clock, make_entry) -> None:
    fixed_clock.moment = _LATE

    async def scenario() -> None:
        transport = DailyFileTransport(tmp_path, clock=fixed_clock)
        await asyncio.gather(
            transport.out(make_entry(message="a", timestamp=_LATE)),
            transport.out(make_entry(message="b", timestamp=_EARLY)),
            transport.out(make_entry(message="c", timestamp=_EARLY)),
        )
        await transport.close()

    asyncio.run(scenario())

    assert [record["message"] for record in _records(tmp_path / "2025-03-09.log")] == ["a"]
    assert [record["message"] for record in _records(tmp_path / "2025-03-10.log")] == ["b", "c"]


def test_file_adapter_close_twice_and_write_after_close(tmp_path, fixed_clock, make_entry, diagnostics) -> None:
    async def scenario() -> bool:
        transport = DailyFileTransport(tmp_path, clock=fixed_clock, diagnostic_hook=diagnostics)
        await transport.out(make_entry(message="kept"))
        await transport.close()
        await transport.close()
        return await transport.out(make_entry(message="dropped"))

    assert asyncio.run(scenario()) is False
    assert [record["message"] for record in _records(tmp_path / "2025-09-30.log")] == ["kept"]
    assert diagnostics.names() == ["transport_closed"]
    assert diagnostics.payloads("transport_closed")[0]["transport"] == "file"


def test_file_adapter_close_before_ready_is_safe(tmp_path) -> None:
    transport = DailyFileTransport(tmp_path)

    asyncio.run(transport.close())

    assert transport.closed is True
    assert list(tmp_path.iterdir()) == []


def test_file_adapter_reports_init_failure(tmp_path, fixed_clock, make_entry, diagnostics) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way", encoding="utf-8")

    async def scenario() -> list[bool]:
        transport = DailyFileTransport(blocker, clock=fixed_clock, diagnostic_hook=diagnostics)
        first = await transport.out(make_entry(message="one"))
        second = await transport.out(make_entry(message="two"))
        await transport.close()
        return [first, second]

    assert asyncio.run(scenario()) == [False, False]
    assert diagnostics.names() == ["transport_init_failed", "transport_write_failed", "transport_write_failed"]


def test_file_adapter_reports_write_failure_without_raising(tmp_path, fixed_clock, make_entry, diagnostics) -> None:
    class _BrokenStream:
        async def write(self, data: str) -> None:
            raise OSError("disk full")

        async def flush(self) -> None:
            return None

        async def close(self) -> None:
            return None

    async def broken_opener(path, **kwargs):
        return _BrokenStream()

    async def scenario() -> bool:
        transport = DailyFileTransport(tmp_path, clock=fixed_clock, opener=broken_opener, diagnostic_hook=diagnostics)
        delivered = await transport.out(make_entry(level="error"))
        await transport.close()
        return delivered

    assert asyncio.run(scenario()) is False
    (payload,) = diagnostics.payloads("transport_write_failed")
    assert payload["level"] == "error"
    assert isinstance(payload["exception"], OSError)


def test_path_for_uses_utc_date(tmp_path) -> None:
    transport = DailyFileTransport(tmp_path)

    assert transport.path_for(_EARLY) == tmp_path / "2025-03-10.log"
