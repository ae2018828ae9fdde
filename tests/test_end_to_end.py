from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

from lib_log_transport import ConsoleTransport, DailyFileTransport, Log


def test_debug_entry_reaches_file_but_not_warn_console(tmp_path, record_console, fixed_clock) -> None:
    async def scenario() -> None:
        console = ConsoleTransport(level="warn", console=record_console, error_console=record_console)
        file = DailyFileTransport(tmp_path, level="debug", clock=fixed_clock)
        async with Log([console, file], clock=fixed_clock) as log:
            log.log("debug", "x")

    asyncio.run(scenario())

    assert record_console.export_text() == ""
    lines = (tmp_path / "2025-09-30.log").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line) for line in lines] == [
        {"timestamp": "2025-09-30T12:00:00+00:00", "level": "debug", "message": "x", "meta": None}
    ]


def test_error_entry_reaches_every_transport(tmp_path, record_console) -> None:
    moment = datetime(2025, 9, 30, 8, 15, tzinfo=timezone.utc)

    class _Clock:
        def now(self) -> datetime:
            return moment

    async def scenario() -> None:
        log = Log(
            [
                ConsoleTransport(level="warn", console=record_console, error_console=record_console),
                DailyFileTransport(tmp_path, level="debug", clock=_Clock()),
            ],
            clock=_Clock(),
        )
        result = await log.error("boom", {"code": 7})
        await log.close()
        assert result["delivered"] == ["console", "file"]

    asyncio.run(scenario())

    assert '[ERROR] boom {"code": 7}' in record_console.export_text()
    record = json.loads((tmp_path / "2025-09-30.log").read_text(encoding="utf-8"))
    assert record["meta"] == {"code": 7}
