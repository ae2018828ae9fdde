from __future__ import annotations

import pytest

from lib_log_transport.domain.errors import UnknownLevelError
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel, SeverityScale


@pytest.mark.parametrize(
    "name, expected",
    [
        ("error", LogLevel.ERROR),
        ("WARN", LogLevel.WARN),
        ("Info", LogLevel.INFO),
        ("log", LogLevel.LOG),
        (" debug ", LogLevel.DEBUG),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(UnknownLevelError, match="Unknown log level"):
        LogLevel.from_name("verbose")


def test_unknown_level_error_is_a_value_error() -> None:
    assert issubclass(UnknownLevelError, ValueError)


def test_scale_ranks_follow_fixed_order() -> None:
    assert SEVERITY_SCALE.as_mapping() == {"error": 0, "warn": 1, "info": 2, "log": 3, "debug": 4}
    assert SEVERITY_SCALE.names == ("error", "warn", "info", "log", "debug")


@pytest.mark.parametrize("level", LogLevel)
def test_rank_lookup_accepts_names_and_members(level: LogLevel) -> None:
    assert SEVERITY_SCALE.rank(level) == level.rank
    assert SEVERITY_SCALE.rank(level.severity) == level.rank


@pytest.mark.parametrize("value", ["verbose", "", "warning", 3, None])
def test_rank_returns_none_for_unknown_values(value: object) -> None:
    assert SEVERITY_SCALE.rank(value) is None  # type: ignore[arg-type]


def test_require_raises_for_unknown_name() -> None:
    with pytest.raises(UnknownLevelError):
        SEVERITY_SCALE.require("trace")


@pytest.mark.parametrize("entry", LogLevel)
@pytest.mark.parametrize("threshold", LogLevel)
def test_allows_delivers_exactly_when_rank_not_above_threshold(entry: LogLevel, threshold: LogLevel) -> None:
    assert SEVERITY_SCALE.allows(entry, threshold) is (entry.rank <= threshold.rank)


def test_allows_rejects_unknown_levels() -> None:
    assert SEVERITY_SCALE.allows("trace", "debug") is False
    assert SEVERITY_SCALE.allows("error", "trace") is False


def test_restricted_scale_rejects_levels_outside_it() -> None:
    scale = SeverityScale([LogLevel.ERROR, LogLevel.INFO])

    assert scale.names == ("error", "info")
    assert scale.lookup(LogLevel.DEBUG) is None
    with pytest.raises(UnknownLevelError):
        scale.require("debug")


@pytest.mark.parametrize(
    "level, icon",
    [
        (LogLevel.ERROR, "✖"),
        (LogLevel.WARN, "⚠"),
        (LogLevel.INFO, "ℹ"),
        (LogLevel.LOG, "•"),
        (LogLevel.DEBUG, "🐞"),
    ],
)
def test_level_icon_table(level: LogLevel, icon: str) -> None:
    assert level.icon == icon
