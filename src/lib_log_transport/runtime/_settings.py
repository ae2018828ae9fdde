"""Runtime configuration and environment overrides.

Environment variables win over :class:`RuntimeConfig` fields so deployments
can reroute logs without code changes:

* ``LOG_ENABLE_CONSOLE`` - ``0``/``1``
* ``LOG_CONSOLE_LEVEL``
* ``LOG_FILE_FOLDER`` / ``LOG_FILE_LEVEL``
* ``LOG_SQLITE_DATABASE`` / ``LOG_SQLITE_LEVEL``
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

from lib_log_transport.application.ports.diagnostic import DiagnosticHook
from lib_log_transport.domain.levels import SEVERITY_SCALE, LogLevel

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RuntimeConfig:
    """Declarative description of the transports to register."""

    enable_console: bool = True
    console_level: LogLevel | str = LogLevel.LOG
    file_folder: Path | str | None = None
    file_level: LogLevel | str = LogLevel.LOG
    sqlite_database: str | None = None
    sqlite_level: LogLevel | str = LogLevel.LOG
    sqlite_table: str = "logs"
    force_color: bool = False
    no_color: bool = False
    diagnostic_hook: DiagnosticHook = None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag (got {raw!r})")


def _parse_level(name: str, raw: str) -> LogLevel:
    level = SEVERITY_SCALE.lookup(raw)
    if level is None:
        raise ValueError(f"{name} must be one of {', '.join(SEVERITY_SCALE.names)} (got {raw!r})")
    return level


def apply_environment(config: RuntimeConfig, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
    """Return ``config`` with ``LOG_*`` overrides from ``environ`` applied.

    Examples
    --------
    >>> apply_environment(RuntimeConfig(), {"LOG_CONSOLE_LEVEL": "warn"}).console_level
    <LogLevel.WARN: 1>
    """

    env = os.environ if environ is None else environ
    changes: dict[str, object] = {}
    if "LOG_ENABLE_CONSOLE" in env:
        changes["enable_console"] = _parse_bool("LOG_ENABLE_CONSOLE", env["LOG_ENABLE_CONSOLE"])
    for variable, field in (
        ("LOG_CONSOLE_LEVEL", "console_level"),
        ("LOG_FILE_LEVEL", "file_level"),
        ("LOG_SQLITE_LEVEL", "sqlite_level"),
    ):
        if env.get(variable):
            changes[field] = _parse_level(variable, env[variable])
    if env.get("LOG_FILE_FOLDER"):
        changes["file_folder"] = Path(env["LOG_FILE_FOLDER"])
    if env.get("LOG_SQLITE_DATABASE"):
        changes["sqlite_database"] = env["LOG_SQLITE_DATABASE"]
    return replace(config, **changes) if changes else config


__all__ = ["RuntimeConfig", "apply_environment"]
