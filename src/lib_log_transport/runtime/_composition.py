"""Composition root turning a :class:`RuntimeConfig` into a :class:`Log`."""

from __future__ import annotations

from lib_log_transport.adapters import ConsoleTransport, DailyFileTransport, SQLiteTransport
from lib_log_transport.application.ports.transport import TransportPort
from lib_log_transport.log import Log

from ._settings import RuntimeConfig


def build_transports(config: RuntimeConfig) -> list[TransportPort]:
    """Instantiate the transports enabled by ``config`` in a fixed order."""

    transports: list[TransportPort] = []
    hook = config.diagnostic_hook
    if config.enable_console:
        transports.append(
            ConsoleTransport(
                level=config.console_level,
                force_color=config.force_color,
                no_color=config.no_color,
                diagnostic_hook=hook,
            )
        )
    if config.file_folder:
        transports.append(DailyFileTransport(config.file_folder, level=config.file_level, diagnostic_hook=hook))
    if config.sqlite_database:
        transports.append(
            SQLiteTransport(
                config.sqlite_database,
                table=config.sqlite_table,
                level=config.sqlite_level,
                diagnostic_hook=hook,
            )
        )
    return transports


def build_log(config: RuntimeConfig) -> Log:
    return Log(build_transports(config), diagnostic_hook=config.diagnostic_hook)


__all__ = ["build_log", "build_transports"]
