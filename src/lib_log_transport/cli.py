"""Click command group exposing the dispatcher from the shell.

Purpose
-------
Provide ``lib_log_transport`` / ``python -m lib_log_transport`` so operators
can print the metadata banner, emit a single entry through the configured
transports, or preview every severity on the console.

Contents
--------
* :func:`cli` - root group with traceback and dotenv toggles.
* ``info`` / ``emit`` / ``logdemo`` subcommands.
* :func:`main` - entry point delegating to :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from . import runtime
from .domain.levels import SEVERITY_SCALE, LogLevel
from .domain.messages import UNKNOWN_LEVEL

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_MESSAGES: dict[LogLevel, str] = {
    LogLevel.ERROR: "disk quota exceeded",
    LogLevel.WARN: "retrying upstream request",
    LogLevel.INFO: "service started",
    LogLevel.LOG: "heartbeat",
    LogLevel.DEBUG: "cache state dumped",
}


def _parse_meta(pairs: Sequence[str]) -> dict[str, str] | None:
    if not pairs:
        return None
    meta: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--meta")
        meta[key] = value
    return meta


async def _emit(config: runtime.RuntimeConfig, level: str, message: str, meta: dict[str, Any] | None) -> dict[str, int]:
    log = runtime.init(config)
    try:
        result = await log.log(level, message, meta)
    finally:
        await runtime.shutdown_async()
    return {"delivered": len(result["delivered"]), "failed": len(result["failed"])}


async def _logdemo(config: runtime.RuntimeConfig) -> int:
    log = runtime.init(config)
    try:
        for level in LogLevel:
            await log.log(level, _DEMO_MESSAGES[level], {"demo": True, "rank": level.rank})
    finally:
        await runtime.shutdown_async()
    return len(_DEMO_MESSAGES)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if log_config.dotenv_requested(use_dotenv):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level")
@click.argument("message")
@click.option("--meta", "meta_pairs", multiple=True, metavar="KEY=VALUE", help="Attach metadata; repeatable.")
@click.option(
    "--folder",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also append the entry to <folder>/<YYYY-MM-DD>.log.",
)
@click.option(
    "--console-level",
    type=click.Choice(list(SEVERITY_SCALE.names), case_sensitive=False),
    default=LogLevel.DEBUG.severity,
    show_default=True,
    help="Least severe level printed on the console.",
)
@click.option("--no-console", is_flag=True, default=False, help="Skip the console transport.")
def cli_emit(
    level: str,
    message: str,
    meta_pairs: tuple[str, ...],
    folder: Path | None,
    console_level: str,
    no_console: bool,
) -> None:
    """Send MESSAGE at LEVEL through the console and optional file transport."""

    if SEVERITY_SCALE.lookup(level) is None:
        raise click.BadParameter(UNKNOWN_LEVEL.format(level=level), param_hint="LEVEL")
    meta = _parse_meta(meta_pairs)
    config = runtime.RuntimeConfig(
        enable_console=not no_console,
        console_level=console_level,
        file_folder=folder,
        file_level=LogLevel.DEBUG,
    )
    outcome = asyncio.run(_emit(config, level, message, meta))
    if outcome["failed"]:
        raise click.ClickException(f"{outcome['failed']} transport(s) failed to store the entry")


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--folder",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write the demo entries to a daily log file in this folder.",
)
def cli_logdemo(folder: Path | None) -> None:
    """Emit one sample entry per severity level."""

    config = runtime.RuntimeConfig(console_level=LogLevel.DEBUG, file_folder=folder, file_level=LogLevel.DEBUG)
    count = asyncio.run(_logdemo(config))
    click.echo(f"emitted {count} entries")
    if folder is not None:
        click.echo(f"log files written to {folder}")


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the CLI with error handling and return the exit code.

    Traceback preferences are restored afterwards so embedding callers keep
    their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
