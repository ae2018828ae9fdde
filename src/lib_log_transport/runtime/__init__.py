"""Process-wide runtime façade.

Purpose
-------
Give host applications one place to build the dispatcher from a
:class:`RuntimeConfig` (plus ``LOG_*`` environment overrides), fetch it from
anywhere, and shut it down deterministically.

Contents
--------
* ``init`` - compose transports and install the runtime.
* ``get`` / ``is_initialised`` - accessors.
* ``shutdown_async`` / ``shutdown`` - flush pending entries, close transports.
"""

from __future__ import annotations

import asyncio

from lib_log_transport.log import Log

from ._composition import build_log, build_transports
from ._settings import RuntimeConfig, apply_environment
from ._state import clear_runtime, current_runtime, is_initialised, set_runtime


def init(config: RuntimeConfig | None = None) -> Log:
    """Compose the dispatcher described by ``config`` and install it.

    Raises
    ------
    RuntimeError
        When a runtime is already active; call :func:`shutdown` first.
    ValueError
        When an environment override cannot be parsed.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_transport.runtime.init() cannot be called twice without shutdown(); call shutdown() first",
        )
    settings = apply_environment(config or RuntimeConfig())
    log = build_log(settings)
    set_runtime(log)
    return log


def get() -> Log:
    return current_runtime()


async def shutdown_async() -> None:
    """Flush pending entries, close the transports and clear the runtime."""

    log = current_runtime()
    try:
        await log.close()
    finally:
        clear_runtime()


def shutdown() -> None:
    """Synchronous variant of :func:`shutdown_async` for hosts without a loop."""

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(
            "lib_log_transport.runtime.shutdown() cannot run inside an active event loop; await shutdown_async() instead",
        )
    asyncio.run(shutdown_async())


__all__ = [
    "RuntimeConfig",
    "apply_environment",
    "build_log",
    "build_transports",
    "get",
    "init",
    "is_initialised",
    "shutdown",
    "shutdown_async",
]
