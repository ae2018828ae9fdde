"""Shutdown orchestration closing every registered transport."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from typing import Awaitable

from lib_log_transport.application.ports.diagnostic import DiagnosticEmitter
from lib_log_transport.application.ports.transport import TransportPort


def create_shutdown(
    *,
    transports: Callable[[], Sequence[TransportPort]],
    emit: DiagnosticEmitter,
) -> Callable[[], Awaitable[None]]:
    """Return an async callable closing the transports supplied by ``transports``."""

    async def shutdown() -> None:
        """Close each transport; one failing close does not skip the others."""
        for transport in tuple(transports()):
            close = getattr(transport, "close", None)
            if close is None:
                continue
            try:
                result = close()
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:  # noqa: BLE001
                emit(
                    "transport_close_failed",
                    {"transport": getattr(transport, "name", repr(transport)), "exception": exc},
                )

    return shutdown


__all__ = ["create_shutdown"]
