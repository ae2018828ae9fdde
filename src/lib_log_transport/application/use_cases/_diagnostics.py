"""Build the guarded diagnostic emitter used across the pipeline."""

from __future__ import annotations

import logging
from typing import Any

from lib_log_transport.application.ports.diagnostic import DiagnosticEmitter, DiagnosticHook

LOGGER = logging.getLogger("lib_log_transport.diagnostics")


def log_diagnostic(name: str, payload: dict[str, Any]) -> None:
    """Default hook: forward diagnostics to :mod:`logging`."""

    level = logging.ERROR if name.endswith("_failed") else logging.INFO
    exc = payload.get("exception")
    details = " ".join(f"{key}={value}" for key, value in sorted(payload.items()) if key != "exception")
    if exc is not None:
        LOGGER.log(level, "%s %s exception=%r", name, details, exc)
    else:
        LOGGER.log(level, "%s %s", name, details)


def build_diagnostic_emitter(hook: DiagnosticHook) -> DiagnosticEmitter:
    """Return an emitter that never raises, whatever ``hook`` does.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append(name))
    >>> emit("transport_connected", {})
    >>> seen
    ['transport_connected']
    """

    target = hook if hook is not None else log_diagnostic

    def emit(name: str, payload: dict[str, Any]) -> None:
        try:
            target(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)

    return emit


__all__ = ["build_diagnostic_emitter", "log_diagnostic"]
