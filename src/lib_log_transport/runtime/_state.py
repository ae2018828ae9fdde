"""Runtime state container and access helpers."""

from __future__ import annotations

from threading import RLock

from lib_log_transport.log import Log

_STATE: Log | None = None
_STATE_LOCK = RLock()


def set_runtime(log: Log) -> None:
    """Install ``log`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = log


def clear_runtime() -> None:
    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> Log:
    """Return the active dispatcher or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_log_transport.runtime.init() must be called before using the logging API")
        return _STATE


def is_initialised() -> bool:
    with _STATE_LOCK:
        return _STATE is not None


__all__ = ["clear_runtime", "current_runtime", "is_initialised", "set_runtime"]
