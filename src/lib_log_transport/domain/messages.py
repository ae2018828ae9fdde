"""Message templates shared by the dispatcher and the transports."""

from __future__ import annotations

UNKNOWN_LEVEL = "Unknown log level: {level!r}"
OPTION_REQUIRED = "{transport}: {option!r} option is required"
OPTIONS_REQUIRED_ONE_OF = "{transport}: must provide either {first} or {second}"
INVALID_IDENTIFIER = "{transport}: {option} {value!r} is not a valid identifier"
TRANSPORT_CLOSED = "{transport}: transport is closed"
TRANSPORT_NOT_READY = "{transport}: transport failed to initialise"
DRIVER_MISSING = "{transport}: driver module {module!r} is unavailable ({hint})"
NO_RUNNING_LOOP = "Log.{method}() requires a running asyncio event loop"
NO_SUCH_TIMER = "No such timer: {label}"
TIMER_ELAPSED = "{label}: {elapsed_ms:.3f}ms"

__all__ = [
    "DRIVER_MISSING",
    "INVALID_IDENTIFIER",
    "NO_RUNNING_LOOP",
    "NO_SUCH_TIMER",
    "OPTIONS_REQUIRED_ONE_OF",
    "OPTION_REQUIRED",
    "TIMER_ELAPSED",
    "TRANSPORT_CLOSED",
    "TRANSPORT_NOT_READY",
    "UNKNOWN_LEVEL",
]
