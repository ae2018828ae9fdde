"""Diagnostic hook type shared by the dispatcher and transports.

The hook receives an event name (``transport_connected``,
``transport_write_failed`` ...) and a payload dictionary. It is the only
channel through which transport failures become visible; callers of
:meth:`lib_log_transport.Log.log` never see them as exceptions.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]
DiagnosticEmitter = Callable[[str, dict[str, Any]], None]

__all__ = ["DiagnosticEmitter", "DiagnosticHook"]
