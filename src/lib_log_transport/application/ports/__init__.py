"""Ports consumed by the application layer."""

from __future__ import annotations

from .diagnostic import DiagnosticEmitter, DiagnosticHook
from .time import ClockPort
from .transport import TransportPort

__all__ = ["ClockPort", "DiagnosticEmitter", "DiagnosticHook", "TransportPort"]
