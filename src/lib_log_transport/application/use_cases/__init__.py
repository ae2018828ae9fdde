"""Application use cases: fan-out and shutdown."""

from __future__ import annotations

from ._diagnostics import build_diagnostic_emitter, log_diagnostic
from .fan_out import FanOutResult, fan_out
from .shutdown import create_shutdown

__all__ = ["FanOutResult", "build_diagnostic_emitter", "create_shutdown", "fan_out", "log_diagnostic"]
