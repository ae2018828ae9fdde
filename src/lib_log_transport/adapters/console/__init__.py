"""Console transport adapters."""

from __future__ import annotations

from .rich_console import ConsoleTransport

__all__ = ["ConsoleTransport"]
