"""File transport adapters."""

from __future__ import annotations

from .daily_file import DailyFileTransport

__all__ = ["DailyFileTransport"]
