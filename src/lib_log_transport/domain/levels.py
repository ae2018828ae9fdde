"""Severity scale shared by the dispatcher and every transport.

Purpose
-------
Provide one totally ordered set of severities (``error`` < ``warn`` <
``info`` < ``log`` < ``debug`` in verbosity) together with the lookup used to
decide whether a transport accepts an entry.

Contents
--------
* :class:`LogLevel` enum with rank, name and icon helpers.
* :class:`SeverityScale` mapping level names to ranks.
* :data:`SEVERITY_SCALE` - the process-wide scale injected into collaborators.

System Role
-----------
The dispatcher validates levels against the scale before fan-out; transports
only compare ranks through the same instance so the two never diverge.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping

from .errors import UnknownLevelError
from .messages import UNKNOWN_LEVEL


class LogLevel(Enum):
    """Enumerated severities; lower values are more severe."""

    ERROR = 0
    WARN = 1
    INFO = 2
    LOG = 3
    DEBUG = 4

    @property
    def rank(self) -> int:
        """Return the numeric rank (0 is the most severe)."""

        return self.value

    @property
    def severity(self) -> str:
        """Return the lowercase name used in persisted records."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        return _ICON_TABLE[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve ``name`` case-insensitively.

        Examples
        --------
        >>> LogLevel.from_name("Warn") is LogLevel.WARN
        True
        """

        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise UnknownLevelError(UNKNOWN_LEVEL.format(level=name)) from exc


_ICON_TABLE = {
    LogLevel.ERROR: "✖",
    LogLevel.WARN: "⚠",
    LogLevel.INFO: "ℹ",
    LogLevel.LOG: "•",
    LogLevel.DEBUG: "🐞",
}


class SeverityScale:
    """Name-to-rank lookup with the delivery rule used by transports.

    Examples
    --------
    >>> scale = SeverityScale()
    >>> scale.rank("info"), scale.rank("verbose")
    (2, None)
    >>> scale.allows("error", "warn"), scale.allows("debug", "warn")
    (True, False)
    """

    def __init__(self, levels: Iterable[LogLevel] = LogLevel) -> None:
        self._levels: dict[str, LogLevel] = {level.severity: level for level in levels}

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._levels)

    def as_mapping(self) -> Mapping[str, int]:
        return {name: level.rank for name, level in self._levels.items()}

    def lookup(self, level: LogLevel | str) -> LogLevel | None:
        """Return the :class:`LogLevel` for ``level`` or ``None`` when unknown."""

        if isinstance(level, LogLevel):
            return level if self._levels.get(level.severity) is level else None
        if not isinstance(level, str):
            return None
        return self._levels.get(level.strip().lower())

    def rank(self, level: LogLevel | str) -> int | None:
        resolved = self.lookup(level)
        return None if resolved is None else resolved.rank

    def require(self, level: LogLevel | str) -> LogLevel:
        """Return the resolved level or raise :class:`UnknownLevelError`."""

        resolved = self.lookup(level)
        if resolved is None:
            raise UnknownLevelError(UNKNOWN_LEVEL.format(level=level))
        return resolved

    def allows(self, level: LogLevel | str, threshold: LogLevel | str) -> bool:
        """Return ``True`` when ``level`` is at least as severe as ``threshold``."""

        entry_rank = self.rank(level)
        threshold_rank = self.rank(threshold)
        if entry_rank is None or threshold_rank is None:
            return False
        return entry_rank <= threshold_rank


SEVERITY_SCALE = SeverityScale()
# Shared by Log and every transport; never copy it per sink.


__all__ = ["LogLevel", "SEVERITY_SCALE", "SeverityScale"]
