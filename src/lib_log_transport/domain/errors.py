"""Exception hierarchy for configuration and transport lifecycle errors."""

from __future__ import annotations


class UnknownLevelError(ValueError):
    """Raised when a severity name is not part of the scale."""


class TransportConfigError(ValueError):
    """Raised synchronously when a transport receives invalid options."""


class TransportClosedError(RuntimeError):
    """Raised inside a transport when a write arrives after ``close()``."""


class TransportNotReadyError(RuntimeError):
    """Raised inside a transport whose readiness work failed."""


__all__ = [
    "TransportClosedError",
    "TransportConfigError",
    "TransportNotReadyError",
    "UnknownLevelError",
]
