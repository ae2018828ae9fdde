"""Optional ``.env`` loading for hosts and the CLI.

``enable_dotenv`` walks up from the working directory, loads the first
``.env`` it finds with :mod:`python-dotenv` and never overrides variables that
are already set. The CLI calls it when ``--use-dotenv`` is given or when
``LOG_USE_DOTENV`` is truthy.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_loaded_path: Path | None = None


def dotenv_requested(explicit: bool | None = None) -> bool:
    """Return whether ``.env`` loading is wanted; an explicit flag wins."""

    if explicit is not None:
        return explicit
    return os.environ.get(DOTENV_ENV_VAR, "").strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file and return its resolved path.

    Subsequent calls return the first loaded path without reading again.
    """

    global _loaded_path
    if _loaded_path is not None:
        return _loaded_path
    if search_from is not None:
        candidate = _search_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    if candidate is None:
        return None
    load_dotenv(candidate, override=False)
    _loaded_path = candidate.resolve()
    return _loaded_path


def _search_upwards(start: Path) -> Path | None:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _loaded_path
    _loaded_path = None


__all__ = ["DOTENV_ENV_VAR", "dotenv_requested", "enable_dotenv"]
