"""Optional ``.env`` loading for the console configuration.

Purpose
-------
Let operators keep ``HUB_CONSOLE_*`` settings in a ``.env`` file next to the
host application. Loading uses :mod:`dotenv` and never overrides variables
that are already present in the environment.

Contents
--------
* :func:`enable_dotenv` - locate and load the nearest ``.env`` once.
* :data:`DOTENV_TOGGLE` - environment variable enabling the CLI default.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_TOGGLE = "HUB_CONSOLE_DOTENV"

_LOADED_PATH: Path | None = None
_ATTEMPTED = False


def enable_dotenv(search_from: str | Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking up from ``search_from`` (default: cwd).

    Returns the resolved path that was loaded, or ``None`` when no file was
    found. Repeated calls return the first result without reloading.
    """
    global _LOADED_PATH, _ATTEMPTED
    if _ATTEMPTED:
        return _LOADED_PATH
    _ATTEMPTED = True
    if search_from is None:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    else:
        candidate = _search_upwards(Path(search_from))
    if candidate is None:
        logger.debug("no .env file found")
        return None
    resolved = candidate.resolve()
    load_dotenv(resolved, override=False)
    _LOADED_PATH = resolved
    logger.debug("loaded environment from %s", resolved)
    return resolved


def dotenv_requested(flag: bool | None) -> bool:
    """Return whether ``.env`` loading is wanted; an explicit CLI flag wins."""

    if flag is not None:
        return flag
    return os.environ.get(DOTENV_TOGGLE, "").strip().lower() in {"1", "true", "yes", "on"}


def _search_upwards(start: Path) -> Path | None:
    directory = start if start.is_dir() else start.parent
    for folder in (directory, *directory.resolve().parents):
        candidate = folder / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_PATH, _ATTEMPTED
    _LOADED_PATH = None
    _ATTEMPTED = False


__all__ = ["DOTENV_TOGGLE", "dotenv_requested", "enable_dotenv"]
