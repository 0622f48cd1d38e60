"""
Process context — the active settings and the user's home directory.

The settings are set ONCE at startup by whichever entry point runs:

    - CLI:    main.py   → context.set_settings(load_settings(...))
    - Tests:  conftest  → context.reset_settings()

Design notes:
    - Module-level singleton (not a class).
    - get_settings() lazily falls back to defaults so library callers
      need no setup.
    - Nothing here caches filesystem or profile state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from rvmsh.core.errors import HomeDirectoryNotFound
from rvmsh.core.models.settings import Settings

_settings: Optional[Settings] = None


def set_settings(settings: Settings) -> None:
    """Register the settings for the current process."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    """Return the current settings, defaulting if none were set."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the registered settings (tests)."""
    global _settings
    _settings = None


def home_dir() -> Path:
    """The user's home directory.

    Raises:
        HomeDirectoryNotFound: ``$HOME`` is unset and no ``home_dir``
            is configured.
    """
    configured = get_settings().home_dir
    if configured:
        return Path(configured).expanduser()
    home = os.environ.get("HOME")
    if not home:
        raise HomeDirectoryNotFound()
    return Path(home)


def profile_path() -> Path:
    """The persisted shell startup file (default ``~/.profile``)."""
    configured = get_settings().profile_path
    if configured:
        return Path(configured).expanduser()
    return home_dir() / ".profile"
