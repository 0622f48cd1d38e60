"""
Configuration loader — reads config.yml into the Settings model.

This is the primary entry point for loading user configuration.
It reads YAML, validates against the Pydantic schema, and applies
environment overrides on top.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from rvmsh.core.errors import ConfigError
from rvmsh.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config location (relative to the home directory)
CONFIG_RELATIVE_PATH = Path(".config") / "rvmsh" / "config.yml"

# Environment variable → Settings field
_ENV_OVERRIDES = {
    "RVMSH_HOME": "home_dir",
    "RVMSH_PROFILE": "profile_path",
    "RVMSH_TOOL_TAG": "tool_tag",
}

__all__ = ["ConfigError", "find_config_file", "load_settings"]


def find_config_file() -> Path | None:
    """Locate the config file.

    ``$RVMSH_CONFIG`` wins; otherwise ``~/.config/rvmsh/config.yml``
    is used when it exists.

    Returns:
        Path to the config file, or None if there is none.
    """
    explicit = os.environ.get("RVMSH_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    home = os.environ.get("HOME")
    if not home:
        return None
    candidate = Path(home) / CONFIG_RELATIVE_PATH
    return candidate if candidate.is_file() else None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit config path. If None, ``find_config_file()`` is used;
            no file at all yields defaults.

    Returns:
        Validated Settings with environment overrides applied.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file()

    data: dict = {}
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        logger.debug("Loading settings from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Expected a YAML mapping in {path}, got {type(loaded).__name__}")
        data = loaded

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug("Effective settings: tool_tag=%s shell=%s", settings.tool_tag, settings.shell)
    return settings
