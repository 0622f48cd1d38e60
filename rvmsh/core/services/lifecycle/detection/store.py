"""
L3 Detection — Installed-version store (read-only filesystem view).

Layout::

    <home>/.<runtime>/<version>/bin/<executables>

A version directory counts as installed for listings only when it has
a ``bin/`` subdirectory.  ``is_installed`` checks bare existence, so
``add`` never clobbers a directory of that name and ``remove`` can
still clean up a broken one.  Staging directories carry a reserved
dot-prefix and are never listed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rvmsh.core.context import home_dir
from rvmsh.core.errors import VersionNotFound
from rvmsh.core.services.lifecycle.domain.versions import matches_prefix

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".rvm-staging-"

_NOT_A_NAME = ("", ".", "..")
_SEPARATORS = tuple(s for s in (os.sep, os.altsep, "\0") if s)


def runtime_home(runtime: str) -> Path:
    """The runtime's home directory, e.g. ``~/.node``."""
    return home_dir() / f".{runtime}"


def version_dir(runtime: str, version: str) -> Path:
    """``<runtime home>/<version>``; the name must be one path component.

    Raises:
        VersionNotFound: ``version`` is empty, ``.``/``..``, or contains a
            path separator or NUL.
    """
    if version in _NOT_A_NAME or any(c in version for c in _SEPARATORS):
        raise VersionNotFound(version, list_installed(runtime))
    return runtime_home(runtime) / version


def bin_dir(runtime: str, version: str) -> Path:
    return version_dir(runtime, version) / "bin"


def is_installed(runtime: str, version: str) -> bool:
    """Whether a directory for this version exists (no ``bin/`` check)."""
    installed = version_dir(runtime, version).exists()
    logger.debug("%s %s installed: %s", runtime, version, installed)
    return installed


def list_installed(runtime: str) -> list[str]:
    """Installed versions, sorted descending by plain string comparison.

    The ordering is lexical, not semantic (``v9.0.0`` sorts above
    ``v20.0.0``); callers must not rely on it meaning "newest first".
    """
    home = runtime_home(runtime)
    if not home.is_dir():
        return []

    versions = [
        entry.name
        for entry in home.iterdir()
        if entry.is_dir()
        and not entry.name.startswith(STAGING_PREFIX)
        and (entry / "bin").is_dir()
    ]
    versions.sort(reverse=True)
    return versions


def resolve_installed(runtime: str, specifier: str) -> str:
    """Resolve a loose specifier against the locally installed set.

    Tried in order: exact name, ``v``-prefixed name, major
    (``"18"`` → ``v18.20.0``), major.minor (``"18.20"`` → ``v18.20.0``).

    Raises:
        VersionNotFound: Nothing matched; ``available`` lists what is
            installed.
    """
    installed = list_installed(runtime)
    value = specifier.strip()

    if not installed:
        raise VersionNotFound(value, [])

    if value in installed:
        return value

    prefixed = value if value.startswith("v") else f"v{value}"
    if prefixed in installed:
        return prefixed

    if value.isdigit() or value.count(".") == 1:
        for candidate in installed:
            if matches_prefix(candidate, prefixed):
                return candidate

    raise VersionNotFound(value, installed)


def directory_size(path: Path) -> int:
    """Total size in bytes of all regular files below ``path``."""
    total = 0
    for root, _dirs, files in os.walk(path):
        for name in files:
            file_path = Path(root) / name
            if file_path.is_symlink():
                continue
            try:
                total += file_path.stat().st_size
            except OSError:
                continue
    return total
