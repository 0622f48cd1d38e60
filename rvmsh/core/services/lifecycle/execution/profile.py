"""
L4 Execution — Shell profile mutator.

The user's shell startup file (``~/.profile`` by default) is the only
persisted record of which version is the default.  rvmsh owns
two-line tagged blocks inside it::

    # Added by rvm for node v20.11.0
    export PATH="/home/me/.node/v20.11.0/bin:$PATH"

Every mutation re-reads the whole file, filters or appends lines and
rewrites it atomically.  Nothing is cached between calls: the file may
be edited by hand at any time.  Concurrent invocations are
last-writer-wins.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from rvmsh.core.context import get_settings, profile_path
from rvmsh.core.errors import ProfileAccessFailed
from rvmsh.core.services.lifecycle.detection.store import bin_dir, runtime_home

logger = logging.getLogger(__name__)


# ── Block format ────────────────────────────────────────────────


def runtime_marker(runtime: str) -> str:
    """Comment prefix shared by every block of a runtime."""
    return f"# Added by {get_settings().tool_tag} for {runtime}"


def entry_marker(runtime: str, version: str) -> str:
    return f"{runtime_marker(runtime)} {version}"


def export_line(runtime: str, version: str) -> str:
    return f'export PATH="{bin_dir(runtime, version)}:$PATH"'


# ── File I/O ────────────────────────────────────────────────────


# Bytes that are not UTF-8 survive a read/rewrite cycle unchanged
_ENCODING = {"encoding": "utf-8", "errors": "surrogateescape"}


def _read_lines(path: Path) -> list[str]:
    if not path.is_file():
        return []
    try:
        return path.read_text(**_ENCODING).splitlines(keepends=True)
    except OSError as e:
        raise ProfileAccessFailed(str(path), str(e)) from e


def _write_lines(path: Path, lines: list[str]) -> None:
    """Rewrite the profile atomically (temp file + rename).

    Symlinked profiles are written through to their target and the
    original permission bits are kept.

    Raises:
        ProfileAccessFailed: The directory or file is not writable.
    """
    target = path.resolve()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".rvm_profile_", suffix=".tmp")
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", **_ENCODING) as f:
                f.writelines(lines)
            if target.exists():
                shutil.copymode(target, tmp)
            tmp.replace(target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise ProfileAccessFailed(str(target), str(e)) from e
    logger.debug("Rewrote %s (%d lines)", target, len(lines))


# ── Queries ─────────────────────────────────────────────────────


def has_entry(runtime: str, version: str) -> bool:
    """Whether any line already references this version's ``bin/`` path."""
    needle = str(bin_dir(runtime, version))
    return any(needle in line for line in _read_lines(profile_path()))


def current_default(runtime: str) -> str | None:
    """The version whose ``bin/`` the profile puts on PATH last, if any."""
    home = f"{runtime_home(runtime)}{os.sep}"
    found: str | None = None
    for line in _read_lines(profile_path()):
        stripped = line.strip()
        if stripped.startswith("#") or home not in stripped:
            continue
        rest = stripped.split(home, 1)[1]
        version = rest.split(os.sep, 1)[0]
        if version:
            found = version
    return found


# ── Mutations ───────────────────────────────────────────────────


def add_entry(runtime: str, version: str) -> bool:
    """Append the tagged block for ``runtime`` ``version``.

    No-op when a line already targets this version's ``bin/`` path.
    A last line without a newline gets one, so ``remove_entry`` restores
    newline-terminated content exactly and otherwise leaves that one
    newline behind.

    Returns:
        True if the file was changed.
    """
    if has_entry(runtime, version):
        logger.debug("%s %s already on PATH in profile", runtime, version)
        return False

    path = profile_path()
    lines = _read_lines(path)
    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    lines.append(f"{entry_marker(runtime, version)}\n")
    lines.append(f"{export_line(runtime, version)}\n")
    _write_lines(path, lines)

    logger.info("Added %s %s to PATH in %s", runtime, version, path)
    return True


def remove_entry(runtime: str, version: str) -> bool:
    """Drop the tagged block for one version.

    The comment line is always dropped once matched; the line after it
    is dropped only if it still references the version's ``bin/`` path
    (it may have been edited by hand).

    Returns:
        True if the file was changed.
    """
    path = profile_path()
    lines = _read_lines(path)
    if not lines:
        return False

    marker = entry_marker(runtime, version)
    target = str(bin_dir(runtime, version))
    kept: list[str] = []
    skip_next = False

    for line in lines:
        if line.strip() == marker:
            skip_next = True
            continue
        if skip_next and target in line:
            skip_next = False
            continue
        skip_next = False
        kept.append(line)

    if kept == lines:
        return False
    _write_lines(path, kept)
    logger.info("Removed %s %s from PATH in %s", runtime, version, path)
    return True


def remove_all_entries(runtime: str) -> bool:
    """Drop every block for a runtime, plus any stray line on its home path.

    Catches manually added or malformed entries that reference
    ``~/.<runtime>/``.

    Returns:
        True if the file was changed.
    """
    path = profile_path()
    lines = _read_lines(path)
    if not lines:
        return False

    prefix = runtime_marker(runtime)
    home = f"{runtime_home(runtime)}{os.sep}"
    kept = [
        line for line in lines
        if not (
            line.strip() == prefix
            or line.strip().startswith(f"{prefix} ")
            or home in line
        )
    ]

    if kept == lines:
        return False
    _write_lines(path, kept)
    logger.info("Removed all %s PATH entries from %s", runtime, path)
    return True


def set_default(runtime: str, version: str) -> None:
    """Leave exactly one PATH block for ``runtime``, pointing at ``version``.

    Two separate rewrites: a crash between them leaves no block at all.
    """
    remove_all_entries(runtime)
    add_entry(runtime, version)
    logger.info("Set %s %s as default", runtime, version)
