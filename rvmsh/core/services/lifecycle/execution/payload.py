"""
L4 Execution — Archive extraction, staging and promotion.

Installs are staged under a reserved dot-prefixed directory inside the
runtime home (invisible to listings) and promoted with a single
rename.  The caller deletes the staging directory on any failure
before promotion.
"""

from __future__ import annotations

import io
import logging
import shutil
import tarfile
import tempfile
from pathlib import Path

from rvmsh.core.errors import ExtractionFailed, RemovalFailed
from rvmsh.core.services.lifecycle.detection.store import STAGING_PREFIX

logger = logging.getLogger(__name__)

# URL suffix → tarfile read mode
_CONTAINER_MODES = {
    "tar.xz": "r:xz",
    "tar.gz": "r:gz",
}

_SUFFIXES = (
    (".tar.xz", "tar.xz"),
    (".txz", "tar.xz"),
    (".tar.gz", "tar.gz"),
    (".tgz", "tar.gz"),
)


def container_kind(url: str) -> str:
    """Identify the archive container from the source URL's suffix.

    Raises:
        ExtractionFailed: The suffix is not a supported container.
    """
    path = url.split("?", 1)[0].lower()
    for suffix, kind in _SUFFIXES:
        if path.endswith(suffix):
            return kind
    raise ExtractionFailed(f"Unsupported archive format: {url}")


def extract(data: bytes, kind: str, destination: Path) -> None:
    """Decode an archive held in memory and write its files.

    Raises:
        ExtractionFailed: Unknown kind, corrupt or empty archive.
    """
    mode = _CONTAINER_MODES.get(kind)
    if mode is None:
        raise ExtractionFailed(f"Unsupported archive format: {kind}")

    destination.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode=mode) as tar:
            members = tar.getmembers()
            if not members:
                raise ExtractionFailed("Archive is empty")
            tar.extractall(destination, filter="data")
    except ExtractionFailed:
        raise
    except (tarfile.TarError, EOFError, OSError, ValueError) as e:
        raise ExtractionFailed(str(e)) from e

    logger.debug("Extracted %d members into %s", len(members), destination)


def normalize_layout(staging: Path) -> Path:
    """Locate the payload root inside a staging directory.

    Archives normally unpack to one top-level directory
    (``node-v20.11.0-linux-x64/``, ``go/``); that directory is the
    payload.  Anything else is taken as-is.
    """
    entries = list(staging.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return staging


def create_staging(runtime_home: Path, version: str) -> Path:
    """Create a fresh, listing-invisible staging directory."""
    runtime_home.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f"{STAGING_PREFIX}{version}-", dir=runtime_home))


def discard_staging(staging: Path) -> None:
    if staging.exists():
        logger.debug("Discarding staging directory %s", staging)
        shutil.rmtree(staging, ignore_errors=True)


def promote(payload_root: Path, staging: Path, target: Path) -> None:
    """Move the staged payload to its final version directory.

    Raises:
        ExtractionFailed: The rename failed (target exists, cross-device…).
    """
    try:
        payload_root.rename(target)
    except OSError as e:
        raise ExtractionFailed(f"Cannot move payload into {target}: {e}") from e

    if payload_root != staging:
        shutil.rmtree(staging, ignore_errors=True)
    logger.debug("Promoted %s → %s", payload_root, target)


def make_executable(path: Path) -> None:
    """Set ``rwxr-xr-x`` on ``path`` if it exists."""
    if path.exists():
        path.chmod(0o755)


def remove_version_dir(path: Path) -> None:
    """Recursively delete an installed version directory.

    Raises:
        RemovalFailed: The directory (or a file in it) could not be deleted.
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
    except OSError as e:
        raise RemovalFailed(str(path), str(e)) from e
