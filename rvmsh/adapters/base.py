"""
Runtime base — the capability contract between the CLI and a runtime.

The lifecycle engine (``rvmsh.core.services.lifecycle.orchestration``)
is written once against this interface.  A concrete runtime only
describes itself and its upstream:

    1. ``descriptor``               — name, binary, native version prefix
    2. ``fetch_available_versions`` — raw feed payload
    3. ``parse_releases``           — raw payload → canonical ``Release`` list
    4. ``download_url``             — where a resolved version's payload lives
    5. ``stage_payload``            — put the payload into a staging dir

To add a runtime, subclass ``ArchiveRuntime`` or ``SingleBinaryRuntime``
and register it in the ``RuntimeRegistry``; the engine never changes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rvmsh.core.errors import DownloadFailed, VersionFetchFailed
from rvmsh.core.models.release import Release
from rvmsh.core.models.runtime import OperationResult, RuntimeDescriptor
from rvmsh.core.services.lifecycle import orchestration
from rvmsh.core.services.lifecycle.execution.download import fetch_bytes, get_architecture
from rvmsh.core.services.lifecycle.execution.payload import (
    container_kind,
    extract,
    normalize_layout,
)
from rvmsh.core.services.lifecycle.resolver.version_resolver import resolve

logger = logging.getLogger(__name__)


class Runtime(ABC):
    """Abstract base class for every managed runtime."""

    # ── Identity ────────────────────────────────────────────────

    @property
    @abstractmethod
    def descriptor(self) -> RuntimeDescriptor:
        """Static identity of this runtime."""

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def binary_name(self) -> str:
        return self.descriptor.binary_name

    # ── Release feed ────────────────────────────────────────────

    @abstractmethod
    def fetch_available_versions(self) -> Any:
        """Fetch the raw upstream feed (one network round trip, no cache)."""

    @abstractmethod
    def parse_releases(self, raw: Any) -> list[Release]:
        """Map the raw feed to releases sorted newest-first per channel."""

    def releases(self) -> list[Release]:
        """Fetch and parse the feed.

        Raises:
            VersionFetchFailed: Transfer failed or the payload has an
                unexpected shape.
        """
        try:
            raw = self.fetch_available_versions()
        except DownloadFailed as e:
            raise VersionFetchFailed(self.name, str(e)) from e
        try:
            releases = self.parse_releases(raw)
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
            raise VersionFetchFailed(self.name, f"unexpected feed format: {e}") from e
        logger.debug("%s feed: %d releases", self.name, len(releases))
        return releases

    def display_releases(self, releases: list[Release]) -> list[Release]:
        """Releases worth showing in ``list available`` (default: all)."""
        return releases

    def resolve_version(self, specifier: str) -> str:
        """Resolve a loose specifier against a fresh copy of the feed."""
        return resolve(specifier, self.releases(), self.descriptor.native_prefix)

    def storage_version(self, feed_version: str) -> str:
        """Directory name used for a feed version under the runtime home."""
        return feed_version

    # ── Payload ─────────────────────────────────────────────────

    @abstractmethod
    def download_url(self, feed_version: str, arch: str) -> str:
        """URL of the payload for ``feed_version`` on ``arch``."""

    @abstractmethod
    def stage_payload(self, feed_version: str, staging: Path) -> Path:
        """Download the payload into ``staging``.

        Returns:
            The directory to promote to ``<home>/.<runtime>/<version>``;
            it must contain ``bin/``.
        """

    # ── Capabilities (delegated to the lifecycle engine) ────────

    def add(self, version: str | None = None) -> OperationResult:
        return orchestration.add(self, version)

    def remove(self, version: str | None = None) -> OperationResult:
        return orchestration.remove(self, version)

    def update(self) -> OperationResult:
        return orchestration.update(self)

    def prune(self, keep_version: str) -> OperationResult:
        return orchestration.prune(self, keep_version)

    def set_default(self, version: str) -> OperationResult:
        return orchestration.set_default(self, version)

    def use_version(self, version: str) -> OperationResult:
        return orchestration.use_version(self, version)

    def list_installed(self) -> list[str]:
        return orchestration.list_installed(self)

    def list_available(self) -> list[str]:
        return orchestration.list_available(self)

    def current_version(self) -> str | None:
        return orchestration.current_version(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class ArchiveRuntime(Runtime):
    """A runtime distributed as a tar archive with a ``bin/`` directory."""

    def stage_payload(self, feed_version: str, staging: Path) -> Path:
        url = self.download_url(feed_version, get_architecture())
        kind = container_kind(url)
        data = fetch_bytes(url)
        logger.info("Downloaded %.1fMB for %s %s", len(data) / 1024 / 1024, self.name, feed_version)
        extract(data, kind, staging)
        return normalize_layout(staging)


class SingleBinaryRuntime(Runtime):
    """A runtime distributed as one standalone executable."""

    def stage_payload(self, feed_version: str, staging: Path) -> Path:
        url = self.download_url(feed_version, get_architecture())
        data = fetch_bytes(url)
        bin_path = staging / "bin"
        bin_path.mkdir(parents=True, exist_ok=True)
        (bin_path / self.binary_name).write_bytes(data)
        logger.info("Downloaded %.1fMB for %s %s", len(data) / 1024 / 1024, self.name, feed_version)
        return staging
