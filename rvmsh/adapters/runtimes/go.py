"""
Go runtime — tar.gz archives from go.dev.

The feed is the go.dev download page itself: every release has a
``<div id="go1.23.1">`` block.  The page is scraped with BeautifulSoup
into a JSON-style array of ``{"version": "go1.23.1", "stable": true}``
ordered stable → rc → beta, newest first inside each group.

Versions are stored on disk as ``v1.23.1`` rather than ``go1.23.1``.
"""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from rvmsh.adapters.base import ArchiveRuntime
from rvmsh.core.context import get_settings
from rvmsh.core.errors import UnsupportedArchitecture
from rvmsh.core.models.release import Channel, Release
from rvmsh.core.models.runtime import RuntimeDescriptor
from rvmsh.core.services.lifecycle.domain.versions import (
    classify,
    parse_components,
    prerelease_sort_key,
    strip_prefix,
)
from rvmsh.core.services.lifecycle.execution.download import fetch_text

GO = RuntimeDescriptor(
    name="go",
    binary_name="go",
    display_name="Go",
    native_prefix="go",
    executables=("bin/go", "bin/gofmt"),
)

_GO_ARCH = {"x64": "amd64", "arm64": "arm64"}


def parse_download_page(html: str) -> list[dict[str, Any]]:
    """Extract release ids from the go.dev/dl page.

    Returns:
        ``[{"version": "go1.23.1", "stable": True}, ...]``; stable
        releases first, then release candidates, then betas.
    """
    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    stable: list[str] = []
    rc: list[str] = []
    beta: list[str] = []

    for div in soup.select("div[id^='go']"):
        ident = div.get("id", "")
        if len(ident) <= 2 or not ident[2].isdigit() or ident in seen:
            continue
        seen.add(ident)
        if "rc" in ident:
            rc.append(ident)
        elif "beta" in ident:
            beta.append(ident)
        else:
            stable.append(ident)

    for group in (stable, rc, beta):
        group.sort(key=prerelease_sort_key, reverse=True)

    return (
        [{"version": v, "stable": True} for v in stable]
        + [{"version": v, "stable": False} for v in rc]
        + [{"version": v, "stable": False} for v in beta]
    )


class GoRuntime(ArchiveRuntime):
    """The Go toolchain."""

    @property
    def descriptor(self) -> RuntimeDescriptor:
        return GO

    def fetch_available_versions(self) -> Any:
        return parse_download_page(fetch_text(get_settings().feeds.go_downloads))

    def parse_releases(self, raw: Any) -> list[Release]:
        releases = []
        for entry in raw:
            version = entry["version"]
            major, minor, patch = parse_components(version)
            releases.append(
                Release(
                    version=version,
                    channel=classify(version),
                    stable=bool(entry["stable"]),
                    major=major,
                    minor=minor,
                    patch=patch,
                )
            )
        return releases

    def display_releases(self, releases: list[Release]) -> list[Release]:
        """Hide pre-releases that are not newer than the newest stable line."""
        newest = next((r for r in releases if r.stable), None)
        if newest is None:
            return releases
        floor = (newest.major, newest.minor)
        return [
            r for r in releases
            if r.stable or (r.channel is not Channel.STABLE and (r.major, r.minor) > floor)
        ]

    def storage_version(self, feed_version: str) -> str:
        return f"v{strip_prefix(feed_version)}"

    def download_url(self, feed_version: str, arch: str) -> str:
        go_arch = _GO_ARCH.get(arch)
        if go_arch is None:
            raise UnsupportedArchitecture(arch)
        base = get_settings().feeds.go_dist.rstrip("/")
        return f"{base}/{feed_version}.linux-{go_arch}.tar.gz"
