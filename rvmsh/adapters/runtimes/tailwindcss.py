"""
TailwindCSS runtime — standalone executable from GitHub releases.

Feed: the GitHub releases API, an array of ``{tag_name, prerelease, ...}``.
The payload is a single file (``tailwindcss-linux-x64``) stored as
``<home>/.tailwindcss/<tag>/bin/tailwindcss``.
"""

from __future__ import annotations

from typing import Any

from rvmsh.adapters.base import SingleBinaryRuntime
from rvmsh.core.context import get_settings
from rvmsh.core.errors import UnsupportedArchitecture
from rvmsh.core.models.release import Channel, Release
from rvmsh.core.models.runtime import RuntimeDescriptor
from rvmsh.core.services.lifecycle.domain.versions import (
    classify,
    parse_components,
    prerelease_sort_key,
)
from rvmsh.core.services.lifecycle.execution.download import fetch_json

TAILWINDCSS = RuntimeDescriptor(
    name="tailwindcss",
    binary_name="tailwindcss",
    display_name="TailwindCSS",
    native_prefix="v",
    executables=("bin/tailwindcss",),
)


class TailwindCssRuntime(SingleBinaryRuntime):
    """TailwindCSS standalone CLI."""

    @property
    def descriptor(self) -> RuntimeDescriptor:
        return TAILWINDCSS

    def fetch_available_versions(self) -> Any:
        return fetch_json(
            get_settings().feeds.tailwindcss_releases,
            accept="application/vnd.github+json",
        )

    def parse_releases(self, raw: Any) -> list[Release]:
        releases = []
        for entry in raw:
            tag = entry["tag_name"]
            prerelease = bool(entry.get("prerelease", False))
            channel = classify(tag)
            # GitHub flags some pre-releases whose tag carries no suffix
            if prerelease and channel is Channel.STABLE:
                channel = Channel.BETA
            major, minor, patch = parse_components(tag)
            releases.append(
                Release(
                    version=tag,
                    channel=channel,
                    stable=not prerelease,
                    major=major,
                    minor=minor,
                    patch=patch,
                    extra={"published_at": entry.get("published_at", "")},
                )
            )
        releases.sort(key=lambda r: prerelease_sort_key(r.version), reverse=True)
        return releases

    def download_url(self, feed_version: str, arch: str) -> str:
        if arch not in ("x64", "arm64"):
            raise UnsupportedArchitecture(arch)
        base = get_settings().feeds.tailwindcss_dist.rstrip("/")
        return f"{base}/{feed_version}/tailwindcss-linux-{arch}"
