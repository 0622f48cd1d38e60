"""
Node.js runtime — tar.xz archives from nodejs.org.

Feed: ``https://nodejs.org/dist/index.json``, a JSON array of
``{version, date, files, lts, ...}`` newest first, where ``lts`` is
``false`` or the LTS codename (``"Iron"``).
"""

from __future__ import annotations

from typing import Any

from rvmsh.adapters.base import ArchiveRuntime
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

NODE = RuntimeDescriptor(
    name="node",
    binary_name="node",
    display_name="Node.js",
    native_prefix="v",
    executables=("bin/node", "bin/npm", "bin/npx", "bin/corepack"),
)


class NodeRuntime(ArchiveRuntime):
    """Node.js, LTS-aware."""

    @property
    def descriptor(self) -> RuntimeDescriptor:
        return NODE

    def fetch_available_versions(self) -> Any:
        return fetch_json(get_settings().feeds.node_index)

    def parse_releases(self, raw: Any) -> list[Release]:
        releases = []
        for entry in raw:
            version = entry["version"]
            lts_name = entry.get("lts") or None
            channel = classify(version, is_lts=bool(lts_name))
            major, minor, patch = parse_components(version)
            releases.append(
                Release(
                    version=version,
                    channel=channel,
                    stable=channel in (Channel.STABLE, Channel.LTS),
                    lts=bool(lts_name),
                    major=major,
                    minor=minor,
                    patch=patch,
                    extra={
                        "date": entry.get("date", ""),
                        "files": list(entry.get("files") or []),
                        "lts_name": lts_name if isinstance(lts_name, str) else None,
                    },
                )
            )
        releases.sort(key=lambda r: prerelease_sort_key(r.version), reverse=True)
        return releases

    def download_url(self, feed_version: str, arch: str) -> str:
        if arch not in ("x64", "arm64"):
            raise UnsupportedArchitecture(arch)
        base = get_settings().feeds.node_dist.rstrip("/")
        return f"{base}/{feed_version}/node-{feed_version}-linux-{arch}.tar.xz"
