"""
L4 Execution — HTTP fetch of feeds and payloads.

Thin wrapper over ``urllib.request``.  No retries: a failed transfer
is surfaced verbatim to the caller.
"""

from __future__ import annotations

import json
import logging
import platform
import urllib.error
import urllib.request
from typing import Any

from rvmsh.core.context import get_settings
from rvmsh.core.errors import DownloadFailed, UnsupportedArchitecture

logger = logging.getLogger(__name__)

_ARCH_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

_CHUNK = 64 * 1024


def get_architecture() -> str:
    """Machine architecture as runtime distributors name it.

    Returns:
        ``"x64"`` or ``"arm64"``.

    Raises:
        UnsupportedArchitecture: Any other machine type.
    """
    machine = platform.machine().lower()
    arch = _ARCH_MAP.get(machine)
    if arch is None:
        raise UnsupportedArchitecture(machine or "unknown")
    return arch


def fetch_bytes(url: str, *, accept: str | None = None) -> bytes:
    """Download ``url`` fully into memory.

    Raises:
        DownloadFailed: HTTP error status, unreachable host or a
            broken stream.
    """
    settings = get_settings()
    headers = {"User-Agent": settings.user_agent}
    if accept:
        headers["Accept"] = accept

    logger.info("Fetching %s", url)
    req = urllib.request.Request(url, headers=headers)
    try:
        with urllib.request.urlopen(req, timeout=settings.http_timeout) as resp:
            total = resp.headers.get("Content-Length")
            chunks: list[bytes] = []
            received = 0
            for chunk in iter(lambda: resp.read(_CHUNK), b""):
                chunks.append(chunk)
                received += len(chunk)
            logger.debug("Fetched %d bytes (declared %s) from %s", received, total or "?", url)
            return b"".join(chunks)
    except urllib.error.HTTPError as e:
        raise DownloadFailed(url, f"HTTP {e.code}") from e
    except urllib.error.URLError as e:
        raise DownloadFailed(url, str(e.reason)) from e
    except OSError as e:
        raise DownloadFailed(url, str(e)) from e


def fetch_text(url: str) -> str:
    return fetch_bytes(url).decode("utf-8", errors="replace")


def fetch_json(url: str, *, accept: str = "application/json") -> Any:
    """Download and decode a JSON document.

    Raises:
        DownloadFailed: Transfer failed or the body is not valid JSON.
    """
    raw = fetch_bytes(url, accept=accept)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DownloadFailed(url, f"invalid JSON: {e}") from e
