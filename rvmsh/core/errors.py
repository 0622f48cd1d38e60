"""
Error taxonomy — every failure the lifecycle engine can report.

Components raise these instead of printing or exiting.  The command
surface (``rvmsh.ui.cli``) is the only place that turns an ``RvmError``
into a terminal message and a non-zero exit status.
"""

from __future__ import annotations


class RvmError(Exception):
    """Base class for all rvmsh failures."""


# ── Runtime / platform ──────────────────────────────────────────


class UnsupportedRuntime(RvmError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported runtime: {name}")


class UnsupportedArchitecture(RvmError):
    def __init__(self, arch: str):
        self.arch = arch
        super().__init__(f"Unsupported architecture: {arch}")


# ── Versions ────────────────────────────────────────────────────


class VersionNotFound(RvmError):
    """No release (remote) or installed version matched a specifier.

    ``available`` carries the installed versions when the lookup was
    made against the local store, so the caller can show them.
    """

    def __init__(self, specifier: str, available: list[str] | None = None):
        self.specifier = specifier
        self.available = list(available or [])
        super().__init__(f"Version {specifier} not found")


class VersionAlreadyInstalled(RvmError):
    def __init__(self, runtime: str, version: str):
        self.runtime = runtime
        self.version = version
        super().__init__(f"Version {version} is already installed")


class VersionFetchFailed(RvmError):
    def __init__(self, runtime: str, reason: str):
        self.runtime = runtime
        self.reason = reason
        super().__init__(f"Failed to fetch available versions for {runtime}: {reason}")


# ── Payload transfer ────────────────────────────────────────────


class DownloadFailed(RvmError):
    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Download failed: {url}{detail}")


class ExtractionFailed(RvmError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to extract archive: {reason}")


class RemovalFailed(RvmError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to remove {path}: {reason}")


# ── Environment ─────────────────────────────────────────────────


class HomeDirectoryNotFound(RvmError):
    def __init__(self) -> None:
        super().__init__("Home directory not found")


class ProfileAccessFailed(RvmError):
    """The shell profile could not be read or rewritten."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot update shell profile {path}: {reason}")


class CommandExecutionFailed(RvmError):
    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Command execution failed: {command}: {reason}")


class ConfigError(RvmError):
    """Raised when the rvmsh configuration file is invalid."""
