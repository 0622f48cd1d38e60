"""
Shared test fixtures and configuration.

Every test runs with ``$HOME`` pointed at a fresh temp directory, the
settings singleton reset, and no real shell or network access.
"""

from pathlib import Path

import pytest

from rvmsh.core.context import reset_settings
from rvmsh.core.errors import DownloadFailed

_RVMSH_ENV = (
    "RVMSH_CONFIG",
    "RVMSH_HOME",
    "RVMSH_PROFILE",
    "RVMSH_TOOL_TAG",
    "RVMSH_LOG_LEVEL",
    "RVMSH_LOG_FILE",
    "RVMSH_LOG_FILE_LEVEL",
)


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch) -> Path:
    """Return an isolated home directory (also exported as $HOME)."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for name in _RVMSH_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield home_dir
    reset_settings()


@pytest.fixture
def profile(home: Path) -> Path:
    """Return the default profile path (not created)."""
    return home / ".profile"


@pytest.fixture(autouse=True)
def shell_calls(monkeypatch) -> list[list[str]]:
    """Record shell invocations instead of running them."""
    calls: list[list[str]] = []

    def _fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        return {"ok": True, "stdout": "", "stderr": "", "returncode": 0, "elapsed_ms": 1}

    monkeypatch.setattr(
        "rvmsh.core.services.lifecycle.execution.session.run_command", _fake_run
    )
    return calls


@pytest.fixture
def downloads(monkeypatch) -> dict[str, bytes]:
    """Serve payload downloads from an in-memory ``url → bytes`` map."""
    served: dict[str, bytes] = {}

    def _fake_fetch(url, **kwargs):
        if url not in served:
            raise DownloadFailed(url, "HTTP 404")
        return served[url]

    monkeypatch.setattr("rvmsh.adapters.base.fetch_bytes", _fake_fetch)
    monkeypatch.setattr("rvmsh.adapters.base.get_architecture", lambda: "x64")
    return served
