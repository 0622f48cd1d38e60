"""
Tests for CLI commands — lifecycle commands, listings and global options.
"""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from rvmsh.adapters import registry as registry_module
from rvmsh.adapters.registry import RuntimeRegistry
from rvmsh.adapters.runtimes.go import GoRuntime
from rvmsh.core.errors import DownloadFailed
from rvmsh.main import cli
from tests.fakes import FakeNodeRuntime, node_tarball, node_url


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_registry(monkeypatch, downloads) -> RuntimeRegistry:
    """Default registry with an in-memory Node.js feed."""
    for version in ("v21.6.1", "v20.12.0", "v20.11.0", "v18.20.0"):
        downloads[node_url(version)] = node_tarball(version)
    registry = RuntimeRegistry()
    registry.register(FakeNodeRuntime())
    registry.register(GoRuntime())
    monkeypatch.setattr(registry_module, "_default", registry)
    return registry


def _invoke(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestCLIGlobal:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        assert "Node.js, Go and TailwindCSS" in result.output
        for command in ("add", "remove", "prune", "update", "set", "use", "current", "list"):
            assert command in result.output

    def test_version(self):
        result = _invoke("--version")
        assert result.exit_code == 0
        assert "rvm" in result.output
        assert "0.1.0" in result.output

    def test_bad_config(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("- not a mapping\n")
        result = _invoke("--config", str(config), "list", "runtimes")
        assert result.exit_code == 1
        assert "❌" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = _invoke("-c", str(tmp_path / "nope.yml"), "list", "runtimes")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestListCommands:
    def test_runtimes(self):
        result = _invoke("list", "runtimes")
        assert result.exit_code == 0
        assert "node (Node.js)" in result.output
        assert "go (Go)" in result.output
        assert "tailwindcss (TailwindCSS)" in result.output

    def test_runtimes_json(self):
        result = _invoke("list", "runtimes", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == ["go", "node", "tailwindcss"]

    def test_available(self, fake_registry):
        result = _invoke("list", "available", "node")
        assert result.exit_code == 0
        assert "=== Stable Versions ===" in result.output
        assert "21.6: 21.6.1, 21.6.0" in result.output

    def test_available_json(self, fake_registry):
        result = _invoke("list", "available", "node", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["version"] == "v22.0.0-rc.1"
        assert data[0]["channel"] == "RC"

    def test_available_feed_failure(self, monkeypatch):
        def _fail(url):
            raise DownloadFailed(url, "HTTP 503")

        monkeypatch.setattr("rvmsh.adapters.runtimes.go.fetch_text", _fail)
        result = _invoke("list", "available", "go")
        assert result.exit_code == 1
        assert "❌ Failed to fetch available versions for go" in result.output

    def test_installed_empty(self, fake_registry):
        result = _invoke("list", "installed", "node")
        assert result.exit_code == 0
        assert "No Node.js versions installed" in result.output

    def test_unknown_runtime(self):
        result = _invoke("list", "installed", "ruby")
        assert result.exit_code == 1
        assert "❌ Unsupported runtime: ruby" in result.output


class TestLifecycleCommands:
    def test_add_then_list(self, fake_registry):
        result = _invoke("add", "node", "20.11.0")
        assert result.exit_code == 0, result.output
        assert "✅ Node.js v20.11.0 installed and set as default" in result.output

        result = _invoke("list", "installed", "node", "--json")
        assert json.loads(result.output) == {
            "runtime": "node",
            "installed": ["v20.11.0"],
            "default": "v20.11.0",
        }

        result = _invoke("list", "installed", "node")
        assert "✓ v20.11.0" in result.output
        assert "← default" in result.output

    def test_add_twice(self, fake_registry):
        _invoke("add", "node", "20.11.0")
        result = _invoke("add", "node", "20.11.0")
        assert result.exit_code == 1
        assert "❌ Version v20.11.0 is already installed" in result.output

    def test_add_unknown_version(self, fake_registry):
        result = _invoke("add", "node", "99")
        assert result.exit_code == 1
        assert "❌ Version 99 not found" in result.output

    def test_current(self, fake_registry):
        result = _invoke("current", "node")
        assert result.exit_code == 0
        assert "No default Node.js version set" in result.output

        _invoke("add", "node", "18")
        result = _invoke("current", "node", "--json")
        assert json.loads(result.output) == {"runtime": "node", "version": "v18.20.0"}

    def test_set_lists_installed_on_miss(self, fake_registry):
        _invoke("add", "node", "20.11.0")
        result = _invoke("set", "node", "16")
        assert result.exit_code == 1
        assert "❌ Version 16 not found" in result.output
        assert "Installed: v20.11.0" in result.output

    def test_set(self, fake_registry):
        _invoke("add", "node", "18")
        _invoke("add", "node", "20.11.0")
        result = _invoke("set", "node", "18")
        assert result.exit_code == 0
        assert "v18.20.0 is now the default version" in result.output

    def test_use(self, fake_registry, home: Path):
        _invoke("add", "node", "20.11.0")
        result = _invoke("use", "node", "20.11")
        assert result.exit_code == 0
        assert f'export PATH="{home}/.node/v20.11.0/bin:$PATH"' in result.output

    def test_prune_and_remove(self, fake_registry):
        _invoke("add", "node", "18")
        _invoke("add", "node", "20.11.0")
        result = _invoke("prune", "node", "20.11")
        assert result.exit_code == 0
        assert "v18.20.0" in result.output
        assert "Freed" in result.output

        result = _invoke("remove", "node")
        assert result.exit_code == 0
        assert "Removed all 1 Node.js versions" in result.output

    def test_update(self, fake_registry):
        result = _invoke("update", "node")
        assert result.exit_code == 0
        assert "Updated Node.js to v21.6.1" in result.output

        result = _invoke("update", "node")
        assert "already up to date" in result.output

    def test_remove_outside_runtime_home(self, fake_registry, home: Path):
        (home / ".ssh").mkdir()
        _invoke("add", "node", "20.11.0")
        result = _invoke("remove", "node", "../.ssh")
        assert result.exit_code == 1
        assert "❌ Version ../.ssh not found" in result.output
        assert (home / ".ssh").is_dir()
