"""
Tests for the lifecycle engine — add, remove, prune, update, set, use.

Feeds are served from memory and payload downloads from the
``downloads`` fixture; nothing touches the network or a real shell.
"""

from pathlib import Path

import pytest

from rvmsh.core.errors import (
    DownloadFailed,
    ExtractionFailed,
    VersionAlreadyInstalled,
    VersionNotFound,
)
from rvmsh.core.services.lifecycle.detection import store
from rvmsh.core.services.lifecycle.execution import profile as prof
from tests.fakes import FakeNodeRuntime, node_tarball, node_url


@pytest.fixture
def node(downloads) -> FakeNodeRuntime:
    for version in ("v21.6.1", "v20.12.0", "v20.11.0", "v18.20.0"):
        downloads[node_url(version)] = node_tarball(version)
    return FakeNodeRuntime()


def _staging_dirs(home: Path) -> list[Path]:
    runtime_home = home / ".node"
    if not runtime_home.exists():
        return []
    return [p for p in runtime_home.iterdir() if p.name.startswith(store.STAGING_PREFIX)]


class TestAdd:
    def test_install_then_remove(self, node, home: Path, profile: Path):
        result = node.add("v20.11.0")

        assert result.version == "v20.11.0"
        assert store.is_installed("node", "v20.11.0")
        assert store.list_installed("node") == ["v20.11.0"]
        binary = home / ".node" / "v20.11.0" / "bin" / "node"
        assert binary.stat().st_mode & 0o777 == 0o755
        assert prof.current_default("node") == "v20.11.0"

        node.remove("v20.11.0")
        assert not store.is_installed("node", "v20.11.0")
        assert not (home / ".node" / "v20.11.0").exists()
        assert prof.current_default("node") is None

    def test_default_is_latest(self, node):
        assert node.add().version == "v21.6.1"

    def test_major(self, node):
        assert node.add("18").version == "v18.20.0"

    def test_already_installed(self, node):
        node.add("20.11.0")
        with pytest.raises(VersionAlreadyInstalled):
            node.add("20.11.0")

    def test_unknown_version(self, node, home: Path):
        with pytest.raises(VersionNotFound):
            node.add("99")
        assert not (home / ".node").exists() or store.list_installed("node") == []

    def test_reloads_profile(self, node, shell_calls):
        result = node.add("20.11.0")
        assert result.profile_reloaded is True
        assert shell_calls and shell_calls[-1][0] == "bash"

    def test_download_failure_leaves_nothing(self, node, downloads, home: Path):
        del downloads[node_url("v20.12.0")]
        with pytest.raises(DownloadFailed):
            node.add("20.12.0")
        assert not store.is_installed("node", "v20.12.0")
        assert _staging_dirs(home) == []

    def test_corrupt_archive_leaves_nothing(self, node, downloads, home: Path):
        downloads[node_url("v20.12.0")] = b"garbage"
        with pytest.raises(ExtractionFailed):
            node.add("20.12.0")
        assert store.list_installed("node") == []
        assert _staging_dirs(home) == []


class TestRemove:
    def test_without_prefix(self, node):
        node.add("20.11.0")
        result = node.remove("20.11.0")
        assert result.removed == ["v20.11.0"]
        assert result.freed_bytes > 0

    def test_not_installed(self, node):
        node.add("20.11.0")
        with pytest.raises(VersionNotFound) as exc:
            node.remove("v18.20.0")
        assert exc.value.available == ["v20.11.0"]

    @pytest.mark.parametrize("name", ["..", "../.ssh", "", " ", "."])
    def test_refuses_paths_outside_runtime_home(self, node, home: Path, name: str):
        secret = home / ".ssh" / "id_ed25519"
        secret.parent.mkdir()
        secret.write_text("key")
        node.add("20.11.0")
        node.add("18")

        with pytest.raises(VersionNotFound):
            node.remove(name)

        assert secret.read_text() == "key"
        assert store.list_installed("node") == ["v20.11.0", "v18.20.0"]

    def test_remove_all(self, node, home: Path, profile: Path):
        node.add("20.11.0")
        node.add("18")
        result = node.remove()
        assert sorted(result.removed) == ["v18.20.0", "v20.11.0"]
        assert not (home / ".node").exists()
        assert "node" not in profile.read_text()

    def test_remove_all_nothing_installed(self, node):
        result = node.remove()
        assert result.removed == []
        assert "No Node.js versions" in result.message


class TestPrune:
    def test_keeps_one(self, node, home: Path):
        node.add("18")
        node.add("20.11.0")
        node.add("20.12.0")
        result = node.prune("20.11")

        assert result.version == "v20.11.0"
        assert sorted(result.removed) == ["v18.20.0", "v20.12.0"]
        assert store.list_installed("node") == ["v20.11.0"]
        assert prof.current_default("node") == "v20.11.0"

    def test_keep_not_installed(self, node):
        node.add("18")
        with pytest.raises(VersionNotFound):
            node.prune("20")

    def test_nothing_to_prune(self, node):
        node.add("18")
        result = node.prune("18")
        assert result.removed == []
        assert prof.current_default("node") == "v18.20.0"


class TestUpdate:
    def test_installs_latest(self, node):
        result = node.update()
        assert result.operation == "update"
        assert result.version == "v21.6.1"
        assert store.is_installed("node", "v21.6.1")
        assert prof.current_default("node") == "v21.6.1"

    def test_fetches_feed_once(self, node):
        node.update()
        assert node.fetch_count == 1

    def test_already_current_reasserts_default(self, node):
        node.add("latest")
        node.add("18")
        assert prof.current_default("node") == "v18.20.0"

        result = node.update()
        assert result.already_current is True
        assert prof.current_default("node") == "v21.6.1"


class TestSwitch:
    def test_set_default(self, node, shell_calls):
        node.add("18")
        node.add("20.11.0")
        result = node.set_default("18")

        assert result.version == "v18.20.0"
        assert prof.current_default("node") == "v18.20.0"
        assert result.session is not None and result.session.ok

    def test_set_unknown(self, node):
        with pytest.raises(VersionNotFound):
            node.set_default("20")

    def test_use_does_not_persist(self, node, profile: Path):
        node.add("18")
        node.add("20.11.0")
        before = profile.read_text()

        result = node.use_version("18")
        assert result.version == "v18.20.0"
        assert result.session.bin_path.endswith("v18.20.0/bin")
        assert profile.read_text() == before

    def test_list_installed_and_current(self, node):
        node.add("18")
        assert node.list_installed() == ["v18.20.0"]
        assert node.current_version() == "v18.20.0"


class TestListAvailable:
    def test_grouped(self, node):
        lines = node.list_available()
        assert lines[0] == "=== Stable Versions ==="
        assert "21.6: 21.6.1, 21.6.0" in lines
        assert "=== LTS Versions ===" in lines
        assert any("(RC)" in line for line in lines)
