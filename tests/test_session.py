"""
Tests for profile reload, session verification and the subprocess runner.
"""

import subprocess
from pathlib import Path

import pytest

from rvmsh.core.context import set_settings
from rvmsh.core.errors import CommandExecutionFailed
from rvmsh.core.models.settings import Settings
from rvmsh.core.services.lifecycle.execution import session
from rvmsh.core.services.lifecycle.execution.subprocess_runner import run_command


class TestReloadProfile:
    def test_no_profile_runs_nothing(self, shell_calls):
        assert session.reload_profile() is False
        assert shell_calls == []

    def test_sources_profile(self, profile: Path, shell_calls):
        profile.write_text("export A=1\n")
        assert session.reload_profile() is True
        assert shell_calls == [["bash", "-c", f". {profile}"]]

    def test_failure_is_false(self, profile: Path, monkeypatch):
        profile.write_text("exit 3\n")
        monkeypatch.setattr(
            session,
            "run_command",
            lambda cmd, **kw: {"ok": False, "stdout": "", "stderr": "boom", "returncode": 3},
        )
        assert session.reload_profile() is False

    def test_configured_shell(self, profile: Path, shell_calls):
        set_settings(Settings(shell="zsh"))
        profile.write_text("")
        session.reload_profile()
        assert shell_calls[0][0] == "zsh"


class TestApplyToSession:
    def test_script_contents(self, home: Path):
        script = session.render_session_script("node", "v20.11.0", "node")
        assert f"{home}/.node/v20.11.0/bin" in script
        assert "command -v node" in script
        assert script.startswith("#!/usr/bin/env bash")

    def test_temp_script_removed(self, monkeypatch):
        seen: dict[str, bool] = {}

        def _fake_run(cmd, **kwargs):
            path = Path(cmd[1])
            seen["existed"] = path.exists()
            seen["mode"] = path.stat().st_mode & 0o777
            seen["path"] = str(path)
            return {"ok": True, "stdout": "node version: v20.11.0\n", "stderr": "", "returncode": 0}

        monkeypatch.setattr(session, "run_command", _fake_run)
        check = session.apply_to_session("node", "v20.11.0", "node")

        assert check.ok
        assert "v20.11.0" in check.stdout
        assert seen["existed"] and seen["mode"] == 0o700
        assert "rvm_session_" in seen["path"]
        assert not Path(seen["path"]).exists()

    def test_failed_check(self, monkeypatch):
        monkeypatch.setattr(
            session,
            "run_command",
            lambda cmd, **kw: {"ok": False, "stdout": "", "stderr": "node not found in PATH", "returncode": 1},
        )
        check = session.apply_to_session("node", "v20.11.0", "node")
        assert not check.ok
        assert "not found" in check.stderr

    def test_script_removed_on_error(self, monkeypatch):
        paths: list[str] = []

        def _boom(cmd, **kwargs):
            paths.append(cmd[1])
            raise CommandExecutionFailed(cmd[0], "No such file or directory")

        monkeypatch.setattr(session, "run_command", _boom)
        with pytest.raises(CommandExecutionFailed):
            session.apply_to_session("node", "v20.11.0", "node")
        assert not Path(paths[0]).exists()


class TestRunCommand:
    def test_success(self, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 0, stdout="hi\n", stderr=""),
        )
        result = run_command(["echo", "hi"])
        assert result["ok"] is True
        assert result["stdout"] == "hi\n"
        assert "error" not in result

    def test_nonzero(self, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 2, stdout="", stderr="bad"),
        )
        result = run_command(["false"])
        assert result["ok"] is False
        assert result["returncode"] == 2
        assert "exit 2" in result["error"]

    def test_timeout(self, monkeypatch):
        def _timeout(cmd, **kw):
            raise subprocess.TimeoutExpired(cmd, kw.get("timeout"))

        monkeypatch.setattr(subprocess, "run", _timeout)
        result = run_command(["sleep", "100"], timeout=1)
        assert result["ok"] is False
        assert "timed out" in result["error"]

    def test_missing_executable(self, monkeypatch):
        def _missing(cmd, **kw):
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(subprocess, "run", _missing)
        with pytest.raises(CommandExecutionFailed):
            run_command(["no-such-shell", "-c", "true"])
