"""
L4 Execution — Profile reload and session verification.

A child process can never change its parent shell's environment.
Both helpers here are confirmation steps: they run a throwaway shell
that sources the profile and report what it sees.
"""

from __future__ import annotations

import logging
import os
import shlex
import tempfile
from pathlib import Path

from rvmsh.core.context import get_settings, profile_path
from rvmsh.core.models.runtime import SessionCheck
from rvmsh.core.services.lifecycle.detection.store import bin_dir
from rvmsh.core.services.lifecycle.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

_SESSION_SCRIPT = """\
#!/usr/bin/env {shell}
[ -f {profile} ] && . {profile}
export PATH={bin_path}:"$PATH"
if command -v {binary} >/dev/null 2>&1; then
    echo "{runtime} version: $({binary} --version 2>&1 | head -n 1)"
    echo "Location: $(command -v {binary})"
else
    echo "{runtime} not found in PATH" >&2
    exit 1
fi
"""


def reload_profile() -> bool:
    """Source the profile in a child shell to check it still parses.

    Returns:
        True if the shell exited cleanly; False if there is no profile
        or sourcing failed.

    Raises:
        CommandExecutionFailed: The configured shell cannot be started.
    """
    path = profile_path()
    if not path.is_file():
        logger.info("No profile at %s to reload", path)
        return False

    shell = get_settings().shell
    result = run_command([shell, "-c", f". {shlex.quote(str(path))}"])
    if not result["ok"]:
        logger.warning("Couldn't reload %s: %s", path, result.get("stderr") or result.get("error"))
        return False
    logger.info("Profile %s reloaded", path)
    return True


def render_session_script(runtime: str, version: str, binary: str) -> str:
    return _SESSION_SCRIPT.format(
        shell=get_settings().shell,
        profile=shlex.quote(str(profile_path())),
        bin_path=shlex.quote(str(bin_dir(runtime, version))),
        binary=shlex.quote(binary),
        runtime=runtime,
    )


def apply_to_session(runtime: str, version: str, binary: str) -> SessionCheck:
    """Verify which ``binary`` a shell would run with ``version`` in front.

    Writes a disposable script to a private temp file, runs it with the
    configured shell, and deletes it.

    Raises:
        CommandExecutionFailed: The configured shell cannot be started.
    """
    script = render_session_script(runtime, version, binary)
    fd, script_name = tempfile.mkstemp(prefix="rvm_session_", suffix=".sh")
    script_path = Path(script_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(script)
        script_path.chmod(0o700)
        result = run_command([get_settings().shell, str(script_path)])
    finally:
        script_path.unlink(missing_ok=True)

    check = SessionCheck(
        ok=result["ok"],
        stdout=result.get("stdout", ""),
        stderr=result.get("stderr", "") or result.get("error", ""),
        bin_path=str(bin_dir(runtime, version)),
    )
    if not check.ok:
        logger.warning("Session check for %s %s failed: %s", runtime, version, check.stderr.strip())
    return check
