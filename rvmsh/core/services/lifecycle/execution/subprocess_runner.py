"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called.  Used only for
best-effort conveniences (profile reload, session verification);
nothing here is correctness-critical for install or remove.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

from rvmsh.core.errors import CommandExecutionFailed

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    *,
    timeout: int = 30,
    cwd: str | None = None,
) -> dict[str, Any]:
    """Run a command and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        timeout: Seconds before ``TimeoutExpired``.
        cwd: Working directory for the command.

    Returns:
        ``{"ok": True, "stdout": "...", "stderr": "...", "returncode": 0,
        "elapsed_ms": N}`` on success; ``"ok": False`` plus ``"error"``
        on a non-zero exit or timeout.

    Raises:
        CommandExecutionFailed: The executable could not be started.
    """
    logger.debug("Running: %s", cmd)
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)", "stdout": "", "stderr": ""}
    except OSError as e:
        raise CommandExecutionFailed(" ".join(cmd), str(e)) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    outcome: dict[str, Any] = {
        "ok": result.returncode == 0,
        "stdout": result.stdout[-4000:] if result.stdout else "",
        "stderr": result.stderr[-2000:] if result.stderr else "",
        "returncode": result.returncode,
        "elapsed_ms": elapsed_ms,
    }
    if result.returncode != 0:
        outcome["error"] = f"Command failed (exit {result.returncode})"
    return outcome
