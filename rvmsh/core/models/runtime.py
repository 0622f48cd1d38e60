"""
Runtime descriptor and operation results.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class RuntimeDescriptor:
    """Identity of a supported runtime.  Defined once, never persisted.

    ``native_prefix`` is the runtime's own version prefix (``"v"`` for
    Node, ``"go"`` for Go).  ``executables`` are paths relative to the
    version directory that must be marked executable after install.
    """

    name: str
    binary_name: str
    display_name: str
    native_prefix: str = "v"
    executables: tuple[str, ...] = field(default_factory=tuple)


class SessionCheck(BaseModel):
    """Output of the disposable session-verification script."""

    ok: bool
    stdout: str = ""
    stderr: str = ""
    bin_path: str = ""


class OperationResult(BaseModel):
    """What a lifecycle operation did, for display or ``--json`` output."""

    operation: str
    runtime: str
    version: str | None = None
    removed: list[str] = Field(default_factory=list)
    freed_bytes: int = 0
    already_current: bool = False
    profile_reloaded: bool = False
    session: SessionCheck | None = None
    message: str = ""
