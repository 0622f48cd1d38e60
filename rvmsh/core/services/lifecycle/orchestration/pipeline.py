"""
L5 Orchestration — the version lifecycle engine.

Composes resolver, store, payload staging and the profile mutator
into the operations every runtime exposes.  Written once against the
``Runtime`` interface; one operation runs at a time per process and
no cross-process lock is taken (two overlapping invocations for the
same runtime race on the profile and on the version directory).

Terminal states per operation: success (an ``OperationResult``) or a
raised ``RvmError``.  Steps after a successful promotion or deletion
(profile reload, session verification) are best-effort and never
undo what came before.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rvmsh.core.errors import CommandExecutionFailed, VersionAlreadyInstalled, VersionNotFound
from rvmsh.core.models.runtime import OperationResult, SessionCheck
from rvmsh.core.services.lifecycle.detection import store
from rvmsh.core.services.lifecycle.domain.grouping import group_for_display
from rvmsh.core.services.lifecycle.execution import payload, profile, session

if TYPE_CHECKING:
    from rvmsh.adapters.base import Runtime

logger = logging.getLogger(__name__)


# ── Helpers ─────────────────────────────────────────────────────


def _reload() -> bool:
    try:
        return session.reload_profile()
    except CommandExecutionFailed as e:
        logger.warning("Profile reload skipped: %s", e)
        return False


def _verify(rt: Runtime, version: str) -> SessionCheck | None:
    try:
        return session.apply_to_session(rt.name, version, rt.binary_name)
    except CommandExecutionFailed as e:
        logger.warning("Session verification skipped: %s", e)
        return None


def _delete_version(rt: Runtime, version: str) -> int:
    """Strip the PATH block and delete the directory; returns bytes freed."""
    target = store.version_dir(rt.name, version)
    size = store.directory_size(target)
    profile.remove_entry(rt.name, version)
    payload.remove_version_dir(target)
    logger.info("Removed %s %s (%.1fMB freed)", rt.name, version, size / 1024 / 1024)
    return size


def install_payload(rt: Runtime, feed_version: str, version: str) -> None:
    """Stage, promote and mark executables for one version.

    Everything up to promotion happens in a dot-prefixed staging
    directory that listings ignore; on any failure before the final
    rename the staging directory is deleted and the error re-raised.
    """
    home = store.runtime_home(rt.name)
    target = store.version_dir(rt.name, version)
    staging = payload.create_staging(home, version)
    logger.debug("Staging %s %s in %s", rt.name, version, staging)

    try:
        payload_root = rt.stage_payload(feed_version, staging)
        payload.promote(payload_root, staging, target)
    except Exception:
        payload.discard_staging(staging)
        raise

    for relative in rt.descriptor.executables:
        payload.make_executable(target / relative)


def _install_as_default(rt: Runtime, feed_version: str, version: str) -> bool:
    install_payload(rt, feed_version, version)
    profile.set_default(rt.name, version)
    return _reload()


# ── Operations ──────────────────────────────────────────────────


def add(rt: Runtime, specifier: str | None = None) -> OperationResult:
    """Resolve, install and make default.

    Raises:
        VersionNotFound: The feed has no match.
        VersionAlreadyInstalled: A directory for that version exists.
        DownloadFailed / ExtractionFailed: Payload transfer failed.
    """
    spec = specifier or "latest"
    logger.info("Adding %s %s", rt.name, spec)

    feed_version = rt.resolve_version(spec)
    version = rt.storage_version(feed_version)
    logger.info("Resolved %s %s → %s", rt.name, spec, feed_version)

    if store.is_installed(rt.name, version):
        raise VersionAlreadyInstalled(rt.name, version)

    reloaded = _install_as_default(rt, feed_version, version)
    return OperationResult(
        operation="add",
        runtime=rt.name,
        version=version,
        profile_reloaded=reloaded,
        message=f"{rt.descriptor.display_name} {version} installed and set as default",
    )


def remove(rt: Runtime, version: str | None = None) -> OperationResult:
    """Remove one installed version, or every version when ``version`` is None.

    Removing everything also deletes the runtime home once it is empty.

    Raises:
        VersionNotFound: ``version`` is not installed.
    """
    if version is None:
        return _remove_all(rt)

    name = version.strip()
    if not store.is_installed(rt.name, name) and store.is_installed(rt.name, f"v{name}"):
        name = f"v{name}"
    if not store.is_installed(rt.name, name):
        raise VersionNotFound(name, store.list_installed(rt.name))

    freed = _delete_version(rt, name)
    reloaded = _reload()
    return OperationResult(
        operation="remove",
        runtime=rt.name,
        version=name,
        removed=[name],
        freed_bytes=freed,
        profile_reloaded=reloaded,
        message=f"{rt.descriptor.display_name} {name} removed",
    )


def _remove_all(rt: Runtime) -> OperationResult:
    installed = store.list_installed(rt.name)
    if not installed:
        return OperationResult(
            operation="remove",
            runtime=rt.name,
            message=f"No {rt.descriptor.display_name} versions are installed",
        )

    freed = sum(_delete_version(rt, v) for v in installed)

    home = store.runtime_home(rt.name)
    if home.is_dir() and not any(home.iterdir()):
        home.rmdir()
        logger.info("Removed empty %s", home)

    reloaded = _reload()
    return OperationResult(
        operation="remove",
        runtime=rt.name,
        removed=installed,
        freed_bytes=freed,
        profile_reloaded=reloaded,
        message=f"Removed all {len(installed)} {rt.descriptor.display_name} versions",
    )


def prune(rt: Runtime, keep_specifier: str) -> OperationResult:
    """Remove every installed version except the one ``keep_specifier`` names.

    The kept version always ends up as the default.

    Raises:
        VersionNotFound: ``keep_specifier`` matches no installed version.
    """
    keep = store.resolve_installed(rt.name, keep_specifier)
    doomed = [v for v in store.list_installed(rt.name) if v != keep]
    logger.info("Pruning %s: keeping %s, removing %d", rt.name, keep, len(doomed))

    freed = sum(_delete_version(rt, v) for v in doomed)
    profile.set_default(rt.name, keep)
    reloaded = _reload()

    message = (
        f"Pruned {len(doomed)} {rt.descriptor.display_name} versions, kept {keep}"
        if doomed
        else f"Only {keep} is installed, nothing to prune"
    )
    return OperationResult(
        operation="prune",
        runtime=rt.name,
        version=keep,
        removed=doomed,
        freed_bytes=freed,
        profile_reloaded=reloaded,
        message=message,
    )


def update(rt: Runtime) -> OperationResult:
    """Install the latest stable release, or re-assert it as default."""
    feed_version = rt.resolve_version("latest")
    version = rt.storage_version(feed_version)

    if store.is_installed(rt.name, version):
        profile.set_default(rt.name, version)
        reloaded = _reload()
        return OperationResult(
            operation="update",
            runtime=rt.name,
            version=version,
            already_current=True,
            profile_reloaded=reloaded,
            message=f"{rt.descriptor.display_name} is already up to date ({version})",
        )

    logger.info("Updating %s to %s", rt.name, feed_version)
    reloaded = _install_as_default(rt, feed_version, version)
    return OperationResult(
        operation="update",
        runtime=rt.name,
        version=version,
        profile_reloaded=reloaded,
        message=f"Updated {rt.descriptor.display_name} to {version}",
    )


def set_default(rt: Runtime, specifier: str) -> OperationResult:
    """Make an installed version the persisted default."""
    version = store.resolve_installed(rt.name, specifier)
    profile.set_default(rt.name, version)
    reloaded = _reload()
    check = _verify(rt, version)
    return OperationResult(
        operation="set",
        runtime=rt.name,
        version=version,
        profile_reloaded=reloaded,
        session=check,
        message=f"{rt.descriptor.display_name} {version} is now the default version",
    )


def use_version(rt: Runtime, specifier: str) -> OperationResult:
    """Verify an installed version for a one-off session (nothing persisted).

    Raises:
        VersionNotFound: Not installed.
        CommandExecutionFailed: The shell could not be started.
    """
    version = store.resolve_installed(rt.name, specifier)
    check = session.apply_to_session(rt.name, version, rt.binary_name)
    return OperationResult(
        operation="use",
        runtime=rt.name,
        version=version,
        session=check,
        message=f"{rt.descriptor.display_name} {version} is active for this session only",
    )


def list_installed(rt: Runtime) -> list[str]:
    return store.list_installed(rt.name)


def list_available(rt: Runtime) -> list[str]:
    releases = rt.display_releases(rt.releases())
    return group_for_display(releases)


def current_version(rt: Runtime) -> str | None:
    return profile.current_default(rt.name)
