"""
L2 Resolver — loose specifier → one concrete upstream version.

Pure function over its inputs.  Rule precedence:

    1. latest       → first release flagged stable
    2. lts          → first release flagged LTS
    3. "20"         → first stable release of major 20
    4. "20.11"      → first stable release of 20.11
    5. anything else → exact match after native-prefix normalization

The release list is trusted to be sorted newest-first within each
channel; the resolver does not re-sort.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rvmsh.core.errors import VersionNotFound
from rvmsh.core.models.release import Release, VersionSpecifier
from rvmsh.core.services.lifecycle.domain.versions import matches_prefix

logger = logging.getLogger(__name__)


def to_native(value: str, native_prefix: str) -> str:
    """Normalize a user-typed version into the runtime's naming.

    ``"1.23.0"`` → ``"go1.23.0"`` and ``"v1.23.0"`` → ``"go1.23.0"`` for
    Go; ``"20.11.0"`` → ``"v20.11.0"`` for Node.
    """
    if not native_prefix or value.startswith(native_prefix):
        return value
    if native_prefix != "v" and value.startswith("v"):
        value = value[1:]
    return f"{native_prefix}{value}"


def resolve(
    specifier: str | VersionSpecifier,
    releases: Sequence[Release],
    native_prefix: str = "v",
) -> str:
    """Resolve a specifier against a canonical release list.

    Args:
        specifier: Raw user text or an already parsed specifier.
        releases: Canonical releases, newest-first per channel.
        native_prefix: The runtime's version prefix (``"v"``, ``"go"``).

    Returns:
        The matching release's version string, verbatim from the feed.

    Raises:
        VersionNotFound: No rule produced a match.
    """
    spec = (
        specifier
        if isinstance(specifier, VersionSpecifier)
        else VersionSpecifier.parse(specifier)
    )
    match: Release | None = None

    if spec.kind == "latest":
        match = next((r for r in releases if r.stable), None)
    elif spec.kind == "lts":
        match = next((r for r in releases if r.lts), None)
    elif spec.kind in ("major", "major_minor"):
        target = to_native(spec.value, native_prefix)
        match = next(
            (r for r in releases if r.stable and matches_prefix(r.version, target)),
            None,
        )
    else:
        target = to_native(spec.value, native_prefix)
        match = next((r for r in releases if r.version == target), None)

    if match is None:
        logger.debug("No %s match for %r among %d releases", spec.kind, spec.value, len(releases))
        raise VersionNotFound(str(spec))

    logger.debug("Resolved %r (%s) → %s", spec.value, spec.kind, match.version)
    return match.version
