"""
L3 Detection — ``__init__.py`` re-exports the installed-version store.

Read-only probes of the runtime home directories.
"""

from rvmsh.core.services.lifecycle.detection.store import (  # noqa: F401
    STAGING_PREFIX,
    bin_dir,
    directory_size,
    is_installed,
    list_installed,
    resolve_installed,
    runtime_home,
    version_dir,
)
