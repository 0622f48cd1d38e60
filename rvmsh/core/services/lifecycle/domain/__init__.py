"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

from rvmsh.core.services.lifecycle.domain.grouping import (  # noqa: F401
    TRUNCATION_NOTICE,
    format_version_list,
    group_for_display,
)
from rvmsh.core.services.lifecycle.domain.versions import (  # noqa: F401
    classify,
    clean_version_for_display,
    compare_versions,
    matches_prefix,
    parse_components,
    prerelease_sort_key,
    strip_prefix,
    version_sort_key,
)
