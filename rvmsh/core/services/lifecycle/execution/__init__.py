"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: network fetches, archive
extraction, directory promotion, profile rewrites, subprocess calls.
"""

from rvmsh.core.services.lifecycle.execution.download import (  # noqa: F401
    fetch_bytes,
    fetch_json,
    fetch_text,
    get_architecture,
)
from rvmsh.core.services.lifecycle.execution.payload import (  # noqa: F401
    container_kind,
    create_staging,
    discard_staging,
    extract,
    make_executable,
    normalize_layout,
    promote,
    remove_version_dir,
)
from rvmsh.core.services.lifecycle.execution.profile import (  # noqa: F401
    add_entry,
    current_default,
    has_entry,
    remove_all_entries,
    remove_entry,
    set_default,
)
from rvmsh.core.services.lifecycle.execution.session import (  # noqa: F401
    apply_to_session,
    reload_profile,
)
from rvmsh.core.services.lifecycle.execution.subprocess_runner import (  # noqa: F401
    run_command,
)
