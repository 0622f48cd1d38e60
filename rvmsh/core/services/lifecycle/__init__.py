"""
Version lifecycle service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (domain → resolver → detection → execution →
orchestration)::

    from rvmsh.core.services.lifecycle import resolve, group_for_display
"""

# ── L1: Domain ──
from rvmsh.core.services.lifecycle.domain.grouping import (  # noqa: F401
    group_for_display,
)
from rvmsh.core.services.lifecycle.domain.versions import (  # noqa: F401
    classify,
    parse_components,
)

# ── L2: Resolver ──
from rvmsh.core.services.lifecycle.resolver.version_resolver import (  # noqa: F401
    resolve,
)

# ── L3: Detection ──
from rvmsh.core.services.lifecycle.detection.store import (  # noqa: F401
    is_installed,
    list_installed,
    resolve_installed,
    runtime_home,
)

# ── L4: Execution ──
from rvmsh.core.services.lifecycle.execution.profile import (  # noqa: F401
    add_entry,
    current_default,
    remove_all_entries,
    remove_entry,
    set_default,
)
from rvmsh.core.services.lifecycle.execution.session import (  # noqa: F401
    apply_to_session,
    reload_profile,
)
