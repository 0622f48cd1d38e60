"""
L5 Orchestration — ``__init__.py`` re-exports the lifecycle operations.
"""

from rvmsh.core.services.lifecycle.orchestration.pipeline import (  # noqa: F401
    add,
    current_version,
    install_payload,
    list_available,
    list_installed,
    prune,
    remove,
    set_default,
    update,
    use_version,
)
