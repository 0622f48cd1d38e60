"""
Runtime adapters — one implementation per managed runtime.
"""

from rvmsh.adapters.base import ArchiveRuntime, Runtime, SingleBinaryRuntime  # noqa: F401
from rvmsh.adapters.registry import (  # noqa: F401
    RuntimeRegistry,
    default_registry,
    get_runtime,
)
