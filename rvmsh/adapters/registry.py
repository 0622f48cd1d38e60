"""
Runtime registry — central lookup for all managed runtimes.

The CLI never instantiates a runtime directly; it asks the registry
by name.  New runtimes are added by registering them here, the
lifecycle engine is never touched.
"""

from __future__ import annotations

import logging

from rvmsh.adapters.base import Runtime
from rvmsh.core.errors import UnsupportedRuntime

logger = logging.getLogger(__name__)


class RuntimeRegistry:
    """Registry of runtimes keyed by name."""

    def __init__(self) -> None:
        self._runtimes: dict[str, Runtime] = {}

    def register(self, runtime: Runtime) -> None:
        """Register a runtime.

        Args:
            runtime: The runtime instance to register.
        """
        name = runtime.name
        if name in self._runtimes:
            logger.warning("Overwriting existing runtime: %s", name)
        self._runtimes[name] = runtime
        logger.debug("Registered runtime: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a runtime from the registry."""
        self._runtimes.pop(name, None)

    def get(self, name: str) -> Runtime:
        """Look up a runtime by name.

        Raises:
            UnsupportedRuntime: Nothing is registered under ``name``.
        """
        runtime = self._runtimes.get(name.strip().lower())
        if runtime is None:
            raise UnsupportedRuntime(name)
        return runtime

    def list_runtimes(self) -> list[str]:
        """List all registered runtime names, sorted."""
        return sorted(self._runtimes)

    def __contains__(self, name: str) -> bool:
        return name in self._runtimes


_default: RuntimeRegistry | None = None


def default_registry() -> RuntimeRegistry:
    """The process-wide registry with the built-in runtimes."""
    global _default
    if _default is None:
        from rvmsh.adapters.runtimes import GoRuntime, NodeRuntime, TailwindCssRuntime

        registry = RuntimeRegistry()
        for runtime in (NodeRuntime(), GoRuntime(), TailwindCssRuntime()):
            registry.register(runtime)
        _default = registry
    return _default


def get_runtime(name: str) -> Runtime:
    """Shortcut for ``default_registry().get(name)``."""
    return default_registry().get(name)
