"""
L2 Resolver — ``__init__.py`` re-exports the version resolver.
"""

from rvmsh.core.services.lifecycle.resolver.version_resolver import (  # noqa: F401
    resolve,
    to_native,
)
