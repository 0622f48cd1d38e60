"""
Concrete runtimes.
"""

from rvmsh.adapters.runtimes.go import GoRuntime  # noqa: F401
from rvmsh.adapters.runtimes.node import NodeRuntime  # noqa: F401
from rvmsh.adapters.runtimes.tailwindcss import TailwindCssRuntime  # noqa: F401
