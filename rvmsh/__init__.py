"""rvmsh — a per-user runtime version manager."""

__version__ = "0.1.0"
