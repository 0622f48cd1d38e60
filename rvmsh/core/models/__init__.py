"""
Domain models — Pydantic types for rvmsh.

All models are re-exported here for convenient access:

    from rvmsh.core.models import Release, Channel, VersionSpecifier, Settings
"""

from rvmsh.core.models.release import Channel, Release, VersionSpecifier
from rvmsh.core.models.runtime import OperationResult, RuntimeDescriptor, SessionCheck
from rvmsh.core.models.settings import FeedUrls, Settings

__all__ = [
    # release.py
    "Channel",
    "Release",
    "VersionSpecifier",
    # runtime.py
    "OperationResult",
    "RuntimeDescriptor",
    "SessionCheck",
    # settings.py
    "FeedUrls",
    "Settings",
]
