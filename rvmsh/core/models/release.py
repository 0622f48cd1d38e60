"""
Release models — canonical view of an upstream release feed entry.

Every runtime's feed adapter maps its raw payload (JSON array, HTML
page, GitHub releases) into an ordered list of ``Release``.  Releases
are recomputed on every fetch and never persisted.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class Channel(str, Enum):
    """Release maturity classification."""

    STABLE = "Stable"
    LTS = "LTS"
    BETA = "Beta"
    RC = "RC"
    ALPHA = "Alpha"
    NIGHTLY = "Nightly"


class Release(BaseModel):
    """One upstream release, in the runtime's native version naming.

    ``stable`` is the feed's own stability flag (what ``latest`` and the
    major/minor rules select on).  ``lts`` is the runtime-specific
    LTS-equivalent flag.
    """

    version: str
    channel: Channel = Channel.STABLE
    stable: bool = True
    lts: bool = False
    major: int = 0
    minor: int = 0
    patch: int = 0
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def major_minor(self) -> str:
        return f"{self.major}.{self.minor}"


SpecifierKind = Literal["latest", "lts", "major", "major_minor", "exact"]

# "20.11", "v20.11", "go1.23"; not "go1.24rc1"
_MAJOR_MINOR = re.compile(r"^[A-Za-z]*\d+\.\d+$")


class VersionSpecifier(BaseModel):
    """A loosely typed, user-supplied version request.

    Parsed from free-form text; anything that is not a keyword, an
    all-digit major or an all-digit major.minor (after an optional
    letter prefix) degrades to ``exact``.
    """

    kind: SpecifierKind
    value: str = ""

    @classmethod
    def parse(cls, text: str) -> VersionSpecifier:
        raw = text.strip()
        lowered = raw.lower()
        if lowered == "latest":
            return cls(kind="latest", value=raw)
        if lowered == "lts":
            return cls(kind="lts", value=raw)
        if raw.isdigit() and raw.isascii():
            return cls(kind="major", value=raw)
        if _MAJOR_MINOR.match(raw) and raw.isascii():
            return cls(kind="major_minor", value=raw)
        return cls(kind="exact", value=raw)

    def __str__(self) -> str:
        return self.value or self.kind
