"""
L1 Domain — Version string helpers and channel classification (pure).

No I/O, no subprocess.  Component parsing is deliberately lenient:
an unparseable component becomes ``0``, so a malformed version sorts
as the oldest instead of raising.
"""

from __future__ import annotations

import re
from functools import cmp_to_key

from rvmsh.core.models.release import Channel

_LEADING_DIGITS = re.compile(r"^(\d+)")

# Checked in this order; the LTS flag outranks all of them
_CHANNEL_MARKERS: tuple[tuple[str, Channel], ...] = (
    ("alpha", Channel.ALPHA),
    ("beta", Channel.BETA),
    ("rc", Channel.RC),
    ("nightly", Channel.NIGHTLY),
)


def classify(version: str, is_lts: bool = False) -> Channel:
    """Label a version with its release channel.

    >>> classify("go1.24rc1")
    <Channel.RC: 'RC'>
    >>> classify("v20.11.0", is_lts=True)
    <Channel.LTS: 'LTS'>
    """
    if is_lts:
        return Channel.LTS
    lowered = version.lower()
    for marker, channel in _CHANNEL_MARKERS:
        if marker in lowered:
            return channel
    return Channel.STABLE


def strip_prefix(version: str) -> str:
    """Drop a native version prefix: ``v20.11.0`` → ``20.11.0``, ``go1.23`` → ``1.23``."""
    if version.startswith("go"):
        return version[2:]
    if version.startswith("v"):
        return version[1:]
    return version


# Display strings carry no native prefix
clean_version_for_display = strip_prefix


def _component(text: str) -> int:
    match = _LEADING_DIGITS.match(text)
    return int(match.group(1)) if match else 0


def parse_components(version: str) -> tuple[int, int, int]:
    """Extract ``(major, minor, patch)`` from a version string.

    Pre-release suffixes are ignored (``go1.24rc1`` → ``(1, 24, 0)``),
    missing or malformed components fall back to ``0``.
    """
    parts = strip_prefix(version).split(".")
    padded = (parts + ["", "", ""])[:3]
    return _component(padded[0]), _component(padded[1]), _component(padded[2])


def compare_versions(a: str, b: str) -> int:
    """Three-way numeric comparison of dotted versions.

    Only fully numeric components take part; when all shared components
    are equal the version with more components is greater.
    """
    nums_a = [int(p) for p in strip_prefix(a).split(".") if p.isdigit()]
    nums_b = [int(p) for p in strip_prefix(b).split(".") if p.isdigit()]
    for x, y in zip(nums_a, nums_b):
        if x != y:
            return -1 if x < y else 1
    if len(nums_a) != len(nums_b):
        return -1 if len(nums_a) < len(nums_b) else 1
    return 0


version_sort_key = cmp_to_key(compare_versions)


# Pre-release stage rank; a final release outranks all of them
_STAGES = (("rc", 2), ("beta", 1), ("alpha", 0))
_FINAL = 3


def prerelease_sort_key(version: str) -> tuple[int, int, int, int, int]:
    """Sort key that also orders pre-releases.

    ``1.24.0`` > ``1.24rc2`` > ``1.24rc1`` > ``1.24beta1``; the suffix
    number may follow a separator (``v4.0.0-beta.2``).
    """
    base = strip_prefix(version).lower()
    stage, suffix_number = _FINAL, 0
    for marker, rank in _STAGES:
        pos = base.find(marker)
        if pos != -1:
            stage = rank
            suffix_number = _component(base[pos + len(marker):].lstrip(".-_"))
            base = base[:pos]
            break
    major, minor, patch = parse_components(base)
    return major, minor, patch, stage, suffix_number


def matches_prefix(version: str, prefix: str) -> bool:
    """Prefix match that respects digit boundaries.

    ``"go1"`` matches ``"go1.23.1"`` but ``"v1"`` never matches ``"v10.2.0"``.
    """
    if not version.startswith(prefix):
        return False
    rest = version[len(prefix):]
    return not rest or not rest[0].isdigit()
