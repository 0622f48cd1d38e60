"""
L1 Domain — Channel grouping for ``list available`` (pure).

Turns a release list into a bounded, human-scannable listing:

    === Stable Versions ===
    22.3: 22.3.0
    22.2: 22.2.0
    21.7: 21.7.3, 21.7.2, 21.7.1, 21.7.0
    ... displaying top 4 versions, all other versions truncated

Hierarchy per channel: top 4 majors → top 4 major.minor per major →
top 4 patches per major.minor.  Deterministic for identical input order.
"""

from __future__ import annotations

from collections.abc import Iterable

from rvmsh.core.models.release import Channel, Release
from rvmsh.core.services.lifecycle.domain.versions import (
    clean_version_for_display,
    prerelease_sort_key,
)

MAX_MAJORS = 4
MAX_MINORS = 4
MAX_PATCHES = 4
MAX_LINE_LENGTH = 100

TRUNCATION_NOTICE = "... displaying top 4 versions, all other versions truncated"

CHANNEL_PRIORITY: tuple[Channel, ...] = (
    Channel.STABLE,
    Channel.LTS,
    Channel.BETA,
    Channel.RC,
    Channel.ALPHA,
    Channel.NIGHTLY,
)

_UNANNOTATED = {Channel.STABLE, Channel.LTS}


def format_version_list(versions: list[str], max_line_length: int = MAX_LINE_LENGTH) -> str:
    """Join versions with ``", "``, wrapping long lists.

    Continuation lines are indented six spaces.
    """
    lines: list[str] = []
    current = ""
    for version in versions:
        addition = version if not current else f", {version}"
        if current and len(current) + len(addition) > max_line_length:
            lines.append(current)
            current = version
        else:
            current += addition
    if current:
        lines.append(current)
    return "\n".join(
        line if i == 0 else f"      {line}" for i, line in enumerate(lines)
    )


def group_for_display(releases: Iterable[Release]) -> list[str]:
    """Render releases grouped by channel, major and major.minor.

    Non-stable entries are annotated with their channel name.  Each
    channel gets at most one truncation notice, emitted only when one
    of its caps was exceeded.
    """
    tree: dict[Channel, dict[int, dict[tuple[int, int], list[str]]]] = {}
    for release in releases:
        (
            tree.setdefault(release.channel, {})
            .setdefault(release.major, {})
            .setdefault((release.major, release.minor), [])
            .append(release.version)
        )

    lines: list[str] = []
    for channel in CHANNEL_PRIORITY:
        majors = tree.get(channel)
        if not majors:
            continue

        lines.append(f"=== {channel.value} Versions ===")
        truncated = len(majors) > MAX_MAJORS

        for major in sorted(majors, reverse=True)[:MAX_MAJORS]:
            minors = majors[major]
            if len(minors) > MAX_MINORS:
                truncated = True

            for key in sorted(minors, reverse=True)[:MAX_MINORS]:
                versions = sorted(minors[key], key=prerelease_sort_key, reverse=True)
                if len(versions) > MAX_PATCHES:
                    truncated = True

                shown = [clean_version_for_display(v) for v in versions[:MAX_PATCHES]]
                if channel not in _UNANNOTATED:
                    shown = [f"{v} ({channel.value})" for v in shown]
                lines.append(f"{key[0]}.{key[1]}: {format_version_list(shown)}")

        if truncated:
            lines.append(TRUNCATION_NOTICE)
        lines.append("")

    if lines and lines[-1] == "":
        lines.pop()
    return lines
