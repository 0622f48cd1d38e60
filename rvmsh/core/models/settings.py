"""
Settings model — user configuration for rvmsh.

Loaded from ``config.yml`` by ``rvmsh.core.config.loader``.  Every
field has a working default, so an absent file means "use defaults".
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class FeedUrls(BaseModel):
    """Upstream release feeds and download bases, per runtime."""

    node_index: str = "https://nodejs.org/dist/index.json"
    node_dist: str = "https://nodejs.org/dist"
    go_downloads: str = "https://go.dev/dl/"
    go_dist: str = "https://go.dev/dl"
    tailwindcss_releases: str = (
        "https://api.github.com/repos/tailwindlabs/tailwindcss/releases?per_page=100"
    )
    tailwindcss_dist: str = "https://github.com/tailwindlabs/tailwindcss/releases/download"


class Settings(BaseModel):
    """Effective configuration for one CLI invocation."""

    tool_tag: str = "rvm"
    home_dir: str | None = None         # overrides $HOME
    profile_path: str | None = None     # default: <home>/.profile
    shell: str = "bash"
    http_timeout: int = 60
    user_agent: str = "rvmsh/0.1"
    feeds: FeedUrls = Field(default_factory=FeedUrls)
