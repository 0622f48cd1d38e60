"""
rvm — CLI entrypoint.

Usage:
    rvm --help
    rvm add node 20
    rvm list available go
    python -m rvmsh.main current node
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from rvmsh import __version__
from rvmsh.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="rvm")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to config.yml (default: $RVMSH_CONFIG or ~/.config/rvmsh/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """rvm — install and switch Node.js, Go and TailwindCSS versions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path).expanduser() if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("RVMSH_LOG_FILE"),
        log_file_level=os.environ.get("RVMSH_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )

    # ── Settings (shared by every service through core.context) ─
    from rvmsh.core.config.loader import ConfigError, load_settings
    from rvmsh.core.context import set_settings

    try:
        set_settings(load_settings(ctx.obj["config_path"]))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


# ── Register command groups ─────────────────────────────────────

from rvmsh.ui.cli.runtimes import (  # noqa: E402
    add,
    current,
    list_group,
    prune,
    remove,
    set_default,
    update,
    use,
)

cli.add_command(add)
cli.add_command(remove)
cli.add_command(prune)
cli.add_command(update)
cli.add_command(set_default)
cli.add_command(use)
cli.add_command(current)
cli.add_command(list_group)


if __name__ == "__main__":
    cli()
