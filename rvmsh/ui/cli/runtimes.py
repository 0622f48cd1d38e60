"""
CLI commands for runtime version management.

Thin wrappers over the ``Runtime`` capabilities in ``rvmsh.adapters``.
Every ``RvmError`` is turned into a red message and exit status 1 here
and nowhere else.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from rvmsh.core.errors import RvmError, VersionNotFound
from rvmsh.core.models.runtime import OperationResult


def _fail(error: RvmError) -> NoReturn:
    click.secho(f"❌ {error}", fg="red")
    if isinstance(error, VersionNotFound) and error.available:
        click.echo(f"   Installed: {', '.join(error.available)}")
    sys.exit(1)


def _runtime(name: str):
    from rvmsh.adapters.registry import get_runtime

    return get_runtime(name)


def _format_bytes(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / 1024 / 1024:.1f}MB"
    if size >= 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size}B"


def _report(ctx: click.Context, result: OperationResult) -> None:
    """Print an operation result in the usual emoji style."""
    click.secho(f"✅ {result.message}", fg="green", bold=True)
    quiet = ctx.obj.get("quiet", False) if ctx.obj else False

    if result.removed and not quiet:
        for version in result.removed:
            click.echo(f"   🗑️  {version}")
    if result.freed_bytes:
        click.echo(f"   💾 Freed {_format_bytes(result.freed_bytes)}")

    if result.session is not None:
        if result.session.ok:
            for line in result.session.stdout.splitlines():
                click.echo(f"   │ {line}")
        else:
            click.secho("   ⚠️  Verification failed:", fg="yellow")
            for line in (result.session.stderr or result.session.stdout).splitlines()[:5]:
                click.echo(f"   │ {line}")

    if result.operation in ("add", "update", "set", "prune") and not quiet:
        click.echo("   ℹ️  Open a new shell or run `source ~/.profile` to pick up the change")


# ── Install / remove ────────────────────────────────────────────


@click.command()
@click.argument("runtime")
@click.argument("version", required=False)
@click.pass_context
def add(ctx: click.Context, runtime: str, version: str | None) -> None:
    """Install a version (default: latest) and make it the default.

    Examples:

        rvm add node

        rvm add node 20.11

        rvm add go 1.23.0
    """
    try:
        rt = _runtime(runtime)
        click.secho(
            f"⬇️  Adding {rt.descriptor.display_name} {version or 'latest'}…", fg="cyan"
        )
        result = rt.add(version)
    except RvmError as e:
        _fail(e)
    _report(ctx, result)


@click.command()
@click.argument("runtime")
@click.argument("version", required=False)
@click.pass_context
def remove(ctx: click.Context, runtime: str, version: str | None) -> None:
    """Remove one installed version, or all of them when VERSION is omitted."""
    try:
        result = _runtime(runtime).remove(version)
    except RvmError as e:
        _fail(e)
    _report(ctx, result)


@click.command()
@click.argument("runtime")
@click.argument("keep")
@click.pass_context
def prune(ctx: click.Context, runtime: str, keep: str) -> None:
    """Remove every installed version except KEEP."""
    try:
        result = _runtime(runtime).prune(keep)
    except RvmError as e:
        _fail(e)
    _report(ctx, result)


@click.command()
@click.argument("runtime")
@click.pass_context
def update(ctx: click.Context, runtime: str) -> None:
    """Install the latest stable version and make it the default."""
    try:
        result = _runtime(runtime).update()
    except RvmError as e:
        _fail(e)
    _report(ctx, result)


# ── Switch ──────────────────────────────────────────────────────


@click.command("set")
@click.argument("runtime")
@click.argument("version")
@click.pass_context
def set_default(ctx: click.Context, runtime: str, version: str) -> None:
    """Make an installed version the default in the shell profile."""
    try:
        result = _runtime(runtime).set_default(version)
    except RvmError as e:
        _fail(e)
    _report(ctx, result)


@click.command()
@click.argument("runtime")
@click.argument("version")
@click.pass_context
def use(ctx: click.Context, runtime: str, version: str) -> None:
    """Check an installed version for the current session (nothing is saved)."""
    try:
        result = _runtime(runtime).use_version(version)
    except RvmError as e:
        _fail(e)
    _report(ctx, result)

    if result.session is not None and result.session.bin_path:
        click.echo()
        click.echo("   To use it in this shell:")
        click.secho(f'     export PATH="{result.session.bin_path}:$PATH"', fg="cyan")
    if result.session is not None and not result.session.ok:
        sys.exit(1)


@click.command()
@click.argument("runtime")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def current(runtime: str, as_json: bool) -> None:
    """Show the default version recorded in the shell profile."""
    try:
        rt = _runtime(runtime)
        version = rt.current_version()
    except RvmError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps({"runtime": rt.name, "version": version}, indent=2))
        return

    if version is None:
        click.secho(f"⚠️  No default {rt.descriptor.display_name} version set", fg="yellow")
        return
    click.secho(f"📌 {rt.descriptor.display_name} {version}", fg="cyan", bold=True)


# ── List ────────────────────────────────────────────────────────


@click.group("list")
def list_group() -> None:
    """List runtimes, available versions or installed versions."""


@list_group.command("runtimes")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_runtimes(as_json: bool) -> None:
    """Show every supported runtime."""
    from rvmsh.adapters.registry import default_registry

    registry = default_registry()
    names = registry.list_runtimes()

    if as_json:
        click.echo(json.dumps(names, indent=2))
        return

    click.secho("🧰 Supported runtimes:", fg="cyan", bold=True)
    for name in names:
        click.echo(f"   • {name} ({registry.get(name).descriptor.display_name})")


@list_group.command("available")
@click.argument("runtime")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_available(runtime: str, as_json: bool) -> None:
    """Show versions published upstream, grouped by channel."""
    try:
        rt = _runtime(runtime)
        if as_json:
            releases = rt.display_releases(rt.releases())
        else:
            lines = rt.list_available()
    except RvmError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in releases], indent=2))
        return

    click.secho(f"🌐 Available {rt.descriptor.display_name} versions:", fg="cyan", bold=True)
    click.echo()
    for line in lines:
        if line.startswith("==="):
            click.secho(line, bold=True)
        else:
            click.echo(line)


@list_group.command("installed")
@click.argument("runtime")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_installed(runtime: str, as_json: bool) -> None:
    """Show versions installed locally."""
    try:
        rt = _runtime(runtime)
        versions = rt.list_installed()
        default = rt.current_version()
    except RvmError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps({"runtime": rt.name, "installed": versions, "default": default}, indent=2))
        return

    if not versions:
        click.secho(f"⚠️  No {rt.descriptor.display_name} versions installed", fg="yellow")
        return

    click.secho(f"📦 Installed {rt.descriptor.display_name} versions:", fg="cyan", bold=True)
    for version in versions:
        if version == default:
            click.secho(f"   ✓ {version}", fg="green", nl=False)
            click.echo("  ← default")
        else:
            click.echo(f"     {version}")
