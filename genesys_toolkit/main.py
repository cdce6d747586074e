"""
Genesys Cloud toolkit installer — CLI entrypoint.

Usage:
    genesys-toolkit-install              # same as `install`
    genesys-toolkit-install install
    genesys-toolkit-install plan --json
    python -m genesys_toolkit.main --help
"""

from __future__ import annotations

import json
import os
import sys

import click

from genesys_toolkit import __version__
from genesys_toolkit.core.observability.logging_config import setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="genesys-toolkit-install")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Install Go, the Genesys Cloud CLI, Terraform and Archy.

    Without a command, runs `install`.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "WARNING"
    else:
        level = os.environ.get("GTI_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("GTI_LOG_FILE"),
        log_file_level=os.environ.get("GTI_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


@cli.command()
@click.pass_context
def install(ctx: click.Context) -> None:
    """Install the toolkit, rolling back everything on failure."""
    from genesys_toolkit.core.services.toolkit_install.orchestration.orchestrator import (
        run_install,
    )

    ctx.exit(run_install())


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def plan(as_json: bool) -> None:
    """Show what `install` would download and where it would go."""
    from genesys_toolkit.core.config.settings import load_config
    from genesys_toolkit.core.services.toolkit_install.resolver.plan_resolution import (
        resolve_install_plan,
    )

    result = resolve_install_plan(load_config())

    if as_json:
        click.echo(json.dumps(result, indent=2))
        if "error" in result:
            sys.exit(1)
        return

    if "error" in result:
        click.secho(f"❌ {result['error']}", fg="red")
        sys.exit(1)

    click.secho(f"\n📋 Install plan for {result['platform']}", fg="cyan", bold=True)
    click.echo()
    for entry in result["tools"]:
        if entry.get("skipped"):
            click.echo(f"     • {entry['label']}: ", nl=False)
            click.secho(f"skipped ({entry['reason']})", fg="yellow")
            continue
        click.echo(f"     • {entry['label']} {entry['version']}  → {entry['target']}")
        click.secho(f"       {entry['url']}", fg="bright_black")

    click.echo()
    click.secho("   PATH integration:", fg="white", bold=True)
    click.echo(f"     {result['path_integration']}")
    if result["profiles"]:
        click.secho("   Shell profiles:", fg="white", bold=True)
        for profile in result["profiles"]:
            click.echo(f"     {profile}")
    click.echo()


if __name__ == "__main__":
    cli()
