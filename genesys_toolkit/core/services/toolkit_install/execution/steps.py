"""
L4 Execution — Per-tool installation steps.

Each step returns a Receipt. The first failed receipt ends the run and
triggers rollback; skipped receipts do not. Every side effect is
recorded in ``ctx.ledger`` as soon as it has happened.
"""

from __future__ import annotations

import logging
from pathlib import Path

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.domain.artifacts import resolve_artifact
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext
from genesys_toolkit.core.services.toolkit_install.execution.download import download_artifact
from genesys_toolkit.core.services.toolkit_install.execution.path_integration import (
    install_path_integration,
)
from genesys_toolkit.core.services.toolkit_install.execution.placement import ensure_install_dir
from genesys_toolkit.core.services.toolkit_install.execution.profiles import append_profile_path

logger = logging.getLogger(__name__)


def _fail(tool: str, action: str, error: str, exit_code: int = 1) -> Receipt:
    logger.error(error)
    return Receipt.failure(source=tool, action=action, error=error, exit_code=exit_code)


# ── Go ──────────────────────────────────────────────────────────


def query_go_workspace(ctx: StepContext) -> Receipt:
    """Ask the installed ``go`` binary where its workspace (GOPATH) is."""
    receipt = ctx.commands.run(
        [str(ctx.config.go_binary), "env", "GOPATH"],
        action="go:env",
        env_overrides=ctx.go_env(),
        timeout=ctx.config.timeouts.probe,
    )
    if receipt.failed:
        return _fail("go", "env", "Could not determine the Go workspace directory.", receipt.exit_code)

    # GOPATH may be a list; the first entry is where `go install` writes
    gopath = receipt.output.strip().split(":")[0]
    if not gopath:
        return _fail("go", "env", "Could not determine the Go workspace directory.")
    return Receipt.success(source="go", action="env", output=gopath)


def install_go(ctx: StepContext) -> Receipt:
    """Install Go into ``config.go_install_dir``.

    After extraction, the Go workspace must not exist yet: its location
    is only known once Go is installed, and it is removed again after
    the CLI build, so a pre-existing one would be destroyed.
    """
    config = ctx.config
    artifact = resolve_artifact("go", ctx.platform, config)

    receipt = download_artifact(ctx, artifact)
    if receipt.failed:
        return receipt

    receipt = ensure_install_dir(ctx, "go", config.go_install_dir)
    if receipt.failed:
        return receipt

    archive = ctx.scratch_dir / artifact.filename
    receipt = ctx.commands.run(
        ["tar", "-C", str(config.go_install_dir), "-zxf", str(archive)],
        action="go:extract",
        timeout=config.timeouts.extract,
    )
    if receipt.failed:
        return _fail(
            "go", "extract",
            f'Could not install Go {config.go_version} to "{config.go_install_dir}".',
            receipt.exit_code,
        )
    ctx.ledger.mark_installed("go", config.go_root, tree=True)
    logger.info('Successfully installed Go %s to "%s".', config.go_version, config.go_install_dir)

    receipt = query_go_workspace(ctx)
    if receipt.failed:
        return receipt
    workspace = Path(receipt.output)
    if workspace.exists():
        return _fail("go", "workspace", f'The Go workspace directory "{workspace}" already exists.')
    ctx.ledger.record_build_cache(workspace)

    install_path_integration(ctx)

    return Receipt.success(
        source="go",
        action="install",
        metadata={"path": str(config.go_root), "workspace": str(workspace)},
    )


# ── Genesys Cloud CLI ───────────────────────────────────────────


def install_cli(ctx: StepContext) -> Receipt:
    """Build the Genesys Cloud CLI with Go and copy it into place."""
    config = ctx.config
    if not ctx.ledger.build_cache_dir:
        return _fail("gc", "build", "Go must be installed before the Genesys Cloud CLI.")

    logger.info("Building the Genesys Cloud CLI with Go...")
    receipt = ctx.commands.run(
        [str(config.go_binary), "install", config.cli_module],
        action="gc:build",
        env_overrides=ctx.go_env(),
        timeout=config.timeouts.build,
    )
    if receipt.failed:
        return _fail("gc", "build", "Could not build the Genesys Cloud CLI.", receipt.exit_code)
    logger.info("Successfully built the Genesys Cloud CLI.")

    built = Path(ctx.ledger.build_cache_dir) / "bin" / config.cli_binary_name
    if not built.is_file():
        return _fail("gc", "build", f'Genesys Cloud CLI binary not found in "{built}".')

    receipt = ensure_install_dir(ctx, "gc", config.cli_install_dir)
    if receipt.failed:
        return receipt

    receipt = ctx.fs.copy_file(built, config.cli_binary)
    if receipt.failed:
        return _fail(
            "gc", "copy",
            "Could not copy the Genesys Cloud CLI to the installation directory "
            f'"{config.cli_install_dir}".',
            receipt.exit_code,
        )
    ctx.ledger.mark_installed("gc", config.cli_binary)
    logger.info(
        'Successfully copied the Genesys Cloud CLI to the installation directory "%s".',
        config.cli_install_dir,
    )
    return Receipt.success(source="gc", action="install", metadata={"path": str(config.cli_binary)})


# ── Terraform ───────────────────────────────────────────────────


def install_terraform(ctx: StepContext) -> Receipt:
    """Install the Terraform binary into ``config.terraform_install_dir``."""
    config = ctx.config
    artifact = resolve_artifact("terraform", ctx.platform, config)

    receipt = download_artifact(ctx, artifact)
    if receipt.failed:
        return receipt

    receipt = ensure_install_dir(ctx, "terraform", config.terraform_install_dir)
    if receipt.failed:
        return receipt

    archive = ctx.scratch_dir / artifact.filename
    receipt = ctx.commands.run(
        ["unzip", str(archive), "-d", str(config.terraform_install_dir)],
        action="terraform:extract",
        timeout=config.timeouts.extract,
    )
    if receipt.failed:
        return _fail(
            "terraform", "extract",
            f'Could not install Terraform {config.terraform_version} to '
            f'"{config.terraform_install_dir}".',
            receipt.exit_code,
        )
    ctx.ledger.mark_installed("terraform", config.terraform_binary)
    logger.info(
        'Successfully installed Terraform %s to "%s".',
        config.terraform_version, config.terraform_install_dir,
    )
    return Receipt.success(
        source="terraform",
        action="install",
        metadata={"path": str(config.terraform_binary)},
    )


# ── Archy ───────────────────────────────────────────────────────


def install_archy(ctx: StepContext) -> Receipt:
    """Install Archy into the invoking user's home.

    Platforms without an Archy build are skipped with a warning. After
    the files are in place, Archy is added to the user's shell profiles
    (best-effort) and initialized with ``archy version``; a failing
    initialization fails the step.
    """
    config = ctx.config
    artifact = resolve_artifact("archy", ctx.platform, config)
    if artifact is None:
        logger.warning(
            'Archy does not support the "%s" platform, skipping the Archy installation.',
            ctx.platform.label,
        )
        return Receipt.skip(source="archy", action="install", reason="unsupported platform")

    receipt = download_artifact(ctx, artifact)
    if receipt.failed:
        return receipt

    archy_dir = ctx.archy_dir
    receipt = ensure_install_dir(ctx, "archy", archy_dir, owner=ctx.delegate_user)
    if receipt.failed:
        return receipt

    archive = ctx.scratch_dir / artifact.filename
    receipt = ctx.commands.run(
        ["unzip", str(archive), "-d", str(archy_dir)],
        action="archy:extract",
        timeout=config.timeouts.extract,
        run_as=ctx.delegate_user,
    )
    if receipt.failed:
        return _fail("archy", "extract", f'Could not install Archy to "{ctx.home}".', receipt.exit_code)
    ctx.ledger.mark_installed("archy", archy_dir, tree=True)
    logger.info('Successfully installed Archy to "%s".', ctx.home)

    for name, shell in config.profile_files.items():
        append_profile_path(ctx, ctx.home / name, shell)

    receipt = ctx.commands.run(
        ["./archy", "version"],
        action="archy:verify",
        cwd=archy_dir,
        timeout=config.timeouts.verify,
        run_as=ctx.delegate_user,
    )
    if receipt.failed:
        return _fail("archy", "verify", "Could not initialize Archy.", receipt.exit_code)
    logger.info("Successfully initialized Archy.")

    return Receipt.success(source="archy", action="install", metadata={"path": str(archy_dir)})
