"""
L5 Orchestration — Step sequencer and rollback engine.

``run_install`` runs the gates and the installation steps strictly in
order. The first failure hands its exit code to ``cleanup``, which
undoes exactly what the ledger recorded and returns that same code.

Flow:
    platform gate → invoking user → prerequisite gate → scratch dir
    → go → gc → terraform → archy → cleanup(status)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from genesys_toolkit.adapters.base import CommandAdapter
from genesys_toolkit.adapters.shell.command import ShellCommandAdapter
from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.config.settings import ToolkitConfig, load_config
from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.ledger import InstallationLedger
from genesys_toolkit.core.models.platform import Platform
from genesys_toolkit.core.services.toolkit_install.data.tools import TOOL_LABELS
from genesys_toolkit.core.services.toolkit_install.detection.invoking_user import (
    resolve_invoking_user,
)
from genesys_toolkit.core.services.toolkit_install.detection.platform_gate import check_platform
from genesys_toolkit.core.services.toolkit_install.detection.prerequisites import (
    check_prerequisites,
)
from genesys_toolkit.core.services.toolkit_install.domain.rollback import (
    plan_rollback,
    plan_success_cleanup,
)
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext
from genesys_toolkit.core.services.toolkit_install.execution.scratch import create_scratch_dir
from genesys_toolkit.core.services.toolkit_install.execution.steps import (
    install_archy,
    install_cli,
    install_go,
    install_terraform,
)
from genesys_toolkit.core.services.toolkit_install.execution.undo import execute_rollback

logger = logging.getLogger(__name__)

InstallStep = Callable[[StepContext], Receipt]

# Fixed order: later steps depend on earlier ones (gc needs go).
INSTALL_STEPS: tuple[tuple[str, InstallStep], ...] = (
    ("go", install_go),
    ("gc", install_cli),
    ("terraform", install_terraform),
    ("archy", install_archy),
)


def cleanup(
    status: int,
    ledger: InstallationLedger,
    fs: FilesystemAdapter | None = None,
) -> int:
    """Clean up after a run and, on failure, roll it back.

    Args:
        status: 0 after a full success, the failing exit code otherwise.
        ledger: The run's ledger. Only read, except that the scratch
            workspace is cleared once removed.
        fs: Filesystem adapter.

    Returns:
        ``status``, unchanged. Rollback errors never replace it.
    """
    fs = fs or FilesystemAdapter()

    if status != 0:
        logger.warning("Starting cleanup with rollback...")
        report = execute_rollback(plan_rollback(ledger), fs)
    else:
        logger.info("Starting cleanup...")
        report = execute_rollback(plan_success_cleanup(ledger), fs)

    if not report.ok:
        logger.debug("Rollback finished with errors: %s", report.to_dict())

    if ledger.scratch_dir:
        scratch = Path(ledger.scratch_dir)
        receipt = fs.remove_tree(scratch)
        if receipt.ok:
            logger.info('Successfully removed the temporary directory "%s".', scratch)
        else:
            logger.error('Could not remove the temporary directory "%s".', scratch)
        ledger.clear_scratch_dir()

    logger.info("Finished cleanup.")
    return status


def run_install(
    config: ToolkitConfig | None = None,
    *,
    ledger: InstallationLedger | None = None,
    commands: CommandAdapter | None = None,
    fs: FilesystemAdapter | None = None,
    platform: Platform | None = None,
    environ: Mapping[str, str] | None = None,
    user: str | None = None,
    home: Path | None = None,
    steps: tuple[tuple[str, InstallStep], ...] = INSTALL_STEPS,
) -> int:
    """Install the toolkit, rolling back on the first failure.

    Args:
        config: Installer configuration (default: compiled-in).
        ledger: Ledger to record into (default: a fresh one).
        commands: Command adapter (default: real subprocesses).
        fs: Filesystem adapter.
        platform: Pre-detected platform (default: detect).
        environ: Environment used to resolve the invoking user.
        user: Invoking user; resolved from ``environ`` when omitted.
        home: Invoking user's home; resolved when omitted.
        steps: Installation steps in order.

    Returns:
        Process exit code: 0 on success, the failing operation's code
        otherwise.
    """
    config = config or load_config()
    ledger = ledger if ledger is not None else InstallationLedger()
    commands = commands or ShellCommandAdapter()
    fs = fs or FilesystemAdapter()

    # ── Gates (no mutation before these pass) ───────────────────
    receipt = check_platform(config, platform)
    if receipt.failed:
        return cleanup(receipt.exit_code, ledger, fs)
    platform = receipt.metadata["platform"]

    if user is None or home is None:
        receipt = resolve_invoking_user(platform, environ)
        if receipt.failed:
            return cleanup(receipt.exit_code, ledger, fs)
        user = user or receipt.metadata["user"]
        home = home or Path(receipt.metadata["home"])

    receipt = check_prerequisites(config, home)
    if receipt.failed:
        return cleanup(receipt.exit_code, ledger, fs)

    receipt = create_scratch_dir(config, ledger, fs)
    if receipt.failed:
        return cleanup(receipt.exit_code, ledger, fs)

    # ── Installation steps ──────────────────────────────────────
    ctx = StepContext(
        config=config,
        platform=platform,
        user=user,
        home=home,
        ledger=ledger,
        commands=commands,
        fs=fs,
    )

    for tool, step in steps:
        logger.debug("Running installation step: %s", tool)
        try:
            receipt = step(ctx)
        except Exception as e:
            # Steps report failures as receipts; anything else still rolls back
            logger.exception("Unexpected error while installing %s", TOOL_LABELS.get(tool, tool))
            receipt = Receipt.failure(source=tool, action="install", error=str(e))

        if receipt.failed:
            return cleanup(receipt.exit_code, ledger, fs)

    return cleanup(0, ledger, fs)
