"""
L3 Detection — Prerequisite gate.

Read-only checks that must all pass before the installer changes
anything: privileges, required commands, and that no managed tool is
already installed. Fail-fast: the first violation is reported.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.data.tools import TOOL_LABELS

logger = logging.getLogger(__name__)


def _fail(check: str, error: str) -> Receipt:
    logger.error(error)
    return Receipt.failure(
        source="prerequisites",
        action=check,
        error=error,
    )


def _subject(tool: str) -> str:
    label = TOOL_LABELS[tool]
    return f"The {label}" if tool == "gc" else label


def check_prerequisites(config: ToolkitConfig, home: Path) -> Receipt:
    """Run every prerequisite check in order.

    Args:
        config: Installer configuration.
        home: The invoking user's home directory.

    Returns:
        Success receipt, or a failure naming the offending path or
        command.
    """
    # ── Privileges ──
    if config.require_root and os.geteuid() != 0:
        return _fail("privileges", "This installer must be run as root.")

    # ── Required commands ──
    for command in config.required_commands:
        if shutil.which(command) is None:
            return _fail("commands", f'"{command}" command is not available.')

    # ── Install roots: absent, or a directory ──
    for tool, root in config.install_roots().items():
        if root.exists() and not root.is_dir():
            return _fail(
                "install_dirs",
                f'The {TOOL_LABELS[tool]} installation directory "{root}" '
                "already exists and is not a directory.",
            )

    # ── Fresh installs only ──
    targets = {
        "go": config.go_root,
        "gc": config.cli_binary,
        "terraform": config.terraform_binary,
        "archy": config.archy_dir(home),
    }
    for tool, target in targets.items():
        if target.exists() or target.is_symlink():
            return _fail(
                "installed",
                f'{_subject(tool)} is already installed in "{target.parent}".',
            )

    # ── Global integration files ──
    for integration in (config.profile_d_path, config.paths_d_path):
        if integration.exists() or integration.is_symlink():
            return _fail(
                "integration",
                f'The file "{integration.name}" already exists in the '
                f'"{integration.parent}" directory.',
            )

    logger.debug("All prerequisites satisfied")
    return Receipt.success(source="prerequisites", action="check")
