"""
L4 Execution — Install-root creation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.data.tools import TOOL_LABELS
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext

logger = logging.getLogger(__name__)


def ensure_install_dir(
    ctx: StepContext,
    tool: str,
    path: Path,
    owner: str | None = None,
) -> Receipt:
    """Create ``tool``'s install-root unless it already exists.

    Only a directory created here is marked in the ledger; an existing
    one is left alone by rollback.
    """
    if path.exists():
        return Receipt.success(
            source=tool,
            action="mkdir",
            output=f"Already exists: {path}",
            metadata={"created": False},
        )

    label = TOOL_LABELS[tool]
    receipt = ctx.fs.make_dir(path, owner=owner)
    if receipt.failed:
        logger.error('Could not create the %s installation directory "%s".', label, path)
        return Receipt.failure(
            source=tool,
            action="mkdir",
            error=f'Could not create the {label} installation directory "{path}".',
            exit_code=receipt.exit_code,
        )

    ctx.ledger.mark_dir_created(tool, path)
    logger.info('Successfully created the %s installation directory "%s".', label, path)
    return Receipt.success(
        source=tool,
        action="mkdir",
        metadata={"created": True, "path": str(path)},
    )
