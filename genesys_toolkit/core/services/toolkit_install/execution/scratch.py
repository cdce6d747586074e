"""
L4 Execution — Scratch workspace.

One timestamped staging directory per run for downloaded archives.
"""

from __future__ import annotations

import logging
import time

from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.ledger import InstallationLedger

logger = logging.getLogger(__name__)


def generate_timestamp() -> str:
    """Current local time as ``YYYYMMDD-HHMMSS``."""
    return time.strftime("%Y%m%d-%H%M%S")


def create_scratch_dir(
    config: ToolkitConfig,
    ledger: InstallationLedger,
    fs: FilesystemAdapter,
) -> Receipt:
    """Create the run's scratch workspace and record it in the ledger.

    The directory must not already exist: a collision with another run
    started in the same second is a failure, not a shared directory.
    """
    path = config.scratch_root / f"{config.scratch_prefix}-{generate_timestamp()}"

    logger.info('Creating the temporary directory "%s"...', path)
    receipt = fs.make_scratch_dir(path)
    if receipt.failed:
        logger.error('Could not create the temporary directory "%s".', path)
        return receipt

    ledger.set_scratch_dir(path)
    logger.info('Successfully created the temporary directory "%s".', path)
    return receipt
