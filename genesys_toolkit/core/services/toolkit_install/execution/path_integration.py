"""
L4 Execution — Global PATH integration for Go.

Best-effort: writes one OS-convention file that puts the Go binaries
on every shell's PATH. Failures are warnings; Go stays installed but
may not be globally discoverable.
"""

from __future__ import annotations

import logging

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext

logger = logging.getLogger(__name__)

_UNAVAILABLE = "the Go command will not be globally available."


def install_path_integration(ctx: StepContext) -> Receipt:
    """Write ``/etc/profile.d/golang-path.sh`` or ``/etc/paths.d/golang-path``.

    ``profile.d`` wins when both directories exist. A written file is
    recorded in the ledger so rollback removes it.

    Returns:
        Success receipt when a file was written, a skip receipt
        otherwise. Never a failure.
    """
    config = ctx.config
    bin_dir = config.go_bin_dir

    if config.profile_d_dir.is_dir():
        target = config.profile_d_path
        content = f"export PATH=$PATH:{bin_dir}\n"
    elif config.paths_d_dir.is_dir():
        target = config.paths_d_path
        content = f"{bin_dir}\n"
    else:
        logger.warning(
            "This platform does not support a global PATH environment variable, %s",
            _UNAVAILABLE,
        )
        return Receipt.skip(source="go", action="path_integration", reason="no convention directory")

    receipt = ctx.fs.write_file(target, content)
    if receipt.failed:
        # A half-written file was still created by this run
        ctx.fs.remove_file(target)
        logger.warning(
            'Could not add the "%s" file to the "%s" directory, %s',
            target.name, target.parent, _UNAVAILABLE,
        )
        return Receipt.skip(source="go", action="path_integration", reason=receipt.error or "")

    ctx.ledger.record_integration_file("go", target)

    if target == config.profile_d_path:
        chmod = ctx.fs.make_executable(target)
        if chmod.failed:
            logger.warning(
                'Could not set the "%s" shell script execution permissions in the "%s" directory, %s',
                target.name, target.parent, _UNAVAILABLE,
            )
            return Receipt.skip(source="go", action="path_integration", reason=chmod.error or "")

    logger.info(
        'Successfully added the "%s" file to the "%s" directory, '
        "the Go command will be globally available.",
        target.name, target.parent,
    )
    return Receipt.success(
        source="go",
        action="path_integration",
        metadata={"path": str(target)},
    )
