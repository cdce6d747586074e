"""
L4 Execution — Artifact download.

Fetches a release archive into the scratch workspace with ``curl``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.data.tools import TOOL_LABELS
from genesys_toolkit.core.services.toolkit_install.domain.artifacts import Artifact
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext

logger = logging.getLogger(__name__)


def _describe(artifact: Artifact) -> str:
    label = TOOL_LABELS[artifact.tool]
    if artifact.version == "latest":
        return label
    return f"{label} {artifact.version}"


def download_artifact(ctx: StepContext, artifact: Artifact) -> Receipt:
    """Download ``artifact`` into the scratch workspace.

    ``--fail`` turns HTTP errors into a non-zero curl exit code, which
    is carried on the failure receipt unchanged.

    Returns:
        Success receipt with ``metadata["path"]``, or a failure naming
        the source URL.
    """
    dest: Path = ctx.scratch_dir / artifact.filename
    what = _describe(artifact)

    logger.info("Downloading %s from %s...", what, artifact.url)
    receipt = ctx.commands.run(
        ["curl", "-L", "--fail", "-o", str(dest), artifact.url],
        action=f"{artifact.tool}:download",
        timeout=ctx.config.timeouts.download,
    )
    if receipt.failed:
        error = f"Could not download {what} from {artifact.url}."
        logger.error(error)
        return Receipt.failure(
            source=artifact.tool,
            action="download",
            error=error,
            exit_code=receipt.exit_code,
            metadata={"url": artifact.url, "detail": receipt.error},
        )

    logger.info("Successfully downloaded %s from %s.", what, artifact.url)
    return Receipt.success(
        source=artifact.tool,
        action="download",
        metadata={"url": artifact.url, "path": str(dest)},
    )
