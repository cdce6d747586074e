"""
L3 Detection — Platform gate.

Read-only probe of the host (OS, architecture) against the configured
allow-list. Runs before anything is changed on the host.
"""

from __future__ import annotations

import logging
import platform as _platform

from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.platform import Platform

logger = logging.getLogger(__name__)


def detect_platform() -> Platform:
    """Query the kernel name and hardware name of this host."""
    return Platform.from_uname(_platform.system(), _platform.machine())


def check_platform(
    config: ToolkitConfig,
    platform: Platform | None = None,
) -> Receipt:
    """Check that the host platform is supported.

    Args:
        config: Installer configuration holding the allow-list.
        platform: Pre-detected platform (default: detect now).

    Returns:
        Success receipt with ``metadata["platform"]``, or a failure
        naming the unsupported pair.
    """
    if platform is None:
        platform = detect_platform()

    if not platform.system:
        error = "Could not get the kernel name, platform support can't be determined."
    elif not platform.machine:
        error = "Could not get the machine hardware name, platform support can't be determined."
    elif (platform.system, platform.machine) in config.supported_platforms and platform.resolved:
        logger.debug("Platform %s is supported", platform.label)
        return Receipt.success(
            source="platform",
            action="check",
            output=platform.label,
            metadata={"platform": platform},
        )
    else:
        error = f'"{platform.label}" is not a supported platform.'

    logger.error(error)
    return Receipt.failure(
        source="platform",
        action="check",
        error=error,
        metadata={"platform": platform},
    )
