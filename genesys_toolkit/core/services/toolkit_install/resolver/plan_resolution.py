"""
L2 Resolver — Plan resolution.

Describes what an installation run would do on a given platform
without touching the host: which archives are fetched from where, and
where each tool lands.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.platform import OSName, Platform
from genesys_toolkit.core.services.toolkit_install.data.tools import INSTALL_ORDER, TOOL_LABELS
from genesys_toolkit.core.services.toolkit_install.detection.invoking_user import (
    resolve_invoking_user,
)
from genesys_toolkit.core.services.toolkit_install.detection.platform_gate import check_platform
from genesys_toolkit.core.services.toolkit_install.domain.artifacts import resolve_artifact

logger = logging.getLogger(__name__)


def _integration_target(config: ToolkitConfig, platform: Platform) -> str | None:
    if config.profile_d_dir.is_dir():
        return str(config.profile_d_path)
    if config.paths_d_dir.is_dir():
        return str(config.paths_d_path)
    # Host has neither; report the conventional one for the OS
    if platform.os == OSName.DARWIN:
        return str(config.paths_d_path)
    return str(config.profile_d_path)


def resolve_install_plan(
    config: ToolkitConfig,
    platform: Platform | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict:
    """Produce the install plan for ``platform``.

    Args:
        config: Installer configuration.
        platform: Target platform (default: this host).
        home: Invoking user's home (default: resolved like ``install``
            does, so ``sudo`` still reports the invoking user's home).
        environ: Environment used to resolve the invoking user.

    Returns:
        Plan dict; ``supported`` is False and ``error`` is set when the
        platform gate would stop the run. When the invoking user's home
        cannot be resolved, ``error`` is set and ``tools`` is absent::

            {
                "platform": "Linux on x86_64",
                "supported": True,
                "tools": [
                    {"tool": "go", "label": "Go", "version": "1.19.2",
                     "artifact": "go1.19.2.linux-amd64.tar.gz",
                     "url": "https://...", "target": "/usr/local/go"},
                    ...
                ],
                "path_integration": "/etc/profile.d/golang-path.sh",
                "profiles": ["/home/me/.zprofile", "/home/me/.bash_profile"],
            }
    """
    gate = check_platform(config, platform)
    platform = gate.metadata["platform"]
    plan: dict = {"platform": platform.label, "supported": gate.ok}
    if gate.failed:
        plan["error"] = gate.error
        return plan

    if home is None:
        user = resolve_invoking_user(platform, environ)
        if user.failed:
            plan["error"] = user.error
            return plan
        home = Path(user.metadata["home"])

    targets = {
        "go": config.go_root,
        "gc": config.cli_binary,
        "terraform": config.terraform_binary,
        "archy": config.archy_dir(home),
    }

    tools: list[dict] = []
    for tool in INSTALL_ORDER:
        entry = {
            "tool": tool,
            "label": TOOL_LABELS[tool],
            "target": str(targets[tool]),
        }
        if tool == "gc":
            entry.update(version="latest", artifact=None, url=config.cli_module)
        else:
            artifact = resolve_artifact(tool, platform, config)
            if artifact is None:
                entry.update(skipped=True, reason="unsupported platform")
            else:
                entry.update(
                    version=artifact.version,
                    artifact=artifact.filename,
                    url=artifact.url,
                )
        tools.append(entry)

    archy_skipped = any(t.get("skipped") for t in tools if t["tool"] == "archy")
    plan["tools"] = tools
    plan["path_integration"] = _integration_target(config, platform)
    plan["profiles"] = (
        [] if archy_skipped else [str(home / name) for name in config.profile_files]
    )
    logger.debug("Resolved install plan for %s: %d tools", platform.label, len(tools))
    return plan
