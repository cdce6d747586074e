"""
L1 Domain — Release artifact resolution (pure).

Maps (tool, platform, pinned version) to an archive name and its
download URL. Every tool goes through the same platform enumeration,
so there is no per-tool OS/arch string branching.
No I/O, no subprocess.
"""

from __future__ import annotations

from pydantic import BaseModel

from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.platform import Platform
from genesys_toolkit.core.services.toolkit_install.data.tools import (
    ARCHY_ARTIFACTS,
    ARTIFACT_TEMPLATES,
)


class Artifact(BaseModel):
    """A downloadable release archive."""

    tool: str
    version: str
    filename: str
    url: str


def _archy_filename(platform: Platform) -> str | None:
    for (os_name, arch), filename in ARCHY_ARTIFACTS.items():
        if platform.os == os_name and (arch is None or platform.arch == arch):
            return filename
    return None


def resolve_artifact(
    tool: str,
    platform: Platform,
    config: ToolkitConfig,
) -> Artifact | None:
    """Resolve the release archive of ``tool`` for ``platform``.

    Args:
        tool: Managed tool key (``go``, ``terraform`` or ``archy``).
        platform: The detected host platform.
        config: Installer configuration (versions, URL templates).

    Returns:
        The Artifact, or None when the tool publishes nothing for
        this platform (only Archy has such gaps).

    Raises:
        ValueError: If ``tool`` is not downloaded as an archive, or
            the platform did not pass the platform gate.
    """
    if not platform.resolved:
        raise ValueError(f"Cannot name artifacts for unsupported platform {platform.label}")

    if tool == "archy":
        filename = _archy_filename(platform)
        if filename is None:
            return None
        return Artifact(
            tool=tool,
            version="latest",
            filename=filename,
            url=config.archy_url_template.format(artifact=filename),
        )

    template = ARTIFACT_TEMPLATES.get(tool)
    if template is None:
        raise ValueError(f"Tool {tool!r} has no release archive")

    version = config.go_version if tool == "go" else config.terraform_version
    url_template = config.go_url_template if tool == "go" else config.terraform_url_template
    filename = template.format(
        version=version,
        os=platform.os.value,
        arch=platform.arch.value,
    )
    return Artifact(
        tool=tool,
        version=version,
        filename=filename,
        url=url_template.format(version=version, artifact=filename),
    )
