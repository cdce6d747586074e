"""
L0 Data — Managed tool catalog.

Display labels, install order and release-archive naming schemes.
Pure data. No logic.
"""

from __future__ import annotations

from genesys_toolkit.core.models.platform import Arch, OSName

# Installation order. Rollback walks the ledger in reverse.
INSTALL_ORDER: tuple[str, ...] = ("go", "gc", "terraform", "archy")

TOOL_LABELS: dict[str, str] = {
    "go": "Go",
    "gc": "Genesys Cloud CLI",
    "terraform": "Terraform",
    "archy": "Archy",
}

# Archive names, templated by version and the platform enumerations.
# Both Go and HashiCorp use Go-style os/arch names (linux, amd64 ...).
ARTIFACT_TEMPLATES: dict[str, str] = {
    "go": "go{version}.{os}-{arch}.tar.gz",
    "terraform": "terraform_{version}_{os}_{arch}.zip",
}

# Archy ships one archive per OS, and only for some architectures.
# ``None`` as the arch matches any architecture.
ARCHY_ARTIFACTS: dict[tuple[OSName, Arch | None], str] = {
    (OSName.DARWIN, None): "archy-macos.zip",
    (OSName.LINUX, Arch.AMD64): "archy-linux.zip",
}
