"""
L4 Execution — Step context.

Everything an installation step needs, passed explicitly through the
call chain: configuration, the detected platform, the invoking user,
the run's ledger and the adapters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from genesys_toolkit.adapters.base import CommandAdapter
from genesys_toolkit.adapters.shell.command import ShellCommandAdapter
from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.config.settings import ToolkitConfig
from genesys_toolkit.core.models.ledger import InstallationLedger
from genesys_toolkit.core.models.platform import Platform


@dataclass
class StepContext:
    """Shared state of one installation run."""

    config: ToolkitConfig
    platform: Platform
    user: str
    home: Path
    ledger: InstallationLedger
    commands: CommandAdapter = field(default_factory=ShellCommandAdapter)
    fs: FilesystemAdapter = field(default_factory=FilesystemAdapter)

    @property
    def scratch_dir(self) -> Path:
        if self.ledger.scratch_dir is None:
            raise RuntimeError("Scratch workspace has not been created")
        return Path(self.ledger.scratch_dir)

    @property
    def archy_dir(self) -> Path:
        return self.config.archy_dir(self.home)

    @property
    def delegate_user(self) -> str | None:
        """User that owns per-user files, when running as root for them."""
        if os.geteuid() == 0 and self.user and self.user != "root":
            return self.user
        return None

    def go_env(self) -> dict[str, str]:
        """Environment for the freshly installed ``go`` binary.

        ``HOME`` points at the invoking user so the Go workspace lands
        where that user would expect it.
        """
        path = os.environ.get("PATH", "")
        return {
            "HOME": str(self.home),
            "PATH": f"{path}:{self.config.go_bin_dir}" if path else str(self.config.go_bin_dir),
        }
