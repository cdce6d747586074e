"""
Installer configuration — compiled-in versions, locations and limits.

The installer takes no runtime configuration: the CLI always uses the
defaults below. The model exists so the values live in one validated
place, and so tests can relocate every path under a temporary root.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from genesys_toolkit.core.models.platform import Platform

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the installer configuration is invalid."""


class Timeouts(BaseModel):
    """Upper bounds (seconds) for blocking external commands."""

    download: int = 600
    extract: int = 300
    build: int = 1200
    verify: int = 120
    probe: int = 30


class ToolkitConfig(BaseModel):
    """Static configuration of one installer variant."""

    # ── Versions ─────────────────────────────────────────────────
    go_version: str = "1.19.2"
    terraform_version: str = "1.3.3"

    # ── Download sources ─────────────────────────────────────────
    go_url_template: str = "https://go.dev/dl/{artifact}"
    terraform_url_template: str = (
        "https://releases.hashicorp.com/terraform/{version}/{artifact}"
    )
    archy_url_template: str = "https://sdk-cdn.mypurecloud.com/archy/latest/{artifact}"
    cli_module: str = "github.com/mypurecloud/platform-client-sdk-cli/build/gc@latest"

    # ── Install locations ────────────────────────────────────────
    go_install_dir: Path = Path("/usr/local")
    cli_install_dir: Path = Path("/usr/local/bin")
    terraform_install_dir: Path = Path("/usr/local/bin")
    archy_dir_name: str = "archy"           # under the invoking user's home
    cli_binary_name: str = "gc"
    terraform_binary_name: str = "terraform"

    # ── Global PATH integration ──────────────────────────────────
    profile_d_dir: Path = Path("/etc/profile.d")
    profile_d_file: str = "golang-path.sh"
    paths_d_dir: Path = Path("/etc/paths.d")
    paths_d_file: str = "golang-path"

    # ── Per-user shell profiles (file name → shell label) ────────
    profile_files: dict[str, str] = Field(
        default_factory=lambda: {".zprofile": "Zsh", ".bash_profile": "Bash"}
    )
    profile_tag: str = "# Archy path added by genesys-toolkit-install"
    profile_export: str = "export PATH=$PATH:$HOME/archy"

    # ── Gates ────────────────────────────────────────────────────
    supported_platforms: list[tuple[str, str]] = Field(
        default_factory=lambda: [
            ("Linux", "aarch64"),
            ("Darwin", "arm64"),
            ("Linux", "x86_64"),
            ("Darwin", "x86_64"),
        ]
    )
    required_commands: list[str] = Field(
        default_factory=lambda: ["curl", "tar", "unzip"]
    )
    require_root: bool = True

    # ── Scratch workspace ────────────────────────────────────────
    scratch_root: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    scratch_prefix: str = "genesys-toolkit-install"

    timeouts: Timeouts = Field(default_factory=Timeouts)

    @field_validator("supported_platforms")
    @classmethod
    def _platforms_resolve(cls, value: list[tuple[str, str]]) -> list[tuple[str, str]]:
        for system, machine in value:
            if not Platform.from_uname(system, machine).resolved:
                raise ValueError(
                    f"'{system} on {machine}' cannot be mapped to a release platform"
                )
        return value

    # ── Derived paths ────────────────────────────────────────────

    @property
    def go_root(self) -> Path:
        """Directory the Go distribution unpacks into."""
        return self.go_install_dir / "go"

    @property
    def go_bin_dir(self) -> Path:
        return self.go_root / "bin"

    @property
    def go_binary(self) -> Path:
        return self.go_bin_dir / "go"

    @property
    def cli_binary(self) -> Path:
        return self.cli_install_dir / self.cli_binary_name

    @property
    def terraform_binary(self) -> Path:
        return self.terraform_install_dir / self.terraform_binary_name

    @property
    def profile_d_path(self) -> Path:
        return self.profile_d_dir / self.profile_d_file

    @property
    def paths_d_path(self) -> Path:
        return self.paths_d_dir / self.paths_d_file

    def archy_dir(self, home: Path) -> Path:
        """Archy's install-root under the invoking user's home."""
        return home / self.archy_dir_name

    def install_roots(self) -> dict[str, Path]:
        """Install-root directory of every system-wide tool."""
        return {
            "go": self.go_install_dir,
            "gc": self.cli_install_dir,
            "terraform": self.terraform_install_dir,
        }


def load_config(**overrides: Any) -> ToolkitConfig:
    """Build the installer configuration.

    Args:
        **overrides: Field values replacing the compiled-in defaults.

    Returns:
        Validated ToolkitConfig.

    Raises:
        ConfigError: If an override is invalid.
    """
    try:
        config = ToolkitConfig.model_validate(overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger.debug(
        "Loaded configuration: go %s, terraform %s, %d supported platforms",
        config.go_version,
        config.terraform_version,
        len(config.supported_platforms),
    )
    return config
