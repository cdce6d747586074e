"""
Platform model — the host (OS, architecture) pair.

The raw ``uname`` names are kept for messages and allow-list checks;
the closed enumerations are what every artifact-naming routine consumes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class OSName(str, Enum):
    """Operating systems the installer knows how to name artifacts for."""

    LINUX = "linux"
    DARWIN = "darwin"


class Arch(str, Enum):
    """CPU architectures, in the naming used by release archives."""

    AMD64 = "amd64"
    ARM64 = "arm64"


_OS_MAP: dict[str, OSName] = {
    "Linux": OSName.LINUX,
    "Darwin": OSName.DARWIN,
}

_ARCH_MAP: dict[str, Arch] = {
    "x86_64": Arch.AMD64,
    "amd64": Arch.AMD64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


class Platform(BaseModel):
    """A detected host platform."""

    system: str                 # raw kernel name, e.g. "Linux"
    machine: str                # raw hardware name, e.g. "aarch64"
    os: OSName | None = None    # None when the kernel is unknown
    arch: Arch | None = None    # None when the hardware is unknown

    @property
    def label(self) -> str:
        """Human-readable pair used in log messages."""
        return f"{self.system} on {self.machine}"

    @property
    def resolved(self) -> bool:
        """Whether both halves map onto the enumerations."""
        return self.os is not None and self.arch is not None

    @classmethod
    def from_uname(cls, system: str, machine: str) -> Platform:
        """Build a Platform from raw ``uname -s`` / ``uname -m`` values."""
        return cls(
            system=system,
            machine=machine,
            os=_OS_MAP.get(system),
            arch=_ARCH_MAP.get(machine),
        )
