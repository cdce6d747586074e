"""
Adapter base — the protocol contract between the installer and the host.

Installation steps never call subprocess or touch the filesystem
directly for their side effects: they go through adapters, which
return Receipts and never raise. Tests swap the command adapter for
:class:`~genesys_toolkit.adapters.mock.MockCommandAdapter`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from genesys_toolkit.core.models.action import Receipt


class Adapter(ABC):
    """Abstract base class for all adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'filesystem')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying mechanism is usable.

        Should be fast and never raise.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class CommandAdapter(Adapter):
    """Runs external programs (curl, tar, unzip, go, archy)."""

    @abstractmethod
    def run(
        self,
        cmd: list[str],
        *,
        action: str = "",
        cwd: Path | str | None = None,
        env_overrides: dict[str, str] | None = None,
        timeout: int = 120,
        run_as: str | None = None,
    ) -> Receipt:
        """Run ``cmd`` to completion and return a receipt.

        Args:
            cmd: Command list, program first.
            action: Label recorded on the receipt.
            cwd: Working directory.
            env_overrides: Extra environment variables.
            timeout: Seconds before the command is abandoned.
            run_as: Run as this user instead of the current one.

        Returns:
            Success receipt with stdout as ``output``, or a failure
            receipt whose ``exit_code`` is the command's return code.
            MUST never raise.
        """
