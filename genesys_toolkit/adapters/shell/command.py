"""
Shell command adapter — the single place external programs are run.

All install-time subprocess calls (downloads, extraction, the CLI
build, the Archy self-check) go through here, so timeouts, user
switching and error capture are handled once.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from genesys_toolkit.adapters.base import CommandAdapter
from genesys_toolkit.core.models.action import EXIT_NOT_FOUND, EXIT_TIMEOUT, Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(CommandAdapter):
    """Execute commands and capture output."""

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

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
        # ── User switching ──
        # Only root can drop to another user without a password prompt.
        if run_as and os.geteuid() == 0:
            cmd = ["sudo", "-u", run_as] + list(cmd)

        # ── Environment ──
        env = os.environ.copy()
        if env_overrides:
            env.update(env_overrides)

        logger.debug("Executing: %s (cwd=%s)", " ".join(cmd), cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                env=env,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                source=self.name,
                action=action,
                error=f"Command timed out after {timeout}s: {cmd[0]}",
                exit_code=EXIT_TIMEOUT,
                metadata={"command": cmd, "timeout": timeout},
            )
        except FileNotFoundError:
            return Receipt.failure(
                source=self.name,
                action=action,
                error=f"Command not found: {cmd[0]}",
                exit_code=EXIT_NOT_FOUND,
                metadata={"command": cmd},
            )
        except OSError as e:
            return Receipt.failure(
                source=self.name,
                action=action,
                error=f"Command execution error: {e}",
                metadata={"command": cmd},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                source=self.name,
                action=action,
                output=output,
                duration_ms=elapsed_ms,
                metadata={"command": cmd, "stderr": stderr[-2000:]},
            )

        # Killed by a signal: report it the way a shell would
        code = result.returncode if result.returncode > 0 else 128 - result.returncode

        logger.debug("Command exited with %d: %s", code, stderr[-500:])
        return Receipt.failure(
            source=self.name,
            action=action,
            error=stderr[-2000:] or f"Command exited with code {code}",
            exit_code=code,
            duration_ms=elapsed_ms,
            metadata={"command": cmd, "stdout": output[-2000:]},
        )
