"""
Mock command adapter — test double for external programs.

Simulates curl, tar, unzip, go and archy without touching the network
or the host toolchain. Handlers are registered per program name (the
basename of ``cmd[0]``) and may create files to imitate the program's
side effects.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from genesys_toolkit.adapters.base import CommandAdapter
from genesys_toolkit.core.models.action import Receipt

# A handler receives the recorded call and returns a receipt, or None
# for the default success receipt.
Handler = Callable[["MockCall"], "Receipt | None"]


@dataclass
class MockCall:
    """One command the mock has received."""

    cmd: list[str]
    action: str = ""
    cwd: str | None = None
    env_overrides: dict[str, str] = field(default_factory=dict)
    timeout: int = 0
    run_as: str | None = None

    @property
    def program(self) -> str:
        return os.path.basename(self.cmd[0]) if self.cmd else ""


class MockCommandAdapter(CommandAdapter):
    """Universal mock for command execution.

    By default, every command succeeds with empty output. Programs can
    be given custom handlers or configured to fail.
    """

    def __init__(self, adapter_name: str = "mock", available: bool = True):
        self._name = adapter_name
        self._available = available
        self._handlers: dict[str, Handler] = {}
        self._call_log: list[MockCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[MockCall]:
        """All calls this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def programs_called(self) -> list[str]:
        """Program names in call order."""
        return [c.program for c in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def on(self, program: str, handler: Handler) -> None:
        """Register a handler for ``program``."""
        self._handlers[program] = handler

    def set_failure(
        self,
        program: str,
        exit_code: int = 1,
        error: str = "Mock failure",
        when: Callable[[MockCall], bool] | None = None,
    ) -> None:
        """Make ``program`` fail, optionally only for calls matching ``when``."""
        previous = self._handlers.get(program)

        def _fail(call: MockCall) -> Receipt | None:
            if when is None or when(call):
                return Receipt.failure(
                    source=self._name,
                    action=call.action,
                    error=error,
                    exit_code=exit_code,
                )
            return previous(call) if previous else None

        self._handlers[program] = _fail

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
        call = MockCall(
            cmd=list(cmd),
            action=action,
            cwd=str(cwd) if cwd else None,
            env_overrides=dict(env_overrides or {}),
            timeout=timeout,
            run_as=run_as,
        )
        self._call_log.append(call)

        handler = self._handlers.get(call.program)
        receipt = handler(call) if handler else None
        if receipt is None:
            receipt = Receipt.success(
                source=self._name,
                action=action,
                metadata={"mock": True},
            )
        return receipt

    def reset(self) -> None:
        """Clear call log and handlers."""
        self._call_log.clear()
        self._handlers.clear()


def output(text: str, **metadata: Any) -> Receipt:
    """Shortcut for a handler returning stdout."""
    return Receipt.success(source="mock", output=text, metadata=metadata)
