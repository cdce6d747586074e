"""
Receipt model — the execution contract.

Every adapter call and every installation step returns a Receipt.
Adapters NEVER raise: failures are captured here, together with the
exit code of the external operation that failed, so the sequencer can
hand that exact code to the rollback engine and to the process exit.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# Exit codes for failures that have no external return code of their own
EXIT_GENERIC = 1
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of an adapter call or an installation step.

    ``source`` names who produced the receipt (an adapter or a managed
    tool), ``action`` names what was attempted (``download``,
    ``extract``, ``mkdir`` ...).
    """

    source: str
    action: str = ""
    status: Literal["ok", "skipped", "failed"] = "ok"
    exit_code: int = 0

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the operation failed."""
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        """Whether the operation was skipped (never a failure)."""
        return self.status == "skipped"

    @classmethod
    def success(
        cls,
        source: str,
        action: str = "",
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            source=source,
            action=action,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        source: str,
        action: str = "",
        error: str = "",
        exit_code: int = EXIT_GENERIC,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt.

        A zero exit code would read as success further up, so it is
        coerced to :data:`EXIT_GENERIC`.
        """
        return cls(
            source=source,
            action=action,
            status="failed",
            error=error,
            exit_code=exit_code or EXIT_GENERIC,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        source: str,
        action: str = "",
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(
            source=source,
            action=action,
            status="skipped",
            output=reason,
            **kwargs,
        )
