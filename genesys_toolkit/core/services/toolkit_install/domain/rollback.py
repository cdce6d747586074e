"""
L1 Domain — Rollback plan generation (pure).

Derives the undo steps of a run from its ledger.
No I/O, no subprocess.
"""

from __future__ import annotations

from genesys_toolkit.core.models.ledger import InstallationLedger, UndoRecord


def plan_rollback(ledger: InstallationLedger) -> list[UndoRecord]:
    """Generate the failure-mode rollback plan (reverse order).

    Every side effect the forward pass recorded is undone, last one
    first. Nothing that is not in the ledger is ever touched.

    Args:
        ledger: The run's installation ledger.

    Returns:
        Ordered list of undo records (reverse of execution order).
    """
    return list(reversed(ledger.undo))


def plan_success_cleanup(ledger: InstallationLedger) -> list[UndoRecord]:
    """Generate the success-mode cleanup plan.

    Installed artifacts stay. Only the runtime workspace that the CLI
    build populated is removed, and only when this run recorded it.
    """
    if not ledger.build_cache_dir:
        return []
    return [
        UndoRecord(
            kind="remove_tree",
            tool="go",
            path=ledger.build_cache_dir,
            description="go workspace directory",
        ),
    ]
