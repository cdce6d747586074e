"""
L4 Execution — Undo record execution.

Runs undo records best-effort: a failing record is logged as an error
and the remaining records still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.ledger import UndoRecord

logger = logging.getLogger(__name__)


@dataclass
class RollbackReport:
    """Result of executing a list of undo records."""

    receipts: list[Receipt] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def steps_run(self) -> int:
        return len(self.receipts)

    @property
    def steps_failed(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "steps_run": self.steps_run,
            "steps_failed": self.steps_failed,
            "errors": list(self.errors),
        }


def apply_undo(record: UndoRecord, fs: FilesystemAdapter) -> Receipt:
    """Reverse the single side effect described by ``record``."""
    path = Path(record.path)
    if record.kind == "remove_file":
        return fs.remove_file(path)
    if record.kind == "remove_tree":
        return fs.remove_tree(path)
    if record.kind == "strip_profile_lines":
        return fs.strip_block(path, record.lines, newline_added=record.newline_added)
    return Receipt.failure(
        source=fs.name,
        action="undo",
        error=f"Unknown undo kind: {record.kind}",
    )


def execute_rollback(records: list[UndoRecord], fs: FilesystemAdapter) -> RollbackReport:
    """Apply every undo record in the given order.

    Args:
        records: Undo records, already in execution order.
        fs: Filesystem adapter.

    Returns:
        RollbackReport listing each failure.
    """
    report = RollbackReport()

    for record in records:
        what = record.description or record.kind
        receipt = apply_undo(record, fs)
        report.receipts.append(receipt)

        if receipt.ok:
            logger.info('Successfully removed the %s "%s".', what, record.path)
        else:
            message = f'Could not remove the {what} "{record.path}".'
            report.errors.append(message)
            logger.error("%s %s", message, receipt.error or "")

    return report
