"""
InstallationLedger — the record of what this run created or installed.

The ledger is created all-false at the start of a run, passed
explicitly into every installation step and consumed once by the
rollback engine. It is never persisted.

During the forward pass the ledger is append-only: flags only go from
False to True and undo records are only appended. Each undo record
carries enough information to reverse one side effect, so rollback is
a generic "undo every record in reverse order" instead of
tool-specific deletion code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

MANAGED_TOOLS: tuple[str, ...] = ("go", "gc", "terraform", "archy")

UndoKind = Literal["remove_file", "remove_tree", "strip_profile_lines"]


class UndoRecord(BaseModel):
    """One reversible side effect performed by this run."""

    kind: UndoKind
    tool: str
    path: str
    description: str = ""
    lines: list[str] = Field(default_factory=list)  # strip_profile_lines only
    newline_added: bool = False  # strip_profile_lines only


class ToolRecord(BaseModel):
    """Per-tool progress flags."""

    name: str
    target_dir_created_by_run: bool = False
    installed: bool = False


def _initial_tools() -> dict[str, ToolRecord]:
    return {name: ToolRecord(name=name) for name in MANAGED_TOOLS}


class InstallationLedger(BaseModel):
    """Process-scoped state consulted by the rollback engine."""

    tools: dict[str, ToolRecord] = Field(default_factory=_initial_tools)

    # Archy only: profile file name → created by this run
    profile_files_created: dict[str, bool] = Field(default_factory=dict)

    # ── Run scope ────────────────────────────────────────────────
    scratch_dir: str | None = None
    build_cache_dir: str | None = None

    # ── Reversible actions, in the order they happened ───────────
    undo: list[UndoRecord] = Field(default_factory=list)

    def tool(self, name: str) -> ToolRecord:
        """Look up a managed tool's record."""
        try:
            return self.tools[name]
        except KeyError:
            raise ValueError(f"Unknown managed tool: {name!r}") from None

    @property
    def untouched(self) -> bool:
        """True when the forward pass has recorded nothing at all."""
        return not self.undo and not any(
            r.installed or r.target_dir_created_by_run for r in self.tools.values()
        )

    # ── Forward pass (append-only) ───────────────────────────────

    def mark_dir_created(self, tool: str, path: Path | str) -> None:
        """Record that this run created ``tool``'s install-root."""
        record = self.tool(tool)
        record.target_dir_created_by_run = True
        self.undo.append(UndoRecord(
            kind="remove_tree",
            tool=tool,
            path=str(path),
            description=f"{tool} installation directory",
        ))

    def mark_installed(
        self,
        tool: str,
        path: Path | str,
        *,
        tree: bool = False,
    ) -> None:
        """Record that ``tool``'s payload now sits at ``path``.

        ``tree`` marks payloads that are whole directories (the Go
        distribution, the Archy folder) rather than a single binary.
        """
        record = self.tool(tool)
        record.installed = True
        kind = "remove_tree" if tree else "remove_file"
        # A directory this run created already has its removal recorded
        if any(r.kind == kind and r.path == str(path) for r in self.undo):
            return
        self.undo.append(UndoRecord(
            kind=kind,
            tool=tool,
            path=str(path),
            description=f"{tool} installation",
        ))

    def record_integration_file(self, tool: str, path: Path | str) -> None:
        """Record a global PATH-integration file written for ``tool``."""
        self.tool(tool)
        self.undo.append(UndoRecord(
            kind="remove_file",
            tool=tool,
            path=str(path),
            description=f"{tool} PATH integration file",
        ))

    def record_build_cache(self, path: Path | str) -> None:
        """Record the runtime workspace the CLI build will populate.

        Only called after the directory was verified not to exist, so
        removing it can never touch a pre-existing workspace.
        """
        self.build_cache_dir = str(path)
        self.undo.append(UndoRecord(
            kind="remove_tree",
            tool="go",
            path=str(path),
            description="go workspace directory",
        ))

    def mark_profile_created(self, path: Path | str) -> None:
        """Record that this run created a shell profile file."""
        path = Path(path)
        self.profile_files_created[path.name] = True
        self.undo.append(UndoRecord(
            kind="remove_file",
            tool="archy",
            path=str(path),
            description=f"{path.name} profile file",
        ))

    def record_profile_lines(
        self,
        path: Path | str,
        lines: list[str],
        *,
        newline_added: bool = False,
    ) -> None:
        """Record lines appended to a pre-existing shell profile file.

        ``newline_added`` notes that the file did not end with a newline
        and one was written in front of ``lines``.
        """
        path = Path(path)
        self.undo.append(UndoRecord(
            kind="strip_profile_lines",
            tool="archy",
            path=str(path),
            description=f"archy PATH lines in {path.name}",
            lines=list(lines),
            newline_added=newline_added,
        ))

    def set_scratch_dir(self, path: Path | str) -> None:
        """Record the run's scratch workspace (exactly once)."""
        if self.scratch_dir is not None:
            raise ValueError(
                f"Scratch workspace already created: {self.scratch_dir}"
            )
        self.scratch_dir = str(path)

    # ── Cleanup ──────────────────────────────────────────────────

    def clear_scratch_dir(self) -> None:
        """Forget the scratch workspace once it has been removed."""
        self.scratch_dir = None
