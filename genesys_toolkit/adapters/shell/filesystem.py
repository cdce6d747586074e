"""
Filesystem adapter — file and directory operations.

Provides a receipt-returning interface for every filesystem side
effect the installer performs or reverses, so steps and rollback can
log and continue instead of handling OSError at each call site.

Removals are idempotent: removing something already absent succeeds.
"""

from __future__ import annotations

import logging
import os
import pwd
import shutil
import stat
from pathlib import Path

from genesys_toolkit.adapters.base import Adapter
from genesys_toolkit.core.models.action import Receipt

logger = logging.getLogger(__name__)


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    ``owner`` parameters hand a created path to another user (the
    invoking user behind ``sudo``); they are ignored unless running as
    root.
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True  # filesystem is always available

    # ── Creation ─────────────────────────────────────────────────

    def make_dir(self, path: Path, owner: str | None = None) -> Receipt:
        """Create ``path`` (and missing parents)."""
        try:
            path.mkdir(parents=True)
            self._chown(path, owner)
        except (OSError, KeyError) as e:
            return self._failure("mkdir", path, e)
        return Receipt.success(
            source=self.name,
            action="mkdir",
            output=f"Directory created: {path}",
            metadata={"path": str(path)},
        )

    def make_scratch_dir(self, path: Path) -> Receipt:
        """Create a fresh directory; an existing one is a failure."""
        try:
            path.mkdir()
        except OSError as e:
            return self._failure("mkdir", path, e)
        return Receipt.success(
            source=self.name,
            action="mkdir",
            output=f"Directory created: {path}",
            metadata={"path": str(path)},
        )

    def write_file(self, path: Path, content: str) -> Receipt:
        """Write ``content`` to ``path``, replacing it."""
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            return self._failure("write", path, e)
        return Receipt.success(
            source=self.name,
            action="write",
            output=f"Written {len(content)} bytes to {path}",
            metadata={"path": str(path), "size": len(content)},
        )

    def make_executable(self, path: Path) -> Receipt:
        """Add execute permission for everyone (``chmod a+x``)."""
        try:
            mode = path.stat().st_mode
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            return self._failure("chmod", path, e)
        return Receipt.success(
            source=self.name,
            action="chmod",
            metadata={"path": str(path)},
        )

    def copy_file(self, src: Path, dest: Path) -> Receipt:
        """Copy a file with its permission bits."""
        try:
            shutil.copy2(src, dest)
        except OSError as e:
            return self._failure("copy", dest, e)
        return Receipt.success(
            source=self.name,
            action="copy",
            output=f"Copied {src} to {dest}",
            metadata={"src": str(src), "path": str(dest)},
        )

    def touch(self, path: Path, owner: str | None = None) -> Receipt:
        """Create an empty file; an existing one is a failure."""
        try:
            path.touch(exist_ok=False)
            self._chown(path, owner)
        except (OSError, KeyError) as e:
            return self._failure("touch", path, e)
        return Receipt.success(
            source=self.name,
            action="touch",
            metadata={"path": str(path)},
        )

    def append_text(self, path: Path, text: str) -> Receipt:
        """Append ``text``, first ending a non-empty file with a newline."""
        try:
            with open(path, "rb") as f:
                f.seek(0, os.SEEK_END)
                needs_newline = False
                if f.tell() > 0:
                    f.seek(-1, os.SEEK_END)
                    needs_newline = f.read(1) != b"\n"
            with open(path, "a", encoding="utf-8") as f:
                f.write(("\n" if needs_newline else "") + text)
        except OSError as e:
            return self._failure("append", path, e)
        return Receipt.success(
            source=self.name,
            action="append",
            metadata={"path": str(path), "newline_added": needs_newline},
        )

    # ── Removal ──────────────────────────────────────────────────

    def remove_file(self, path: Path) -> Receipt:
        """Remove a single file."""
        try:
            path.unlink()
        except FileNotFoundError:
            return Receipt.success(
                source=self.name, action="remove", output=f"Already absent: {path}",
            )
        except OSError as e:
            return self._failure("remove", path, e)
        return Receipt.success(
            source=self.name,
            action="remove",
            output=f"Removed {path}",
            metadata={"path": str(path)},
        )

    def remove_tree(self, path: Path) -> Receipt:
        """Remove a directory tree (or a lone file at that path)."""
        if not path.exists() and not path.is_symlink():
            return Receipt.success(
                source=self.name, action="remove", output=f"Already absent: {path}",
            )
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            return self._failure("remove", path, e)
        return Receipt.success(
            source=self.name,
            action="remove",
            output=f"Removed {path}",
            metadata={"path": str(path)},
        )

    def strip_block(self, path: Path, block: list[str], newline_added: bool = False) -> Receipt:
        """Delete the last occurrence of ``block`` from ``path``.

        Only whole lines matching ``block`` exactly, in order, are
        removed. ``newline_added`` also drops the newline that
        ``append_text`` put in front of the block when it is still last.
        """
        if not path.is_file():
            return Receipt.success(
                source=self.name, action="strip", output=f"Already absent: {path}",
            )
        try:
            with open(path, encoding="utf-8", newline="") as f:
                lines = f.read().splitlines(keepends=True)

            start = _find_block(lines, block)
            removed = 0
            if start is not None:
                kept = lines[:start] + lines[start + len(block):]
                # Only a trailing block can give back the newline in front of it
                if newline_added and 0 < start == len(kept) and kept[-1].endswith("\n"):
                    kept[-1] = kept[-1][:-1]
                removed = len(block)
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write("".join(kept))
        except (OSError, UnicodeDecodeError) as e:
            return self._failure("strip", path, e)
        return Receipt.success(
            source=self.name,
            action="strip",
            output=f"Removed {removed} line(s) from {path}",
            metadata={"path": str(path), "removed": removed},
        )

    # ── Helpers ──────────────────────────────────────────────────

    @staticmethod
    def _chown(path: Path, owner: str | None) -> None:
        if not owner or os.geteuid() != 0:
            return
        entry = pwd.getpwnam(owner)
        os.chown(path, entry.pw_uid, entry.pw_gid)

    def _failure(self, action: str, path: Path, exc: Exception) -> Receipt:
        logger.debug("Filesystem %s failed for %s: %s", action, path, exc)
        return Receipt.failure(
            source=self.name,
            action=action,
            error=f"Filesystem error: {exc}",
            metadata={"path": str(path)},
        )


def _find_block(lines: list[str], block: list[str]) -> int | None:
    """Index of the last run of whole lines equal to ``block``."""
    if not block:
        return None
    stripped = [line.rstrip("\r\n") for line in lines]
    for start in range(len(lines) - len(block), -1, -1):
        if stripped[start:start + len(block)] == block:
            return start
    return None
