"""
End-to-end tests for the step sequencer and rollback engine.

Each test runs ``run_install`` against a fake host under ``tmp_path``
and compares the host before and after the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.models.ledger import InstallationLedger
from genesys_toolkit.core.models.platform import Platform
from genesys_toolkit.core.services.toolkit_install.execution.steps import install_go
from genesys_toolkit.core.services.toolkit_install.orchestration.orchestrator import (
    cleanup,
    run_install,
)


class RecordingFilesystem(FilesystemAdapter):
    """Filesystem adapter that remembers what it removed, in order."""

    def __init__(self) -> None:
        self.removed: list[Path] = []

    def remove_file(self, path: Path):
        self.removed.append(path)
        return super().remove_file(path)

    def remove_tree(self, path: Path):
        self.removed.append(path)
        return super().remove_tree(path)


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Every path under ``root`` with file contents (None for directories)."""
    return {
        str(p.relative_to(root)): (p.read_bytes() if p.is_file() else None)
        for p in sorted(root.rglob("*"))
    }


def _run(host, commands, platform=None, **kwargs) -> int:
    return run_install(
        host.config,
        commands=commands,
        platform=platform or Platform.from_uname("Linux", "x86_64"),
        user=host.user,
        home=host.home,
        **kwargs,
    )


# ── Success path ─────────────────────────────────────────────────────


class TestSuccess:
    def test_full_install(self, host, toolchain):
        ledger = InstallationLedger()
        status = _run(host, toolchain, ledger=ledger)

        assert status == 0
        assert host.config.go_binary.is_file()
        assert host.config.cli_binary.is_file()
        assert host.config.terraform_binary.is_file()
        assert (host.home / "archy" / "archy").is_file()
        assert host.config.profile_d_path.is_file()
        assert (host.home / ".zprofile").is_file()
        assert (host.home / ".bash_profile").is_file()
        assert all(ledger.tool(t).installed for t in ("go", "gc", "terraform", "archy"))

    def test_no_scratch_or_build_cache_left(self, host, toolchain):
        ledger = InstallationLedger()
        assert _run(host, toolchain, ledger=ledger) == 0
        assert list(host.scratch_root.iterdir()) == []
        assert not host.gopath.exists()
        assert ledger.scratch_dir is None

    def test_steps_run_in_order(self, host, toolchain):
        _run(host, toolchain)
        actions = [c.action for c in toolchain.call_log]
        assert actions == [
            "go:download", "go:extract", "go:env",
            "gc:build",
            "terraform:download", "terraform:extract",
            "archy:download", "archy:extract", "archy:verify",
        ]

    def test_archy_unsupported_platform(self, host, toolchain):
        status = _run(host, toolchain, platform=Platform.from_uname("Linux", "aarch64"))
        assert status == 0
        assert host.config.terraform_binary.is_file()
        assert not (host.home / "archy").exists()
        assert not (host.home / ".zprofile").exists()
        assert not (host.home / ".bash_profile").exists()
        assert "archy" not in toolchain.programs_called()

    def test_success_logs_cleanup(self, host, toolchain, caplog):
        with caplog.at_level(logging.INFO):
            _run(host, toolchain)
        assert "Starting cleanup..." in caplog.text
        assert "Finished cleanup." in caplog.text
        assert "rollback" not in caplog.text


# ── Gate failures ────────────────────────────────────────────────────


class TestGateFailures:
    def test_unsupported_platform(self, host, toolchain):
        before = snapshot(host.root)
        status = _run(host, toolchain, platform=Platform.from_uname("Linux", "riscv64"))
        assert status != 0
        assert snapshot(host.root) == before
        assert toolchain.call_count == 0

    def test_prerequisite_failure_changes_nothing(self, host, toolchain):
        host.config.terraform_binary.write_text("old terraform")
        before = snapshot(host.root)
        status = _run(host, toolchain)
        assert status == 1
        assert snapshot(host.root) == before
        assert toolchain.call_count == 0

    def test_unresolvable_user(self, host, toolchain):
        before = snapshot(host.root)
        status = run_install(
            host.config,
            commands=toolchain,
            platform=Platform.from_uname("Darwin", "arm64"),
            environ={"SUDO_USER": "nobody-special"},
        )
        assert status == 1
        assert snapshot(host.root) == before

    def test_user_resolved_from_environment(self, host, toolchain):
        status = run_install(
            host.config,
            commands=toolchain,
            platform=Platform.from_uname("Darwin", "arm64"),
            environ={"SUDO_USER": host.user, "HOME": str(host.home)},
        )
        assert status == 0
        assert (host.home / "archy" / "archy").is_file()


# ── Rollback ─────────────────────────────────────────────────────────


def _fail_at(toolchain, step: str, exit_code: int) -> None:
    if step == "go":
        toolchain.set_failure("tar", exit_code=exit_code)
    elif step == "gc":
        toolchain.set_failure("go", exit_code=exit_code, when=lambda c: c.cmd[1] == "install")
    elif step == "terraform":
        toolchain.set_failure(
            "unzip",
            exit_code=exit_code,
            when=lambda c: Path(c.cmd[1]).name.startswith("terraform"),
        )
    else:
        toolchain.set_failure("archy", exit_code=exit_code)


class TestRollback:
    @pytest.mark.parametrize("step", ["go", "gc", "terraform", "archy"])
    def test_failure_restores_host(self, host, toolchain, step):
        (host.home / ".bash_profile").write_text("alias ll='ls -l'\n")
        before = snapshot(host.root)
        _fail_at(toolchain, step, exit_code=7)

        status = _run(host, toolchain)

        assert status == 7
        assert snapshot(host.root) == before

    @pytest.mark.parametrize(
        "contents",
        [
            "export PATH=$PATH:$HOME/archy-tools/bin\nalias ll='ls -l'\n",
            "# Archy path added by genesys-toolkit-install, kept by hand\n",
            "alias ll='ls -l'",
        ],
    )
    def test_existing_profile_restored_exactly(self, host, toolchain, contents):
        profile = host.home / ".bash_profile"
        profile.write_text(contents)
        _fail_at(toolchain, "archy", exit_code=3)

        assert _run(host, toolchain) == 3

        assert profile.read_bytes() == contents.encode()
        assert not (host.home / ".zprofile").exists()

    def test_download_failure_removes_scratch_only(self, host, toolchain):
        toolchain.set_failure("curl", exit_code=6)
        fs = RecordingFilesystem()
        ledger = InstallationLedger()
        before = snapshot(host.root)

        status = _run(host, toolchain, ledger=ledger, fs=fs)

        assert status == 6
        assert ledger.untouched
        assert len(fs.removed) == 1
        assert fs.removed[0].parent == host.scratch_root
        assert snapshot(host.root) == before

    def test_rollback_order(self, host_factory, tmp_path):
        host, toolchain = host_factory(
            go_install_dir=tmp_path / "opt" / "golang",
            cli_install_dir=tmp_path / "opt" / "gc",
        )
        toolchain.set_failure("curl", exit_code=22, when=lambda c: "terraform" in c.cmd[-1])
        fs = RecordingFilesystem()

        status = _run(host, toolchain, fs=fs)

        assert status == 22
        config = host.config
        assert fs.removed[:-1] == [
            config.cli_binary,
            config.cli_install_dir,
            config.profile_d_path,
            host.gopath,
            config.go_root,
            config.go_install_dir,
        ]
        assert fs.removed[-1].parent == host.scratch_root
        for path in fs.removed:
            assert not path.exists()

    def test_preexisting_install_root_is_kept(self, host, toolchain):
        neighbour = host.config.cli_install_dir / "kubectl"
        neighbour.write_text("unrelated")
        _fail_at(toolchain, "terraform", exit_code=1)

        assert _run(host, toolchain) == 1

        assert host.config.cli_install_dir.is_dir()
        assert neighbour.read_text() == "unrelated"
        assert not host.config.cli_binary.exists()

    def test_preexisting_go_workspace_is_kept(self, host, toolchain):
        (host.gopath / "src").mkdir(parents=True)
        status = _run(host, toolchain)
        assert status == 1
        assert (host.gopath / "src").is_dir()
        assert not host.config.go_root.exists()

    def test_rollback_continues_after_removal_error(self, host, toolchain, caplog):
        class StubbornFilesystem(RecordingFilesystem):
            def remove_file(self, path):
                if path.name == "gc":
                    self.removed.append(path)
                    return self._failure("remove", path, PermissionError("denied"))
                return super().remove_file(path)

        _fail_at(toolchain, "terraform", exit_code=5)
        fs = StubbornFilesystem()
        with caplog.at_level(logging.INFO):
            status = _run(host, toolchain, fs=fs)

        assert status == 5
        assert host.config.cli_binary.exists()
        assert not host.config.go_root.exists()
        assert not host.config.profile_d_path.exists()
        assert f'Could not remove the gc installation "{host.config.cli_binary}".' in caplog.text
        assert "Finished cleanup." in caplog.text

    def test_unexpected_exception_rolls_back(self, host, toolchain):
        def explode(ctx):
            raise RuntimeError("boom")

        before = snapshot(host.root)
        status = _run(host, toolchain, steps=(("go", install_go), ("gc", explode)))
        assert status == 1
        assert snapshot(host.root) == before


# ── cleanup() ────────────────────────────────────────────────────────


class TestCleanup:
    def test_returns_status_unchanged(self, tmp_path):
        assert cleanup(0, InstallationLedger(), FilesystemAdapter()) == 0
        assert cleanup(124, InstallationLedger(), FilesystemAdapter()) == 124

    def test_untouched_ledger_removes_nothing(self, tmp_path):
        fs = RecordingFilesystem()
        cleanup(1, InstallationLedger(), fs)
        assert fs.removed == []

    def test_success_keeps_installed_artifacts(self, tmp_path):
        binary = tmp_path / "terraform"
        binary.write_text("x")
        cache = tmp_path / "go"
        cache.mkdir()
        ledger = InstallationLedger()
        ledger.mark_installed("terraform", binary)
        ledger.record_build_cache(cache)

        cleanup(0, ledger, FilesystemAdapter())

        assert binary.exists()
        assert not cache.exists()

    def test_failure_logs_rollback(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO):
            cleanup(3, InstallationLedger(), FilesystemAdapter())
        assert "Starting cleanup with rollback..." in caplog.text
        assert "Finished cleanup." in caplog.text
