"""
Shared test fixtures and configuration.

Every host path the installer touches is relocated under ``tmp_path``,
and the external programs (curl, tar, unzip, go, archy) are simulated
by a MockCommandAdapter whose handlers create the files those programs
would create.
"""

from __future__ import annotations

import logging
import os
import pwd
from dataclasses import dataclass
from pathlib import Path

import pytest

from genesys_toolkit.adapters.mock import MockCall, MockCommandAdapter, output
from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter
from genesys_toolkit.core.config.settings import ToolkitConfig, load_config
from genesys_toolkit.core.models.ledger import InstallationLedger
from genesys_toolkit.core.models.platform import Platform
from genesys_toolkit.core.observability.logging_config import SeverityFormatter
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext


@dataclass
class Host:
    """A fake host rooted in a temporary directory."""

    root: Path
    config: ToolkitConfig
    user: str
    home: Path

    @property
    def gopath(self) -> Path:
        return self.home / "go"

    @property
    def scratch_root(self) -> Path:
        return self.config.scratch_root


def _current_user() -> str:
    # Running as the current user keeps delegate ownership a no-op
    return pwd.getpwuid(os.getuid()).pw_name


def make_host(root: Path, **overrides) -> Host:
    """Lay out a fake host under ``root`` and build its configuration."""
    for d in ("usr/local/bin", "etc/profile.d", "tmp", "home/tester"):
        (root / d).mkdir(parents=True, exist_ok=True)

    settings = {
        "go_install_dir": root / "usr" / "local",
        "cli_install_dir": root / "usr" / "local" / "bin",
        "terraform_install_dir": root / "usr" / "local" / "bin",
        "profile_d_dir": root / "etc" / "profile.d",
        "paths_d_dir": root / "etc" / "paths.d",
        "scratch_root": root / "tmp",
        "require_root": False,
        "required_commands": ["sh"],
    }
    settings.update(overrides)
    return Host(
        root=root,
        config=load_config(**settings),
        user=_current_user(),
        home=root / "home" / "tester",
    )


def _arg_after(cmd: list[str], flag: str) -> str:
    return cmd[cmd.index(flag) + 1]


def fake_toolchain(host: Host) -> MockCommandAdapter:
    """A command adapter that behaves like a healthy toolchain."""
    mock = MockCommandAdapter()

    def curl(call: MockCall):
        Path(_arg_after(call.cmd, "-o")).write_bytes(b"archive")

    def tar(call: MockCall):
        go_bin = Path(_arg_after(call.cmd, "-C")) / "go" / "bin"
        go_bin.mkdir(parents=True)
        (go_bin / "go").write_text("#!/bin/sh\n")

    def go(call: MockCall):
        if call.cmd[1] == "env":
            return output(f"{host.gopath}\n")
        if call.cmd[1] == "install":
            gc_bin = host.gopath / "bin"
            gc_bin.mkdir(parents=True)
            (gc_bin / "gc").write_text("#!/bin/sh\n")
        return None

    def unzip(call: MockCall):
        archive = Path(call.cmd[1])
        dest = Path(_arg_after(call.cmd, "-d"))
        if archive.name.startswith("terraform"):
            (dest / "terraform").write_text("#!/bin/sh\n")
        else:
            (dest / "archy").write_text("#!/bin/sh\n")
            (dest / "archyLib").mkdir()

    mock.on("curl", curl)
    mock.on("tar", tar)
    mock.on("go", go)
    mock.on("unzip", unzip)
    return mock


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo any setup_logging() a test performed."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if isinstance(h.formatter, SeverityFormatter) or isinstance(h, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def host(tmp_path: Path) -> Host:
    """Fake host with every install location under ``tmp_path``."""
    return make_host(tmp_path)


@pytest.fixture
def host_factory(tmp_path: Path):
    """Build a fake host with configuration overrides, plus its toolchain."""

    def _factory(**overrides) -> tuple[Host, MockCommandAdapter]:
        built = make_host(tmp_path, **overrides)
        return built, fake_toolchain(built)

    return _factory


@pytest.fixture
def toolchain(host: Host) -> MockCommandAdapter:
    """Simulated external programs for ``host``."""
    return fake_toolchain(host)


@pytest.fixture
def linux_amd64() -> Platform:
    return Platform.from_uname("Linux", "x86_64")


@pytest.fixture
def step_ctx(host: Host, toolchain: MockCommandAdapter, linux_amd64: Platform) -> StepContext:
    """Step context with a created scratch workspace."""
    ledger = InstallationLedger()
    scratch = host.scratch_root / "genesys-toolkit-install-test"
    scratch.mkdir()
    ledger.set_scratch_dir(scratch)
    return StepContext(
        config=host.config,
        platform=linux_amd64,
        user=host.user,
        home=host.home,
        ledger=ledger,
        commands=toolchain,
        fs=FilesystemAdapter(),
    )
