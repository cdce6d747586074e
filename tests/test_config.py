"""
Tests for installer configuration — defaults, derived paths, validation.
"""

from pathlib import Path

import pytest

from genesys_toolkit.core.config.settings import ConfigError, ToolkitConfig, load_config


class TestDefaults:
    def test_versions(self):
        config = load_config()
        assert config.go_version == "1.19.2"
        assert config.terraform_version == "1.3.3"

    def test_system_locations(self):
        config = ToolkitConfig()
        assert config.go_root == Path("/usr/local/go")
        assert config.go_binary == Path("/usr/local/go/bin/go")
        assert config.cli_binary == Path("/usr/local/bin/gc")
        assert config.terraform_binary == Path("/usr/local/bin/terraform")
        assert config.profile_d_path == Path("/etc/profile.d/golang-path.sh")
        assert config.paths_d_path == Path("/etc/paths.d/golang-path")

    def test_archy_dir_under_home(self):
        assert ToolkitConfig().archy_dir(Path("/home/me")) == Path("/home/me/archy")

    def test_supported_platforms(self):
        pairs = ToolkitConfig().supported_platforms
        assert ("Linux", "x86_64") in pairs
        assert ("Darwin", "arm64") in pairs
        assert len(pairs) == 4

    def test_profile_files(self):
        assert ToolkitConfig().profile_files == {".zprofile": "Zsh", ".bash_profile": "Bash"}

    def test_required_commands(self):
        assert ToolkitConfig().required_commands == ["curl", "tar", "unzip"]

    def test_install_roots(self):
        roots = ToolkitConfig().install_roots()
        assert set(roots) == {"go", "gc", "terraform"}


class TestOverrides:
    def test_override_paths(self, tmp_path: Path):
        config = load_config(go_install_dir=tmp_path)
        assert config.go_root == tmp_path / "go"

    def test_unmappable_platform_rejected(self):
        with pytest.raises(ConfigError, match="Invalid installer configuration"):
            load_config(supported_platforms=[("Plan9", "mips")])

    def test_bad_type_rejected(self):
        with pytest.raises(ConfigError):
            load_config(require_root="not-a-bool")
