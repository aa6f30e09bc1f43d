"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from branchdiff.config.defaults import DEFAULT_TOML
from branchdiff.config.loader import ConfigError, load_config


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.base.branch == ""
        assert cfg.git.timeout == 30
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text(
            'version = "1.0"\n'
            '[base]\n'
            'branch = "develop"\n'
            '[output]\n'
            'format = "yaml"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.base.branch == "develop"
        assert cfg.output.format == "yaml"

    def test_default_template_parses(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text(DEFAULT_TOML, encoding="utf-8")
        cfg = load_config(tmp_path)
        assert cfg.output.gutter_char == "▎"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text('[git]\ntimeout = 5\nfoo = 1\n')
        cfg = load_config(tmp_path)
        assert cfg.git.timeout == 5

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[base]\nbranch = "release"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.base.branch == "release"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_timeout_raises(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text('[git]\ntimeout = 0\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".branchdiff.toml").write_text('base = "main"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_base_branch_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BRANCHDIFF_BASE_BRANCH", "develop")
        cfg = load_config(tmp_path)
        assert cfg.base.branch == "develop"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BRANCHDIFF_FORMAT", "json")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "json"

    def test_timeout_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BRANCHDIFF_GIT_TIMEOUT", "90")
        cfg = load_config(tmp_path)
        assert cfg.git.timeout == 90

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BRANCHDIFF_FORMAT", "not_a_format")
        monkeypatch.setenv("BRANCHDIFF_GIT_TIMEOUT", "soon")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"
        assert cfg.git.timeout == 30
