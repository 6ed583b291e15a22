"""Tests for ConfigurationReader."""

from __future__ import annotations

from pathlib import Path

import pytest

from bazelcompdb.compdb.settings import ConfigurationReader
from bazelcompdb.core.config import ConfigManager
from bazelcompdb.core.exceptions import ConfigurationMissing

from _helpers import make_config_manager


def test_read_targets_from_config(config_manager: ConfigManager) -> None:
    reader = ConfigurationReader(config_manager)
    assert reader.read_targets() == ["//foo:bar", "//baz:qux"]


def test_read_targets_override_wins(config_manager: ConfigManager) -> None:
    reader = ConfigurationReader(config_manager)
    assert reader.read_targets(["//only:this"]) == ["//only:this"]


def test_missing_targets_raise_with_setting_key(empty_config_manager: ConfigManager) -> None:
    reader = ConfigurationReader(empty_config_manager)
    with pytest.raises(ConfigurationMissing) as exc_info:
        reader.read_targets()
    assert exc_info.value.setting_key == "compdb.targets"
    assert "compdb.targets" in str(exc_info.value)


def test_empty_target_list_raises(tmp_path: Path) -> None:
    mgr = make_config_manager(tmp_path, yaml_text="compdb:\n  targets: []\n")
    with pytest.raises(ConfigurationMissing):
        ConfigurationReader(mgr).read()


def test_working_directory_defaults_to_workspace(config_manager: ConfigManager) -> None:
    reader = ConfigurationReader(config_manager)
    assert reader.read_working_directory() == config_manager.project_root


def test_working_directory_relative_to_workspace(tmp_path: Path) -> None:
    mgr = make_config_manager(tmp_path, yaml_text="cwd: sub\ncompdb:\n  targets: ['//a:a']\n")
    settings = ConfigurationReader(mgr).read()
    assert settings.working_directory == (tmp_path / "sub").resolve()


def test_read_collects_settings(tmp_path: Path) -> None:
    mgr = make_config_manager(
        tmp_path,
        yaml_text="bazel: bazelisk\nenv:\n  CC: clang\ncompdb:\n  targets: ['//a:a']\n",
    )
    repo = tmp_path / "compdb"
    settings = ConfigurationReader(mgr).read(repository_root=repo)
    assert settings.targets == ["//a:a"]
    assert settings.tool_path == "bazelisk"
    assert settings.environment == {"CC": "clang"}
    assert settings.repository_root == repo.resolve()
    assert settings.name == "bazel-compdb"


def test_read_tool_path_override(config_manager: ConfigManager) -> None:
    settings = ConfigurationReader(config_manager).read(tool_path="/usr/bin/bazel")
    assert settings.tool_path == "/usr/bin/bazel"
