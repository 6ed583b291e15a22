"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bazelcompdb.cli import main

from _helpers import completed

CONFIG = "compdb:\n  targets:\n    - //foo:bar\npresentation:\n  clear: false\n"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _workspace(root: Path, config: str | None = CONFIG) -> None:
    (root / "MODULE.bazel").write_text("")
    if config is not None:
        (root / ".bazel-compdb.yaml").write_text(config)


def test_cli_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_cli_generate_without_targets_fails(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd(), config=None)
        with patch("bazelcompdb.compdb.task_runner.subprocess.run") as m:
            result = runner.invoke(main, ["generate"], catch_exceptions=False)
        assert result.exit_code == 1
        assert "compdb.targets" in result.output
        m.assert_not_called()


def test_cli_generate_success(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        with patch("bazelcompdb.compdb.task_runner.subprocess.run", return_value=completed(0)) as m:
            result = runner.invoke(main, ["generate"], catch_exceptions=False)
        assert result.exit_code == 0, result.output
        assert "Building clang compilation database for" in result.output
        assert "Complete!" in result.output
        assert m.call_count == 3
        build_argv = m.call_args_list[0].args[0]
        assert build_argv[:2] == ["bazel", "build"]
        assert "//foo:bar" in build_argv
        assert Path("bazel-compdb.log").exists()


def test_cli_generate_build_failure_exits_nonzero(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        with patch(
            "bazelcompdb.compdb.task_runner.subprocess.run",
            side_effect=[completed(1), completed(0)],
        ):
            result = runner.invoke(main, ["generate"], catch_exceptions=False)
        assert result.exit_code == 1
        assert "Complete!" not in result.output


def test_cli_generate_target_option_overrides_config(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        with patch("bazelcompdb.compdb.task_runner.subprocess.run", return_value=completed(0)) as m:
            result = runner.invoke(
                main,
                ["generate", "--target", "//a:a", "--target", "//b:b", "--bazel", "bazelisk"],
                catch_exceptions=False,
            )
        assert result.exit_code == 0, result.output
        build_argv = m.call_args_list[0].args[0]
        assert build_argv[0] == "bazelisk"
        assert build_argv[-2:] == ["//a:a", "//b:b"]


def test_cli_generate_dry_run(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        with patch("bazelcompdb.compdb.task_runner.subprocess.run") as m:
            result = runner.invoke(main, ["generate", "--dry-run"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "bazel build --override_repository=bazel_vscode_compdb=" in result.output
        assert "postprocess.py -b" in result.output
        m.assert_not_called()


def test_cli_generate_custom_log_file(runner: CliRunner, tmp_path: Path) -> None:
    custom_log = tmp_path / "my-run.log"
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        with patch("bazelcompdb.compdb.task_runner.subprocess.run", return_value=completed(0)):
            runner.invoke(main, ["generate", "--log-file", str(custom_log)], catch_exceptions=False)
    content = custom_log.read_text(encoding="utf-8")
    assert "generation started" in content
    assert "targets=" in content


def test_cli_invalid_config_exits_one(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd(), config="compdb:\n  targets: 5\n")
        result = runner.invoke(main, ["generate"], catch_exceptions=False)
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


def test_cli_check_reports_failures(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd(), config=None)
        result = runner.invoke(main, ["check", "--skip-bazel"], catch_exceptions=False)
        assert result.exit_code == 1
        assert "repository: FAIL" in result.output
        assert "targets: FAIL" in result.output


def test_cli_check_all_pass(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        root = Path.cwd()
        _workspace(root)
        repo = root / "tools" / "compdb"
        repo.mkdir(parents=True)
        (repo / "aspects.bzl").write_text("")
        (repo / "postprocess.py").write_text("")
        with patch("bazelcompdb.core.health._run_cmd", return_value=(True, "Build label: 7.1.0")):
            result = runner.invoke(main, ["check", "-v"], catch_exceptions=False)
        assert result.exit_code == 0, result.output
        assert "All checks passed." in result.output
        assert "Build label: 7.1.0" in result.output


def test_cli_show_config(runner: CliRunner, tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        _workspace(Path.cwd())
        result = runner.invoke(main, ["show-config"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "//foo:bar" in result.output
        assert "bazel: bazel" in result.output
