"""Health checks for Bazel, the aspect repository, and target configuration."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from bazelcompdb.core.config import CONFIG_FILE_NAME, TARGETS_SETTING_KEY, ConfigManager

#: Files the overridden aspect repository must provide.
REPOSITORY_FILES = ("aspects.bzl", "postprocess.py")


@dataclass
class HealthCheckResult:
    """Result of a single health check."""

    name: str
    ok: bool
    message: str = ""
    suggestion: str = ""


def _run_cmd(cmd: list[str], timeout: int = 30) -> tuple[bool, str]:
    """Run command, return (success, output_or_error)."""
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        if result.returncode == 0:
            return True, (result.stdout or "").strip()
        return False, result.stderr or result.stdout or f"exit code {result.returncode}"
    except FileNotFoundError:
        return False, "command not found"
    except subprocess.TimeoutExpired:
        return False, "timeout"
    except OSError as e:
        return False, str(e)


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0] if lines else ""


class HealthChecker:
    """Run health checks for the bazel binary, aspect repository, and targets."""

    def __init__(self, config: ConfigManager | None = None) -> None:
        self._config = config or ConfigManager()

    def check_bazel(self) -> HealthCheckResult:
        """Check that the configured bazel binary runs and reports a version."""
        bazel = self._config.config.bazel
        ok, out = _run_cmd([bazel, "version"])
        if not ok:
            return HealthCheckResult(
                name="bazel",
                ok=False,
                message=out or f"{bazel} version failed.",
                suggestion=(
                    "Install Bazel or Bazelisk and add it to PATH, or set 'bazel' in "
                    f"{CONFIG_FILE_NAME} (or BAZEL in .env) to the executable path."
                ),
            )
        found = shutil.which(bazel)
        message = _first_line(out) or "OK"
        if found:
            message = f"{message} (binary: {Path(found).resolve()})"
        return HealthCheckResult(name="bazel", ok=True, message=message)

    def check_repository(self) -> HealthCheckResult:
        """Check that the aspect repository holds aspects.bzl and postprocess.py."""
        root = self._config.default_repository_root()
        if not root.is_dir():
            return HealthCheckResult(
                name="repository",
                ok=False,
                message=f"Aspect repository not found at {root}.",
                suggestion=f"Set 'repository_root' in {CONFIG_FILE_NAME} or pass --repository.",
            )
        missing = [f for f in REPOSITORY_FILES if not (root / f).is_file()]
        if missing:
            return HealthCheckResult(
                name="repository",
                ok=False,
                message=f"{root} is missing {', '.join(missing)}.",
                suggestion="Point 'repository_root' at a directory with the compdb aspect and post-processing script.",
            )
        return HealthCheckResult(name="repository", ok=True, message=str(root))

    def check_targets(self) -> HealthCheckResult:
        """Check that at least one target label is configured."""
        targets = self._config.config.compdb.targets
        if not targets:
            return HealthCheckResult(
                name="targets",
                ok=False,
                message=f"'{TARGETS_SETTING_KEY}' is not configured.",
                suggestion=f"Add a list of cc_library / cc_binary labels under compdb.targets in {CONFIG_FILE_NAME}.",
            )
        return HealthCheckResult(name="targets", ok=True, message=", ".join(targets))

    def check_all(self, *, skip_bazel: bool = False) -> list[HealthCheckResult]:
        """Run all enabled checks."""
        results: list[HealthCheckResult] = []
        if not skip_bazel:
            results.append(self.check_bazel())
        results.append(self.check_repository())
        results.append(self.check_targets())
        return results
