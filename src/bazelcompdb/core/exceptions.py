"""Custom exception hierarchy for bazel-compdb."""

from __future__ import annotations


class CompdbError(Exception):
    """Base exception for bazel-compdb."""

    pass


class ConfigError(CompdbError):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigurationMissing(ConfigError):
    """Raised when a required setting is absent or empty."""

    def __init__(self, setting_key: str, message: str) -> None:
        super().__init__(message)
        self.setting_key = setting_key


class ExternalToolFailure(CompdbError):
    """Raised when Bazel or the post-processing script exits unsuccessfully."""

    def __init__(self, step: str, exit_code: int | None) -> None:
        status = "could not be started" if exit_code is None else f"exited with status {exit_code}"
        super().__init__(f"Step '{step}' {status}")
        self.step = step
        self.exit_code = exit_code
