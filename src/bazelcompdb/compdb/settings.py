"""Read the generation settings (targets and working directory) from configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bazelcompdb.core.config import TARGETS_SETTING_KEY, ConfigManager
from bazelcompdb.core.exceptions import ConfigurationMissing

MISSING_TARGETS_MESSAGE = (
    "The list of bazel targets to index for the compilation database is not configured. "
    'Please configure the "{key}" setting to include a list of cc_library, cc_binary labels.'
)


@dataclass
class GenerationSettings:
    """Settings resolved for one run."""

    targets: list[str]
    working_directory: Path
    repository_root: Path
    tool_path: str = "bazel"
    name: str = "bazel-compdb"
    environment: dict[str, str] = field(default_factory=dict)


class ConfigurationReader:
    """Resolve settings from a ConfigManager; explicit overrides win over configuration."""

    def __init__(self, config_manager: ConfigManager) -> None:
        self._config_manager = config_manager

    def read_targets(self, override: list[str] | None = None) -> list[str]:
        """Return the configured target labels, raising ConfigurationMissing if there are none."""
        targets = list(override) if override else self._config_manager.config.compdb.targets
        if not targets:
            raise ConfigurationMissing(
                TARGETS_SETTING_KEY,
                MISSING_TARGETS_MESSAGE.format(key=TARGETS_SETTING_KEY),
            )
        return list(targets)

    def read_working_directory(self, override: Path | None = None) -> Path:
        """Configured cwd relative to the workspace root; the workspace root when unset."""
        root = self._config_manager.project_root
        raw = override if override is not None else self._config_manager.config.cwd
        if not raw:
            return root
        path = Path(raw).expanduser()
        return path if path.is_absolute() else (root / path).resolve()

    def read(
        self,
        *,
        targets: list[str] | None = None,
        working_directory: Path | None = None,
        repository_root: Path | None = None,
        tool_path: str | None = None,
    ) -> GenerationSettings:
        cfg = self._config_manager.config
        return GenerationSettings(
            targets=self.read_targets(targets),
            working_directory=self.read_working_directory(working_directory),
            repository_root=(
                Path(repository_root).resolve()
                if repository_root is not None
                else self._config_manager.default_repository_root()
            ),
            tool_path=tool_path or cfg.bazel,
            name=cfg.name,
            environment=dict(cfg.env),
        )
