"""Configuration loading from .env and YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError

from bazelcompdb.core.exceptions import ConfigError

log = logging.getLogger(__name__)

#: Files that mark the root of a Bazel workspace, checked in order.
WORKSPACE_MARKERS = ("MODULE.bazel", "WORKSPACE.bazel", "WORKSPACE")

#: Name of the YAML settings file at the workspace root.
CONFIG_FILE_NAME = ".bazel-compdb.yaml"

#: Dotted key of the target list setting, as reported to the user.
TARGETS_SETTING_KEY = "compdb.targets"


def _find_project_root(start: Path | None = None) -> Path:
    """Find the Bazel workspace root by looking for a workspace marker upward."""
    current = Path(start or Path.cwd()).resolve()
    for _ in range(32):
        if any((current / marker).exists() for marker in WORKSPACE_MARKERS):
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    return Path(start or Path.cwd()).resolve()


class CompdbConfigModel(BaseModel):
    """compdb section of config."""

    targets: list[str] | None = None


class PresentationConfigModel(BaseModel):
    """How a run is shown in the terminal."""

    clear: bool = True
    echo: bool = True


class AppConfig(BaseModel):
    """Full application configuration."""

    name: str = "bazel-compdb"
    bazel: str = "bazel"
    repository_root: str | None = None
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    notify_failure: bool = False
    compdb: CompdbConfigModel = Field(default_factory=CompdbConfigModel)
    presentation: PresentationConfigModel = Field(default_factory=PresentationConfigModel)


class ConfigManager:
    """Load and merge configuration from .env and YAML."""

    def __init__(
        self,
        project_root: Path | None = None,
        env_path: Path | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._root = Path(project_root or _find_project_root()).resolve()
        self._env_path = Path(env_path) if env_path else self._root / ".env"
        self._config_path = Path(config_path) if config_path else self._root / CONFIG_FILE_NAME
        self._config: AppConfig | None = None
        self._env: dict[str, str] = {}

    def load_env(self) -> dict[str, str]:
        """Load .env file into a dict (without modifying os.environ)."""
        if not self._env_path.exists():
            self._env = {}
            return self._env
        try:
            self._env = {k: v for k, v in dotenv_values(self._env_path).items() if v is not None}
        except (OSError, PermissionError) as e:
            log.warning("Failed to read .env file %s: %s", self._env_path, e)
            self._env = {}
        return self._env

    def load_yaml(self) -> dict[str, Any]:
        """Load YAML config file if it exists."""
        if not self._config_path.exists():
            return {}
        try:
            with open(self._config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, PermissionError) as e:
            log.warning("Failed to read config file %s: %s", self._config_path, e)
            return {}
        except yaml.YAMLError as e:
            log.warning("Malformed YAML in %s: %s", self._config_path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring config file %s: top level is not a mapping", self._config_path)
            return {}
        return data

    def load(self) -> AppConfig:
        """Load .env and YAML, merge with defaults, return AppConfig."""
        env = self.load_env()
        config_dict = self.load_yaml()

        # Environment variables override YAML values
        env_mapping = {
            "BAZEL": "bazel",
            "COMPDB_REPOSITORY": "repository_root",
            "COMPDB_CWD": "cwd",
        }
        for env_key, config_key in env_mapping.items():
            if env.get(env_key):
                config_dict[config_key] = env[env_key]
        if env.get("COMPDB_TARGETS"):
            labels = [t.strip() for t in env["COMPDB_TARGETS"].split(",") if t.strip()]
            compdb = dict(config_dict.get("compdb") or {})
            compdb["targets"] = labels
            config_dict["compdb"] = compdb

        try:
            self._config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self._config_path}: {e}") from e
        return self._config

    @property
    def config(self) -> AppConfig:
        """Return loaded config; load if not yet loaded."""
        if self._config is None:
            self.load()
        if self._config is None:
            raise RuntimeError("ConfigManager.load() failed to produce a config")
        return self._config

    @property
    def env(self) -> dict[str, str]:
        """Return loaded env dict."""
        if not self._env and self._env_path.exists():
            self.load_env()
        return self._env

    @property
    def project_root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        return self._config_path

    def default_repository_root(self) -> Path:
        """Directory holding aspects.bzl and postprocess.py when none is configured."""
        configured = self.config.repository_root
        if configured:
            path = Path(configured).expanduser()
            return path if path.is_absolute() else (self._root / path).resolve()
        return self._root / "tools" / "compdb"
