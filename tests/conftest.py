"""Shared pytest fixtures for bazel-compdb tests.

Factory functions live in ``_helpers.py``; this module re-exports them as
pytest fixtures so tests can receive them via dependency injection.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bazelcompdb.core.config import ConfigManager
from bazelcompdb.core.events import TerminationEventSource

from _helpers import RecordingSink, make_config_manager


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config_manager(tmp_path: Path) -> ConfigManager:
    """A real ConfigManager with two targets configured."""
    return make_config_manager(
        tmp_path,
        yaml_text="compdb:\n  targets:\n    - //foo:bar\n    - //baz:qux\n",
    )


@pytest.fixture()
def empty_config_manager(tmp_path: Path) -> ConfigManager:
    """A real ConfigManager with no YAML or .env, so defaults are used."""
    return make_config_manager(tmp_path)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def events() -> TerminationEventSource:
    return TerminationEventSource()
