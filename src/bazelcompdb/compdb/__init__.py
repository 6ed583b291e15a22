"""Compilation database generation: command building, step running, completion notice."""

from bazelcompdb.compdb.command_builder import build_command, split_steps, to_shell_command
from bazelcompdb.compdb.generator import GenerationContext, GenerationOverrides, run_generation
from bazelcompdb.compdb.lifecycle import LifecycleNotifier, LifecycleState
from bazelcompdb.compdb.settings import ConfigurationReader, GenerationSettings
from bazelcompdb.compdb.task_runner import SubprocessTaskRunner

__all__ = [
    "ConfigurationReader",
    "GenerationContext",
    "GenerationOverrides",
    "GenerationSettings",
    "LifecycleNotifier",
    "LifecycleState",
    "SubprocessTaskRunner",
    "build_command",
    "run_generation",
    "split_steps",
    "to_shell_command",
]
