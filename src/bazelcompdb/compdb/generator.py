"""Generate a compilation database: read settings, run bazel, announce completion."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from bazelcompdb.compdb.command_builder import command_for_request, to_shell_command
from bazelcompdb.compdb.lifecycle import LifecycleNotifier
from bazelcompdb.compdb.settings import ConfigurationReader, GenerationSettings
from bazelcompdb.core.config import ConfigManager
from bazelcompdb.core.events import TerminationEventSource
from bazelcompdb.core.exceptions import ConfigurationMissing, ExternalToolFailure
from bazelcompdb.core.schema import GenerationRequest, GenerationResult
from bazelcompdb.protocols import NotificationSink, TaskExecutor

log = logging.getLogger(__name__)

#: Prefix of the scratch file holding the build-event log.
SCRATCH_PREFIX = "bazel-compdb-"


@dataclass
class GenerationOverrides:
    """Values given on the command line; None means use configuration."""

    targets: list[str] | None = None
    working_directory: Path | None = None
    repository_root: Path | None = None
    tool_path: str | None = None


@dataclass
class GenerationContext:
    """Collaborators owned by one generation run."""

    config_manager: ConfigManager
    sink: NotificationSink
    events: TerminationEventSource
    executor: TaskExecutor
    overrides: GenerationOverrides = field(default_factory=GenerationOverrides)
    notify_failure: bool | None = None
    dry_run: bool = False


def make_scratch_file() -> Path:
    """Create an empty, uniquely named file for the build-event log."""
    fd, name = tempfile.mkstemp(prefix=SCRATCH_PREFIX, suffix=".json")
    os.close(fd)
    return Path(name)


def make_request(settings: GenerationSettings, scratch_file_path: Path) -> GenerationRequest:
    return GenerationRequest(
        name=settings.name,
        tool_path=settings.tool_path,
        repository_root=settings.repository_root,
        targets=settings.targets,
        working_directory=settings.working_directory,
        environment=settings.environment,
        scratch_file_path=scratch_file_path,
    )


def check_result(result: GenerationResult) -> None:
    """Raise ExternalToolFailure if any step of ``result`` failed."""
    failed = result.failed_step
    if failed is not None:
        raise ExternalToolFailure(failed.step, failed.exit_code)


def run_generation(context: GenerationContext) -> GenerationResult:
    """
    Run one generation.

    Missing targets are reported once through the sink and nothing is run.
    Otherwise a fresh scratch file is created, a LifecycleNotifier is subscribed
    for the run's name, the executor runs the steps, and the subscription is
    released. The scratch file never outlives the call.
    """
    reader = ConfigurationReader(context.config_manager)
    overrides = context.overrides
    try:
        settings = reader.read(
            targets=overrides.targets,
            working_directory=overrides.working_directory,
            repository_root=overrides.repository_root,
            tool_path=overrides.tool_path,
        )
    except ConfigurationMissing as e:
        log.error("Configuration missing: %s", e.setting_key)
        context.sink.error(str(e))
        return GenerationResult(success=False, message=str(e))

    log.info("targets=%s", settings.targets)
    log.info("working_directory=%s", settings.working_directory)
    log.info("repository_root=%s", settings.repository_root)

    if context.dry_run:
        preview = make_request(settings, Path(tempfile.gettempdir()) / f"{SCRATCH_PREFIX}XXXXXX.json")
        line = to_shell_command(preview.tool_path, command_for_request(preview))
        context.sink.info(line)
        return GenerationResult(name=preview.name, success=True, message=line)

    context.sink.info("Building clang compilation database for " + json.dumps(settings.targets))

    scratch = make_scratch_file()
    try:
        request = make_request(settings, scratch)
        notifier = LifecycleNotifier(request.name, context.sink)
        with context.events.subscribe(notifier.handle_termination):
            result = context.executor.execute(request)
    finally:
        if scratch.exists():
            log.debug("Removing leftover scratch file %s", scratch)
            scratch.unlink()

    notify_failure = context.notify_failure
    if notify_failure is None:
        notify_failure = context.config_manager.config.notify_failure
    try:
        check_result(result)
    except ExternalToolFailure as e:
        log.warning("Generation failed: %s", e)
        if notify_failure:
            context.sink.error(f"Compilation database generation failed: {e}")
    return result
