"""Run the build, post-process and cleanup steps as separate processes."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess

import click

from bazelcompdb.compdb.command_builder import CommandStep, steps_for_request
from bazelcompdb.core.events import TerminationEventSource
from bazelcompdb.core.schema import GenerationRequest, GenerationResult, StepResult, TerminationEvent

log = logging.getLogger(__name__)

#: Step that always runs, even after a failed build or post-process.
CLEANUP_STEP = "cleanup"


class SubprocessTaskRunner:
    """Run each step with subprocess, stopping at the first failure except for cleanup.

    Output is inherited so Bazel streams to the terminal. When every step has
    finished, one TerminationEvent is published with the request name and the
    exit status of the first failing step (0 when all succeeded, None when a
    step could not be started).
    """

    def __init__(
        self,
        events: TerminationEventSource,
        *,
        clear: bool = False,
        echo: bool = True,
    ) -> None:
        self._events = events
        self._clear = clear
        self._echo = echo

    def execute(self, request: GenerationRequest) -> GenerationResult:
        env = {**os.environ, **request.environment}
        cwd = request.working_directory
        if self._clear:
            click.clear()

        results: list[StepResult] = []
        failed: StepResult | None = None
        for step in steps_for_request(request):
            if failed is not None and step.name != CLEANUP_STEP:
                log.info("Skipping step %s after failure of %s", step.name, failed.step)
                continue
            result = self._run_step(step, cwd=str(cwd), env=env)
            results.append(result)
            if not result.ok and failed is None:
                failed = result

        exit_code = 0 if failed is None else failed.exit_code
        self._events.publish(TerminationEvent(name=request.name, exit_code=exit_code))

        if failed is None:
            message = "Compilation database generated."
        elif failed.exit_code is None:
            message = f"Step '{failed.step}' could not be started."
        else:
            message = f"Step '{failed.step}' exited with status {failed.exit_code}."
        return GenerationResult(
            name=request.name,
            success=failed is None,
            message=message,
            steps=results,
            scratch_file_path=request.scratch_file_path,
        )

    def _run_step(self, step: CommandStep, *, cwd: str, env: dict[str, str]) -> StepResult:
        shell_line = shlex.join(step.argv)
        if self._echo:
            click.echo(f"> {shell_line}")
        log.info("Running %s: %s (cwd=%s)", step.name, shell_line, cwd)
        try:
            proc = subprocess.run(step.argv, cwd=cwd, env=env)
        except OSError as e:
            log.error("Could not start %s: %s", step.name, e)
            return StepResult(step=step.name, argv=step.argv, exit_code=None)
        log.info("%s exited with status %s", step.name, proc.returncode)
        return StepResult(step=step.name, argv=step.argv, exit_code=proc.returncode)
