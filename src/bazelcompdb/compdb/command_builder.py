"""Build the Bazel argument list that produces a compilation database."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from bazelcompdb.core.schema import GenerationRequest

#: Name under which the aspect repository is overridden.
COMPDB_REPOSITORY_NAME = "bazel_vscode_compdb"

#: Aspect that writes per-target compile command fragments.
COMPDB_ASPECT = f"@{COMPDB_REPOSITORY_NAME}//:aspects.bzl%compilation_database_aspect"

#: Output groups requested from the aspect.
COMPDB_OUTPUT_GROUPS = ("compdb_files", "header_files")

#: Flags that keep Bazel output plain; the log is consumed by a script.
PRESENTATION_FLAGS = ("--color=no", "--noshow_progress", "--noshow_loading_progress")

#: Script inside the repository root that turns the build-event log into compile_commands.json.
POSTPROCESS_SCRIPT = "postprocess.py"

#: Token separating chained commands.
CHAIN_TOKEN = "&&"

#: Names of the chained commands, in order.
STEP_NAMES = ("build", "postprocess", "cleanup")


@dataclass(frozen=True)
class CommandStep:
    """One command of the chain, runnable on its own."""

    name: str
    argv: list[str] = field(default_factory=list)


def build_command(
    targets: list[str],
    repository_root: str | Path,
    scratch_file_path: str | Path,
) -> list[str]:
    """
    Return the arguments passed to bazel, chained with post-processing and cleanup.

    The result is ``build <flags> <targets> && <root>/postprocess.py -b <scratch> && rm <scratch>``.
    Targets keep their order. Nothing is executed.
    """
    root = os.fspath(repository_root)
    scratch = os.fspath(scratch_file_path)
    return [
        "build",
        f"--override_repository={COMPDB_REPOSITORY_NAME}={root}",
        f"--aspects={COMPDB_ASPECT}",
        *PRESENTATION_FLAGS,
        "--output_groups=" + ",".join(COMPDB_OUTPUT_GROUPS),
        f"--build_event_json_file={scratch}",
        *targets,
        CHAIN_TOKEN,
        os.path.join(root, POSTPROCESS_SCRIPT),
        "-b",
        scratch,
        CHAIN_TOKEN,
        "rm",
        scratch,
    ]


def command_for_request(request: GenerationRequest) -> list[str]:
    return build_command(request.targets, request.repository_root, request.scratch_file_path)


def split_steps(tool_path: str, command: list[str]) -> list[CommandStep]:
    """
    Split a chained command into separately runnable steps.

    The first segment is the bazel invocation, so ``tool_path`` is put in front of it.
    Segments are named after STEP_NAMES; extra segments get ``step-<n>``.
    """
    segments: list[list[str]] = [[]]
    for arg in command:
        if arg == CHAIN_TOKEN:
            segments.append([])
        else:
            segments[-1].append(arg)
    segments[0] = [tool_path, *segments[0]]

    steps = []
    for i, argv in enumerate(segments):
        name = STEP_NAMES[i] if i < len(STEP_NAMES) else f"step-{i + 1}"
        steps.append(CommandStep(name=name, argv=argv))
    return steps


def steps_for_request(request: GenerationRequest) -> list[CommandStep]:
    return split_steps(request.tool_path, command_for_request(request))


def to_shell_command(tool_path: str, command: list[str]) -> str:
    """Render the chain as one shell line; arguments are quoted, chain tokens are not."""
    parts = [shlex.quote(tool_path)]
    parts.extend(arg if arg == CHAIN_TOKEN else shlex.quote(arg) for arg in command)
    return " ".join(parts)
