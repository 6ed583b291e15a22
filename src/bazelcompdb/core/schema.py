"""Pydantic models and data structures for a generation run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

#: Correlation name used when none is configured.
DEFAULT_REQUEST_NAME = "bazel-compdb"


class GenerationRequest(BaseModel):
    """Everything needed to run one compilation database generation."""

    name: str = DEFAULT_REQUEST_NAME
    tool_path: str = "bazel"
    repository_root: Path
    targets: list[str] = Field(min_length=1)
    working_directory: Path
    environment: dict[str, str] = Field(default_factory=dict)
    scratch_file_path: Path


class TerminationEvent(BaseModel):
    """A process finished; ``exit_code`` is None when the status is unknown."""

    name: str
    exit_code: int | None = None


class StepResult(BaseModel):
    """Outcome of one sequential step (build, postprocess, cleanup)."""

    step: str
    argv: list[str] = Field(default_factory=list)
    exit_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class GenerationResult(BaseModel):
    """Result of a generation run."""

    name: str = DEFAULT_REQUEST_NAME
    success: bool = False
    message: str = ""
    steps: list[StepResult] = Field(default_factory=list)
    scratch_file_path: Path | None = None

    @property
    def failed_step(self) -> StepResult | None:
        """First step that did not exit with status 0, if any."""
        for step in self.steps:
            if not step.ok:
                return step
        return None
