"""Protocol for running a generation request."""

from __future__ import annotations

from typing import Protocol

from bazelcompdb.core.schema import GenerationRequest, GenerationResult


class TaskExecutor(Protocol):
    """Runs the steps of a request and reports how they ended.

    Implementations publish exactly one termination event named after
    ``request.name`` once the last step has finished.
    """

    def execute(self, request: GenerationRequest) -> GenerationResult:
        """Run the request's steps in order and return their results."""
        ...
