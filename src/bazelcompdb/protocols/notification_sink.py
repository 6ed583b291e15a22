"""Protocol for user-facing notifications."""

from __future__ import annotations

from typing import Protocol


class NotificationSink(Protocol):
    """Accepts informational and error messages; fire-and-forget."""

    def info(self, message: str) -> None:
        """Show an informational message."""
        ...

    def error(self, message: str) -> None:
        """Show an error message."""
        ...
