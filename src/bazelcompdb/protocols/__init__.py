"""Protocols for the collaborators a generation run depends on."""

from bazelcompdb.protocols.notification_sink import NotificationSink
from bazelcompdb.protocols.task_executor import TaskExecutor

__all__ = [
    "NotificationSink",
    "TaskExecutor",
]
