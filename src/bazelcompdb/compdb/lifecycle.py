"""One-shot observer that announces a successful generation run."""

from __future__ import annotations

import enum
import logging

from bazelcompdb.core.schema import TerminationEvent
from bazelcompdb.protocols import NotificationSink

log = logging.getLogger(__name__)

#: Message shown when the run named by the notifier exits with status 0.
COMPLETE_MESSAGE = "Complete!"


class LifecycleState(enum.Enum):
    PENDING = "pending"
    DONE_SILENT = "done_silent"
    DONE_NOTIFIED = "done_notified"


class LifecycleNotifier:
    """Watch termination events for ``name``; notify once on exit status 0.

    Events for other names are ignored. The first matching event ends the
    observer: a non-zero or unknown status ends it without a notification.
    """

    def __init__(self, name: str, sink: NotificationSink) -> None:
        self._name = name
        self._sink = sink
        self._state = LifecycleState.PENDING

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is not LifecycleState.PENDING

    def handle_termination(self, event: TerminationEvent) -> None:
        if self.done or event.name != self._name:
            return
        if event.exit_code != 0:
            log.info("%s finished with exit status %s", self._name, event.exit_code)
            self._state = LifecycleState.DONE_SILENT
            return
        self._state = LifecycleState.DONE_NOTIFIED
        self._sink.info(COMPLETE_MESSAGE)
