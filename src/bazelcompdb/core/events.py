"""Process termination events and explicit subscriptions."""

from __future__ import annotations

import logging
from typing import Callable

from bazelcompdb.core.schema import TerminationEvent

log = logging.getLogger(__name__)

TerminationCallback = Callable[[TerminationEvent], None]


class Subscription:
    """Handle returned by :meth:`TerminationEventSource.subscribe`.

    Use as a context manager so the callback is removed when the owning
    run ends; ``dispose`` is idempotent.
    """

    def __init__(self, source: TerminationEventSource, callback: TerminationCallback) -> None:
        self._source = source
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def dispose(self) -> None:
        if self._active:
            self._source._remove(self._callback)
            self._active = False

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class TerminationEventSource:
    """Delivers termination events to the callbacks subscribed at publish time."""

    def __init__(self) -> None:
        self._callbacks: list[TerminationCallback] = []

    def subscribe(self, callback: TerminationCallback) -> Subscription:
        self._callbacks.append(callback)
        return Subscription(self, callback)

    def publish(self, event: TerminationEvent) -> None:
        log.debug("termination event name=%s exit_code=%s", event.name, event.exit_code)
        for callback in list(self._callbacks):
            callback(event)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _remove(self, callback: TerminationCallback) -> None:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            log.debug("callback already unsubscribed")
