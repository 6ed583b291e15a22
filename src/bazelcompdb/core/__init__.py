"""Framework core: config, schema, events, notifications, health."""

from bazelcompdb.core.config import AppConfig, ConfigManager
from bazelcompdb.core.events import Subscription, TerminationEventSource
from bazelcompdb.core.health import HealthChecker, HealthCheckResult
from bazelcompdb.core.notify import ClickNotificationSink
from bazelcompdb.core.schema import (
    GenerationRequest,
    GenerationResult,
    StepResult,
    TerminationEvent,
)

__all__ = [
    "AppConfig",
    "ClickNotificationSink",
    "ConfigManager",
    "GenerationRequest",
    "GenerationResult",
    "HealthCheckResult",
    "HealthChecker",
    "StepResult",
    "Subscription",
    "TerminationEvent",
    "TerminationEventSource",
]
