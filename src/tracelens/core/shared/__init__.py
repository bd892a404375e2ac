"""Shared foundational utilities for tracelens."""

from tracelens.core.shared import events, reporter, typing
from tracelens.core.shared.events import (
    Event,
    EventDispatcher,
    EventHandler,
    EventType,
    StreamUpdateEvent,
)
from tracelens.core.shared.exceptions import (
    InvalidInputError,
    StreamError,
    StreamOverrunError,
    StreamStateError,
    TraceLensError,
)
from tracelens.core.shared.reporter import (
    CompositeReporter,
    LoggingReporter,
    NullReporter,
    Reporter,
)

__all__ = [
    "CompositeReporter",
    "Event",
    "EventDispatcher",
    "EventHandler",
    "EventType",
    "InvalidInputError",
    "LoggingReporter",
    "NullReporter",
    "Reporter",
    "StreamError",
    "StreamOverrunError",
    "StreamStateError",
    "StreamUpdateEvent",
    "TraceLensError",
    "events",
    "reporter",
    "typing",
]
