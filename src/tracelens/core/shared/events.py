"""Lightweight event dispatcher for streaming progress notifications."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from tracelens.core.domain.draws import StepStat


class EventType(Enum):
    """Supported event types emitted by the streaming layer."""

    STREAM_STARTED = auto()
    STREAM_UPDATE = auto()
    STREAM_COMPLETED = auto()
    ERROR = auto()


@dataclass(slots=True)
class Event:
    """Base event carrying a type and arbitrary metadata."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class StreamUpdateEvent(Event):
    """Accumulated state emitted by the coordinator on every flush.

    ``samples`` and ``stats`` are snapshots: tuples built at flush time that
    later draws never modify.
    """

    samples: Mapping[str, tuple[float, ...]] = field(default_factory=dict)
    stats: tuple[StepStat, ...] = ()
    running_count: int = 0
    expected_total: int = 0


class EventHandler(Protocol):
    """Protocol implemented by event handlers."""

    def handle(self, event: Event) -> None:  # pragma: no cover - thin interface
        """Process an incoming event."""


class EventDispatcher:
    """Simple pub-sub dispatcher for stream events."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = {}

    def subscribe(
        self,
        event_type: EventType,
        handler: EventHandler | Callable[[Event], None],
    ) -> None:
        """Register a handler for a particular event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        self._handlers[event_type].append(as_handler(handler))

    def dispatch(self, event: Event) -> None:
        """Send an event to all subscribed handlers."""
        for handler in self._handlers.get(event.event_type, []):
            handler.handle(event)

    def handle(self, event: Event) -> None:
        """Let a dispatcher be used directly wherever a handler is expected."""
        self.dispatch(event)


def as_handler(handler: EventHandler | Callable[[Event], None]) -> EventHandler:
    """Wrap bare callables so they satisfy :class:`EventHandler`."""
    if callable(handler) and not hasattr(handler, "handle"):
        return _CallableHandler(handler)
    return handler


class _CallableHandler:
    """Adapter that allows bare callables to act as event handlers."""

    def __init__(self, func: Callable[[Event], None]) -> None:
        self._func = func

    def handle(self, event: Event) -> None:  # pragma: no cover - trivial adapter
        self._func(event)
