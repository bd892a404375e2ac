"""Buffering coordinator between a sampler and a live consumer.

The sampler emits one :class:`DrawMessage` per draw, as fast as it can.
The coordinator collects them and, every ``flush_batch_size`` draws (or
when the expected total is reached), hands the consumer a snapshot of
everything accumulated so far::

    sampler thread --DrawMessage--> inbox --> coordinator loop --event--> consumer

All mutable state belongs to the single processing loop, so nothing is
locked. Emission is one synchronous call to the consumer; a consumer that
must not slow the loop down should hand events off to its own queue (see
:class:`QueueConsumer`).
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterator, Mapping
from enum import Enum, auto
from typing import Any

from tracelens.core.domain.config import StreamConfig
from tracelens.core.domain.draws import DoneMessage, DrawMessage, StepStat
from tracelens.core.shared.events import (
    Event,
    EventHandler,
    EventType,
    StreamUpdateEvent,
    as_handler,
)
from tracelens.core.shared.exceptions import (
    InvalidInputError,
    StreamOverrunError,
    StreamStateError,
)
from tracelens.core.shared.reporter import NullReporter, Reporter

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_BATCH_SIZE = 10


class CoordinatorState(Enum):
    """Lifecycle of a :class:`StreamCoordinator`."""

    IDLE = auto()
    ACCUMULATING = auto()
    FLUSHING = auto()
    COMPLETED = auto()


class StreamCoordinator:
    """Batch per-draw messages and flush accumulated draws to a consumer.

    Args:
        expected_total: Number of draws the producer will send
        consumer: Event handler (or plain callable) receiving a
            :class:`StreamUpdateEvent` per flush and one
            ``STREAM_COMPLETED`` event at the end
        flush_batch_size: Pending draws that trigger a flush
        reporter: Progress reporter (silent by default)

    The coordinator can be driven synchronously through :meth:`handle_draw`
    and :meth:`handle_done`, or run on its own thread with :meth:`start`.
    """

    def __init__(
        self,
        expected_total: int,
        consumer: EventHandler | Callable[[Event], None],
        flush_batch_size: int = DEFAULT_FLUSH_BATCH_SIZE,
        reporter: Reporter | None = None,
    ) -> None:
        if expected_total < 0:
            msg = f"expected_total must be >= 0, got {expected_total}"
            raise InvalidInputError(msg)
        if flush_batch_size < 1:
            msg = f"flush_batch_size must be >= 1, got {flush_batch_size}"
            raise InvalidInputError(msg)

        self.expected_total = expected_total
        self.flush_batch_size = flush_batch_size
        self._consumer = as_handler(consumer)
        self._reporter = reporter or NullReporter()

        self._state = CoordinatorState.IDLE
        self._pending: list[DrawMessage] = []
        self._samples: dict[str, list[float]] = {}
        self._stats: list[StepStat] = []
        self._count = 0
        self._handle: CoordinatorHandle | None = None

    @classmethod
    def from_config(
        cls,
        expected_total: int,
        consumer: EventHandler | Callable[[Event], None],
        config: StreamConfig,
        reporter: Reporter | None = None,
    ) -> StreamCoordinator:
        return cls(
            expected_total,
            consumer,
            flush_batch_size=config.flush_batch_size,
            reporter=reporter,
        )

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def running_count(self) -> int:
        """Draws received so far, flushed or not."""
        return self._count

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # --- message processing -------------------------------------------------

    def handle(self, message: DrawMessage | DoneMessage) -> None:
        """Process one inbound message."""
        if isinstance(message, DrawMessage):
            self.handle_draw(message)
        elif isinstance(message, DoneMessage):
            self.handle_done(message.total_count)
        else:
            msg = f"Unsupported message type: {type(message).__name__}"
            raise StreamStateError(msg)

    def handle_draw(self, message: DrawMessage) -> None:
        """Buffer a draw and flush if the batch is full or the stream is finished.

        Raises:
            StreamStateError: If the stream already completed
            StreamOverrunError: If ``expected_total`` draws were already received
        """
        if self._state is CoordinatorState.COMPLETED:
            msg = f"Draw {message.draw_index} received after the stream completed"
            raise StreamStateError(msg)
        if self._count >= self.expected_total:
            msg = (
                f"Draw {message.draw_index} exceeds the expected total of "
                f"{self.expected_total} draws"
            )
            self._reporter.error(msg)
            raise StreamOverrunError(msg)

        if self._state is CoordinatorState.IDLE:
            self._reporter.action(f"Streaming {self.expected_total} draws")
            self._state = CoordinatorState.ACCUMULATING

        self._pending.append(message)
        self._count += 1

        if len(self._pending) >= self.flush_batch_size or self._count == self.expected_total:
            self._flush()

    def handle_done(self, total_count: int) -> None:
        """Flush whatever is pending, then signal completion to the consumer."""
        if self._state is CoordinatorState.COMPLETED:
            msg = "Stream already completed"
            raise StreamStateError(msg)
        if total_count != self._count:
            self._reporter.warning(
                f"Producer reported {total_count} draws but {self._count} were received"
            )

        if self._pending:
            self._flush()

        self._state = CoordinatorState.COMPLETED
        self._consumer.handle(
            Event(
                EventType.STREAM_COMPLETED,
                {"running_count": self._count, "expected_total": self.expected_total},
            )
        )
        self._reporter.success(f"Sampling complete: {self._count} draws")

    def _flush(self) -> None:
        self._state = CoordinatorState.FLUSHING

        for message in self._pending:
            for name, value in message.point_values.items():
                self._samples.setdefault(name, []).append(value)
            self._stats.append(message.step_stat)
        self._pending.clear()

        logger.debug("Flushing %d/%d draws", self._count, self.expected_total)
        self._consumer.handle(
            StreamUpdateEvent(
                event_type=EventType.STREAM_UPDATE,
                samples={name: tuple(values) for name, values in self._samples.items()},
                stats=tuple(self._stats),
                running_count=self._count,
                expected_total=self.expected_total,
            )
        )

        self._state = CoordinatorState.ACCUMULATING

    # --- threaded mode --------------------------------------------------------

    def start(self) -> CoordinatorHandle:
        """Run the processing loop on a background thread.

        Returns:
            The handle producers use to send draws; pass it to them explicitly.
        """
        if self._handle is not None:
            msg = "Coordinator already started"
            raise StreamStateError(msg)
        self._handle = CoordinatorHandle(self)
        self._handle._thread.start()
        return self._handle


_STOP = object()


class CoordinatorHandle:
    """Producer-side reference to a running :class:`StreamCoordinator`.

    ``send_draw`` and ``done`` only enqueue; they never wait for the
    coordinator or its consumer. Errors raised inside the loop stop it and
    are re-raised from :meth:`wait`. Messages sent after the stream
    completed are rejected: directly by :meth:`send` once completion is
    known, otherwise from :meth:`wait`.
    """

    def __init__(self, coordinator: StreamCoordinator) -> None:
        self._coordinator = coordinator
        self._inbox: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._stopped = threading.Event()
        self._completed = threading.Event()
        # Guards the completed check in send() against the final drain in _run()
        self._lock = threading.Lock()
        self._error: BaseException | None = None
        self._thread = threading.Thread(
            target=self._run,
            name="tracelens-coordinator",
            daemon=True,
        )

    @property
    def coordinator(self) -> StreamCoordinator:
        return self._coordinator

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    def send(self, message: DrawMessage | DoneMessage) -> None:
        with self._lock:
            if self._completed.is_set():
                msg = "Stream already completed"
                raise StreamStateError(msg)
            if self._stopped.is_set():
                msg = "Coordinator has been stopped"
                raise StreamStateError(msg)
            self._inbox.put(message)

    def send_draw(
        self,
        draw_index: int,
        point_values: Mapping[str, float],
        step_stat: StepStat | Mapping[str, Any] | None = None,
    ) -> None:
        """Enqueue one draw."""
        self.send(DrawMessage.create(draw_index, point_values, step_stat))

    def done(self, total_count: int) -> None:
        """Enqueue the end-of-stream signal."""
        self.send(DoneMessage(total_count))

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the loop exits.

        Returns:
            False if ``timeout`` elapsed first, True otherwise

        Raises:
            Whatever error stopped the loop
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            return False
        if self._error is not None:
            raise self._error
        return True

    def stop(self) -> None:
        """Stop the loop without draining queued messages."""
        self._stopped.set()
        self._inbox.put(_STOP)

    def _run(self) -> None:
        coordinator = self._coordinator
        while not self._stopped.is_set():
            message = self._inbox.get()
            if message is _STOP or self._stopped.is_set():
                break
            try:
                coordinator.handle(message)
            except Exception as exc:
                logger.exception("Coordinator loop stopped")
                self._error = exc
                self._stopped.set()
                coordinator._consumer.handle(Event(EventType.ERROR, {"error": str(exc)}))
                break
            if coordinator.state is CoordinatorState.COMPLETED:
                self._finish()
                break

    def _finish(self) -> None:
        """Mark the stream completed and reject anything already queued behind ``done``."""
        with self._lock:
            self._completed.set()
            late = 0
            while True:
                try:
                    message = self._inbox.get_nowait()
                except queue.Empty:
                    break
                if message is not _STOP:
                    late += 1

        if late:
            msg = f"{late} message(s) received after the stream completed"
            logger.error(msg)
            self._coordinator._reporter.error(msg)
            self._error = StreamStateError(msg)


class QueueConsumer:
    """Consumer that drops every event into an unbounded queue.

    ``handle`` never blocks, so a slow reader cannot hold up the
    coordinator. Readers iterate :meth:`events` until completion.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Event] = queue.SimpleQueue()

    def handle(self, event: Event) -> None:
        self._queue.put(event)

    def get(self, timeout: float | None = None) -> Event:
        return self._queue.get(timeout=timeout)

    def events(self, timeout: float | None = None) -> Iterator[Event]:
        """Yield events up to and including ``STREAM_COMPLETED`` or ``ERROR``."""
        while True:
            event = self._queue.get(timeout=timeout)
            yield event
            if event.event_type in (EventType.STREAM_COMPLETED, EventType.ERROR):
                return


__all__ = [
    "DEFAULT_FLUSH_BATCH_SIZE",
    "CoordinatorHandle",
    "CoordinatorState",
    "QueueConsumer",
    "StreamCoordinator",
]
