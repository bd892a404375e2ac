"""Live consumer that rebuilds summaries from streamed draws."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from tracelens.core.domain.config import StreamConfig
from tracelens.core.domain.summaries import EnergySummary, SingleChainSummary
from tracelens.core.shared.events import Event, EventType, StreamUpdateEvent
from tracelens.core.shared.reporter import NullReporter, Reporter
from tracelens.services.summarize import VariableSummarizer

logger = logging.getLogger(__name__)

DEFAULT_MIN_SAMPLES_FOR_DISPLAY = 5


@dataclass(frozen=True, slots=True)
class LiveFrame:
    """Everything a live view needs to redraw itself once."""

    summaries: tuple[SingleChainSummary, ...]
    energy: EnergySummary | None
    running_count: int
    expected_total: int
    complete: bool = False

    @property
    def status(self) -> str:
        if self.complete:
            return "complete"
        return f"{self.running_count} / {self.expected_total}"

    @property
    def title(self) -> str:
        return f"MCMC Live Sampling ({self.status})"


class LiveSummaryConsumer:
    """Stream consumer that summarizes every flush and hands frames to a renderer.

    Updates carrying fewer than ``min_samples_for_display`` draws are
    counted but not summarized. On completion the last frame is sent again
    with ``complete=True``.

    Args:
        render: Called with each new :class:`LiveFrame`
        summarizer: Summarizer used for the single-chain path
        min_samples_for_display: Draws needed before the first frame
        reporter: Progress reporter (silent by default)
    """

    def __init__(
        self,
        render: Callable[[LiveFrame], None],
        summarizer: VariableSummarizer | None = None,
        min_samples_for_display: int = DEFAULT_MIN_SAMPLES_FOR_DISPLAY,
        reporter: Reporter | None = None,
    ) -> None:
        self._render = render
        self._summarizer = summarizer or VariableSummarizer()
        self.min_samples_for_display = min_samples_for_display
        self._reporter = reporter or NullReporter()
        self.running_count = 0
        self.complete = False
        self.last_frame: LiveFrame | None = None

    @classmethod
    def from_config(
        cls,
        render: Callable[[LiveFrame], None],
        config: StreamConfig,
        summarizer: VariableSummarizer | None = None,
        reporter: Reporter | None = None,
    ) -> LiveSummaryConsumer:
        return cls(
            render,
            summarizer=summarizer,
            min_samples_for_display=config.min_samples_for_display,
            reporter=reporter,
        )

    def handle(self, event: Event) -> None:
        if isinstance(event, StreamUpdateEvent):
            self._on_update(event)
        elif event.event_type is EventType.STREAM_COMPLETED:
            self._on_complete()
        elif event.event_type is EventType.ERROR:
            self._reporter.error(f"Streaming failed: {event.data.get('error', 'unknown error')}")

    def _on_update(self, event: StreamUpdateEvent) -> None:
        self.running_count = event.running_count
        if event.running_count < self.min_samples_for_display:
            return

        frame = LiveFrame(
            summaries=tuple(self._summarizer.from_trace(event.samples, event.stats)),
            energy=self._summarizer.prepare_energy(event.stats),
            running_count=event.running_count,
            expected_total=event.expected_total,
            complete=self.complete,
        )
        logger.debug("Rendering live frame at %s", frame.status)
        self.last_frame = frame
        self._render(frame)

    def _on_complete(self) -> None:
        self.complete = True
        self._reporter.success(f"Live view complete after {self.running_count} draws")
        if self.last_frame is not None:
            self.last_frame = replace(self.last_frame, complete=True)
            self._render(self.last_frame)


__all__ = ["DEFAULT_MIN_SAMPLES_FOR_DISPLAY", "LiveFrame", "LiveSummaryConsumer"]
