"""Streaming: batch per-draw sampler output into periodic summary updates."""

from tracelens.core.domain.draws import DoneMessage, DrawMessage, StepStat
from tracelens.stream.coordinator import (
    CoordinatorHandle,
    CoordinatorState,
    QueueConsumer,
    StreamCoordinator,
)
from tracelens.stream.live import LiveFrame, LiveSummaryConsumer

__all__ = [
    "CoordinatorHandle",
    "CoordinatorState",
    "DoneMessage",
    "DrawMessage",
    "LiveFrame",
    "LiveSummaryConsumer",
    "QueueConsumer",
    "StepStat",
    "StreamCoordinator",
]
