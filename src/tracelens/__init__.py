"""tracelens - render-ready MCMC diagnostics, batch and streaming.

Public API:
    - VariableSummarizer: per-variable summaries and plot data from traces
    - StreamCoordinator: batch per-draw sampler output into periodic updates
    - LiveSummaryConsumer: rebuild summaries on every streamed update

Configuration:
    - TraceLensConfig: Main configuration object
    - SummaryConfig, StreamConfig: Sub-configurations
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from tracelens.core.diagnostics import DiagnosticsBackend, NumpyDiagnostics
from tracelens.core.domain.config import StreamConfig, SummaryConfig, TraceLensConfig
from tracelens.core.domain.summaries import (
    EnergySummary,
    MultiChainSummary,
    SingleChainSummary,
    VariableSummary,
)
from tracelens.services import VariableSummarizer
from tracelens.stream import LiveFrame, LiveSummaryConsumer, StreamCoordinator

__all__ = [
    "__version__",
    "DiagnosticsBackend",
    "EnergySummary",
    "LiveFrame",
    "LiveSummaryConsumer",
    "MultiChainSummary",
    "NumpyDiagnostics",
    "SingleChainSummary",
    "StreamConfig",
    "StreamCoordinator",
    "SummaryConfig",
    "TraceLensConfig",
    "VariableSummarizer",
    "VariableSummary",
]
