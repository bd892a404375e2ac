"""Domain models: configuration and render-ready summaries."""

from tracelens.core.domain.config import (
    LoggingConfig,
    StreamConfig,
    SummaryConfig,
    TraceLensConfig,
)
from tracelens.core.domain.draws import DoneMessage, DrawMessage, StepStat
from tracelens.core.domain.summaries import (
    EnergySummary,
    ForestSummary,
    HDIInterval,
    Histogram,
    HistogramBin,
    MultiChainSummary,
    PairSummary,
    PPCHistograms,
    Quantiles,
    RankHistogramSet,
    SingleChainSummary,
    VariableSummary,
)

__all__ = [
    "DoneMessage",
    "DrawMessage",
    "StepStat",
    "EnergySummary",
    "ForestSummary",
    "HDIInterval",
    "Histogram",
    "HistogramBin",
    "LoggingConfig",
    "MultiChainSummary",
    "PPCHistograms",
    "PairSummary",
    "Quantiles",
    "RankHistogramSet",
    "SingleChainSummary",
    "StreamConfig",
    "SummaryConfig",
    "TraceLensConfig",
    "VariableSummary",
]
