"""Render-ready summary records.

Everything in this module is a frozen dataclass holding plain Python
floats, ints and tuples. A renderer can keep a reference to any of these
objects without ever seeing a later draw: each summarization call builds
a fresh snapshot instead of updating an old one.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HistogramBin:
    """One equal-width bin: ``[left, right)`` (closed on the right for the last bin)."""

    left: float
    right: float
    count: int


@dataclass(frozen=True, slots=True)
class Histogram:
    """Equal-width histogram over a float sequence.

    Attributes:
        bins: Ordered bins partitioning the (padded) sample range
        max_count: Largest bin count, used to scale the y-axis
    """

    bins: tuple[HistogramBin, ...]
    max_count: int

    @property
    def counts(self) -> tuple[int, ...]:
        return tuple(b.count for b in self.bins)

    @property
    def edges(self) -> tuple[float, ...]:
        """The ``num_bins + 1`` bin edges."""
        if not self.bins:
            return ()
        return (*(b.left for b in self.bins), self.bins[-1].right)

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)

    @property
    def num_bins(self) -> int:
        return len(self.bins)


@dataclass(frozen=True, slots=True)
class Quantiles:
    """The canonical 5/25/50/75/95% quantile set."""

    q5: float
    q25: float
    q50: float
    q75: float
    q95: float

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.q5, self.q25, self.q50, self.q75, self.q95)


@dataclass(frozen=True, slots=True)
class HDIInterval:
    """Highest-density interval; both bounds are observed sample values."""

    lo: float
    hi: float

    @property
    def width(self) -> float:
        return self.hi - self.lo

    def contains(self, other: HDIInterval) -> bool:
        """True when ``other`` lies entirely inside this interval."""
        return self.lo <= other.lo and other.hi <= self.hi


@dataclass(frozen=True, slots=True)
class VariableSummary:
    """Fields shared by single- and multi-chain summaries.

    Attributes:
        name: Variable identifier
        sample_count: Number of draws summarized (pooled over chains)
        mean: Population mean
        std: Population standard deviation
        quantiles: 5/25/50/75/95% quantiles
        histogram: Equal-width histogram of the (pooled) draws
        autocorrelation: ACF from lag 0 (always 1.0) up to the configured lag
        effective_sample_size: ESS reported by the diagnostics backend
        samples: The (pooled) draws, in draw order
    """

    name: str
    sample_count: int
    mean: float
    std: float
    quantiles: Quantiles
    histogram: Histogram
    autocorrelation: tuple[float, ...]
    effective_sample_size: float
    samples: tuple[float, ...]

    @property
    def is_multi_chain(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class SingleChainSummary(VariableSummary):
    """Summary of one chain, optionally carrying divergence markers."""

    divergent_indices: tuple[int, ...] | None = None


@dataclass(frozen=True, slots=True)
class MultiChainSummary(VariableSummary):
    """Summary pooled over several chains with per-chain draws and R-hat."""

    chains: tuple[tuple[float, ...], ...] = ()
    rhat: float = float("nan")

    @property
    def is_multi_chain(self) -> bool:
        return True

    @property
    def num_chains(self) -> int:
        return len(self.chains)


@dataclass(frozen=True, slots=True)
class EnergySummary:
    """Marginal energy and energy-transition histograms on a shared y scale."""

    energies: tuple[float, ...]
    transitions: tuple[float, ...]
    histogram_energy: Histogram
    histogram_transition: Histogram
    max_count: int


@dataclass(frozen=True, slots=True)
class RankHistogramSet:
    """Per-chain histograms of pooled-sample ranks for one variable.

    Roughly flat histograms for every chain indicate good mixing.
    """

    name: str
    histograms: tuple[tuple[int, ...], ...]
    num_chains: int
    num_bins: int
    total_count: int


@dataclass(frozen=True, slots=True)
class PPCHistograms:
    """Observed and posterior-predictive histograms sharing one set of edges."""

    name: str
    observed: tuple[int, ...]
    predictive: tuple[tuple[int, ...], ...]
    bin_edges: tuple[float, ...]
    num_bins: int
    max_count: int


@dataclass(frozen=True, slots=True)
class ForestSummary:
    """Mean and two nested HDIs for one variable of a forest plot."""

    name: str
    mean: float
    hdi_94: HDIInterval
    hdi_50: HDIInterval


@dataclass(frozen=True, slots=True)
class PairSummary:
    """Inputs for a corner plot: marginals plus all pairwise correlations."""

    names: tuple[str, ...]
    samples: dict[str, tuple[float, ...]]
    correlations: dict[tuple[str, str], float]
    histograms: dict[str, Histogram]

    def correlation(self, a: str, b: str) -> float:
        return self.correlations[(a, b)]


__all__ = [
    "EnergySummary",
    "ForestSummary",
    "HDIInterval",
    "Histogram",
    "HistogramBin",
    "MultiChainSummary",
    "PPCHistograms",
    "PairSummary",
    "Quantiles",
    "RankHistogramSet",
    "SingleChainSummary",
    "VariableSummary",
]
