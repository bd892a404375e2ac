"""Turn MCMC traces into render-ready summaries.

This is the only layer that accepts numpy arrays from a sampler; every
record it returns holds plain floats and tuples. Renderers and live
consumers call into :class:`VariableSummarizer` and never touch arrays.

| Method               | Returns                      |
|----------------------|------------------------------|
| ``summarize``        | ``SingleChainSummary``       |
| ``summarize_chains`` | ``MultiChainSummary``        |
| ``from_trace``       | ``list[SingleChainSummary]`` |
| ``from_chains``      | ``list[MultiChainSummary]``  |
| ``prepare_forest``   | ``list[ForestSummary]``      |
| ``prepare_pairs``    | ``PairSummary``              |
| ``prepare_energy``   | ``EnergySummary | None``     |
| ``prepare_ranks``    | ``list[RankHistogramSet]``   |
| ``prepare_ppc``      | ``list[PPCHistograms]``      |
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from tracelens.core.diagnostics.convergence import DiagnosticsBackend, NumpyDiagnostics
from tracelens.core.diagnostics.correlation import pairwise_correlations
from tracelens.core.diagnostics.energy import summarize_energy
from tracelens.core.diagnostics.histogram import as_samples, compute_histogram
from tracelens.core.diagnostics.intervals import compute_hdi, compute_quantiles
from tracelens.core.diagnostics.ppc import histogram_with_shared_edges
from tracelens.core.diagnostics.ranks import compute_rank_histograms
from tracelens.core.domain.config import SummaryConfig
from tracelens.core.domain.draws import StepStat
from tracelens.core.domain.summaries import (
    EnergySummary,
    ForestSummary,
    MultiChainSummary,
    PairSummary,
    PPCHistograms,
    RankHistogramSet,
    SingleChainSummary,
)
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import FloatArray, SampleLike, Trace

logger = logging.getLogger(__name__)

StatLike = StepStat | Mapping[str, Any]


def _stat_value(stat: StatLike, key: str) -> Any:
    if isinstance(stat, StepStat):
        return getattr(stat, key)
    return stat.get(key)


def _is_true(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_)) and bool(value)


def extract_divergent_indices(stats: Sequence[StatLike] | None) -> tuple[int, ...] | None:
    """0-based indices of divergent draws.

    Returns:
        The indices, or None when there are no stats or no divergences
    """
    if stats is None:
        return None
    indices = tuple(i for i, stat in enumerate(stats) if _is_true(_stat_value(stat, "divergent")))
    return indices or None


def extract_energies(stats: Sequence[StatLike] | None) -> list[float]:
    """Energies of the draws that recorded one, in draw order."""
    if stats is None:
        return []
    energies = []
    for stat in stats:
        energy = _stat_value(stat, "energy")
        if isinstance(energy, numbers.Real) and not isinstance(energy, (bool, np.bool_)):
            energies.append(float(energy))
    return energies


def _mean_std(values: FloatArray) -> tuple[float, float]:
    """Population mean and standard deviation."""
    mean = float(np.mean(values))
    variance = float(np.mean((values - mean) ** 2))
    # Cancellation can leave a tiny negative variance
    return mean, math.sqrt(max(variance, 0.0))


def _as_tuple(values: FloatArray) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


class VariableSummarizer:
    """Build per-variable summaries from single- or multi-chain traces.

    Args:
        config: Bin counts, ACF lag and HDI masses (defaults if omitted)
        diagnostics: Provider of ESS, autocorrelation and R-hat
    """

    def __init__(
        self,
        config: SummaryConfig | None = None,
        diagnostics: DiagnosticsBackend | None = None,
    ) -> None:
        self.config = config or SummaryConfig()
        self.diagnostics = diagnostics or NumpyDiagnostics()

    # --- single variable ------------------------------------------------------

    def summarize(
        self,
        name: str,
        samples: SampleLike,
        divergent_indices: Sequence[int] | None = None,
    ) -> SingleChainSummary:
        """Summarize one chain of one variable."""
        arr = as_samples(samples, name=f"samples for '{name}'")
        n = arr.size
        mean, std = _mean_std(arr)

        return SingleChainSummary(
            name=name,
            sample_count=n,
            mean=mean,
            std=std,
            quantiles=compute_quantiles(arr),
            histogram=compute_histogram(arr, self.config.num_bins),
            autocorrelation=tuple(self.diagnostics.autocorrelation(arr, self._acf_lag(n))),
            effective_sample_size=float(self.diagnostics.effective_sample_size(arr)),
            samples=_as_tuple(arr),
            divergent_indices=None if divergent_indices is None else tuple(divergent_indices),
        )

    def summarize_chains(self, name: str, chains: Sequence[SampleLike]) -> MultiChainSummary:
        """Summarize one variable over several chains.

        Aggregates are computed on the pooled draws; R-hat is computed from
        the per-chain sequences.
        """
        chain_arrays = [as_samples(c, name=f"chain {i} of '{name}'") for i, c in enumerate(chains)]
        if not chain_arrays:
            msg = f"No chains given for '{name}'"
            raise InvalidInputError(msg)

        pooled = np.concatenate(chain_arrays)
        n = pooled.size
        mean, std = _mean_std(pooled)

        return MultiChainSummary(
            name=name,
            sample_count=n,
            mean=mean,
            std=std,
            quantiles=compute_quantiles(pooled),
            histogram=compute_histogram(pooled, self.config.num_bins),
            autocorrelation=tuple(self.diagnostics.autocorrelation(pooled, self._acf_lag(n))),
            effective_sample_size=float(self.diagnostics.effective_sample_size(pooled)),
            samples=_as_tuple(pooled),
            chains=tuple(_as_tuple(c) for c in chain_arrays),
            rhat=float(self.diagnostics.rhat(chain_arrays)),
        )

    def _acf_lag(self, n: int) -> int:
        return min(self.config.max_acf_lag, n - 1)

    # --- whole traces ---------------------------------------------------------

    def from_trace(
        self,
        trace: Trace,
        stats: Sequence[StatLike] | None = None,
    ) -> list[SingleChainSummary]:
        """Summaries for every variable of a single-chain trace, sorted by name.

        Divergent draws found in ``stats`` are attached to every summary.
        """
        divergent = extract_divergent_indices(stats)
        return [self.summarize(name, trace[name], divergent) for name in sorted(trace)]

    def from_chains(self, traces: Sequence[Trace]) -> list[MultiChainSummary]:
        """Summaries for every variable of a multi-chain run, sorted by name.

        Variable names come from the first chain; every chain must have them.
        """
        if len(traces) < 2:
            msg = f"from_chains needs at least 2 chains, got {len(traces)}"
            raise InvalidInputError(msg)

        names = sorted(traces[0])
        summaries = []
        for name in names:
            try:
                chains = [trace[name] for trace in traces]
            except KeyError as exc:
                msg = f"Variable '{name}' is missing from at least one chain"
                raise InvalidInputError(msg) from exc
            summaries.append(self.summarize_chains(name, chains))
        logger.debug("Summarized %d variables over %d chains", len(names), len(traces))
        return summaries

    def prepare_forest(self, trace: Trace) -> list[ForestSummary]:
        """Mean plus inner (50%) and outer (94%) HDI per variable, sorted by name."""
        inner_mass, outer_mass = self.config.hdi_masses
        forest = []
        for name in sorted(trace):
            sorted_arr = np.sort(as_samples(trace[name], name=f"samples for '{name}'"))
            n = sorted_arr.size
            forest.append(
                ForestSummary(
                    name=name,
                    mean=float(np.mean(sorted_arr)),
                    hdi_94=compute_hdi(sorted_arr, n, outer_mass),
                    hdi_50=compute_hdi(sorted_arr, n, inner_mass),
                )
            )
        return forest

    def prepare_pairs(self, trace: Trace) -> PairSummary:
        """Marginal histograms and pairwise correlations for a corner plot."""
        names = tuple(sorted(trace))
        samples = {name: as_samples(trace[name], name=f"samples for '{name}'") for name in names}
        lengths = {arr.size for arr in samples.values()}
        if len(lengths) > 1:
            msg = "All variables of a pair plot need the same number of draws"
            raise InvalidInputError(msg)

        return PairSummary(
            names=names,
            samples={name: _as_tuple(arr) for name, arr in samples.items()},
            correlations=pairwise_correlations(samples),
            histograms={
                name: compute_histogram(arr, self.config.num_bins) for name, arr in samples.items()
            },
        )

    def prepare_energy(self, stats: Sequence[StatLike] | None) -> EnergySummary | None:
        """Energy diagnostic from per-draw stats, or None without enough energies."""
        return summarize_energy(extract_energies(stats), self.config.num_bins)

    def prepare_ranks(
        self,
        traces: Sequence[Trace],
        num_bins: int | None = None,
    ) -> list[RankHistogramSet]:
        """Per-variable rank histograms over all chains, sorted by name."""
        if not traces:
            msg = "prepare_ranks needs at least one chain"
            raise InvalidInputError(msg)
        bins = num_bins if num_bins is not None else self.config.rank_bins
        return [
            compute_rank_histograms([trace[name] for trace in traces], bins, name=name)
            for name in sorted(traces[0])
        ]

    def prepare_ppc(
        self,
        observed: Mapping[str, SampleLike],
        predictive: Mapping[str, Any],
        num_bins: int | None = None,
    ) -> list[PPCHistograms]:
        """Posterior predictive histograms per observed variable, sorted by name.

        Args:
            observed: Observed data per variable
            predictive: ``(n_draws, ...)`` simulated data per variable; each
                draw is flattened and truncated to the observation count,
                while the shared edges span every predictive value
            num_bins: Bin count (``config.ppc_bins`` if omitted)
        """
        bins = num_bins if num_bins is not None else self.config.ppc_bins
        results = []
        for name in sorted(observed):
            obs = as_samples(observed[name], name=f"observed '{name}'")
            if name not in predictive:
                msg = f"No predictive draws for observed variable '{name}'"
                raise InvalidInputError(msg)
            pred = np.asarray(predictive[name], dtype=np.float64)
            pred = pred.reshape(pred.shape[0], -1) if pred.ndim > 1 else pred.reshape(-1, 1)
            rows = [row[: obs.size] for row in pred]
            results.append(
                histogram_with_shared_edges(obs, rows, bins, name=name, range_sets=[pred.ravel()])
            )
        return results


__all__ = [
    "VariableSummarizer",
    "extract_divergent_indices",
    "extract_energies",
]
