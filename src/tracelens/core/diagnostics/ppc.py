"""Posterior predictive check histograms on shared bin edges."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from tracelens.core.diagnostics.histogram import as_samples, histogram_with_edges
from tracelens.core.domain.summaries import PPCHistograms
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import SampleLike

# Fraction of the union span added on each side of the shared edges
PPC_PADDING = 0.05


def shared_bin_edges(
    observed: SampleLike,
    predictive_sets: Sequence[SampleLike],
    num_bins: int,
) -> tuple[float, ...]:
    """``num_bins + 1`` equal-width edges spanning observed and all predictive draws."""
    if num_bins < 1:
        msg = f"num_bins must be >= 1, got {num_bins}"
        raise InvalidInputError(msg)

    obs = as_samples(observed, name="observed")
    lo = float(np.min(obs))
    hi = float(np.max(obs))
    for pred in predictive_sets:
        arr = np.asarray(pred, dtype=np.float64).ravel()
        if arr.size:
            lo = min(lo, float(np.min(arr)))
            hi = max(hi, float(np.max(arr)))

    span = 1.0 if hi == lo else hi - lo
    lo -= PPC_PADDING * span
    hi += PPC_PADDING * span
    bin_width = (hi - lo) / num_bins
    return tuple(lo + i * bin_width for i in range(num_bins + 1))


def histogram_with_shared_edges(
    observed: SampleLike,
    predictive_sets: Sequence[SampleLike],
    num_bins: int,
    name: str = "",
    range_sets: Sequence[SampleLike] | None = None,
) -> PPCHistograms:
    """Histogram observed data and every predictive draw set on identical edges.

    Args:
        observed: Observed data points
        predictive_sets: One sequence of simulated data per posterior draw
        num_bins: Number of bins (>= 1)
        name: Observation name recorded on the result
        range_sets: Samples the edges must span besides ``observed``
            (``predictive_sets`` if omitted)

    Returns:
        PPCHistograms whose ``max_count`` covers observed and predictive bins
    """
    if range_sets is None:
        range_sets = predictive_sets
    edges = shared_bin_edges(observed, range_sets, num_bins)
    observed_hist = histogram_with_edges(observed, edges)
    predictive_hists = tuple(histogram_with_edges(pred, edges) for pred in predictive_sets)

    max_count = max([max(observed_hist), *(max(h) for h in predictive_hists)])

    return PPCHistograms(
        name=name,
        observed=observed_hist,
        predictive=predictive_hists,
        bin_edges=edges,
        num_bins=num_bins,
        max_count=max_count,
    )


__all__ = ["PPC_PADDING", "histogram_with_shared_edges", "shared_bin_edges"]
