"""Rank histograms for multi-chain mixing diagnostics.

All chains of one variable are pooled and ranked together. If the chains
sample the same distribution, each chain's ranks are spread uniformly over
``[0, total)``; a chain whose histogram piles up at one end has not mixed
with the others.

References:
    Vehtari et al. (2021): "Rank-normalization, folding, and localization:
    An improved R-hat for assessing convergence of MCMC", section 4.1
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from tracelens.core.domain.summaries import RankHistogramSet
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import IntArray, SampleLike


def pooled_ranks(chains: Sequence[SampleLike]) -> list[IntArray]:
    """0-based rank of every draw within the pooled sample, split per chain.

    Ties keep their pooled order (chain by chain, draw by draw), and each
    returned array follows its chain's draw order.
    """
    arrays = [np.asarray(chain, dtype=np.float64).ravel() for chain in chains]
    pooled = np.concatenate(arrays) if arrays else np.empty(0)
    if pooled.size == 0:
        msg = "rank histograms need at least one sample"
        raise InvalidInputError(msg)

    order = np.argsort(pooled, kind="stable")
    ranks = np.empty(pooled.size, dtype=np.int64)
    ranks[order] = np.arange(pooled.size)

    offsets = np.cumsum([0, *(a.size for a in arrays)])
    return [ranks[offsets[i] : offsets[i + 1]] for i in range(len(arrays))]


def compute_rank_histograms(
    chains: Sequence[SampleLike],
    num_bins: int,
    name: str = "",
) -> RankHistogramSet:
    """Histogram each chain's pooled ranks into ``num_bins`` equal-width bins.

    Bin ``b`` covers ranks in ``[b * total / num_bins, (b + 1) * total / num_bins)``.
    Counts over all bins and chains add up to the pooled sample count.

    Args:
        chains: Draws of one variable, one sequence per chain
        num_bins: Number of rank bins (>= 1)
        name: Variable name recorded on the result

    Returns:
        RankHistogramSet with one histogram per chain
    """
    if num_bins < 1:
        msg = f"num_bins must be >= 1, got {num_bins}"
        raise InvalidInputError(msg)

    chain_ranks = pooled_ranks(chains)
    total = sum(r.size for r in chain_ranks)

    histograms = []
    for ranks in chain_ranks:
        # floor(rank * num_bins / total) in exact integer arithmetic
        bin_idx = (ranks * num_bins) // total
        counts = np.bincount(bin_idx, minlength=num_bins)
        histograms.append(tuple(int(c) for c in counts))

    return RankHistogramSet(
        name=name,
        histograms=tuple(histograms),
        num_chains=len(chain_ranks),
        num_bins=num_bins,
        total_count=total,
    )


__all__ = ["compute_rank_histograms", "pooled_ranks"]
