"""MCMC diagnostics computations.

Pure, stateless functions turning raw draws into render-ready values:

- Histograms (``histogram``)
- Quantiles and highest-density intervals (``intervals``)
- Pearson correlation (``correlation``)
- Pooled-rank histograms (``ranks``)
- Energy-transition diagnostics (``energy``)
- Posterior predictive histograms (``ppc``)
- ESS / autocorrelation / R-hat backend (``convergence``)

Every function is safe to call concurrently from several threads.
"""

from tracelens.core.diagnostics.convergence import (
    DiagnosticsBackend,
    NumpyDiagnostics,
    compute_autocorrelation,
    compute_ess,
    compute_rhat,
)
from tracelens.core.diagnostics.correlation import pairwise_correlations, pearson_correlation
from tracelens.core.diagnostics.energy import energy_transitions, summarize_energy
from tracelens.core.diagnostics.histogram import (
    compute_histogram,
    histogram_range,
    histogram_with_edges,
)
from tracelens.core.diagnostics.intervals import compute_hdi, compute_quantiles, quantile
from tracelens.core.diagnostics.ppc import histogram_with_shared_edges, shared_bin_edges
from tracelens.core.diagnostics.ranks import compute_rank_histograms, pooled_ranks

__all__ = [
    "DiagnosticsBackend",
    "NumpyDiagnostics",
    "compute_autocorrelation",
    "compute_ess",
    "compute_hdi",
    "compute_histogram",
    "compute_quantiles",
    "compute_rank_histograms",
    "compute_rhat",
    "energy_transitions",
    "histogram_range",
    "histogram_with_edges",
    "histogram_with_shared_edges",
    "pairwise_correlations",
    "pearson_correlation",
    "pooled_ranks",
    "quantile",
    "shared_bin_edges",
    "summarize_energy",
]
