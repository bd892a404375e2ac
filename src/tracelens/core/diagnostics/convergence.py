"""Convergence diagnostics backing the summarizer.

The summarizer only needs three numbers from outside its own statistics:
effective sample size, the autocorrelation function and R-hat. They sit
behind :class:`DiagnosticsBackend` so a sampler library can plug in its
own implementations; :class:`NumpyDiagnostics` is the default.

References:
    - Gelman & Rubin (1992): "Inference from Iterative Simulation Using Multiple Sequences"
    - Geyer (1992): "Practical Markov Chain Monte Carlo" (initial positive sequence)
    - Vehtari et al. (2021): "Rank-normalization, folding, and localization:
      An improved R-hat for assessing convergence of MCMC"
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import numpy as np

from tracelens.core.shared.typing import FloatArray, SampleLike

# Upper bound on lags summed for ESS
MAX_ESS_LAG = 1000


@runtime_checkable
class DiagnosticsBackend(Protocol):
    """Provider of the delegated convergence statistics."""

    def effective_sample_size(self, samples: SampleLike) -> float:
        """Number of independent draws equivalent to ``samples``."""
        ...

    def autocorrelation(self, samples: SampleLike, max_lag: int) -> list[float]:
        """ACF at lags ``0..max_lag``; index 0 is always 1.0."""
        ...

    def rhat(self, chains: Sequence[SampleLike]) -> float:
        """Potential scale reduction factor over several chains."""
        ...


def _autocorr_fft(chain: FloatArray) -> FloatArray:
    """Normalized autocorrelation of a centered, non-constant chain at every lag."""
    n = chain.size
    var = np.var(chain)
    n_fft = 2 ** int(np.ceil(np.log2(2 * n - 1)))
    fft_chain = np.fft.rfft(chain, n=n_fft)
    autocorr_fft = np.fft.irfft(fft_chain * np.conj(fft_chain), n=n_fft)
    return autocorr_fft[:n] / (var * n)


def compute_autocorrelation(samples: SampleLike, max_lag: int) -> list[float]:
    """Autocorrelation function up to ``max_lag`` (clamped to ``n - 1``).

    A constant chain has no defined ACF; it is reported as all ones, the
    same as a chain that never decorrelates.
    """
    chain = np.asarray(samples, dtype=np.float64).ravel()
    n = chain.size
    if n == 0:
        return []
    max_lag = max(0, min(max_lag, n - 1))

    centered = chain - np.mean(chain)
    if np.var(chain) == 0:
        return [1.0] * (max_lag + 1)

    autocorr = _autocorr_fft(centered)[: max_lag + 1]
    acf = [float(v) for v in autocorr]
    acf[0] = 1.0
    return acf


def compute_ess(samples: SampleLike) -> float:
    """Effective sample size of a single chain.

    ``ESS = N / tau`` with the integrated autocorrelation time ``tau``
    estimated from Geyer's initial positive sequence: pairs of consecutive
    autocorrelations are summed until a pair turns non-positive.
    """
    chain = np.asarray(samples, dtype=np.float64).ravel()
    n = chain.size
    if n < 2:
        return float(n)

    centered = chain - np.mean(chain)
    if np.var(chain) == 0:
        return float(n)

    autocorr = _autocorr_fft(centered)
    max_lag = min(n - 1, MAX_ESS_LAG)

    rho = []
    for lag in range(1, max_lag, 2):
        if lag + 1 >= autocorr.size:
            break
        rho_pair = autocorr[lag] + autocorr[lag + 1]
        if rho_pair <= 0:
            break
        rho.append(rho_pair)

    tau = 1 + 2 * sum(rho)
    return float(n / tau)


def compute_rhat(chains: Sequence[SampleLike]) -> float:
    """Split R-hat for one variable.

    Chains are truncated to the shortest length, then each is split in half
    so within-chain drift also inflates the statistic.

    Returns:
        R-hat (close to 1 when converged), NaN with fewer than two chains,
        fewer than four draws per chain, or zero within-chain variance
    """
    arrays = [np.asarray(c, dtype=np.float64).ravel() for c in chains]
    if len(arrays) < 2:
        return float("nan")

    n_samples = min(a.size for a in arrays)
    if n_samples < 4:
        return float("nan")
    stacked = np.stack([a[:n_samples] for a in arrays])

    half = n_samples // 2
    split_chains = np.concatenate([stacked[:, :half], stacked[:, half : 2 * half]], axis=0)
    n_split = split_chains.shape[1]

    chain_means = np.mean(split_chains, axis=1)
    chain_vars = np.var(split_chains, axis=1, ddof=1)

    w = np.mean(chain_vars)
    b = n_split * np.var(chain_means, ddof=1)
    if w <= 0:
        return float("nan")

    var_plus = ((n_split - 1) / n_split) * w + b / n_split
    return float(np.sqrt(var_plus / w))


class NumpyDiagnostics:
    """Default :class:`DiagnosticsBackend` built on numpy."""

    def effective_sample_size(self, samples: SampleLike) -> float:
        return compute_ess(samples)

    def autocorrelation(self, samples: SampleLike, max_lag: int) -> list[float]:
        return compute_autocorrelation(samples, max_lag)

    def rhat(self, chains: Sequence[SampleLike]) -> float:
        return compute_rhat(chains)


__all__ = [
    "DiagnosticsBackend",
    "NumpyDiagnostics",
    "compute_autocorrelation",
    "compute_ess",
    "compute_rhat",
]
