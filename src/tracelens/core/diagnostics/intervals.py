"""Quantiles and highest-density intervals over sorted samples.

Both estimators take an already-sorted sequence together with its length,
so callers that need several quantiles or intervals sort once.

References:
    Hyndman & Fan (1996): "Sample Quantiles in Statistical Packages"
    (definition 7, numpy's ``method="linear"``)
    Kruschke (2015): Doing Bayesian Data Analysis, section 25.2.3 (HDI from MCMC draws)
"""

from __future__ import annotations

import math

import numpy as np

from tracelens.core.diagnostics.histogram import as_samples
from tracelens.core.domain.summaries import HDIInterval, Quantiles
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import FloatArray, SampleLike

CANONICAL_PROBABILITIES = (0.05, 0.25, 0.50, 0.75, 0.95)


def _sorted_prefix(sorted_values: SampleLike, n: int) -> FloatArray:
    arr = as_samples(sorted_values, name="sorted_values")
    if n < 1 or n > arr.size:
        msg = f"n must be in [1, {arr.size}], got {n}"
        raise InvalidInputError(msg)
    return arr[:n]


def quantile(sorted_values: SampleLike, n: int, p: float) -> float:
    """Linearly interpolated quantile of an ascending sequence.

    ``h = (n - 1) * p``; the result interpolates between ``sorted[floor(h)]``
    and ``sorted[ceil(h)]`` by the fractional part of ``h``. Sortedness is
    the caller's responsibility.

    Args:
        sorted_values: Samples in ascending order
        n: Number of samples to use from the front of ``sorted_values``
        p: Probability in [0, 1]

    Returns:
        The p-quantile
    """
    if not 0.0 <= p <= 1.0:
        msg = f"p must be in [0, 1], got {p}"
        raise InvalidInputError(msg)
    arr = _sorted_prefix(sorted_values, n)

    h = (n - 1) * p
    lo = math.floor(h)
    hi = math.ceil(h)
    frac = h - lo
    lo_val = float(arr[lo])
    hi_val = float(arr[hi])
    return lo_val + frac * (hi_val - lo_val)


def compute_quantiles(values: SampleLike) -> Quantiles:
    """Sort ``values`` and return the canonical 5/25/50/75/95% quantiles."""
    sorted_arr = np.sort(as_samples(values))
    n = sorted_arr.size
    q5, q25, q50, q75, q95 = (quantile(sorted_arr, n, p) for p in CANONICAL_PROBABILITIES)
    return Quantiles(q5=q5, q25=q25, q50=q50, q75=q75, q95=q95)


def compute_hdi(sorted_values: SampleLike, n: int, mass: float) -> HDIInterval:
    """Narrowest interval holding ``mass`` of the sorted samples.

    A window of ``max(floor(mass * n), 1)`` consecutive sorted samples is
    slid over every start index; the narrowest one wins and ties go to the
    lowest start. Both bounds are observed samples, never interpolated.

    Args:
        sorted_values: Samples in ascending order
        n: Number of samples to use from the front of ``sorted_values``
        mass: Credible mass in (0, 1]

    Returns:
        HDIInterval ``(lo, hi)``
    """
    if not 0.0 < mass <= 1.0:
        msg = f"mass must be in (0, 1], got {mass}"
        raise InvalidInputError(msg)
    arr = _sorted_prefix(sorted_values, n)

    window = max(math.floor(mass * n), 1)
    if window >= n:
        return HDIInterval(lo=float(arr[0]), hi=float(arr[n - 1]))

    # widths[i] = arr[i + window - 1] - arr[i] for i in [0, n - window]
    widths = arr[window - 1 :] - arr[: n - window + 1]
    # argmin returns the first occurrence of the minimum
    best = int(np.argmin(widths))
    return HDIInterval(lo=float(arr[best]), hi=float(arr[best + window - 1]))


__all__ = [
    "CANONICAL_PROBABILITIES",
    "compute_hdi",
    "compute_quantiles",
    "quantile",
]
