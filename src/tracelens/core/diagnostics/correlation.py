"""Pearson correlation between sample sequences."""

from __future__ import annotations

import math
from collections.abc import Mapping

import numpy as np

from tracelens.core.diagnostics.histogram import as_samples
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import SampleLike


def pearson_correlation(xs: SampleLike, ys: SampleLike) -> float:
    """Pearson correlation coefficient of two equal-length sequences.

    Uses the population (uncorrected) covariance and variances. When the
    denominator vanishes (a constant sequence) the result is ``0.0``
    instead of NaN.

    Raises:
        InvalidInputError: If either sequence is empty or the lengths differ
    """
    x = as_samples(xs, name="xs")
    y = as_samples(ys, name="ys")
    if x.size != y.size:
        msg = f"xs and ys must have equal length, got {x.size} and {y.size}"
        raise InvalidInputError(msg)

    dx = x - np.mean(x)
    dy = y - np.mean(y)
    sum_xy = float(np.sum(dx * dy))
    sum_xx = float(np.sum(dx * dx))
    sum_yy = float(np.sum(dy * dy))

    denom = math.sqrt(sum_xx * sum_yy)
    if denom == 0.0:
        return 0.0
    return sum_xy / denom


def pairwise_correlations(
    samples_by_name: Mapping[str, SampleLike],
) -> dict[tuple[str, str], float]:
    """Correlation for every ordered pair of distinct variables.

    Both ``(a, b)`` and ``(b, a)`` are present so a corner plot can look up
    either triangle.
    """
    names = sorted(samples_by_name)
    correlations: dict[tuple[str, str], float] = {}
    for i, a in enumerate(names):
        for b in names[i + 1 :]:
            r = pearson_correlation(samples_by_name[a], samples_by_name[b])
            correlations[(a, b)] = r
            correlations[(b, a)] = r
    return correlations


__all__ = ["pairwise_correlations", "pearson_correlation"]
