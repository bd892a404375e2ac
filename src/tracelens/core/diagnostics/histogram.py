"""Equal-width histograms over sample sequences.

Pure functions: no state, no I/O. Results are plain-value
:class:`~tracelens.core.domain.summaries.Histogram` records.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from tracelens.core.domain.summaries import Histogram, HistogramBin
from tracelens.core.shared.exceptions import InvalidInputError
from tracelens.core.shared.typing import FloatArray, SampleLike

# Half-width of the synthetic range used when every sample is identical
DEGENERATE_HALF_SPAN = 0.5
# Fraction of the observed span added on each side of a non-degenerate range
RANGE_PADDING = 0.01


def as_samples(values: SampleLike, *, name: str = "values") -> FloatArray:
    """Convert ``values`` to a 1-D float64 array, rejecting empty input."""
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        msg = f"{name} must contain at least one sample"
        raise InvalidInputError(msg)
    return arr


def _check_num_bins(num_bins: int) -> None:
    if num_bins < 1:
        msg = f"num_bins must be >= 1, got {num_bins}"
        raise InvalidInputError(msg)


def histogram_range(values: FloatArray) -> tuple[float, float]:
    """Return the padded ``(lo, hi)`` range a histogram of ``values`` spans.

    Identical values get a ±0.5 span so binning never divides by zero.
    Otherwise the observed range is widened by 1% on each side so the
    extremes do not sit exactly on an edge.
    """
    min_val = float(np.min(values))
    max_val = float(np.max(values))
    if min_val == max_val:
        return min_val - DEGENERATE_HALF_SPAN, max_val + DEGENERATE_HALF_SPAN
    pad = (max_val - min_val) * RANGE_PADDING
    return min_val - pad, max_val + pad


def compute_histogram(values: SampleLike, num_bins: int) -> Histogram:
    """Compute a ``num_bins`` equal-width histogram of ``values``.

    Args:
        values: Non-empty sequence of samples
        num_bins: Number of bins (>= 1)

    Returns:
        Histogram whose counts sum to ``len(values)``

    Raises:
        InvalidInputError: If ``values`` is empty or ``num_bins < 1``
    """
    _check_num_bins(num_bins)
    arr = as_samples(values)

    lo, hi = histogram_range(arr)
    bin_width = (hi - lo) / num_bins

    # Clamping only matters at the extreme edges, where rounding can push
    # an index one past the end.
    indices = np.floor((arr - lo) / bin_width).astype(np.int64)
    indices = np.clip(indices, 0, num_bins - 1)
    counts = np.bincount(indices, minlength=num_bins)

    bins = []
    for i in range(num_bins):
        left = lo + i * bin_width
        bins.append(HistogramBin(left=left, right=left + bin_width, count=int(counts[i])))

    return Histogram(bins=tuple(bins), max_count=int(counts.max()))


def histogram_with_edges(values: SampleLike, edges: Sequence[float]) -> tuple[int, ...]:
    """Count ``values`` into the half-open intervals ``[edges[i], edges[i+1])``.

    Values outside ``[edges[0], edges[-1])`` are not counted; callers that
    need every value counted must pad their edges.
    """
    edge_arr = np.asarray(edges, dtype=np.float64)
    if edge_arr.ndim != 1 or edge_arr.size < 2:
        msg = "edges must contain at least two values"
        raise InvalidInputError(msg)

    num_bins = edge_arr.size - 1
    arr = np.asarray(values, dtype=np.float64).ravel()
    indices = np.searchsorted(edge_arr, arr, side="right") - 1
    in_range = (indices >= 0) & (indices < num_bins)
    counts = np.bincount(indices[in_range], minlength=num_bins)
    return tuple(int(c) for c in counts)


__all__ = [
    "as_samples",
    "compute_histogram",
    "histogram_range",
    "histogram_with_edges",
]
