"""Energy-transition diagnostics for Hamiltonian samplers.

Compares the marginal energy distribution with the distribution of energy
changes between consecutive draws. When the transition histogram is much
narrower than the marginal one, momentum resampling cannot move the chain
across energy levels efficiently (Betancourt, 2017, section 6.1).
"""

from __future__ import annotations

import numpy as np

from tracelens.core.diagnostics.histogram import compute_histogram
from tracelens.core.domain.summaries import EnergySummary
from tracelens.core.shared.typing import SampleLike

DEFAULT_ENERGY_BINS = 30


def energy_transitions(energies: SampleLike) -> tuple[float, ...]:
    """``|e[i+1] - e[i]|`` for every consecutive pair of energies."""
    arr = np.asarray(energies, dtype=np.float64).ravel()
    return tuple(float(t) for t in np.abs(np.diff(arr)))


def summarize_energy(
    energies: SampleLike,
    num_bins: int = DEFAULT_ENERGY_BINS,
) -> EnergySummary | None:
    """Histogram energies and energy transitions with a shared y scale.

    Returns ``None`` when fewer than two energies are available; energy
    capture is optional on the sampler side, so this is not an error.
    """
    arr = np.asarray(energies, dtype=np.float64).ravel()
    if arr.size < 2:
        return None

    transitions = energy_transitions(arr)
    hist_energy = compute_histogram(arr, num_bins)
    hist_transition = compute_histogram(transitions, num_bins)

    return EnergySummary(
        energies=tuple(float(e) for e in arr),
        transitions=transitions,
        histogram_energy=hist_energy,
        histogram_transition=hist_transition,
        max_count=max(hist_energy.max_count, hist_transition.max_count),
    )


__all__ = ["DEFAULT_ENERGY_BINS", "energy_transitions", "summarize_energy"]
