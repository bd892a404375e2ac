"""Service layer for tracelens.

Services sit between raw sampler output and the pure diagnostics
functions.

Available services:
- VariableSummarizer: single-/multi-chain summaries, forest, pair, energy,
  rank and posterior predictive data
"""

from tracelens.services.summarize import (
    VariableSummarizer,
    extract_divergent_indices,
    extract_energies,
)

__all__ = [
    "VariableSummarizer",
    "extract_divergent_indices",
    "extract_energies",
]
