"""Tests for rank histograms."""

import numpy as np
import pytest

from tracelens.core.diagnostics.ranks import compute_rank_histograms, pooled_ranks
from tracelens.core.shared.exceptions import InvalidInputError


class TestPooledRanks:
    """Tests for pooled ranking."""

    def test_ranks_follow_draw_order(self):
        ranks = pooled_ranks([[3.0, 1.0], [2.0, 0.0]])
        assert ranks[0].tolist() == [3, 1]
        assert ranks[1].tolist() == [2, 0]

    def test_ties_keep_pooled_order(self):
        ranks = pooled_ranks([[1.0, 1.0], [1.0, 1.0]])
        assert ranks[0].tolist() == [0, 1]
        assert ranks[1].tolist() == [2, 3]

    def test_unequal_chain_lengths(self):
        ranks = pooled_ranks([[0.0], [1.0, 2.0, 3.0]])
        assert [r.size for r in ranks] == [1, 3]

    def test_empty_chains_rejected(self):
        with pytest.raises(InvalidInputError):
            pooled_ranks([[], []])


class TestComputeRankHistograms:
    """Tests for compute_rank_histograms."""

    def test_counts_sum_to_total(self, rng):
        chains = [rng.normal(size=100) for _ in range(4)]
        result = compute_rank_histograms(chains, 20, name="mu")

        assert result.name == "mu"
        assert result.num_chains == 4
        assert result.num_bins == 20
        assert result.total_count == 400
        assert sum(sum(h) for h in result.histograms) == 400
        assert all(sum(h) == 100 for h in result.histograms)
        assert all(len(h) == 20 for h in result.histograms)

    def test_separated_chains(self):
        """A chain stuck below the others piles up in the low-rank bins."""
        result = compute_rank_histograms([[0.0, 1.0], [2.0, 3.0]], 2)
        assert result.histograms == ((2, 0), (0, 2))

    def test_well_mixed_chains_roughly_uniform(self, rng):
        chains = [rng.normal(size=2000) for _ in range(2)]
        result = compute_rank_histograms(chains, 4)
        for hist in result.histograms:
            assert np.all(np.abs(np.array(hist) - 500) < 100)

    def test_zero_bins_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_rank_histograms([[1.0], [2.0]], 0)
