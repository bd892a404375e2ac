"""Tests for Pearson correlation."""

import numpy as np
import pytest

from tracelens.core.diagnostics.correlation import pairwise_correlations, pearson_correlation
from tracelens.core.shared.exceptions import InvalidInputError


class TestPearsonCorrelation:
    """Tests for pearson_correlation."""

    def test_self_correlation_is_one(self, normal_samples):
        assert pearson_correlation(normal_samples, normal_samples) == pytest.approx(1.0)

    def test_negated_correlation_is_minus_one(self, normal_samples):
        assert pearson_correlation(normal_samples, -normal_samples) == pytest.approx(-1.0)

    def test_linear_relation(self):
        assert pearson_correlation([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_independent_samples_near_zero(self, rng):
        xs = rng.normal(size=5000)
        ys = rng.normal(size=5000)
        assert abs(pearson_correlation(xs, ys)) < 0.05

    def test_bounded(self, rng):
        xs = rng.normal(size=50)
        ys = xs + rng.normal(size=50)
        assert -1.0 <= pearson_correlation(xs, ys) <= 1.0

    def test_constant_sequence_gives_zero(self):
        """A zero-variance input yields 0.0 rather than NaN."""
        assert pearson_correlation([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]) == 0.0

    def test_length_mismatch(self):
        with pytest.raises(InvalidInputError, match="equal length"):
            pearson_correlation([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_empty_input(self):
        with pytest.raises(InvalidInputError):
            pearson_correlation([], [])


class TestPairwiseCorrelations:
    """Tests for pairwise_correlations."""

    def test_both_orders_present(self, rng):
        a = rng.normal(size=100)
        samples = {"b": 2 * a, "a": a, "c": rng.normal(size=100)}
        correlations = pairwise_correlations(samples)

        assert len(correlations) == 6
        assert correlations[("a", "b")] == correlations[("b", "a")]
        assert correlations[("a", "b")] == pytest.approx(1.0)
        assert ("a", "a") not in correlations

    def test_single_variable_has_no_pairs(self):
        assert pairwise_correlations({"x": np.arange(5.0)}) == {}
