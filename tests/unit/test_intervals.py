"""Tests for quantiles and highest-density intervals."""

import numpy as np
import pytest

from tracelens.core.diagnostics.intervals import compute_hdi, compute_quantiles, quantile
from tracelens.core.shared.exceptions import InvalidInputError


class TestQuantile:
    """Tests for linearly interpolated quantiles."""

    def test_median_of_odd_sequence(self):
        assert quantile([1.0, 2.0, 3.0, 4.0, 5.0], 5, 0.5) == 3.0

    def test_interpolates_between_neighbours(self):
        assert quantile([1.0, 2.0], 2, 0.5) == pytest.approx(1.5)
        assert quantile([0.0, 10.0, 20.0], 3, 0.25) == pytest.approx(5.0)

    def test_endpoints(self):
        values = [1.0, 4.0, 9.0]
        assert quantile(values, 3, 0.0) == 1.0
        assert quantile(values, 3, 1.0) == 9.0

    def test_uses_prefix_of_length_n(self):
        """Only the first n values are considered."""
        assert quantile([1.0, 2.0, 3.0, 100.0], 3, 1.0) == 3.0

    def test_matches_numpy_linear(self, normal_samples):
        sorted_arr = np.sort(normal_samples)
        for p in (0.05, 0.33, 0.5, 0.9):
            expected = np.quantile(sorted_arr, p, method="linear")
            assert quantile(sorted_arr, sorted_arr.size, p) == pytest.approx(expected)

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_probability_out_of_range(self, p):
        with pytest.raises(InvalidInputError):
            quantile([1.0, 2.0], 2, p)

    def test_n_larger_than_sequence(self):
        with pytest.raises(InvalidInputError):
            quantile([1.0, 2.0], 3, 0.5)


class TestComputeQuantiles:
    """Tests for the canonical quantile set."""

    def test_monotone(self, normal_samples):
        q = compute_quantiles(normal_samples)
        assert q.q5 <= q.q25 <= q.q50 <= q.q75 <= q.q95

    def test_unsorted_input(self):
        q = compute_quantiles([5.0, 1.0, 3.0, 2.0, 4.0])
        assert q.q50 == 3.0
        assert q.q5 == pytest.approx(1.2)
        assert q.q95 == pytest.approx(4.8)

    def test_single_value(self):
        q = compute_quantiles([7.0])
        assert q.as_tuple() == (7.0, 7.0, 7.0, 7.0, 7.0)


class TestComputeHDI:
    """Tests for the highest-density interval."""

    def test_bounds_are_observed_samples(self, normal_samples):
        sorted_arr = np.sort(normal_samples)
        hdi = compute_hdi(sorted_arr, sorted_arr.size, 0.94)
        assert hdi.lo in sorted_arr
        assert hdi.hi in sorted_arr
        assert hdi.lo <= hdi.hi

    def test_inner_interval_nested_in_outer(self, normal_samples):
        sorted_arr = np.sort(normal_samples)
        n = sorted_arr.size
        hdi_94 = compute_hdi(sorted_arr, n, 0.94)
        hdi_50 = compute_hdi(sorted_arr, n, 0.5)
        assert hdi_94.contains(hdi_50)
        assert hdi_50.width < hdi_94.width

    def test_single_value(self):
        hdi = compute_hdi([3.0], 1, 0.94)
        assert (hdi.lo, hdi.hi) == (3.0, 3.0)

    def test_full_mass_spans_all_samples(self):
        hdi = compute_hdi([1.0, 2.0, 5.0], 3, 1.0)
        assert (hdi.lo, hdi.hi) == (1.0, 5.0)

    def test_ties_pick_earliest_window(self):
        """Equally narrow windows resolve to the lowest start index."""
        hdi = compute_hdi([0.0, 1.0, 2.0, 3.0], 4, 0.5)
        assert (hdi.lo, hdi.hi) == (0.0, 1.0)

    def test_skips_outlier(self):
        hdi = compute_hdi([0.0, 0.1, 0.2, 0.3, 10.0], 5, 0.8)
        assert (hdi.lo, hdi.hi) == (0.0, 0.3)

    def test_last_window_is_considered(self):
        """The window ending at the last sample can win."""
        hdi = compute_hdi([-10.0, -5.0, 0.0, 0.1], 4, 0.5)
        assert (hdi.lo, hdi.hi) == (0.0, 0.1)

    @pytest.mark.parametrize("mass", [0.0, -0.5, 1.01])
    def test_invalid_mass(self, mass):
        with pytest.raises(InvalidInputError):
            compute_hdi([1.0, 2.0], 2, mass)
