"""
Unit tests for the statistical primitives.
"""
import numpy as np
import pytest

from nof1_engine.inference.statistics import (
    is_constant,
    pearson,
    population_std,
    regression_slope,
    standardize,
)


class TestPearson:
    """Test Pearson correlation."""

    def test_self_correlation_is_one(self):
        x = [3.0, 1.0, 4.0, 1.5, 9.0]
        assert pearson(x, x) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_constant_series_gives_zero(self):
        assert pearson([1, 2, 3], [5, 5, 5]) == 0.0
        assert pearson([5, 5, 5], [1, 2, 3]) == 0.0

    def test_constant_with_float_residue_gives_zero(self):
        """0.1 * 3 / 3 is not exactly 0.1; the series must still count as constant."""
        assert pearson([1, 2, 3], [0.1, 0.1, 0.1]) == 0.0

    def test_fewer_than_two_points(self):
        assert pearson([1.0], [2.0]) == 0.0
        assert pearson([], []) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            pearson([1, 2, 3], [1, 2])

    def test_bounded(self):
        rng = np.random.default_rng(0)
        for _ in range(20):
            x = rng.normal(size=8)
            y = rng.normal(size=8)
            assert -1.0 <= pearson(x, y) <= 1.0


class TestRegressionSlope:
    """Test OLS slope."""

    def test_linear_slope(self):
        assert regression_slope([1, 2, 3], [2, 4, 6]) == pytest.approx(2.0)

    def test_negative_slope(self):
        assert regression_slope([0, 1, 2, 3], [10, 8, 6, 4]) == pytest.approx(-2.0)

    def test_constant_x_gives_zero(self):
        assert regression_slope([4, 4, 4], [1, 2, 3]) == 0.0

    def test_constant_y_gives_zero(self):
        assert regression_slope([1, 2, 3], [7, 7, 7]) == 0.0

    def test_fewer_than_two_points(self):
        assert regression_slope([1.0], [1.0]) == 0.0


class TestStandardize:
    """Test z-score transform."""

    def test_mean_zero_std_one(self):
        z = standardize([2.0, 9.0, 4.0, 4.0, 11.0, 1.0])
        assert np.mean(z) == pytest.approx(0.0, abs=1e-12)
        assert np.std(z) == pytest.approx(1.0)

    def test_population_divisor(self):
        z = standardize([1, 2, 3])
        assert z == pytest.approx([-np.sqrt(1.5), 0.0, np.sqrt(1.5)])

    def test_constant_input_gives_zeros(self):
        z = standardize([5.0, 5.0, 5.0, 5.0])
        assert list(z) == [0.0, 0.0, 0.0, 0.0]

    def test_empty(self):
        assert len(standardize([])) == 0


class TestHelpers:
    """Test variance helpers."""

    def test_population_std(self):
        assert population_std([2, 4, 6]) == pytest.approx(np.sqrt(8 / 3))
        assert population_std([3, 3, 3]) == 0.0

    def test_is_constant(self):
        assert is_constant([1e6, 1e6, 1e6])
        assert not is_constant([1.0, 1.0, 1.0001])
