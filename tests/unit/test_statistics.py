"""Test fit statistics and derived spectrum quantities."""

import numpy as np
import pytest

from ltfit.core.results.statistics import (
    compute_degrees_of_freedom,
    compute_reduced_chi_squared,
    mean_with_error,
    peak_to_background,
    spectral_centroid,
    sum_with_error,
)


class TestChiSquare:
    """Tests for chi-square helpers."""

    def test_degrees_of_freedom_floor(self):
        """Degrees of freedom should never drop below one."""
        assert compute_degrees_of_freedom(10, 3) == 7
        assert compute_degrees_of_freedom(3, 3) == 1
        assert compute_degrees_of_freedom(2, 5) == 1

    def test_reduced(self):
        assert compute_reduced_chi_squared(14.0, 10, 3) == pytest.approx(2.0)


class TestAggregates:
    """Tests for sums and means with propagated errors."""

    def test_sum_adds_errors_in_quadrature(self):
        total, error = sum_with_error([0.3, 0.7], [0.03, 0.04])
        assert total == pytest.approx(1.0)
        assert error == pytest.approx(0.05)

    def test_mean_error_is_quadrature_sum(self):
        """The mean error should be sqrt(sum(err**2)), not divided by the count."""
        mean, error = mean_with_error([100.0, 200.0, 300.0], [3.0, 4.0, 12.0])
        assert mean == pytest.approx(200.0)
        assert error == pytest.approx(13.0)

    def test_mean_of_nothing(self):
        assert mean_with_error([], []) == (0.0, 0.0)


class TestPeakToBackground:
    """Tests for the peak-to-background ratio."""

    def test_ratio(self):
        assert peak_to_background(105.0, 5.0) == pytest.approx(20.0)

    @pytest.mark.parametrize("background", [0.0, -1.0])
    def test_undefined_without_background(self, background):
        """A non-positive background should give no ratio."""
        assert peak_to_background(100.0, background) is None


class TestSpectralCentroid:
    """Tests for the centroid of the fitted curve tail."""

    def test_trapezoid_moment(self):
        """Should weight mid-bin times after the maximum by trapezoid counts."""
        centroid, t0 = spectral_centroid(np.array([0, 1, 2, 3]), np.array([1.0, 4.0, 2.0, 0.0]), 10.0)
        assert t0 == 1
        # Trapezoids 3 and 1 at 5 and 15
        assert centroid == pytest.approx(7.5)

    def test_channel_offset_irrelevant(self):
        """Only channel differences from the maximum should matter."""
        curve = np.array([1.0, 4.0, 2.0, 0.0])
        shifted, _ = spectral_centroid(np.array([100, 101, 102, 103]), curve, 10.0)
        assert shifted == pytest.approx(7.5)

    def test_exponential_tail(self):
        """A sampled exponential should give a centroid close to its lifetime."""
        channels = np.arange(2000)
        curve = np.exp(-channels / 100.0)
        centroid, t0 = spectral_centroid(channels, curve, 1.0)
        assert t0 == 0
        assert centroid == pytest.approx(100.0, rel=0.01)

    def test_no_tail(self):
        """A curve peaking at its last value has no tail."""
        centroid, t0 = spectral_centroid(np.array([0, 1, 2]), np.array([0.0, 0.0, 5.0]), 25.0)
        assert centroid is None
        assert t0 == 2
