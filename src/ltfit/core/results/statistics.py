"""Fit statistics and derived spectrum quantities.

The chi-square helpers are the single source of truth for degrees of freedom
and reduced chi-square. The remaining functions derive the summary quantities
reported after a fit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ltfit.core.shared.typing import FloatArray, IntArray


def compute_degrees_of_freedom(n_data: int, n_params: int) -> int:
    """Compute degrees of freedom for statistical calculations.

    Args:
        n_data: Number of data points
        n_params: Number of free parameters

    Returns
    -------
        Degrees of freedom, minimum of 1 to avoid division by zero
    """
    return max(1, n_data - n_params)


def compute_reduced_chi_squared(chi_squared: float, n_data: int, n_params: int) -> float:
    """Compute reduced chi-squared (chi_squared / dof)."""
    return chi_squared / compute_degrees_of_freedom(n_data, n_params)


def sum_with_error(values: Sequence[float], errors: Sequence[float]) -> tuple[float, float]:
    """Sum of values with the errors added in quadrature."""
    return float(np.sum(values)), float(np.sqrt(np.sum(np.square(errors))))


def mean_with_error(values: Sequence[float], errors: Sequence[float]) -> tuple[float, float]:
    """Unweighted mean with the combined error ``sqrt(sum(err**2))``.

    The error is the quadrature sum of the component errors and is not divided
    by the number of values.

    Returns ``(0.0, 0.0)`` for an empty input.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    return float(np.mean(values)), float(np.sqrt(np.sum(np.square(errors))))


def peak_to_background(peak: float, background: float) -> float | None:
    """``(peak - background) / background``; undefined for a non-positive background."""
    if background <= 0.0:
        return None
    return (peak - background) / background


def spectral_centroid(
    channels: IntArray,
    curve: FloatArray,
    resolution: float,
) -> tuple[float | None, int]:
    """First moment of the fitted curve tail.

    The tail starts at the curve maximum ``t0``. Each bin contributes its
    trapezoid counts at its mid-bin time relative to ``t0``.

    Args:
        channels: Channels of the curve values
        curve: Fitted counts per channel
        resolution: Channel width

    Returns
    -------
        Centroid in time units (``None`` if the tail holds no counts) and the
        index of ``t0``
    """
    t0 = int(np.argmax(curve))
    # Trapezoids between consecutive curve values
    counts = 0.5 * (curve[t0:-1] + curve[t0 + 1 :])
    times = ((channels[t0:-1] - channels[t0]) + 0.5) * resolution
    total = float(np.sum(counts))
    if total == 0.0:
        return None, t0
    return float(np.sum(times * counts) / total), t0


__all__ = [
    "compute_degrees_of_freedom",
    "compute_reduced_chi_squared",
    "mean_with_error",
    "peak_to_background",
    "spectral_centroid",
    "sum_with_error",
]
