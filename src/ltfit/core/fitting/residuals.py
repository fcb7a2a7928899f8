"""Statistically weighted residuals of the lifetime model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ltfit.core.constants import IRF_SUM_SCALE
from ltfit.core.fitting.model import evaluate_model

if TYPE_CHECKING:
    from ltfit.core.fitting.assembler import ParameterLayout
    from ltfit.core.fitting.context import FitContext
    from ltfit.core.shared.typing import FloatArray


def statistical_weights(observed: FloatArray) -> FloatArray:
    """Poisson weights ``1/sqrt(counts + 1)``, finite for empty channels."""
    return 1.0 / np.sqrt(np.asarray(observed, dtype=float) + 1.0)


def weighted_residuals(observed: FloatArray, model: FloatArray, weights: FloatArray) -> FloatArray:
    return weights * (observed - model)


def irf_sum_residual(irf_intensity: FloatArray, scale: float = IRF_SUM_SCALE) -> float:
    """Penalty pulling the IRF intensities towards a sum of one.

    Only applied with two or more IRF components; a single component gives 0.
    """
    if len(irf_intensity) < 2:
        return 0.0
    return float((np.sum(irf_intensity) - 1.0) * scale)


def chi_square(residuals: FloatArray) -> float:
    """Sum of squared weighted residuals."""
    return float(np.sum(np.square(residuals)))


class ResidualFunction:
    """Residual callback handed to the solver.

    Calling the instance returns the weighted data residuals followed by one
    IRF-sum residual. :meth:`chi_square` only covers the data residuals.
    """

    def __init__(self, context: FitContext, layout: ParameterLayout) -> None:
        self._context = context
        self._layout = layout

    def model(self, values: FloatArray) -> FloatArray:
        """Expected counts per bin for a parameter vector in channel units."""
        context = self._context
        return evaluate_model(
            self._layout.unpack(values),
            context.x,
            context.integral_counts,
            context.roi_width,
        )

    def data_residuals(self, values: FloatArray) -> FloatArray:
        context = self._context
        return weighted_residuals(context.observed, self.model(values), context.weights)

    def chi_square(self, values: FloatArray) -> float:
        return chi_square(self.data_residuals(values))

    def __call__(self, values: FloatArray) -> FloatArray:
        penalty = irf_sum_residual(self._layout.unpack(values).irf_intensity)
        return np.append(self.data_residuals(values), penalty)
