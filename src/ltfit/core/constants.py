"""Core constants for LTFit fitting.

These constants define the defaults of the iterative fit and of the bounded
least-squares solver. The tolerances can be overridden from the fit set.
"""

import math

# =============================================================================
# Iterative Fit Driver
# =============================================================================

MAX_FIT_RUNS = 20
"""Maximum number of consecutive solver runs before the fit is accepted as is."""

CHI_SQUARE_CONVERGENCE = 1e-5
"""Run-to-run chi-square improvement below which the fit counts as converged."""

# =============================================================================
# Residual Function
# =============================================================================

IRF_SUM_SCALE = 1e4
"""Weight of the synthetic residual pulling the IRF intensities towards 1."""

# =============================================================================
# Model Evaluator
# =============================================================================

FWHM_TO_WIDTH = 1.0 / (2.0 * math.sqrt(math.log(2.0)))
"""Converts a Gaussian FWHM into the width ``s`` of ``exp(-(t/s)**2)``."""

# =============================================================================
# Least-Squares Solver Defaults
# =============================================================================

LEAST_SQUARES_FTOL = 1e-10
"""Relative change of the cost function below which a solver run stops."""

LEAST_SQUARES_XTOL = 1e-10
"""Relative change of the parameters below which a solver run stops."""

LEAST_SQUARES_GTOL = 1e-10
"""Gradient orthogonality below which a solver run stops."""

MAX_ITERATIONS = 200
"""Default cap on residual evaluations in a single solver run."""
