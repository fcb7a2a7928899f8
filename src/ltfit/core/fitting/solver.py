"""Bounded nonlinear least-squares solver used by the fit driver.

The driver only talks to the :class:`Solver` protocol, so tests can inject a
deterministic fake. :class:`ScipyLeastSquaresSolver` wraps
``scipy.optimize.least_squares`` (trust-region reflective, which honours box
constraints) and reports MPFIT-compatible status codes: positive codes mean
success, zero and negative codes mean the run failed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

import numpy as np
from scipy.optimize import least_squares

from ltfit.core.constants import LEAST_SQUARES_FTOL, LEAST_SQUARES_GTOL, LEAST_SQUARES_XTOL
from ltfit.core.shared.typing import BoolArray, FloatArray

logger = logging.getLogger(__name__)

ResidualCallback = Callable[[FloatArray], FloatArray]


class SolverStatus(IntEnum):
    """Status codes returned by a solver run."""

    INPUT_ERROR = 0
    CONVERGED_CHI_SQUARE = 1
    CONVERGED_PARAMETERS = 2
    CONVERGED_BOTH = 3
    CONVERGED_ORTHOGONALITY = 4
    MAX_ITERATIONS = 5
    NON_FINITE = -16
    NO_DATA = -18
    NO_FREE_PARAMETERS = -19
    INITIAL_VALUES_INCONSISTENT = -21
    CONSTRAINTS_INCONSISTENT = -22
    NOT_ENOUGH_DOF = -24


STATUS_OK = SolverStatus.CONVERGED_CHI_SQUARE
"""Codes below this threshold are solver failures."""

_STATUS_MESSAGES: dict[int, str] = {
    SolverStatus.INPUT_ERROR: "General input parameter error.",
    SolverStatus.CONVERGED_CHI_SQUARE: "OK. Convergence in chi-square.",
    SolverStatus.CONVERGED_PARAMETERS: "OK. Convergence in parameter value.",
    SolverStatus.CONVERGED_BOTH: "OK. Convergence in chi-square and parameter value.",
    SolverStatus.CONVERGED_ORTHOGONALITY: "OK. Convergence in orthogonality.",
    SolverStatus.MAX_ITERATIONS: "OK. Maximum number of iterations reached.",
    SolverStatus.NON_FINITE: "Error. Residual function produced non-finite values.",
    SolverStatus.NO_DATA: "Error. No data points were supplied.",
    SolverStatus.NO_FREE_PARAMETERS: "Error. No free parameters.",
    SolverStatus.INITIAL_VALUES_INCONSISTENT: "Error. Initial values inconsistent with constraints.",
    SolverStatus.CONSTRAINTS_INCONSISTENT: "Error. Initial constraints inconsistent.",
    SolverStatus.NOT_ENOUGH_DOF: "Error. Not enough degrees of freedom.",
}

# scipy.optimize.least_squares status -> solver status
_SCIPY_STATUS: dict[int, SolverStatus] = {
    -1: SolverStatus.INPUT_ERROR,
    0: SolverStatus.MAX_ITERATIONS,
    1: SolverStatus.CONVERGED_ORTHOGONALITY,
    2: SolverStatus.CONVERGED_CHI_SQUARE,
    3: SolverStatus.CONVERGED_PARAMETERS,
    4: SolverStatus.CONVERGED_BOTH,
}


def describe_status(code: int) -> str:
    """Human-readable text for a solver status code."""
    return _STATUS_MESSAGES.get(code, "")


@dataclass(frozen=True, slots=True)
class ParameterConstraints:
    """Per-parameter box constraints and fixed flags, aligned with the parameter vector."""

    lower: FloatArray
    upper: FloatArray
    fixed: BoolArray

    @property
    def free(self) -> BoolArray:
        return ~self.fixed

    @property
    def n_free(self) -> int:
        return int(np.count_nonzero(self.free))


@dataclass(frozen=True, slots=True)
class SolverOutcome:
    """Result of a single solver call.

    ``params`` always has the full parameter-vector length; fixed entries keep
    their start value and report a zero error. ``iterations`` counts residual
    function evaluations, the same unit as the ``max_iterations`` budget.
    """

    status: int
    iterations: int
    params: FloatArray
    errors: FloatArray
    residuals: FloatArray
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status >= STATUS_OK


class Solver(Protocol):
    """Protocol implemented by bounded least-squares solvers."""

    def solve(
        self,
        residuals: ResidualCallback,
        x0: FloatArray,
        constraints: ParameterConstraints,
        max_iterations: int,
    ) -> SolverOutcome:
        """Minimise ``sum(residuals(x)**2)`` starting at ``x0``.

        ``max_iterations`` caps the number of residual evaluations.
        """
        ...


class ScipyLeastSquaresSolver:
    """Bounded solver built on ``scipy.optimize.least_squares``.

    Fixed parameters are removed from the optimisation vector. One-sigma errors
    come from the unscaled covariance ``(J^T J)^-1`` of the free parameters,
    which matches statistically weighted residuals.
    """

    def __init__(
        self,
        *,
        ftol: float = LEAST_SQUARES_FTOL,
        xtol: float = LEAST_SQUARES_XTOL,
        gtol: float = LEAST_SQUARES_GTOL,
    ) -> None:
        self._ftol = ftol
        self._xtol = xtol
        self._gtol = gtol

    def solve(
        self,
        residuals: ResidualCallback,
        x0: FloatArray,
        constraints: ParameterConstraints,
        max_iterations: int,
    ) -> SolverOutcome:
        """Run one bounded least-squares optimisation."""
        x0 = np.asarray(x0, dtype=float)
        free = constraints.free
        zeros = np.zeros_like(x0)

        def failed(status: SolverStatus, fun: FloatArray, detail: str = "") -> SolverOutcome:
            message = detail or describe_status(status)
            logger.warning("Solver input rejected: %s", message)
            return SolverOutcome(status, 0, x0.copy(), zeros, fun, message)

        initial = np.asarray(residuals(x0), dtype=float)
        if initial.size == 0:
            return failed(SolverStatus.NO_DATA, initial)
        if constraints.n_free == 0:
            return failed(SolverStatus.NO_FREE_PARAMETERS, initial)
        if initial.size < constraints.n_free:
            return failed(SolverStatus.NOT_ENOUGH_DOF, initial)
        if not np.all(np.isfinite(initial)):
            return failed(SolverStatus.NON_FINITE, initial)

        lower = constraints.lower[free]
        upper = constraints.upper[free]
        start = x0[free]
        if np.any(lower >= upper):
            return failed(SolverStatus.CONSTRAINTS_INCONSISTENT, initial)
        if np.any(start < lower) or np.any(start > upper):
            return failed(SolverStatus.INITIAL_VALUES_INCONSISTENT, initial)

        def objective(values: FloatArray) -> FloatArray:
            full = x0.copy()
            full[free] = values
            return residuals(full)

        try:
            result = least_squares(
                objective,
                start,
                bounds=(lower, upper),
                method="trf",
                x_scale="jac",
                ftol=self._ftol,
                xtol=self._xtol,
                gtol=self._gtol,
                max_nfev=max_iterations,
            )
        except ValueError as exc:
            return failed(SolverStatus.INPUT_ERROR, initial, str(exc))

        params = x0.copy()
        params[free] = result.x
        errors = zeros.copy()
        errors[free] = self._estimate_errors(result.jac)

        status = _SCIPY_STATUS.get(result.status, SolverStatus.INPUT_ERROR)
        logger.debug("least_squares finished: %s (nfev=%d)", result.message, result.nfev)
        return SolverOutcome(
            status=int(status),
            iterations=int(result.nfev),
            params=params,
            errors=errors,
            residuals=np.asarray(result.fun, dtype=float),
            message=describe_status(status),
        )

    @staticmethod
    def _estimate_errors(jac: FloatArray) -> FloatArray:
        """One-sigma errors from the Jacobian at the solution."""
        jtj = jac.T @ jac
        try:
            covariance = np.linalg.inv(jtj)
        except np.linalg.LinAlgError:
            covariance = np.linalg.pinv(jtj)
        return np.sqrt(np.abs(np.diag(covariance)))
