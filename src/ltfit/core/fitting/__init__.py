"""Lifetime model fitting.

This module assembles the parameter vector, evaluates the convolved decay
model and its weighted residuals, and drives the bounded least-squares solver
until the chi-square settles.
"""

# Parameter vector
from ltfit.core.fitting.assembler import (
    ModelParameters,
    ParameterLayout,
    ParameterSlot,
    SlotKind,
    assemble_parameters,
)

# Working state
from ltfit.core.fitting.context import FitContext, RunRecord

# Iterative fit
from ltfit.core.fitting.driver import DriverResult, FitDriver, FitState

# Model and residuals
from ltfit.core.fitting.model import decay_shape, evaluate_model
from ltfit.core.fitting.residuals import (
    ResidualFunction,
    chi_square,
    irf_sum_residual,
    statistical_weights,
    weighted_residuals,
)

# Solver
from ltfit.core.fitting.solver import (
    STATUS_OK,
    ParameterConstraints,
    ScipyLeastSquaresSolver,
    Solver,
    SolverOutcome,
    SolverStatus,
    describe_status,
)

__all__ = [
    "STATUS_OK",
    "DriverResult",
    "FitContext",
    "FitDriver",
    "FitState",
    "ModelParameters",
    "ParameterConstraints",
    "ParameterLayout",
    "ParameterSlot",
    "ResidualFunction",
    "RunRecord",
    "ScipyLeastSquaresSolver",
    "SlotKind",
    "Solver",
    "SolverOutcome",
    "SolverStatus",
    "assemble_parameters",
    "chi_square",
    "decay_shape",
    "describe_status",
    "evaluate_model",
    "irf_sum_residual",
    "statistical_weights",
    "weighted_residuals",
]
