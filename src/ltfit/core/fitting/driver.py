"""Iterative fit driver.

A single solver call can stop on a plateau of the weighted cost, so the driver
restarts the solver from its own result until the chi-square no longer
improves. The loop is an explicit state machine::

    INIT -> SOLVING -> CONVERGED | MAX_RUNS_REACHED | SOLVER_ERROR

Chi-square values are recomputed from the model after every run (the solver
cost also carries the IRF-sum penalty) and normalised by the degrees of freedom
once the loop has ended. A run that ends above its starting chi-square stops
the loop and is discarded, so the result is always the best run seen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ltfit.core.constants import CHI_SQUARE_CONVERGENCE, MAX_FIT_RUNS, MAX_ITERATIONS
from ltfit.core.fitting.assembler import ParameterLayout
from ltfit.core.fitting.context import FitContext, RunRecord
from ltfit.core.fitting.residuals import ResidualFunction
from ltfit.core.fitting.solver import ScipyLeastSquaresSolver, Solver, SolverStatus, describe_status
from ltfit.core.results.statistics import compute_degrees_of_freedom, compute_reduced_chi_squared
from ltfit.core.shared.events import EventDispatcher, EventType, FitRunEvent
from ltfit.core.shared.reporter import NullReporter, Reporter
from ltfit.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


class FitState(str, Enum):
    """States of the iterative fit."""

    INIT = "init"
    SOLVING = "solving"
    CONVERGED = "converged"
    MAX_RUNS_REACHED = "max_runs_reached"
    SOLVER_ERROR = "solver_error"

    @property
    def is_terminal(self) -> bool:
        return self in (FitState.CONVERGED, FitState.MAX_RUNS_REACHED, FitState.SOLVER_ERROR)


@dataclass(slots=True)
class DriverResult:
    """Outcome of the iterative fit, in channel units.

    Chi-square values are reduced (divided by ``dof``).
    """

    state: FitState
    status: int
    message: str
    values: FloatArray
    errors: FloatArray
    start_chi_square: float
    final_chi_square: float
    n_data: int
    n_free: int
    runs: list[RunRecord] = field(default_factory=list)

    @property
    def dof(self) -> int:
        return compute_degrees_of_freedom(self.n_data, self.n_free)

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def total_iterations(self) -> int:
        return sum(record.iterations for record in self.runs)


class FitDriver:
    """Run the injected solver until the chi-square settles.

    Args:
        solver: Bounded least-squares solver, ``ScipyLeastSquaresSolver`` by default
        max_runs: Run cap
        threshold: Chi-square improvement below which the fit has converged
        max_iterations: Iteration cap handed to every solver call
        reporter: Progress reporter
        dispatcher: Receives a ``FIT_RUN_COMPLETED`` event per run
    """

    def __init__(
        self,
        solver: Solver | None = None,
        *,
        max_runs: int = MAX_FIT_RUNS,
        threshold: float = CHI_SQUARE_CONVERGENCE,
        max_iterations: int = MAX_ITERATIONS,
        reporter: Reporter | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        if max_runs < 1:
            msg = f"max_runs must be at least 1, got {max_runs}"
            raise ValueError(msg)
        self._solver = solver if solver is not None else ScipyLeastSquaresSolver()
        self._max_runs = max_runs
        self._threshold = threshold
        self._max_iterations = max_iterations
        self._reporter = reporter or NullReporter()
        self._dispatcher = dispatcher
        self.state = FitState.INIT

    def run(self, context: FitContext, layout: ParameterLayout) -> DriverResult:
        """Fit the context data starting from the layout's start vector."""
        self.state = FitState.INIT
        residuals = ResidualFunction(context, layout)
        values = layout.values.copy()
        errors = np.zeros_like(values)
        status = int(SolverStatus.INPUT_ERROR)

        start_chi_square = residuals.chi_square(values)
        previous = start_chi_square
        logger.debug("Starting chi-square %.6g over %d bins", start_chi_square, context.n_data)

        self.state = FitState.SOLVING
        while not self.state.is_terminal:
            run_index = len(context.runs) + 1
            self._reporter.action(f"Fit run {run_index}/{self._max_runs}")

            outcome = self._solver.solve(residuals, values, layout.constraints, self._max_iterations)
            candidate = np.asarray(outcome.params, dtype=float)
            status = int(outcome.status)
            final = residuals.chi_square(candidate)

            record = RunRecord(run_index, status, outcome.iterations, previous, final)
            context.runs.append(record)
            self._notify(record)
            logger.debug(
                "Run %d: status=%d iterations=%d chi2 %.6g -> %.6g",
                run_index,
                status,
                outcome.iterations,
                previous,
                final,
            )

            if not outcome.ok:
                # Attempted values are still written back with the failing status
                values = candidate
                errors = np.asarray(outcome.errors, dtype=float)
                previous = final
                self.state = FitState.SOLVER_ERROR
                self._reporter.error(f"Solver failed in run {run_index}: {describe_status(status)}")
                continue

            if final > previous:
                # A worse run ends the loop; the previous values stay the result
                logger.debug("Run %d raised chi-square; keeping run %d values", run_index, run_index - 1)
                self.state = FitState.CONVERGED
                continue

            improvement = previous - final
            values = candidate
            errors = np.asarray(outcome.errors, dtype=float)
            previous = final
            if improvement <= self._threshold:
                self.state = FitState.CONVERGED
            elif run_index >= self._max_runs:
                self.state = FitState.MAX_RUNS_REACHED
                self._reporter.warning(f"Run cap of {self._max_runs} reached before convergence")

        n_data = context.n_data
        n_free = layout.n_free
        dof = compute_degrees_of_freedom(n_data, n_free)
        return DriverResult(
            state=self.state,
            status=status,
            message=describe_status(status),
            values=values,
            errors=errors,
            start_chi_square=compute_reduced_chi_squared(start_chi_square, n_data, n_free),
            final_chi_square=compute_reduced_chi_squared(previous, n_data, n_free),
            n_data=n_data,
            n_free=n_free,
            runs=[record.normalized(dof) for record in context.runs],
        )

    def _notify(self, record: RunRecord) -> None:
        if self._dispatcher is None:
            return
        self._dispatcher.dispatch(
            FitRunEvent(
                event_type=EventType.FIT_RUN_COMPLETED,
                data={"status": record.status},
                run_index=record.run_index,
                max_runs=self._max_runs,
                iterations=record.iterations,
                chi_square=record.final_chi_square,
            )
        )
