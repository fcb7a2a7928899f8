"""Lifetime decay fit engine.

Binds a :class:`LifetimeProject` to the iterative fit driver and the result
extractor. One call to :meth:`LifetimeDecayFitEngine.fit` is one complete
synchronous fit; the engine does no locking of its own.
"""

from __future__ import annotations

import logging
import time

from ltfit.core.domain.state import LifetimeProject
from ltfit.core.fitting.assembler import assemble_parameters
from ltfit.core.fitting.context import FitContext
from ltfit.core.fitting.driver import FitDriver
from ltfit.core.fitting.solver import ScipyLeastSquaresSolver, Solver
from ltfit.core.results.extractor import extract_results
from ltfit.core.results.report import FitReport
from ltfit.core.shared.events import Event, EventDispatcher, EventType
from ltfit.core.shared.reporter import NullReporter, Reporter

logger = logging.getLogger(__name__)


class LifetimeDecayFitEngine:
    """Fit the spectrum of a project with its fit set.

    Args:
        solver: Solver used for every run; by default a
            ``ScipyLeastSquaresSolver`` with the fit set tolerances
        reporter: Progress reporter (default: silent)
        dispatcher: Receives ``FIT_STARTED``, ``FIT_RUN_COMPLETED`` and
            exactly one ``FIT_COMPLETED`` event per call
    """

    def __init__(
        self,
        solver: Solver | None = None,
        *,
        reporter: Reporter | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self._solver = solver
        self._reporter = reporter or NullReporter()
        self.dispatcher = dispatcher or EventDispatcher()

    def fit(self, project: LifetimeProject) -> FitReport | None:
        """Run the iterative fit and write the results back onto the project.

        Returns ``None`` without touching the project when the spectrum or the
        fit set is missing, or when the region of interest holds fewer than two
        channels. ``FIT_COMPLETED`` is dispatched on every path.
        """
        report: FitReport | None = None
        started = time.perf_counter()
        try:
            report = self._fit(project)
        finally:
            self.dispatcher.dispatch(
                Event(
                    EventType.FIT_COMPLETED,
                    {
                        "project": project.name,
                        "report": report,
                        "duration": time.perf_counter() - started,
                    },
                )
            )
        return report

    def _fit(self, project: LifetimeProject) -> FitReport | None:
        spectrum = project.spectrum
        fit_set = project.fit_set
        if spectrum is None or spectrum.is_empty or fit_set is None:
            self._reporter.warning("Nothing to fit: spectrum or fit set missing")
            return None

        context = FitContext.from_spectrum(spectrum, fit_set)
        if context is None:
            self._reporter.warning(
                f"Region of interest [{fit_set.start_channel}:{fit_set.stop_channel}] "
                "holds fewer than two channels"
            )
            return None

        layout = assemble_parameters(fit_set)
        self.dispatcher.dispatch(
            Event(
                EventType.FIT_STARTED,
                {"project": project.name, "n_params": layout.n_params, "n_free": layout.n_free},
            )
        )
        logger.info(
            "Fitting %d bins in [%d:%d] with %d free of %d parameters",
            context.n_data,
            fit_set.start_channel,
            fit_set.stop_channel,
            layout.n_free,
            layout.n_params,
        )

        solver = self._solver or ScipyLeastSquaresSolver(
            ftol=fit_set.ftol, xtol=fit_set.xtol, gtol=fit_set.gtol
        )
        driver = FitDriver(
            solver,
            max_runs=fit_set.max_runs,
            threshold=fit_set.convergence_threshold,
            max_iterations=fit_set.max_iterations,
            reporter=self._reporter,
            dispatcher=self.dispatcher,
        )
        result = driver.run(context, layout)

        report = extract_results(fit_set, context, layout, result)
        project.report = report

        if report.ok:
            self._reporter.success(
                f"Fit finished after {report.n_runs} run(s): reduced chi-square "
                f"{report.final_chi_square:.4f} ({result.state.value})"
            )
        else:
            self._reporter.error(f"Fit failed: {report.status_message}")
        return report


__all__ = ["LifetimeDecayFitEngine"]
