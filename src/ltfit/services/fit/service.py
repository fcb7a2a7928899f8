"""High-level fitting service facade.

This service provides the primary API for fitting operations. Fits run on a
dedicated worker thread, one at a time. CLI and other adapters should import
only from this module.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from ltfit.core.domain.state import LifetimeProject
from ltfit.core.results.report import FitReport
from ltfit.core.shared.events import EventDispatcher
from ltfit.core.shared.exceptions import FitInProgressError, ParameterConflictError
from ltfit.core.shared.reporter import NullReporter, Reporter
from ltfit.services.fit.engine import LifetimeDecayFitEngine

logger = logging.getLogger(__name__)


class FitService:
    """Service for lifetime spectrum fitting.

    Example:
        with FitService() as service:
            report = service.fit(project)
            print(f"Reduced chi-square: {report.final_chi_square:.3f}")
    """

    def __init__(
        self,
        engine: LifetimeDecayFitEngine | None = None,
        *,
        reporter: Reporter | None = None,
    ) -> None:
        """Initialize the fit service.

        Args:
            engine: Fit engine to run; a default engine is built otherwise
            reporter: Reporter for status messages (default: silent)
        """
        self._reporter = reporter or NullReporter()
        self._engine = engine or LifetimeDecayFitEngine(reporter=self._reporter)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ltfit-fit")
        self._lock = threading.Lock()
        self._future: Future[FitReport | None] | None = None

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._engine.dispatcher

    @property
    def is_running(self) -> bool:
        """Whether a submitted fit has not finished yet."""
        with self._lock:
            return self._future is not None and not self._future.done()

    def submit(self, project: LifetimeProject) -> Future[FitReport | None]:
        """Start a fit on the worker thread.

        Raises
        ------
            ParameterConflictError: If a parameter is both fixed and bounded
            FitInProgressError: If another fit is still running
        """
        if project.fit_set is not None:
            conflicts = project.fit_set.conflicts()
            if conflicts:
                raise ParameterConflictError(conflicts)

        with self._lock:
            if self._future is not None and not self._future.done():
                msg = "A fit is already running"
                raise FitInProgressError(msg)
            logger.debug("Submitting fit of project '%s'", project.name)
            self._future = self._executor.submit(self._engine.fit, project)
            return self._future

    def fit(self, project: LifetimeProject) -> FitReport | None:
        """Run a fit and wait for its report."""
        return self.submit(project).result()

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> FitService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()


__all__ = ["FitService"]
