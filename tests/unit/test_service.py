"""Test the fit engine and the single-worker fit service."""

import threading

import numpy as np
import pytest

from ltfit.core.domain.parameters import FitParameter
from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.domain.state import LifetimeProject
from ltfit.core.fitting.assembler import assemble_parameters
from ltfit.core.fitting.solver import SolverOutcome, SolverStatus
from ltfit.core.shared.events import EventDispatcher, EventType
from ltfit.core.shared.exceptions import FitInProgressError, ParameterConflictError
from ltfit.services.fit.engine import LifetimeDecayFitEngine
from ltfit.services.fit.service import FitService


class TargetSolver:
    """Returns a fixed parameter vector on every call."""

    def __init__(self, target, status=SolverStatus.CONVERGED_CHI_SQUARE):
        self.target = np.asarray(target, dtype=float)
        self.status = status

    def solve(self, residuals, x0, constraints, max_iterations):
        params = np.where(constraints.fixed, x0, self.target)
        return SolverOutcome(int(self.status), 2, params, np.zeros_like(params), residuals(params))


class BlockingEngine:
    """Engine stand-in that waits until released."""

    def __init__(self):
        self.dispatcher = EventDispatcher()
        self.started = threading.Event()
        self.release = threading.Event()

    def fit(self, project):
        self.started.set()
        self.release.wait(timeout=10)
        return None


@pytest.fixture
def project(single_decay_fit_set, synthesize, with_start_values):
    truth = with_start_values(single_decay_fit_set, {"tau_1": 180.0, "I_1": 1.0})
    return LifetimeProject(name="synthetic", spectrum=synthesize(truth), fit_set=single_decay_fit_set)


@pytest.fixture
def target(single_decay_fit_set, with_start_values):
    truth = with_start_values(single_decay_fit_set, {"tau_1": 180.0, "I_1": 1.0})
    return assemble_parameters(truth).values


def _completed(dispatcher):
    events = []
    dispatcher.subscribe(EventType.FIT_COMPLETED, events.append)
    return events


class TestLifetimeDecayFitEngine:
    """Tests for LifetimeDecayFitEngine."""

    def test_report_attached_to_project(self, project, target):
        """A finished fit should store its report on the project."""
        engine = LifetimeDecayFitEngine(TargetSolver(target))
        report = engine.fit(project)

        assert report is not None
        assert project.report is report
        assert report.ok
        assert project.fit_set.sample.parameters[0].fit_value == pytest.approx(180.0)

    def test_events(self, project, target):
        """Start, run and completion events should be dispatched in order."""
        engine = LifetimeDecayFitEngine(TargetSolver(target))
        seen = []
        for event_type in EventType:
            engine.dispatcher.subscribe(event_type, lambda event: seen.append(event.event_type))

        engine.fit(project)

        assert seen[0] is EventType.FIT_STARTED
        assert seen[-1] is EventType.FIT_COMPLETED
        assert seen.count(EventType.FIT_COMPLETED) == 1
        assert EventType.FIT_RUN_COMPLETED in seen

    def test_solver_failure_reported(self, project, target):
        """A failing solver should still produce a report flagged as failed."""
        engine = LifetimeDecayFitEngine(TargetSolver(target, status=SolverStatus.NON_FINITE))
        report = engine.fit(project)

        assert report is not None
        assert not report.ok
        assert report.state == "solver_error"

    @pytest.mark.parametrize("missing", ["spectrum", "fit_set"])
    def test_missing_inputs(self, project, missing):
        """A project without spectrum or fit set should not be fitted."""
        setattr(project, missing, None)
        engine = LifetimeDecayFitEngine()
        events = _completed(engine.dispatcher)

        assert engine.fit(project) is None
        assert project.report is None
        assert len(events) == 1
        assert events[0].data["report"] is None

    def test_empty_spectrum(self, project):
        project.spectrum = LifetimeSpectrum()
        assert LifetimeDecayFitEngine().fit(project) is None

    def test_region_too_small(self, project):
        """A region of interest outside the spectrum should not be fitted."""
        project.fit_set.stop_channel = 6000
        project.fit_set.start_channel = 5000
        engine = LifetimeDecayFitEngine()
        events = _completed(engine.dispatcher)

        assert engine.fit(project) is None
        assert len(events) == 1

    def test_completion_event_on_exception(self, project):
        """The completion event should be dispatched even if the fit raises."""

        class BrokenSolver:
            def solve(self, residuals, x0, constraints, max_iterations):
                msg = "boom"
                raise RuntimeError(msg)

        engine = LifetimeDecayFitEngine(BrokenSolver())
        events = _completed(engine.dispatcher)

        with pytest.raises(RuntimeError, match="boom"):
            engine.fit(project)
        assert len(events) == 1


class TestFitService:
    """Tests for FitService."""

    def test_fit(self, project, target):
        with FitService(LifetimeDecayFitEngine(TargetSolver(target))) as service:
            report = service.fit(project)
        assert report is not None
        assert project.report is report

    def test_conflict_rejected_before_fit(self, project):
        """Fixed-and-bounded parameters should be rejected without fitting."""
        project.fit_set.irf.parameters[0] = FitParameter(
            name="fwhm_1", alias="FWHM_1", start_value=230.0, fixed=True, lower_bound=100.0
        )
        engine = BlockingEngine()
        with FitService(engine) as service, pytest.raises(ParameterConflictError) as excinfo:
            service.submit(project)
        assert excinfo.value.conflicts == {"irf": ["FWHM_1"]}
        assert not engine.started.is_set()

    def test_bounded_fixed_background_accepted(self, project, target):
        """Background bounds are never applied, so they should not block a fit."""
        project.fit_set.background.parameters[0] = FitParameter(
            name="background", alias="B", start_value=0.0, fixed=True, lower_bound=0.0, upper_bound=10.0
        )
        with FitService(LifetimeDecayFitEngine(TargetSolver(target))) as service:
            report = service.fit(project)
        assert report is not None
        assert report.ok

    def test_second_fit_rejected_while_running(self, project):
        """Only one fit may run at a time."""
        engine = BlockingEngine()
        service = FitService(engine)
        try:
            future = service.submit(project)
            assert engine.started.wait(timeout=5)
            assert service.is_running
            with pytest.raises(FitInProgressError):
                service.submit(project)
        finally:
            engine.release.set()
            service.shutdown()
        assert future.result() is None
        assert not service.is_running

    def test_fits_in_sequence(self, project, target):
        """A new fit may start once the previous one has finished."""
        with FitService(LifetimeDecayFitEngine(TargetSolver(target))) as service:
            first = service.fit(project)
            second = service.fit(project)
        assert first is not None
        assert second is not None
        assert second.final_chi_square == pytest.approx(first.final_chi_square)

    def test_dispatcher_shared_with_engine(self):
        engine = BlockingEngine()
        service = FitService(engine)
        assert service.dispatcher is engine.dispatcher
        service.shutdown()
