"""Pytest fixtures for LTFit tests."""

from collections.abc import Callable

import numpy as np
import pytest

from ltfit.core.domain.config import FitSet
from ltfit.core.domain.parameters import FitParameter, GroupKind, ParameterGroup
from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.fitting.assembler import assemble_parameters
from ltfit.core.fitting.model import evaluate_model
from ltfit.ui.console import Verbosity, set_verbosity

Synthesizer = Callable[..., LifetimeSpectrum]


@pytest.fixture(autouse=True)
def _reset_verbosity():
    """Restore normal console output after each test."""
    yield
    set_verbosity(Verbosity.NORMAL)


def _decays(kind: GroupKind, *components: tuple[FitParameter, FitParameter]) -> ParameterGroup:
    return ParameterGroup.decays(kind, list(components))


@pytest.fixture
def single_decay_fit_set() -> FitSet:
    """One free sample decay, one fixed narrow-window IRF, no background.

    Start values are off the generating values (tau 180 ps, I 1.0).
    """
    return FitSet(
        start_channel=0,
        stop_channel=999,
        channel_resolution=25.0,
        sample=_decays(
            GroupKind.SAMPLE,
            (
                FitParameter(name="tau_1", alias="tau_1", start_value=150.0, lower_bound=50.0, upper_bound=1000.0),
                FitParameter(name="I_1", alias="I_1", start_value=0.8),
            ),
        ),
        irf=ParameterGroup.irf(
            [
                (
                    FitParameter(name="fwhm_1", alias="FWHM_1", start_value=230.0, fixed=True),
                    FitParameter(name="mu_1", alias="mu_1", start_value=500.0, fixed=True),
                    FitParameter(name="I_irf_1", alias="I_irf_1", start_value=1.0, fixed=True),
                )
            ]
        ),
        background=ParameterGroup.background(0.0, fixed=True),
    )


@pytest.fixture
def reference_fit_set() -> FitSet:
    """Source correction, one sample decay, one IRF at the ROI start and a background of 5."""
    return FitSet(
        start_channel=0,
        stop_channel=999,
        channel_resolution=25.0,
        source=_decays(
            GroupKind.SOURCE,
            (
                FitParameter(name="tau_source", alias="tau_s", start_value=400.0, fixed=True),
                FitParameter(name="I_source", alias="I_s", start_value=0.1, fixed=True),
            ),
        ),
        sample=_decays(
            GroupKind.SAMPLE,
            (
                FitParameter(name="tau_1", alias="tau_1", start_value=200.0, lower_bound=50.0, upper_bound=1000.0),
                FitParameter(name="I_1", alias="I_1", start_value=0.9),
            ),
        ),
        irf=ParameterGroup.irf(
            [
                (
                    FitParameter(name="fwhm_1", alias="FWHM_1", start_value=230.0, fixed=True),
                    FitParameter(name="mu_1", alias="mu_1", start_value=0.0, fixed=True),
                    FitParameter(name="I_irf_1", alias="I_irf_1", start_value=1.0, fixed=True),
                )
            ]
        ),
        background=ParameterGroup.background(5.0, fixed=True),
    )


@pytest.fixture
def synthesize() -> Synthesizer:
    """Return a function that draws a spectrum from the model itself.

    The function takes a fit set whose start values are the generating
    parameters, the total counts of the region of interest and an optional
    ``numpy.random.Generator`` for Poisson noise. The counts left over after
    the model bins go into the last channel, so the region integral equals the
    requested total and the generating parameters reproduce the bins.
    """

    def _synthesize(
        fit_set: FitSet,
        total_counts: float = 1e6,
        rng: np.random.Generator | None = None,
    ) -> LifetimeSpectrum:
        layout = assemble_parameters(fit_set)
        x = np.arange(fit_set.roi_width + 1, dtype=float)
        expected = evaluate_model(layout.unpack(layout.values), x, total_counts, fit_set.roi_width)
        expected = np.append(expected, max(total_counts - expected.sum(), 0.0))
        counts = rng.poisson(expected) if rng is not None else np.rint(expected)
        return LifetimeSpectrum.from_counts(counts.astype(int), first_channel=fit_set.start_channel)

    return _synthesize


@pytest.fixture
def with_start_values() -> Callable[[FitSet, dict[str, float]], FitSet]:
    """Return a function that copies a fit set with new start values by parameter name."""

    def _with_start_values(fit_set: FitSet, values: dict[str, float]) -> FitSet:
        copy = fit_set.model_copy(deep=True)
        for group in copy.groups():
            for param in group.parameters:
                if param.name in values:
                    param.start_value = values[param.name]
        return copy

    return _with_start_values
