"""LTFit - Positron annihilation lifetime spectrum fitting.

Public API:
    - FitService: Runs fits on a worker thread, one at a time
    - LifetimeDecayFitEngine: Synchronous fit of one project

Domain Objects:
    - LifetimeProject: Spectrum, fit set and last report
    - FitSet, ParameterGroup, FitParameter: Fit inputs
    - FitReport: Fit outputs
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from ltfit.core.domain.config import FitSet, LTFitConfig, OutputConfig
from ltfit.core.domain.parameters import FitParameter, GroupKind, ParameterGroup
from ltfit.core.domain.spectrum import LifetimeSpectrum, SpectrumPoint
from ltfit.core.domain.state import LifetimeProject
from ltfit.core.results.report import FitReport
from ltfit.services import FitService, LifetimeDecayFitEngine

__all__ = [
    "FitParameter",
    "FitReport",
    "FitService",
    "FitSet",
    "GroupKind",
    "LTFitConfig",
    "LifetimeDecayFitEngine",
    "LifetimeProject",
    "LifetimeSpectrum",
    "OutputConfig",
    "ParameterGroup",
    "SpectrumPoint",
    "__version__",
]
