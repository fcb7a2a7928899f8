"""Domain models representing core LTFit entities."""

from ltfit.core.domain.config import FitSet, LogFormat, LTFitConfig, OutputConfig, OutputFormat
from ltfit.core.domain.parameters import FitParameter, GroupKind, ParameterGroup
from ltfit.core.domain.spectrum import LifetimeSpectrum, SpectrumPoint
from ltfit.core.domain.state import LifetimeProject

__all__ = [
    "FitParameter",
    "FitSet",
    "GroupKind",
    "LTFitConfig",
    "LifetimeProject",
    "LifetimeSpectrum",
    "LogFormat",
    "OutputConfig",
    "OutputFormat",
    "ParameterGroup",
    "SpectrumPoint",
]
