"""Core module for LTFit - contains data models and fitting logic."""

from ltfit.core.domain import FitParameter, FitSet, LifetimeProject, LifetimeSpectrum, ParameterGroup

__all__ = [
    "FitParameter",
    "FitSet",
    "LifetimeProject",
    "LifetimeSpectrum",
    "ParameterGroup",
]
