"""Fit results: the report model and the statistics behind it.

The extractor lives in :mod:`ltfit.core.results.extractor`; it depends on the
fitting layer and is imported from there directly.
"""

from ltfit.core.results.report import FitReport, ParameterResult, RunSummary
from ltfit.core.results.statistics import (
    compute_degrees_of_freedom,
    compute_reduced_chi_squared,
    mean_with_error,
    peak_to_background,
    spectral_centroid,
    sum_with_error,
)

__all__ = [
    "FitReport",
    "ParameterResult",
    "RunSummary",
    "compute_degrees_of_freedom",
    "compute_reduced_chi_squared",
    "mean_with_error",
    "peak_to_background",
    "spectral_centroid",
    "sum_with_error",
]
