"""Fit service running the lifetime fit engine."""

from ltfit.services.fit.engine import LifetimeDecayFitEngine
from ltfit.services.fit.service import FitService

__all__ = ["FitService", "LifetimeDecayFitEngine"]
