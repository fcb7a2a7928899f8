"""Application services for LTFit.

Services are the entry points used by the CLI and other front ends.
"""

from ltfit.services.fit import FitService, LifetimeDecayFitEngine

__all__ = ["FitService", "LifetimeDecayFitEngine"]
