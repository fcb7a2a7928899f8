"""Explicit project context of a lifetime fit."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ltfit.core.domain.config import FitSet
from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.results.report import FitReport  # noqa: TC001


class LifetimeProject(BaseModel):
    """Spectrum, fit set and last fit report of one measurement.

    The fit engine reads the spectrum and the fit set and replaces ``report``
    once a fit has finished. A missing spectrum or fit set makes the fit a
    no-op.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="", description="Free-form project name.")
    spectrum: LifetimeSpectrum | None = None
    fit_set: FitSet | None = None
    report: FitReport | None = None

    @property
    def is_fittable(self) -> bool:
        """Whether both inputs of a fit are present."""
        return self.spectrum is not None and not self.spectrum.is_empty and self.fit_set is not None


__all__ = ["LifetimeProject"]
