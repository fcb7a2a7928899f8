"""Per-fit working state.

A :class:`FitContext` is built from a spectrum and a fit set when a fit starts
and dropped when it ends. It holds the region-of-interest arrays, the
statistical weights and the run history; nothing in it outlives the fit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from ltfit.core.domain.config import FitSet
from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.fitting.residuals import statistical_weights
from ltfit.core.shared.typing import FloatArray, IntArray


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Chi-square and iteration count of one solver run."""

    run_index: int
    status: int
    iterations: int
    start_chi_square: float
    final_chi_square: float

    def normalized(self, dof: int) -> RunRecord:
        """Copy with both chi-square values divided by the degrees of freedom."""
        return replace(
            self,
            start_chi_square=self.start_chi_square / dof,
            final_chi_square=self.final_chi_square / dof,
        )


@dataclass(slots=True)
class FitContext:
    """Region-of-interest data and bookkeeping of a running fit.

    ``x`` holds the channel positions relative to the region start. The model
    predicts one value per adjacent channel pair, so ``observed`` and
    ``weights`` have one entry less than ``x``.
    """

    start_channel: int
    stop_channel: int
    resolution: float
    channels: IntArray
    x: FloatArray
    counts: FloatArray
    weights: FloatArray
    integral_counts: float
    peak_value: float
    peak_index: int
    peak_channel: int
    n_irf: int
    runs: list[RunRecord] = field(default_factory=list)

    @classmethod
    def from_spectrum(cls, spectrum: LifetimeSpectrum, fit_set: FitSet) -> FitContext | None:
        """Restrict the spectrum to the region of interest.

        Returns ``None`` when the region holds fewer than two channels, since no
        bin can be formed.
        """
        channels, counts = spectrum.region(fit_set.start_channel, fit_set.stop_channel)
        if channels.size < 2:
            return None

        peak_index = int(np.argmax(counts))
        observed = counts[:-1]
        return cls(
            start_channel=fit_set.start_channel,
            stop_channel=fit_set.stop_channel,
            resolution=fit_set.channel_resolution,
            channels=channels,
            x=(channels - fit_set.start_channel).astype(float),
            counts=counts,
            weights=statistical_weights(observed),
            integral_counts=float(np.sum(counts)),
            peak_value=float(counts[peak_index]),
            peak_index=peak_index,
            peak_channel=int(channels[peak_index]),
            n_irf=fit_set.irf.n_components,
        )

    @property
    def observed(self) -> FloatArray:
        """Observed counts aligned with the model bins."""
        return self.counts[:-1]

    @property
    def n_data(self) -> int:
        return int(self.counts.size - 1)

    @property
    def roi_width(self) -> int:
        return self.stop_channel - self.start_channel

    @property
    def total_iterations(self) -> int:
        return sum(record.iterations for record in self.runs)
