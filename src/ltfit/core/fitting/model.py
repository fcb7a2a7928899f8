"""Exponential decays convolved with Gaussian instrument responses.

The convolution of ``exp(-t/tau)`` with a Gaussian has a closed form in terms
of the error function (Kirkegaard-Eldrup). Integrating it over a channel gives
the expected fraction of counts in that channel, so no numerical integration is
needed. All quantities are in channel units, with channels counted from the
start of the region of interest.
"""

from __future__ import annotations

import numpy as np
from scipy.special import erf, erfc, erfcx

from ltfit.core.constants import FWHM_TO_WIDTH
from ltfit.core.fitting.assembler import ModelParameters
from ltfit.core.shared.typing import FloatArray


def _decay_antiderivative(x: FloatArray, tau: FloatArray, mu: float, width: float) -> FloatArray:
    """``exp(-(x - mu - width**2/(4 tau))/tau) * erfc(width/(2 tau) - (x - mu)/width)``.

    For a non-negative erfc argument the product is rewritten with the scaled
    complementary error function so large exponents never overflow.
    """
    u = (x - mu) / width
    w = width / (2.0 * tau) - u
    scaled = erfcx(np.maximum(w, 0.0)) * np.exp(-(u * u))
    # w < 0 implies a negative exponent; the clip only guards the unused branch
    exponent = -(x - mu) / tau + (width / (2.0 * tau)) ** 2
    direct = np.exp(np.minimum(exponent, 0.0)) * erfc(w)
    return np.where(w >= 0.0, scaled, direct)


def _unbroadened_decay(lo: FloatArray, hi: FloatArray, taus: FloatArray, mu: float) -> FloatArray:
    """Bin areas of ``exp(-(t - mu)/tau)`` for ``t >= mu``, the zero-width IRF limit."""
    return np.exp(-(np.maximum(lo, mu) - mu) / taus) - np.exp(-(np.maximum(hi, mu) - mu) / taus)


def decay_shape(params: ModelParameters, x: FloatArray) -> FloatArray:
    """Normalised decay histogram for the bins ``[x[i], x[i+1]]``.

    Each decay component contributes its intensity times the area of the
    convolved decay inside the bin; each IRF component scales its convolution
    by its own intensity. A zero FWHM gives the plain exponential starting at
    the IRF centre.
    """
    lo = x[:-1]
    hi = x[1:]
    taus = params.taus[:, np.newaxis]
    intensities = params.intensities

    shape = np.zeros(lo.shape, dtype=float)
    for fwhm, mu, weight in zip(params.irf_fwhm, params.irf_mu, params.irf_intensity, strict=True):
        width = fwhm * FWHM_TO_WIDTH
        if width == 0.0:
            shape += weight * (intensities @ _unbroadened_decay(lo, hi, taus, mu))
            continue
        decay = _decay_antiderivative(lo, taus, mu, width) - _decay_antiderivative(hi, taus, mu, width)
        gauss = erf((hi - mu) / width) - erf((lo - mu) / width)
        component = 0.5 * (intensities @ decay + intensities.sum() * gauss)
        shape += weight * component
    return shape


def evaluate_model(
    params: ModelParameters,
    x: FloatArray,
    counts_in_roi: float,
    roi_width: float,
) -> FloatArray:
    """Expected counts for each adjacent channel pair of the region of interest.

    Args:
        params: Model parameters in channel units
        x: Channel positions relative to the region start, length ``n``
        counts_in_roi: Integral counts of the observed region
        roi_width: Region width in channels (stop - start)

    Returns
    -------
        Expected counts, length ``n - 1``
    """
    background = params.background
    return decay_shape(params, x) * (counts_in_roi - background * roi_width) + background
