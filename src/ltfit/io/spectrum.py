"""Plain-text spectrum loading."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.shared.exceptions import DataIOError


def load_spectrum(path: Path, *, first_channel: int = 0) -> LifetimeSpectrum:
    """Read a whitespace-separated spectrum file.

    One column is read as consecutive counts starting at ``first_channel``; two
    columns are read as ``channel counts`` pairs. Lines starting with ``#`` are
    ignored.

    Raises:
        DataIOError: If the file is missing or cannot be parsed.
    """
    if not path.exists():
        msg = f"Spectrum file not found: {path}"
        raise DataIOError(msg)

    try:
        data = np.loadtxt(path, comments="#", ndmin=2)
    except ValueError as exc:
        msg = f"Cannot parse spectrum file {path}: {exc}"
        raise DataIOError(msg) from exc

    if data.size == 0:
        msg = f"Spectrum file is empty: {path}"
        raise DataIOError(msg)
    if data.shape[1] == 1:
        return LifetimeSpectrum.from_counts(data[:, 0].astype(int), first_channel=first_channel)
    if data.shape[1] == 2:
        return LifetimeSpectrum.from_arrays(data[:, 0].astype(int), data[:, 1].astype(int))

    msg = f"Expected one or two columns in {path}, found {data.shape[1]}"
    raise DataIOError(msg)


__all__ = ["load_spectrum"]
