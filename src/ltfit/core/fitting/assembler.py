"""Assemble the fit groups into one parameter vector with constraints.

The vector layout is always::

    [source tau, I]* [sample tau, I]* [IRF FWHM, mu, I]* [background]

Every entry is described by a :class:`ParameterSlot`, so code downstream
selects parameters by kind instead of by index arithmetic. Time-domain values
are converted to channel units; intensities and the background are left as is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ltfit.core.domain.config import FitSet
from ltfit.core.domain.parameters import GroupKind
from ltfit.core.fitting.solver import ParameterConstraints
from ltfit.core.shared.typing import FloatArray, IntArray


class SlotKind(str, Enum):
    """Role of a single entry of the parameter vector."""

    SOURCE_TAU = "source_tau"
    SOURCE_INTENSITY = "source_intensity"
    SAMPLE_TAU = "sample_tau"
    SAMPLE_INTENSITY = "sample_intensity"
    IRF_SIGMA = "irf_sigma"  # IRF width, stored as FWHM
    IRF_MU = "irf_mu"
    IRF_INTENSITY = "irf_intensity"
    BACKGROUND = "background"

    @property
    def is_time_domain(self) -> bool:
        """Whether the slot holds a time converted to channel units."""
        return self in _TIME_DOMAIN


_TIME_DOMAIN = frozenset({SlotKind.SOURCE_TAU, SlotKind.SAMPLE_TAU, SlotKind.IRF_SIGMA, SlotKind.IRF_MU})

_GROUP_SLOTS: dict[GroupKind, tuple[SlotKind, ...]] = {
    GroupKind.SOURCE: (SlotKind.SOURCE_TAU, SlotKind.SOURCE_INTENSITY),
    GroupKind.SAMPLE: (SlotKind.SAMPLE_TAU, SlotKind.SAMPLE_INTENSITY),
    GroupKind.IRF: (SlotKind.IRF_SIGMA, SlotKind.IRF_MU, SlotKind.IRF_INTENSITY),
    GroupKind.BACKGROUND: (SlotKind.BACKGROUND,),
}


@dataclass(frozen=True, slots=True)
class ParameterSlot:
    """Descriptor of one parameter-vector entry."""

    kind: SlotKind
    group: GroupKind
    component: int  # Component index inside the group
    position: int  # Index into ParameterGroup.parameters


@dataclass(frozen=True, slots=True)
class ModelParameters:
    """Structured view of a parameter vector, in channel units."""

    taus: FloatArray
    intensities: FloatArray
    irf_fwhm: FloatArray
    irf_mu: FloatArray
    irf_intensity: FloatArray
    background: float


@dataclass
class ParameterLayout:
    """Parameter vector, constraints and slot descriptors of one fit."""

    slots: tuple[ParameterSlot, ...]
    values: FloatArray
    scales: FloatArray
    constraints: ParameterConstraints
    _index: dict[SlotKind, IntArray] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = {
            kind: np.array([i for i, slot in enumerate(self.slots) if slot.kind is kind], dtype=int)
            for kind in SlotKind
        }

    @property
    def n_params(self) -> int:
        return len(self.slots)

    @property
    def n_free(self) -> int:
        return self.constraints.n_free

    @property
    def n_irf(self) -> int:
        return len(self._index[SlotKind.IRF_INTENSITY])

    def indices(self, *kinds: SlotKind) -> IntArray:
        """Vector indices of all slots of the given kinds, in layout order."""
        return np.sort(np.concatenate([self._index[kind] for kind in kinds]))

    def unpack(self, values: FloatArray) -> ModelParameters:
        """Split a parameter vector into the arrays used by the model."""
        index = self._index
        background = index[SlotKind.BACKGROUND]
        return ModelParameters(
            taus=values[self.indices(SlotKind.SOURCE_TAU, SlotKind.SAMPLE_TAU)],
            intensities=values[self.indices(SlotKind.SOURCE_INTENSITY, SlotKind.SAMPLE_INTENSITY)],
            irf_fwhm=values[index[SlotKind.IRF_SIGMA]],
            irf_mu=values[index[SlotKind.IRF_MU]],
            irf_intensity=values[index[SlotKind.IRF_INTENSITY]],
            background=float(values[background[0]]) if background.size else 0.0,
        )

    def to_physical(self, values: FloatArray) -> FloatArray:
        """Convert a channel-unit vector (values or errors) back to physical units."""
        return np.asarray(values, dtype=float) * self.scales


def assemble_parameters(fit_set: FitSet) -> ParameterLayout:
    """Build the parameter vector and constraints of a fit set.

    IRF intensities get a lower bound of zero unless the user set one.
    Background bounds are ignored; only its fixed flag decides whether it floats.
    """
    resolution = fit_set.channel_resolution

    slots: list[ParameterSlot] = []
    values: list[float] = []
    scales: list[float] = []
    lower: list[float] = []
    upper: list[float] = []
    fixed: list[bool] = []

    for group in fit_set.groups():
        kinds = _GROUP_SLOTS[group.kind]
        for position, param in enumerate(group.parameters):
            kind = kinds[position % len(kinds)]
            scale = resolution if kind.is_time_domain else 1.0

            lo = param.lower_bound / scale if param.lower_bound is not None else -np.inf
            hi = param.upper_bound / scale if param.upper_bound is not None else np.inf
            if kind is SlotKind.IRF_INTENSITY and param.lower_bound is None:
                lo = 0.0
            if kind is SlotKind.BACKGROUND:
                lo, hi = -np.inf, np.inf

            slots.append(ParameterSlot(kind, group.kind, position // len(kinds), position))
            values.append(param.start_value / scale)
            scales.append(scale)
            lower.append(lo)
            upper.append(hi)
            fixed.append(param.fixed)

    constraints = ParameterConstraints(
        lower=np.array(lower, dtype=float),
        upper=np.array(upper, dtype=float),
        fixed=np.array(fixed, dtype=bool),
    )
    return ParameterLayout(
        slots=tuple(slots),
        values=np.array(values, dtype=float),
        scales=np.array(scales, dtype=float),
        constraints=constraints,
    )


__all__ = [
    "ModelParameters",
    "ParameterLayout",
    "ParameterSlot",
    "SlotKind",
    "assemble_parameters",
]
