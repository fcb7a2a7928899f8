"""Fit parameters and parameter groups of a lifetime spectrum."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GroupKind(str, Enum):
    """The four parameter groups of the lifetime model."""

    SOURCE = "source"  # Source-correction exponentials (tau, I)
    SAMPLE = "sample"  # Sample exponentials (tau, I)
    IRF = "irf"  # Gaussian instrument response (FWHM, mu, I)
    BACKGROUND = "background"  # Constant background (counts/channel)


# Number of parameters per component in each group
_SLOT_WIDTH: dict[GroupKind, int] = {
    GroupKind.SOURCE: 2,
    GroupKind.SAMPLE: 2,
    GroupKind.IRF: 3,
    GroupKind.BACKGROUND: 1,
}


class FitParameter(BaseModel):
    """Single fit parameter with start value, optional bounds and fit result.

    Time-domain parameters (tau, IRF FWHM, IRF mu) are given in picoseconds,
    intensities are dimensionless and the background is in counts per channel.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str
    alias: str = ""
    start_value: float
    fit_value: float | None = None
    fit_value_error: float | None = None
    lower_bound: float | None = None
    upper_bound: float | None = None
    fixed: bool = False

    @model_validator(mode="after")
    def validate_bounds(self) -> FitParameter:
        """Reject an inverted bound pair."""
        if (
            self.lower_bound is not None
            and self.upper_bound is not None
            and self.lower_bound > self.upper_bound
        ):
            msg = (
                f"Parameter {self.name}: lower bound ({self.lower_bound}) "
                f"> upper bound ({self.upper_bound})"
            )
            raise ValueError(msg)
        return self

    @property
    def label(self) -> str:
        """Alias if set, otherwise the name."""
        return self.alias or self.name

    @property
    def is_bounded(self) -> bool:
        return self.lower_bound is not None or self.upper_bound is not None

    def has_conflict(self) -> bool:
        """A parameter cannot be fixed and bounded at the same time."""
        return self.fixed and self.is_bounded

    def __repr__(self) -> str:
        """Return a string representation of the parameter."""
        state = "fixed" if self.fixed else "vary"
        lower = f"{self.lower_bound:.4g}" if self.lower_bound is not None else "-inf"
        upper = f"{self.upper_bound:.4g}" if self.upper_bound is not None else "inf"
        fitted = f" -> {self.fit_value:.6g}" if self.fit_value is not None else ""
        return (
            f"<FitParameter {self.label}={self.start_value:.6g}{fitted} "
            f"[{lower}, {upper}] ({state})>"
        )


class ParameterGroup(BaseModel):
    """Ordered parameters of one group with fixed slot semantics.

    Source and sample groups hold ``(tau, I)`` pairs, the IRF group holds
    ``(FWHM, mu, I)`` triples and the background group exactly one parameter.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    kind: GroupKind
    parameters: list[FitParameter] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_slots(self) -> ParameterGroup:
        """Check the parameter count against the slot pattern of the group."""
        n_params = len(self.parameters)
        if self.kind is GroupKind.BACKGROUND:
            if n_params != 1:
                msg = f"Background group needs exactly one parameter, got {n_params}"
                raise ValueError(msg)
        elif n_params % self.slot_width:
            msg = (
                f"{self.kind.value} group needs a multiple of {self.slot_width} "
                f"parameters, got {n_params}"
            )
            raise ValueError(msg)
        return self

    @property
    def slot_width(self) -> int:
        return _SLOT_WIDTH[self.kind]

    @property
    def n_components(self) -> int:
        return len(self.parameters) // self.slot_width

    def component(self, index: int) -> tuple[FitParameter, ...]:
        """Return the parameters of one component."""
        width = self.slot_width
        return tuple(self.parameters[index * width : (index + 1) * width])

    def conflicts(self) -> list[str]:
        """Labels of parameters that are both fixed and bounded."""
        return [param.label for param in self.parameters if param.has_conflict()]

    def __len__(self) -> int:
        return len(self.parameters)

    @classmethod
    def decays(
        cls,
        kind: GroupKind,
        components: list[tuple[FitParameter, FitParameter]],
    ) -> ParameterGroup:
        """Build a source or sample group from ``(tau, I)`` pairs."""
        return cls(kind=kind, parameters=[param for pair in components for param in pair])

    @classmethod
    def irf(cls, components: list[tuple[FitParameter, FitParameter, FitParameter]]) -> ParameterGroup:
        """Build an IRF group from ``(FWHM, mu, I)`` triples."""
        return cls(
            kind=GroupKind.IRF,
            parameters=[param for triple in components for param in triple],
        )

    @classmethod
    def background(cls, value: float = 0.0, *, fixed: bool = True) -> ParameterGroup:
        """Build the single-parameter background group."""
        return cls(
            kind=GroupKind.BACKGROUND,
            parameters=[FitParameter(name="background", alias="B", start_value=value, fixed=fixed)],
        )
