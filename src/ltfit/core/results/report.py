"""Result bundle written back onto a project after a fit."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ltfit.core.domain.parameters import FitParameter, GroupKind
from ltfit.core.fitting.solver import STATUS_OK


class RunSummary(BaseModel):
    """Iteration count and reduced chi-square of one solver run."""

    model_config = ConfigDict(frozen=True)

    run_index: int
    status: int
    iterations: int
    start_chi_square: float
    final_chi_square: float


class ParameterResult(BaseModel):
    """Fitted value of one parameter, in physical units."""

    model_config = ConfigDict(frozen=True)

    group: GroupKind
    name: str
    alias: str
    start_value: float
    fit_value: float
    fit_value_error: float
    fixed: bool

    @classmethod
    def from_parameter(cls, group: GroupKind, param: FitParameter) -> ParameterResult:
        return cls(
            group=group,
            name=param.name,
            alias=param.alias,
            start_value=param.start_value,
            fit_value=param.fit_value if param.fit_value is not None else param.start_value,
            fit_value_error=param.fit_value_error or 0.0,
            fixed=param.fixed,
        )


class FitReport(BaseModel):
    """Statistics, curves and history of a finished fit.

    Chi-square values are reduced by the degrees of freedom. Time quantities are
    in the units of the channel resolution (picoseconds).
    """

    model_config = ConfigDict(extra="forbid")

    status: int = Field(description="Solver status code of the last run.")
    status_message: str = ""
    state: str = Field(description="Terminal state of the iterative fit.")
    timestamp: str = ""

    start_chi_square: float
    final_chi_square: float
    n_data: int
    n_free: int
    dof: int

    counts_in_roi: float
    average_lifetime: float
    average_lifetime_error: float
    intensity_sum: float
    intensity_sum_error: float
    peak_to_background: float | None = None
    spectral_centroid: float | None = None
    time_zero: float = 0.0

    total_iterations: int = 0
    runs: list[RunSummary] = Field(default_factory=list)
    parameters: list[ParameterResult] = Field(default_factory=list)

    fit_curve: list[tuple[int, float]] = Field(default_factory=list)
    residuals: list[tuple[int, float]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether the last solver run succeeded."""
        return self.status >= STATUS_OK

    @property
    def n_runs(self) -> int:
        return len(self.runs)


__all__ = ["FitReport", "ParameterResult", "RunSummary"]
