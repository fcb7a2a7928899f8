"""Domain configuration models for LTFit."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ltfit.core.constants import (
    CHI_SQUARE_CONVERGENCE,
    LEAST_SQUARES_FTOL,
    LEAST_SQUARES_GTOL,
    LEAST_SQUARES_XTOL,
    MAX_FIT_RUNS,
    MAX_ITERATIONS,
)
from ltfit.core.domain.parameters import GroupKind, ParameterGroup

OutputFormat = Literal["csv", "json"]
LogFormat = Literal["text", "json"]

_GROUP_FIELDS: tuple[tuple[str, GroupKind], ...] = (
    ("source", GroupKind.SOURCE),
    ("sample", GroupKind.SAMPLE),
    ("irf", GroupKind.IRF),
    ("background", GroupKind.BACKGROUND),
)


class FitSet(BaseModel):
    """Caller-owned inputs of a lifetime fit.

    Example TOML configuration:
        [fit]
        start_channel = 0
        stop_channel = 999
        channel_resolution = 25.0

        [[fit.sample.parameters]]
        name = "tau_1"
        start_value = 200.0
        lower_bound = 50.0
        upper_bound = 1000.0

        [[fit.sample.parameters]]
        name = "I_1"
        start_value = 0.9
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    start_channel: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="First channel of the region of interest (inclusive).",
    )
    stop_channel: Annotated[int, Field(gt=0)] = Field(
        default=1000,
        description="Last channel of the region of interest (inclusive).",
    )
    channel_resolution: Annotated[float, Field(gt=0)] = Field(
        default=25.0,
        description="Channel width in picoseconds.",
    )
    max_iterations: Annotated[int, Field(gt=0)] = Field(
        default=MAX_ITERATIONS,
        description="Cap on residual evaluations in a single solver run.",
    )
    max_runs: Annotated[int, Field(ge=1, le=MAX_FIT_RUNS)] = Field(
        default=MAX_FIT_RUNS,
        description="Maximum number of consecutive solver runs.",
    )
    convergence_threshold: Annotated[float, Field(gt=0)] = Field(
        default=CHI_SQUARE_CONVERGENCE,
        description="Chi-square improvement below which the run loop stops.",
    )
    ftol: Annotated[float, Field(gt=0)] = Field(default=LEAST_SQUARES_FTOL)
    xtol: Annotated[float, Field(gt=0)] = Field(default=LEAST_SQUARES_XTOL)
    gtol: Annotated[float, Field(gt=0)] = Field(default=LEAST_SQUARES_GTOL)

    source: ParameterGroup = Field(default_factory=lambda: ParameterGroup(kind=GroupKind.SOURCE))
    sample: ParameterGroup = Field(default_factory=lambda: ParameterGroup(kind=GroupKind.SAMPLE))
    irf: ParameterGroup = Field(default_factory=lambda: ParameterGroup(kind=GroupKind.IRF))
    background: ParameterGroup = Field(default_factory=ParameterGroup.background)

    @model_validator(mode="before")
    @classmethod
    def fill_group_kinds(cls, data: Any) -> Any:
        """Let configuration files omit the ``kind`` of each group."""
        if isinstance(data, dict):
            for field_name, kind in _GROUP_FIELDS:
                group = data.get(field_name)
                if isinstance(group, dict) and "kind" not in group:
                    data = {**data, field_name: {**group, "kind": kind}}
        return data

    @model_validator(mode="after")
    def validate_fit_set(self) -> FitSet:
        """Check the region of interest and the group kinds."""
        if self.stop_channel <= self.start_channel:
            msg = (
                f"stop_channel ({self.stop_channel}) must be greater than "
                f"start_channel ({self.start_channel})"
            )
            raise ValueError(msg)
        for field_name, kind in _GROUP_FIELDS:
            group: ParameterGroup = getattr(self, field_name)
            if group.kind is not kind:
                msg = f"Group '{field_name}' must be of kind '{kind.value}', got '{group.kind.value}'"
                raise ValueError(msg)
        return self

    @property
    def roi_width(self) -> int:
        """Width of the region of interest in channels."""
        return self.stop_channel - self.start_channel

    def groups(self) -> tuple[ParameterGroup, ParameterGroup, ParameterGroup, ParameterGroup]:
        """Groups in parameter-vector order."""
        return (self.source, self.sample, self.irf, self.background)

    def conflicts(self) -> dict[str, list[str]]:
        """Fixed-and-bounded parameters, keyed by group name.

        The background is left out since its bounds are never applied.
        """
        return {
            group.kind.value: group.conflicts()
            for group in (self.source, self.sample, self.irf)
            if group.conflicts()
        }


class OutputConfig(BaseModel):
    """Configuration for output file generation."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(default=Path("Fits"), description="Output directory for results.")
    formats: list[OutputFormat] = Field(
        default=["json", "csv"],
        description="Output formats for results.",
    )
    log_format: LogFormat = Field(
        default="text",
        description="Format for log file: text (human-readable) or json (structured).",
    )


class LTFitConfig(BaseModel):
    """Top-level LTFit configuration.

    Example TOML configuration:
        [fit]
        start_channel = 0
        stop_channel = 999
        channel_resolution = 25.0

        [output]
        directory = "Fits"
        formats = ["json", "csv"]
    """

    model_config = ConfigDict(extra="forbid")

    fit: FitSet = Field(default_factory=FitSet)
    output: OutputConfig = Field(default_factory=OutputConfig)


__all__ = [
    "FitSet",
    "LTFitConfig",
    "LogFormat",
    "OutputConfig",
    "OutputFormat",
]
