"""Turn the driver result into physical quantities and write them back.

Fitted values and errors are written onto the caller's ``FitParameter``
objects, time-domain slots rescaled by the channel resolution. Fixed
parameters report their start value and a zero error. Everything else is
collected in a :class:`FitReport`.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ltfit.core.domain.config import FitSet
from ltfit.core.fitting.assembler import ParameterLayout, SlotKind
from ltfit.core.fitting.context import FitContext
from ltfit.core.fitting.driver import DriverResult
from ltfit.core.fitting.residuals import ResidualFunction, weighted_residuals
from ltfit.core.results.report import FitReport, ParameterResult, RunSummary
from ltfit.core.results.statistics import (
    mean_with_error,
    peak_to_background,
    spectral_centroid,
    sum_with_error,
)

logger = logging.getLogger(__name__)


def write_parameters(fit_set: FitSet, layout: ParameterLayout, result: DriverResult) -> None:
    """Store fitted values and errors on the fit set parameters."""
    values = layout.to_physical(result.values)
    errors = layout.to_physical(result.errors)
    groups = {group.kind: group for group in fit_set.groups()}

    for index, slot in enumerate(layout.slots):
        param = groups[slot.group].parameters[slot.position]
        if param.fixed:
            param.fit_value = param.start_value
            param.fit_value_error = 0.0
        else:
            param.fit_value = float(values[index])
            param.fit_value_error = float(errors[index])


def _fitted(
    fit_set: FitSet, layout: ParameterLayout, *kinds: SlotKind
) -> tuple[list[float], list[float]]:
    """Fitted values and errors of all slots of the given kinds."""
    groups = {group.kind: group for group in fit_set.groups()}
    slots = [layout.slots[index] for index in layout.indices(*kinds)]
    params = [groups[slot.group].parameters[slot.position] for slot in slots]
    return (
        [param.fit_value or 0.0 for param in params],
        [param.fit_value_error or 0.0 for param in params],
    )


def extract_results(
    fit_set: FitSet,
    context: FitContext,
    layout: ParameterLayout,
    result: DriverResult,
) -> FitReport:
    """Write the fitted parameters back and derive the summary quantities.

    Args:
        fit_set: Fit set whose parameters receive the fitted values
        context: Working state of the finished fit
        layout: Parameter layout the fit ran with
        result: Outcome of the iterative fit

    Returns
    -------
        The report of the fit
    """
    write_parameters(fit_set, layout, result)

    intensity_sum, intensity_sum_error = sum_with_error(
        *_fitted(fit_set, layout, SlotKind.SOURCE_INTENSITY, SlotKind.SAMPLE_INTENSITY)
    )
    average_lifetime, average_lifetime_error = mean_with_error(
        *_fitted(fit_set, layout, SlotKind.SAMPLE_TAU)
    )

    curve = ResidualFunction(context, layout).model(result.values)
    channels = context.channels[:-1]
    residuals = weighted_residuals(context.observed, curve, context.weights)

    # Ratio against the configured background, also when it floats
    background = fit_set.background.parameters[0].start_value
    centroid, t0_index = spectral_centroid(channels, curve, context.resolution)
    time_zero = float((channels[t0_index] - context.start_channel) * context.resolution)
    if centroid is None:
        logger.warning("Fitted curve holds no counts after its maximum; centroid undefined")

    parameters = [
        ParameterResult.from_parameter(group.kind, param)
        for group in fit_set.groups()
        for param in group.parameters
    ]

    return FitReport(
        status=result.status,
        status_message=result.message,
        state=result.state.value,
        timestamp=datetime.now(UTC).isoformat(),
        start_chi_square=result.start_chi_square,
        final_chi_square=result.final_chi_square,
        n_data=result.n_data,
        n_free=result.n_free,
        dof=result.dof,
        counts_in_roi=context.integral_counts,
        average_lifetime=average_lifetime,
        average_lifetime_error=average_lifetime_error,
        intensity_sum=intensity_sum,
        intensity_sum_error=intensity_sum_error,
        peak_to_background=peak_to_background(context.peak_value, background),
        spectral_centroid=centroid,
        time_zero=time_zero,
        total_iterations=result.total_iterations,
        runs=[
            RunSummary(
                run_index=record.run_index,
                status=record.status,
                iterations=record.iterations,
                start_chi_square=record.start_chi_square,
                final_chi_square=record.final_chi_square,
            )
            for record in result.runs
        ],
        parameters=parameters,
        fit_curve=[(int(c), float(v)) for c, v in zip(channels, curve, strict=True)],
        residuals=[(int(c), float(v)) for c, v in zip(channels, residuals, strict=True)],
    )


__all__ = ["extract_results", "write_parameters"]
