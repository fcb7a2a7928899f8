"""UI tables for displaying fit results.

This module provides functions for creating and displaying Rich tables
with consistent styling across the application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from ltfit.ui.console import console

if TYPE_CHECKING:
    from ltfit.core.results.report import FitReport

__all__ = [
    "create_table",
    "print_conflicts",
    "print_parameters",
    "print_report",
    "print_run_history",
    "print_summary",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a standard two-column summary table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def _format(value: float | None, digits: int = 4) -> str:
    return "n/a" if value is None else f"{value:.{digits}f}"


def print_parameters(report: FitReport) -> None:
    """Print fitted parameters grouped by kind."""
    table = create_table("Fitted Parameters")
    table.add_column("Group", style="key")
    table.add_column("Parameter", style="param")
    table.add_column("Start", justify="right")
    table.add_column("Fit", style="value", justify="right")
    table.add_column("Error", justify="right")
    table.add_column("", justify="center")

    for result in report.parameters:
        table.add_row(
            result.group.value,
            result.alias or result.name,
            f"{result.start_value:.4g}",
            f"{result.fit_value:.6g}",
            f"{result.fit_value_error:.3g}",
            "fixed" if result.fixed else "",
        )
    console.print(table)


def print_report(report: FitReport) -> None:
    """Print the summary statistics of a fit."""
    print_summary(
        {
            "Status": f"{report.status} ({report.status_message})",
            "State": report.state,
            "Runs / iterations": f"{report.n_runs} / {report.total_iterations}",
            "Reduced chi-square (start)": _format(report.start_chi_square),
            "Reduced chi-square (final)": _format(report.final_chi_square),
            "Counts in ROI": f"{report.counts_in_roi:.0f}",
            "Average lifetime [ps]": (
                f"{report.average_lifetime:.4f} ± {report.average_lifetime_error:.4f}"
            ),
            "Sum of intensities": f"{report.intensity_sum:.4f} ± {report.intensity_sum_error:.4f}",
            "Peak-to-background": _format(report.peak_to_background, 2),
            "Spectral centroid [ps]": _format(report.spectral_centroid),
            "Estimated t0 [ps]": _format(report.time_zero),
        },
        title="Fit Summary",
    )


def print_run_history(report: FitReport) -> None:
    """Print per-run iteration counts and reduced chi-square values."""
    table = create_table("Run History")
    table.add_column("Run", justify="right")
    table.add_column("Status", justify="right")
    table.add_column("Iterations", justify="right")
    table.add_column("Chi-square start", justify="right")
    table.add_column("Chi-square final", style="value", justify="right")

    for run in report.runs:
        table.add_row(
            str(run.run_index),
            str(run.status),
            str(run.iterations),
            _format(run.start_chi_square, 6),
            _format(run.final_chi_square, 6),
        )
    console.print(table)


def print_conflicts(conflicts: dict[str, list[str]]) -> None:
    """Print parameters that are both fixed and bounded."""
    table = create_table("Parameter Conflicts")
    table.add_column("Group", style="key")
    table.add_column("Fixed and bounded", style="warning")

    for group, aliases in conflicts.items():
        table.add_row(group, ", ".join(aliases))
    console.print(table)
