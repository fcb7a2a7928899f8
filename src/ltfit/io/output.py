"""Output file writers for lifetime fit results."""

from __future__ import annotations

import csv
import json
from typing import TYPE_CHECKING

from ltfit.core.shared.exceptions import DataIOError
from ltfit.core.shared.reporter import NullReporter

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ltfit.core.domain.spectrum import LifetimeSpectrum
    from ltfit.core.results.report import FitReport
    from ltfit.core.shared.reporter import Reporter

SUMMARY_FILE = "fit_summary.json"
CURVE_FILE = "fit_curve.csv"


def write_summary_json(report: FitReport, path: Path) -> None:
    """Write statistics, parameters and run history as JSON.

    The curve and residual series go to the CSV file instead.
    """
    payload = report.model_dump(mode="json", exclude={"fit_curve", "residuals"})
    payload["n_runs"] = report.n_runs
    payload["ok"] = report.ok
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")


def write_curve_csv(report: FitReport, spectrum: LifetimeSpectrum, path: Path) -> None:
    """Write observed counts, model curve and weighted residuals per channel."""
    observed = {point.channel: point.counts for point in spectrum.points}
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["channel", "observed", "model", "residual"])
        for (channel, model), (_, residual) in zip(report.fit_curve, report.residuals, strict=True):
            writer.writerow([channel, observed.get(channel, ""), f"{model:.6f}", f"{residual:.6f}"])


def write_outputs(
    report: FitReport,
    spectrum: LifetimeSpectrum,
    directory: Path,
    formats: Iterable[str] = ("json", "csv"),
    reporter: Reporter | None = None,
) -> list[Path]:
    """Write the requested output files into ``directory``.

    Returns:
        Paths of the written files.

    Raises:
        DataIOError: If a file cannot be written.
    """
    reporter = reporter or NullReporter()
    written: list[Path] = []
    try:
        for fmt in formats:
            if fmt == "json":
                path = directory / SUMMARY_FILE
                write_summary_json(report, path)
            elif fmt == "csv":
                path = directory / CURVE_FILE
                write_curve_csv(report, spectrum, path)
            else:
                msg = f"Unknown output format: {fmt}"
                raise DataIOError(msg)
            reporter.info(f"Wrote {path}")
            written.append(path)
    except OSError as exc:
        msg = f"Cannot write results to {directory}: {exc}"
        raise DataIOError(msg) from exc
    return written


__all__ = ["CURVE_FILE", "SUMMARY_FILE", "write_curve_csv", "write_outputs", "write_summary_json"]
