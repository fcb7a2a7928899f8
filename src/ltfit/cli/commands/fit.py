"""Fit command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from ltfit.core.domain.config import OutputFormat
from ltfit.core.domain.state import LifetimeProject
from ltfit.core.shared.exceptions import LTFitError, ParameterConflictError
from ltfit.io.config import load_config
from ltfit.io.output import write_outputs
from ltfit.io.spectrum import load_spectrum
from ltfit.services.fit import FitService
from ltfit.ui import (
    ConsoleReporter,
    Verbosity,
    close_logging,
    error,
    info,
    print_conflicts,
    print_parameters,
    print_report,
    print_run_history,
    set_verbosity,
    setup_logging,
    show_header,
    warning,
)

# Valid output formats for CLI validation
VALID_OUTPUT_FORMATS = get_args(OutputFormat)


def fit_command(
    spectrum: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Spectrum file: one column of counts or 'channel counts' pairs",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    config: Annotated[
        pathlib.Path,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file (see 'ltfit init')",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for results",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    start: Annotated[
        int | None,
        typer.Option("--start", help="First channel of the region of interest", min=0),
    ] = None,
    stop: Annotated[
        int | None,
        typer.Option("--stop", help="Last channel of the region of interest", min=1),
    ] = None,
    resolution: Annotated[
        float | None,
        typer.Option("--resolution", help="Channel width in ps"),
    ] = None,
    max_runs: Annotated[
        int | None,
        typer.Option("--max-runs", help="Maximum number of solver runs", min=1, max=20),
    ] = None,
    formats: Annotated[
        list[str] | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format(s): json, csv. Can be specified multiple times.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show run-by-run progress and log to the console"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
) -> None:
    """Fit a lifetime spectrum.

    Loads the fit set from the configuration file, runs the iterative fit and
    writes fit_summary.json and fit_curve.csv to the output directory.

    Examples
    --------
      Fit with a configuration file:
        $ ltfit fit spectrum.dat --config ltfit.toml

      Override the region of interest:
        $ ltfit fit spectrum.dat -c ltfit.toml --start 100 --stop 900
    """
    set_verbosity(Verbosity.QUIET if quiet else Verbosity.VERBOSE if verbose else Verbosity.NORMAL)

    if formats:
        invalid = sorted(set(formats) - set(VALID_OUTPUT_FORMATS))
        if invalid:
            error(f"Invalid output format(s): {', '.join(invalid)}")
            info(f"Valid formats: {', '.join(VALID_OUTPUT_FORMATS)}")
            raise typer.Exit(1)

    try:
        ltfit_config = load_config(config)
        fit_set = ltfit_config.fit
        overrides = {
            "start_channel": start,
            "stop_channel": stop,
            "channel_resolution": resolution,
            "max_runs": max_runs,
        }
        updates = {key: value for key, value in overrides.items() if value is not None}
        if updates:
            fit_set = fit_set.model_validate({**fit_set.model_dump(), **updates})
        lifetime_spectrum = load_spectrum(spectrum)
    except ValidationError as exc:
        error(f"Invalid command-line override:\n{exc}")
        raise typer.Exit(1) from exc
    except LTFitError as exc:
        error(str(exc))
        raise typer.Exit(1) from exc

    output_dir = output or ltfit_config.output.directory
    log_suffix = ".json" if ltfit_config.output.log_format == "json" else ".log"
    setup_logging(
        output_dir / f"ltfit{log_suffix}",
        verbose=verbose,
        log_format=ltfit_config.output.log_format,
    )

    show_header(f"Fitting {spectrum.name}")
    info(
        f"ROI [{fit_set.start_channel}:{fit_set.stop_channel}], "
        f"{fit_set.channel_resolution:g} ps/channel, {len(lifetime_spectrum)} channels read"
    )

    project = LifetimeProject(name=spectrum.stem, spectrum=lifetime_spectrum, fit_set=fit_set)
    try:
        with FitService(reporter=ConsoleReporter()) as service:
            report = service.fit(project)
    except ParameterConflictError as exc:
        print_conflicts(exc.conflicts)
        error("Parameters cannot be fixed and bounded at the same time")
        close_logging()
        raise typer.Exit(1) from exc

    if report is None:
        if lifetime_spectrum.is_empty:
            error(f"Nothing was fitted: {spectrum.name} holds no channels")
        else:
            error(
                f"Nothing was fitted: the region of interest [{fit_set.start_channel}:"
                f"{fit_set.stop_channel}] holds fewer than two channels of {spectrum.name}"
            )
        close_logging()
        raise typer.Exit(1)

    print_report(report)
    print_parameters(report)
    if verbose:
        print_run_history(report)

    try:
        write_outputs(
            report,
            lifetime_spectrum,
            output_dir,
            formats or ltfit_config.output.formats,
            reporter=ConsoleReporter(),
        )
    except LTFitError as exc:
        error(str(exc))
        raise typer.Exit(1) from exc
    finally:
        close_logging()

    if not report.ok:
        warning(f"Solver reported status {report.status}: {report.status_message}")
        raise typer.Exit(1)
