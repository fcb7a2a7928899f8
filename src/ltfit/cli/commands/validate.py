"""Validate command implementation."""

from __future__ import annotations

from pathlib import Path  # Required at runtime by Typer  # noqa: TC003
from typing import Annotated

import typer  # Required at runtime by Typer

from ltfit.core.shared.exceptions import LTFitError
from ltfit.io.config import load_config
from ltfit.io.spectrum import load_spectrum
from ltfit.ui import error, info, print_conflicts, print_summary, show_header, success


def validate_command(
    config: Annotated[
        Path,
        typer.Argument(
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    spectrum: Annotated[
        Path | None,
        typer.Option(
            "--spectrum",
            "-s",
            help="Spectrum file to check against the region of interest",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """Validate a configuration file before fitting.

    Checks the configuration schema, lists parameters that are both fixed and
    bounded, and optionally checks that the region of interest holds data.
    """
    show_header("Validating Configuration")

    try:
        fit_set = load_config(config).fit
    except LTFitError as exc:
        error(str(exc))
        raise typer.Exit(1) from exc
    success(f"Configuration readable: [path]{config.name}[/path]")

    print_summary(
        {
            "Region of interest": f"[{fit_set.start_channel}:{fit_set.stop_channel}]",
            "Channel resolution [ps]": f"{fit_set.channel_resolution:g}",
            "Source components": fit_set.source.n_components,
            "Sample components": fit_set.sample.n_components,
            "IRF components": fit_set.irf.n_components,
            "Background": "fixed" if fit_set.background.parameters[0].fixed else "free",
            "Max runs": fit_set.max_runs,
        },
        title="Fit Set",
    )

    valid = True
    conflicts = fit_set.conflicts()
    if conflicts:
        print_conflicts(conflicts)
        error("Parameters cannot be fixed and bounded at the same time")
        valid = False

    if spectrum is not None:
        try:
            channels, _ = load_spectrum(spectrum).region(fit_set.start_channel, fit_set.stop_channel)
        except LTFitError as exc:
            error(str(exc))
            raise typer.Exit(1) from exc
        if channels.size < 2:
            error("The region of interest holds fewer than two channels of the spectrum")
            valid = False
        else:
            info(f"{channels.size} channels of {spectrum.name} fall into the region of interest")

    if not valid:
        raise typer.Exit(1)
    success("Configuration is valid")
