"""Main Typer application for LTFit.

This module creates the Typer application and registers the commands of the
``commands`` subpackage.
"""

from typing import Annotated

import typer

from ltfit.cli.callbacks import version_callback
from ltfit.cli.commands import fit_command, info_command, init_command, validate_command

app = typer.Typer(
    name="ltfit",
    help="LTFit - Positron annihilation lifetime spectrum fitting",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """LTFit - Fit lifetime spectra with exponential decays convolved with Gaussian IRFs."""


app.command(name="fit")(fit_command)
app.command(name="validate")(validate_command)
app.command(name="init")(init_command)
app.command(name="info")(info_command)
