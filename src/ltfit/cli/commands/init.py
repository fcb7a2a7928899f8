"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ltfit.io.config import generate_default_config
from ltfit.ui import bullet, error, info, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("ltfit.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    The file holds a one-component sample fit with a fixed source correction,
    one Gaussian IRF and a floating background.

    Examples
    --------
      Create default config:
        $ ltfit init

      Overwrite existing config:
        $ ltfit init my_fit.toml --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]")
        info("Use --force to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config())
    success(f"Created configuration file: [path]{path}[/path]")
    bullet(f"Review the parameter groups in {path.name}")
    bullet(f"Run the fit: ltfit fit spectrum.dat --config {path.name}")
