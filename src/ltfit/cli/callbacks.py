"""Typer callbacks for CLI."""

import typer

from ltfit.ui import VERSION, console


def version_callback(value: bool | None) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"LTFit version {VERSION}")
        raise typer.Exit
