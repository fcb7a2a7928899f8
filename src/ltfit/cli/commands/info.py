"""Info command implementation."""

from __future__ import annotations

import sys

import numpy as np
import scipy

from ltfit.ui import VERSION, console


def info_command() -> None:
    """Show system information.

    Display details about the LTFit installation and its numerical stack.
    """
    console.print("[bold]LTFit System Information[/bold]\n")
    console.print(f"[green]LTFit version:[/green] {VERSION}")
    console.print(f"[green]Python version:[/green] {sys.version.split()[0]}")
    console.print(f"[green]NumPy version:[/green] {np.__version__}")
    console.print(f"[green]SciPy version:[/green] {scipy.__version__}")
    console.print(
        "\n[dim]Fits run one at a time on a dedicated worker thread; "
        "the solver is scipy.optimize.least_squares (trust-region reflective).[/dim]"
    )
