"""CLI command modules for LTFit.

Each module exports one command function that ``app.py`` registers with the
main Typer application.
"""

from ltfit.cli.commands.fit import fit_command
from ltfit.cli.commands.info import info_command
from ltfit.cli.commands.init import init_command
from ltfit.cli.commands.validate import validate_command

__all__ = ["fit_command", "info_command", "init_command", "validate_command"]
