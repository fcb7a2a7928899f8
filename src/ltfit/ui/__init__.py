"""UI and terminal output styling for LTFit.

Submodules:
- console: Theme and console instance
- logging: File and console logging setup
- messages: Status messages (success, error, warning, etc.)
- tables: Result tables
- reporter: Reporter implementation on top of the messages
"""

from ltfit.ui.console import LTFIT_THEME, VERSION, Verbosity, console, get_verbosity, icon, set_verbosity
from ltfit.ui.logging import JSONFormatter, close_logging, setup_logging
from ltfit.ui.messages import action, bullet, error, info, show_header, spacer, success, warning
from ltfit.ui.reporter import ConsoleReporter
from ltfit.ui.tables import (
    create_table,
    print_conflicts,
    print_parameters,
    print_report,
    print_run_history,
    print_summary,
)

__all__ = [
    "LTFIT_THEME",
    "VERSION",
    "ConsoleReporter",
    "JSONFormatter",
    "Verbosity",
    "action",
    "bullet",
    "close_logging",
    "console",
    "create_table",
    "error",
    "get_verbosity",
    "icon",
    "info",
    "print_conflicts",
    "print_parameters",
    "print_report",
    "print_run_history",
    "print_summary",
    "set_verbosity",
    "setup_logging",
    "show_header",
    "spacer",
    "success",
    "warning",
]
