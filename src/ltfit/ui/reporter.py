"""Console-based reporter implementation using Rich."""

from __future__ import annotations

from ltfit.core.shared.reporter import Reporter
from ltfit.ui.console import Verbosity, get_verbosity
from ltfit.ui.messages import action, error, info, success, warning


class ConsoleReporter:
    """Reporter implementation using Rich console output.

    Per-run action messages are only shown at verbose level.

    Example:
        >>> reporter = ConsoleReporter()
        >>> reporter.success("Fit finished")
    """

    def action(self, message: str) -> None:
        if get_verbosity() >= Verbosity.VERBOSE:
            action(message)

    def info(self, message: str) -> None:
        info(message)

    def warning(self, message: str) -> None:
        warning(message)

    def error(self, message: str) -> None:
        error(message)

    def success(self, message: str) -> None:
        success(message)


# Verify protocol compliance at import time
if not isinstance(ConsoleReporter(), Reporter):
    raise TypeError("ConsoleReporter must satisfy Reporter protocol")
