"""Exception taxonomy for LTFit.

A small hierarchy of exceptions used outside the numerical core. The fit core
itself never raises across its boundary; failures there are carried in the
solver status code.
"""

from __future__ import annotations


class LTFitError(Exception):
    """Base class for all LTFit-specific exceptions."""


class ConfigError(LTFitError):
    """Configuration-related errors (invalid/missing options, schema issues)."""


class DataIOError(LTFitError):
    """Data loading/saving errors (files, formats, permissions)."""


class OptimizationError(LTFitError):
    """Errors raised while preparing or scheduling a fit."""


class FitInProgressError(OptimizationError):
    """A fit was submitted while another one is still running."""


class ParameterConflictError(OptimizationError):
    """Parameters are both fixed and bounded."""

    def __init__(self, conflicts: dict[str, list[str]]) -> None:
        self.conflicts = conflicts
        details = "; ".join(
            f"{group}: {', '.join(aliases)}" for group, aliases in conflicts.items() if aliases
        )
        super().__init__(f"Parameters cannot be fixed and bounded at once ({details})")


__all__ = [
    "ConfigError",
    "DataIOError",
    "FitInProgressError",
    "LTFitError",
    "OptimizationError",
    "ParameterConflictError",
]
