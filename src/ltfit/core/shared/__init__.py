"""Shared foundational utilities for LTFit."""

from ltfit.core.shared import events, reporter, typing
from ltfit.core.shared.events import Event, EventDispatcher, EventType, FitRunEvent
from ltfit.core.shared.exceptions import (
    ConfigError,
    DataIOError,
    FitInProgressError,
    LTFitError,
    OptimizationError,
    ParameterConflictError,
)
from ltfit.core.shared.reporter import CompositeReporter, LoggingReporter, NullReporter, Reporter

__all__ = [
    "CompositeReporter",
    "ConfigError",
    "DataIOError",
    "Event",
    "EventDispatcher",
    "EventType",
    "FitInProgressError",
    "FitRunEvent",
    "LTFitError",
    "LoggingReporter",
    "NullReporter",
    "OptimizationError",
    "ParameterConflictError",
    "Reporter",
    "events",
    "reporter",
    "typing",
]
