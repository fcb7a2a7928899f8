"""Lightweight event dispatcher for fit lifecycle notifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class EventType(Enum):
    """Supported event types emitted by the fit engine."""

    FIT_STARTED = auto()
    FIT_RUN_COMPLETED = auto()
    FIT_COMPLETED = auto()
    ERROR = auto()


@dataclass(slots=True)
class Event:
    """Base event carrying a type and arbitrary metadata."""

    event_type: EventType
    data: dict[str, Any]


@dataclass(slots=True)
class FitRunEvent(Event):
    """Event emitted after each solver run of the iterative fit."""

    run_index: int
    max_runs: int
    iterations: int
    chi_square: float


class EventHandler(Protocol):
    """Protocol implemented by event handlers."""

    def handle(self, event: Event) -> None:  # pragma: no cover - thin interface
        """Process an incoming event."""


class EventDispatcher:
    """Simple pub-sub dispatcher for fit progress and completion events."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = {}

    def subscribe(
        self,
        event_type: EventType,
        handler: EventHandler | Callable[[Event], None],
    ) -> None:
        """Register a handler for a particular event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        if callable(handler) and not hasattr(handler, "handle"):
            handler = _CallableHandler(handler)

        self._handlers[event_type].append(handler)

    def dispatch(self, event: Event) -> None:
        """Send an event to all subscribed handlers."""
        for handler in self._handlers.get(event.event_type, []):
            handler.handle(event)


class _CallableHandler:
    """Adapter that allows bare callables to act as event handlers."""

    def __init__(self, func: Callable[[Event], None]) -> None:
        self._func = func

    def handle(self, event: Event) -> None:  # pragma: no cover - trivial adapter
        self._func(event)
