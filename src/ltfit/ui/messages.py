"""UI messages and status indicators."""

from __future__ import annotations

import logging

from ltfit.ui.console import console, icon

logger = logging.getLogger("ltfit.ui")

__all__ = [
    "action",
    "bullet",
    "error",
    "info",
    "show_header",
    "spacer",
    "success",
    "warning",
]


def show_header(text: str) -> None:
    """Display a prominent section header."""
    console.rule(f"[header]{text}[/header]", style="cyan")


def success(message: str, indent: int = 0) -> None:
    spaces = "  " * indent
    console.print(f"{spaces}[success]{icon('check')}[/success] {message}")
    logger.info(message)


def warning(message: str, indent: int = 0) -> None:
    spaces = "  " * indent
    console.print(f"{spaces}[warning]{icon('warn')}[/warning]  {message}")
    logger.warning(message)


def error(message: str, indent: int = 0) -> None:
    spaces = "  " * indent
    console.print(f"{spaces}[error]{icon('error')}[/error] {message}")
    logger.error(message)


def info(message: str, indent: int = 0) -> None:
    spaces = "  " * indent
    console.print(f"{spaces}[dim]{icon('info')}[/dim] {message}")
    logger.info(message)


def action(message: str) -> None:
    """Display an action/process message with visual separation."""
    console.print(f"\n[bold yellow]{icon('play')}[/bold yellow] {message}")


def bullet(message: str, indent: int = 1) -> None:
    console.print(f"{'  ' * indent}[cyan]{icon('bullet')}[/cyan] {message}")


def spacer() -> None:
    """Print an empty line for visual spacing."""
    console.print()
