"""Shared utilities for the create-mn-app CLI."""
from __future__ import annotations

from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from create_mn_app.core.errors import CreateAppError
from create_mn_app.models.template import TemplateDescriptor

# Substring of an error message -> generic remedy
GENERIC_HINTS = [
    (("permission denied", "eacces", "eperm"),
     "Check file permissions or choose another directory."),
    (("enotfound", "network", "could not resolve host", "connection"),
     "Check your internet connection and try again."),
    (("no space left", "enospc"),
     "Free up some disk space and try again."),
]


def suggest_solution(e: Exception) -> Optional[str]:
    """Derive a remedy from the error text when the error carries none."""
    if isinstance(e, CreateAppError) and e.hint:
        return e.hint

    text = str(e).lower()
    if isinstance(e, PermissionError):
        text += " permission denied"
    for needles, hint in GENERIC_HINTS:
        if any(needle in text for needle in needles):
            return hint
    return None


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use

    Raises:
        typer.Exit: Always
    """
    message = e.message if isinstance(e, CreateAppError) else str(e)
    console.print(f"\n[red]Error:[/red] {escape(message)}")

    hint = suggest_solution(e)
    if hint:
        console.print(f"[yellow]→[/yellow] {escape(hint)}")

    if verbose:
        console.print_exception()
    else:
        console.print("[dim]Run with --verbose for details.[/dim]")
    raise typer.Exit(exit_code)


def print_templates(console: Console, templates: Iterable[TemplateDescriptor]) -> None:
    """List selectable templates with their descriptions."""
    console.print("\n[bold]Available templates:[/bold]")
    for template in templates:
        console.print(f"  [cyan]{template.name:<12}[/cyan] {template.description}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")
