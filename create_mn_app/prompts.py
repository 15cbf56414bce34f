"""Interactive prompting.

The orchestration code only talks to ``Prompter``; the CLI plugs in
``TyperPrompter`` and tests plug in canned answers. Any prompt the operator
aborts (Ctrl-C, EOF) raises OperationCancelled.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from create_mn_app.core.errors import OperationCancelled
from create_mn_app.core.logger import console as default_console

# Returns an error message, or None when the value is acceptable
Validator = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class Choice:
    title: str
    value: str
    description: str = ""


class Prompter(ABC):
    """Collects answers from the operator."""

    @abstractmethod
    def ask_text(self, message: str, default: Optional[str] = None,
                 validate: Optional[Validator] = None) -> str:
        """Ask for free text, re-asking until ``validate`` accepts it."""

    @abstractmethod
    def ask_select(self, message: str, choices: List[Choice]) -> str:
        """Ask the operator to pick one choice; returns its value."""

    @abstractmethod
    def ask_confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""


class TyperPrompter(Prompter):
    """Prompts on the terminal through typer."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or default_console

    def ask_text(self, message, default=None, validate=None):
        while True:
            try:
                value = typer.prompt(message, default=default)
            except typer.Abort:
                raise OperationCancelled() from None
            value = value.strip()
            error = validate(value) if validate else None
            if error is None:
                return value
            self.console.print(f"[red]✗[/red] {escape(error)}")

    def ask_select(self, message, choices):
        if not choices:
            raise ValueError("ask_select needs at least one choice")

        self.console.print(f"[bold]{message}[/bold]")
        for index, choice in enumerate(choices, start=1):
            description = f" [dim]- {choice.description}[/dim]" if choice.description else ""
            self.console.print(f"  [cyan]{index}[/cyan]. {choice.title}{description}")

        while True:
            try:
                picked = typer.prompt("Select", default=1, type=int)
            except typer.Abort:
                raise OperationCancelled() from None
            if 1 <= picked <= len(choices):
                return choices[picked - 1].value
            self.console.print(f"[red]✗[/red] Enter a number from 1 to {len(choices)}")

    def ask_confirm(self, message, default=False):
        try:
            return typer.confirm(message, default=default)
        except typer.Abort:
            raise OperationCancelled() from None
