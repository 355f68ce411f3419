from __future__ import annotations

from typing import List, Protocol

import click
import typer


class Prompter(Protocol):
    """
    Asks the user for input. Operations that need the user take one of these so
    that tests can pass in scripted answers.
    """

    def prompt_text(self, message: str) -> str:
        ...

    def prompt_choice(self, message: str, options: List[str]) -> int:
        """Returns the index of the chosen option."""
        ...


class TyperPrompter:
    def __init__(self, hide_input: bool = True) -> None:
        self.hide_input = hide_input

    def prompt_text(self, message: str) -> str:
        return typer.prompt(message, hide_input=self.hide_input).strip()

    def prompt_choice(self, message: str, options: List[str]) -> int:
        for i, option in enumerate(options, start=1):
            typer.echo(f"{i:>3}) {option}")
        choice = typer.prompt(message, type=click.IntRange(1, len(options)))
        return choice - 1
