from __future__ import annotations

from typing import Optional

import typer

from kubetoken.cli.utils import exit_on_error, get_prompter, load_store
from kubetoken.kubeconfig.operations import choose_context, refresh_token
from kubetoken.kubeconfig.presentation import format_contexts, format_contexts_table
from kubetoken.logger import logger


@exit_on_error
def list_contexts(
    wide: bool = typer.Option(
        False,
        "--wide",
        "-w",
        help="Also show the cluster, user and namespace of each context.",
    ),
) -> None:
    """
    Lists all contexts. The current context is marked with an asterisk.
    """
    store, _ = load_store()
    if wide:
        typer.echo(format_contexts_table(store))
    else:
        typer.echo(format_contexts(store.list_contexts(), color=True))


@exit_on_error
def select(
    name: Optional[str] = typer.Argument(
        None, help="The context to switch to. Prompts for one if omitted."
    ),
) -> None:
    """
    Sets the current context.
    """
    store, path = load_store()
    if name is None:
        name = choose_context(store, get_prompter())
    else:
        store.select_context(name)

    store.save(path)
    logger.info(f'Switched to context "{name}".')


@exit_on_error
def refresh(
    name: Optional[str] = typer.Argument(
        None,
        help="The context whose user gets the token. Defaults to the current context.",
    ),
) -> None:
    """
    Replaces the token of the user behind a context with a newly entered one.
    """
    store, path = load_store()
    user_name = refresh_token(store, get_prompter(), name)

    store.save(path)
    logger.info(f'Successfully updated the token of user "{user_name}".')


@exit_on_error
def current() -> None:
    """
    Shows the current context.
    """
    store, _ = load_store()
    if not store.current_context:
        logger.error("current-context is not set.")
        raise typer.Exit(1)
    typer.echo(store.current_context)
