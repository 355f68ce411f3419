from __future__ import annotations

import functools
from typing import Any, Tuple

import typer

from kubetoken.errors import KubeconfigError
from kubetoken.kubeconfig.store import KubeconfigStore
from kubetoken.logger import logger
from kubetoken.prompt import Prompter, TyperPrompter
from kubetoken.utils import get_kubeconfig_path


def exit_on_error(func: Any) -> Any:
    """
    Decorator that reports kubeconfig and file errors raised by a command.

    The error message is logged and the program exits with status 1. Since
    commands only save after every step succeeded, nothing has been written
    when this happens.

    Args:
        func (Any): The command to decorate.

    Returns:
        Any: The decorated command.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except KubeconfigError as e:
            logger.error(str(e))
            raise typer.Exit(1)
        except OSError as e:
            logger.error(f"An error occurred: {e}")
            raise typer.Exit(1)

    return wrapper


def load_store() -> Tuple[KubeconfigStore, str]:
    path = get_kubeconfig_path()
    return KubeconfigStore.from_file(path), path


def get_prompter() -> Prompter:
    return TyperPrompter()
