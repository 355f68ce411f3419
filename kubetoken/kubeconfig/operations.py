from __future__ import annotations

from typing import Optional

from kubetoken.errors import InvalidTokenFormatError
from kubetoken.kubeconfig.store import KubeconfigStore
from kubetoken.kubeconfig.token import is_valid_token
from kubetoken.logger import logger
from kubetoken.prompt import Prompter


def choose_context(store: KubeconfigStore, prompter: Prompter) -> str:
    """
    Lets the user pick one of the contexts and makes it the current context.

    Args:
        store (KubeconfigStore): The store holding the config.
        prompter (Prompter): Used to ask the user for a choice.

    Returns:
        str: The name of the chosen context.

    Raises:
        EmptyConfigError: If the config has no contexts.
    """
    names = [entry.name for entry in store.list_contexts()]
    index = prompter.prompt_choice("Select a context", names)
    name = names[index]
    store.select_context(name)
    return name


def refresh_token(
    store: KubeconfigStore, prompter: Prompter, context_name: Optional[str] = None
) -> str:
    """
    Asks the user for a new token and stores it for the user of a context.

    The token is requested once. If it does not have the expected shape, the
    config is left untouched and the user has to run the command again.

    Args:
        store (KubeconfigStore): The store holding the config.
        prompter (Prompter): Used to ask the user for the token.
        context_name (Optional[str]): The context whose user gets the token.
            Defaults to the current context.

    Returns:
        str: The name of the user whose token was replaced.

    Raises:
        ContextNotFoundError: If the context does not exist.
        InvalidTokenFormatError: If the entered token has the wrong shape.
        UserNotFoundError: If the context refers to a user that does not exist.
    """
    target = context_name or store.current_context
    user_name = store.resolve_user_for_context(target)
    logger.debug(f'Context "{target}" uses user "{user_name}"')

    token = prompter.prompt_text(f'Enter a new token for user "{user_name}"')
    if not is_valid_token(token):
        raise InvalidTokenFormatError()

    store.apply_token(user_name, token)
    return user_name
