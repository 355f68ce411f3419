from __future__ import annotations

import os
from typing import List, NamedTuple, Optional, Union

from ruamel.yaml.comments import CommentedMap

from kubetoken.config import (
    KubeConfig,
    NamedContext,
    dump_config,
    generate_yaml,
    load_document,
    parse_document,
)
from kubetoken.errors import (
    ContextNotFoundError,
    DecodeError,
    EmptyConfigError,
    KubeconfigNotFoundError,
    UserNotFoundError,
)
from kubetoken.logger import logger
from kubetoken.utils import read_file, write_file_atomic


class ContextEntry(NamedTuple):
    name: str
    is_current: bool


class KubeconfigStore:
    """
    Owns the in-memory kubeconfig for the lifetime of one command.

    All reads and changes of the config go through this class. Changes stay in
    memory until save() is called.
    """

    def __init__(
        self, config: KubeConfig, document: Optional[CommentedMap] = None
    ) -> None:
        self._config = config
        # The document the config was parsed from, used to keep comments and
        # key order on write.
        self._document = document
        # What the config dumped to when the document was last in sync with it.
        # Nodes whose dump still matches are written back untouched.
        self._baseline = dump_config(config) if document is not None else None

    @classmethod
    def load(cls, data: Union[str, bytes]) -> KubeconfigStore:
        """
        Decodes a kubeconfig document.

        Args:
            data (Union[str, bytes]): The content of the kubeconfig file.

        Returns:
            KubeconfigStore: A store holding the decoded config.

        Raises:
            DecodeError: If the data is not a valid kubeconfig document.
        """
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(f"Invalid kubeconfig: {e}") from e

        document = load_document(data)
        store = cls(parse_document(document), document)

        current = store.current_context
        if current and store._find_context(current) is None:
            logger.warning(
                f'current-context "{current}" does not match any context.'
            )
        return store

    @classmethod
    def from_file(cls, path: str) -> KubeconfigStore:
        if not os.path.exists(path):
            raise KubeconfigNotFoundError(path)

        logger.debug(f"Loading kubeconfig from {path}")
        try:
            return cls.load(read_file(path))
        except DecodeError as e:
            raise DecodeError(f"{path} is not a valid kubeconfig file. {e}") from e

    @property
    def config(self) -> KubeConfig:
        return self._config

    @property
    def current_context(self) -> str:
        return self._config.current_context

    @property
    def contexts(self) -> List[NamedContext]:
        return list(self._config.contexts)

    def _find_context(self, name: str) -> Optional[NamedContext]:
        for named_context in self._config.contexts:
            if named_context.name == name:
                return named_context
        return None

    def list_contexts(self) -> List[ContextEntry]:
        """
        Lists the contexts in file order.

        Returns:
            List[ContextEntry]: One entry per context, flagged when it is the
            current context.

        Raises:
            EmptyConfigError: If the config has no contexts.
        """
        if not self._config.contexts:
            raise EmptyConfigError()

        current = self._config.current_context
        return [
            ContextEntry(named_context.name, named_context.name == current)
            for named_context in self._config.contexts
        ]

    def select_context(self, name: str) -> None:
        """
        Makes the context with the given name the current context.

        Args:
            name (str): The exact, case-sensitive name of the context.

        Raises:
            ContextNotFoundError: If no context has that name. The config is
            left unchanged.
        """
        if self._find_context(name) is None:
            raise ContextNotFoundError(name)

        logger.debug(f'Setting current-context to "{name}"')
        self._config.current_context = name

    def resolve_user_for_context(self, context_name: str) -> str:
        """
        Returns the user name referenced by a context. Whether that user exists
        is only checked when a token is applied.
        """
        named_context = self._find_context(context_name)
        if named_context is None:
            raise ContextNotFoundError(context_name)
        return named_context.context.user

    def apply_token(self, user_name: str, token: str) -> None:
        """
        Replaces the token of the first user with the given name.

        Args:
            user_name (str): The name of the user.
            token (str): The new token.

        Raises:
            UserNotFoundError: If no user has that name.
        """
        for named_user in self._config.users:
            if named_user.name == user_name:
                named_user.user.token = token
                logger.debug(f'Updated token of user "{user_name}"')
                return
        raise UserNotFoundError(user_name)

    def serialize(self) -> str:
        content = generate_yaml(self._config, self._document, self._baseline)
        if self._document is not None:
            self._baseline = dump_config(self._config)
        return content

    def save(self, path: str) -> None:
        # Encode first so that nothing is written if encoding fails
        content = self.serialize()
        write_file_atomic(path, content)
        logger.debug(f"Saved kubeconfig to {path}")
