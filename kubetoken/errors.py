from __future__ import annotations

from kubetoken.constants import KUBECONFIG_ENV_VAR, TOKEN_EXAMPLE


class KubeconfigError(Exception):
    """
    Base class for every error raised while reading, changing or writing a
    kubeconfig file. The CLI reports these to the user and exits non-zero.
    """


class DecodeError(KubeconfigError):
    """The document is not valid YAML or does not have the kubeconfig shape."""


class EncodeError(KubeconfigError):
    """The in-memory config could not be turned back into a document."""


class EmptyConfigError(KubeconfigError):
    def __init__(self) -> None:
        super().__init__("No contexts found in the kubeconfig file.")


class ContextNotFoundError(KubeconfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        if name:
            message = f'Context "{name}" not found in the kubeconfig file.'
        else:
            message = "No context given and current-context is not set."
        super().__init__(message)


class UserNotFoundError(KubeconfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'User "{name}" not found in the kubeconfig file.')


class InvalidTokenFormatError(KubeconfigError):
    def __init__(self) -> None:
        super().__init__(
            f"Invalid token format. A token looks like this: {TOKEN_EXAMPLE}"
        )


class KubeconfigNotFoundError(KubeconfigError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Kubeconfig file {path} does not exist. Set the {KUBECONFIG_ENV_VAR} "
            "environment variable to use a different file."
        )
