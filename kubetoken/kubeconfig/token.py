from __future__ import annotations

import re

from kubetoken.constants import TOKEN_BODY_LENGTH, TOKEN_PREFIX

# Only the URL-safe base64 alphabet is accepted, without padding.
TOKEN_PATTERN = re.compile(
    rf"{re.escape(TOKEN_PREFIX)}[A-Za-z0-9_-]{{{TOKEN_BODY_LENGTH}}}"
)


def is_valid_token(token: str) -> bool:
    """
    Checks whether a string has the shape of a token.

    Only the lexical shape is checked: the prefix followed by exactly
    TOKEN_BODY_LENGTH URL-safe base64 characters, matched against the whole
    string. Whether a cluster accepts the token is not something this can know.

    Args:
        token (str): The candidate token.

    Returns:
        bool: True if the token has the expected shape.
    """
    return TOKEN_PATTERN.fullmatch(token) is not None
