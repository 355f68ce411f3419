from __future__ import annotations

import contextlib
import os
import shutil
import tempfile

from kubetoken.constants import DEFAULT_KUBECONFIG_PATH, KUBECONFIG_ENV_VAR


def get_kubeconfig_path() -> str:
    """
    Get the path of the kubeconfig file to manage.

    If the environment variable KUBECONFIG_ENV_VAR is set, its value is used
    verbatim. Otherwise, the default location under the home directory is used.

    Returns:
        str: The path of the kubeconfig file.
    """
    override = os.environ.get(KUBECONFIG_ENV_VAR)
    if override:
        return override
    return os.path.expanduser(DEFAULT_KUBECONFIG_PATH)


def read_file(path: str) -> bytes:
    # Decoding is left to the caller so that bad encodings are reported as such
    with open(path, "rb") as file:
        return file.read()


def write_file_atomic(path: str, content: str) -> None:
    """
    Write content to a file without ever leaving a half-written file behind.

    The content is written to a temporary file in the same directory, flushed to
    disk and then moved over the target with os.replace. If the target already
    exists, its permission bits are copied to the new file. Symlinks are followed
    so that the file they point to is replaced, not the link itself.

    Args:
        path (str): The path of the file to write.
        content (str): The text to write.

    Returns:
        None
    """
    path = os.path.realpath(path)
    directory = os.path.dirname(path)
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            file.write(content)
            file.flush()
            os.fsync(file.fileno())
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.remove(tmp_path)
        raise
