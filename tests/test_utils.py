import os
from pathlib import Path
from unittest.mock import patch

import pytest

from kubetoken.constants import KUBECONFIG_ENV_VAR
from kubetoken.utils import get_kubeconfig_path, read_file, write_file_atomic


def test_get_kubeconfig_path() -> None:
    with patch.dict(os.environ, {KUBECONFIG_ENV_VAR: "~/custom/config"}):
        # Used verbatim
        assert get_kubeconfig_path() == "~/custom/config"

    with patch.dict(os.environ, {KUBECONFIG_ENV_VAR: ""}):
        assert get_kubeconfig_path() == str(Path.home() / ".kube" / "config")

    with patch.dict(os.environ, clear=True), patch(
        "os.path.expanduser", return_value="/home/user/.kube/config"
    ):
        assert get_kubeconfig_path() == "/home/user/.kube/config"


def test_write_file_atomic(tmp_path: Path) -> None:
    path = tmp_path / "config"

    write_file_atomic(str(path), "first\n")
    assert read_file(str(path)) == b"first\n"

    os.chmod(path, 0o640)
    write_file_atomic(str(path), "second\n")
    assert read_file(str(path)) == b"second\n"
    assert os.stat(path).st_mode & 0o777 == 0o640
    assert os.listdir(tmp_path) == ["config"]


def test_write_file_atomic_follows_symlink(tmp_path: Path) -> None:
    target = tmp_path / "real"
    target.write_text("old\n")
    link = tmp_path / "link"
    link.symlink_to(target)

    write_file_atomic(str(link), "new\n")

    assert link.is_symlink()
    assert target.read_text() == "new\n"


def test_write_file_atomic_failure_keeps_original(tmp_path: Path) -> None:
    path = tmp_path / "config"
    path.write_text("original\n")

    with patch("os.replace", side_effect=OSError("disk full")):
        with pytest.raises(OSError, match="disk full"):
            write_file_atomic(str(path), "new\n")

    assert path.read_text() == "original\n"
    assert os.listdir(tmp_path) == ["config"]
