from __future__ import annotations

from pathlib import Path

import pytest

from kubetoken.kubeconfig.store import KubeconfigStore
from tests.samples import KUBECONFIG_YAML


@pytest.fixture
def store() -> KubeconfigStore:
    return KubeconfigStore.load(KUBECONFIG_YAML)


@pytest.fixture
def kubeconfig_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config"
    path.write_text(KUBECONFIG_YAML)
    monkeypatch.setenv("KUBECONFIG", str(path))
    return path
