from __future__ import annotations

import os
from pathlib import Path

import pytest

from octasphere.mesh import Mesh
from octasphere.sphere import build_sphere


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep user configuration out of the real home directory."""
    directory = tmp_path / "config"
    monkeypatch.setenv("OCTASPHERE_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture
def sphere_mesh() -> Mesh:
    return build_sphere(center=(1.0, -2.0, 3.0), radius=2.5, resolution=3)
