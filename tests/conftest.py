"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest

from tinmesh.core.heightfield import HeightField


@pytest.fixture
def peak_field():
    """13x9 height field with a smooth central bump."""
    ys, xs = np.mgrid[0:9, 0:13].astype(np.float64)
    heights = 50.0 * np.exp(-((xs - 6) ** 2 + (ys - 4) ** 2) / 8.0)
    return HeightField.from_array(heights)


@pytest.fixture
def noise_field():
    """Reproducible 11x7 field of uniform noise."""
    rng = np.random.default_rng(1234)
    return HeightField.from_array(rng.uniform(0.0, 10.0, size=(7, 11)))


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the home directory at a temp dir so the user config isn't touched."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path
