"""Pytest configuration and fixtures."""

import json
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from nnlite.config import Settings

SAMPLE_VECTORS = {
    "a": [1.0, 2.0, 3.0],
    "b": [7.0, 2.0, 9.0],
    "c": [4.0, 2.1, 3.4],
    "d": [0.9, 8.2, 4.6],
}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_vectors() -> dict[str, list[float]]:
    """Four 3-dimensional vectors used across store and CLI tests."""
    return {key: list(values) for key, values in SAMPLE_VECTORS.items()}


@pytest.fixture
def sample_vectors_json(temp_dir: Path, sample_vectors: dict[str, list[float]]) -> Path:
    """Write the sample vectors as a raw ``{id: [numbers]}`` dump."""
    path = temp_dir / "vectors.json"
    path.write_text(json.dumps(sample_vectors), encoding="utf-8")
    return path


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated nnlite settings scoped to tests."""

    import nnlite.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    data_dir = temp_dir / "appdata"
    data_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(data_dir=data_dir)
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
