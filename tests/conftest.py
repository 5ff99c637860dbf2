# tests/conftest.py

from pathlib import Path

import pytest

from tilepath.core.scene import grid_from_rows

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


@pytest.fixture
def maps_dir() -> Path:
    return MAPS_DIR


@pytest.fixture
def open_grid():
    """Factory: width x height grid, every tile navigable with all exits."""
    def _make(width: int, height: int):
        return grid_from_rows([" ".join(["."] * width)] * height)
    return _make
