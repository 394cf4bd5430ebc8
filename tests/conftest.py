"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from helpers import png_bytes


@pytest.fixture
def make_png(tmp_path):
    """Write a raster to a PNG file under ``tmp_path`` and return its path."""

    def _write(image, name: str = "logo.png"):
        path = tmp_path / name
        path.write_bytes(png_bytes(image))
        return path

    return _write
