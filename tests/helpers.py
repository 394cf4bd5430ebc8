"""Helpers that synthesize logo rasters for tests."""

from __future__ import annotations

from io import BytesIO

import numpy as np
from PIL import Image

from logo_balance.io.models import RasterImage


def solid(width: int, height: int, rgba=(200, 30, 30, 255)) -> RasterImage:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return RasterImage(pixels)


def transparent_with_block(
    width: int,
    height: int,
    box: tuple[int, int, int, int],
    alpha: int = 255,
) -> RasterImage:
    """Transparent canvas with an opaque black block at ``(left, top, right, bottom)``."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    left, top, right, bottom = box
    pixels[top:bottom, left:right] = (0, 0, 0, alpha)
    return RasterImage(pixels)


def white_with_block(width: int, height: int, box: tuple[int, int, int, int]) -> RasterImage:
    """Opaque white canvas with a black block at ``(left, top, right, bottom)``."""
    pixels = np.full((height, width, 4), 255, dtype=np.uint8)
    left, top, right, bottom = box
    pixels[top:bottom, left:right, :3] = 0
    return RasterImage(pixels)


def png_bytes(image: RasterImage) -> bytes:
    buffer = BytesIO()
    Image.fromarray(image.pixels).save(buffer, format="PNG")
    return buffer.getvalue()
