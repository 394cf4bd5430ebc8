"""Tests for foreground weighting and content box detection."""

import numpy as np
import pytest

from helpers import solid, transparent_with_block, white_with_block
from logo_balance.errors import EmptyContentError
from logo_balance.features.content_box import detect_content_box, find_content_box
from logo_balance.features.foreground import (
    MODE_ALPHA,
    MODE_LUMINANCE,
    MODE_SOLID,
    corner_background,
    foreground_weights,
)
from logo_balance.io.models import ContentBox, RasterImage


def test_transparent_padding_is_trimmed() -> None:
    image = transparent_with_block(20, 10, (3, 2, 8, 6))

    assert detect_content_box(image) == ContentBox(3, 2, 8, 6)
    assert foreground_weights(image).mode == MODE_ALPHA


def test_opaque_background_is_trimmed_by_luminance() -> None:
    image = white_with_block(30, 12, (5, 1, 25, 11))

    assert detect_content_box(image) == ContentBox(5, 1, 25, 11)
    assert foreground_weights(image).mode == MODE_LUMINANCE


def test_single_colour_opaque_image_is_solid_content() -> None:
    image = solid(16, 9)

    foreground = foreground_weights(image)

    assert foreground.mode == MODE_SOLID
    assert detect_content_box(image) == ContentBox.full(16, 9)


def test_fully_transparent_image_has_no_content() -> None:
    image = transparent_with_block(8, 8, (0, 0, 1, 1), alpha=0)

    with pytest.raises(EmptyContentError):
        find_content_box(foreground_weights(image))
    assert detect_content_box(image) == ContentBox.full(8, 8)


def test_alpha_below_threshold_is_background() -> None:
    image = transparent_with_block(8, 8, (2, 2, 4, 4), alpha=5)

    assert foreground_weights(image).is_empty
    assert detect_content_box(image, alpha_threshold=4) == ContentBox(2, 2, 4, 4)


def test_faint_marks_below_luminance_threshold_are_ignored() -> None:
    pixels = np.full((10, 10, 4), 255, dtype=np.uint8)
    pixels[4:6, 4:6, :3] = 250
    image = RasterImage(pixels)

    assert foreground_weights(image).is_empty
    assert detect_content_box(image, luminance_threshold=2) == ContentBox(4, 4, 6, 6)


def test_background_is_modal_corner_colour() -> None:
    image = white_with_block(10, 10, (4, 4, 7, 7))
    image.pixels[0, 0, :3] = 0

    assert corner_background(image) == (0, 9)
    assert detect_content_box(image) == ContentBox(0, 0, 7, 7)


def test_dark_background_with_light_logo() -> None:
    pixels = np.zeros((12, 12, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    pixels[3:9, 2:10, :3] = 255
    image = RasterImage(pixels)

    assert detect_content_box(image) == ContentBox(2, 3, 10, 9)
