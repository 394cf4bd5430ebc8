"""Tests for density and visual centre measurements."""

import numpy as np
import pytest

from helpers import solid, transparent_with_block
from logo_balance.features.content_box import detect_content_box
from logo_balance.features.density import measure_density
from logo_balance.features.foreground import foreground_weights
from logo_balance.features.visual_center import compute_visual_center
from logo_balance.io.models import ContentBox, RasterImage


def _two_columns(right_height: int) -> RasterImage:
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[0:10, 0:2] = (0, 0, 0, 255)
    pixels[0:right_height, 8:10] = (0, 0, 0, 255)
    return RasterImage(pixels)


def test_density_is_exactly_one_for_solid_images() -> None:
    image = solid(7, 5)
    foreground = foreground_weights(image)

    assert measure_density(foreground, detect_content_box(image)) == 1.0


def test_density_counts_weight_inside_the_box() -> None:
    image = _two_columns(10)
    foreground = foreground_weights(image)
    box = detect_content_box(image)

    assert box == ContentBox(0, 0, 10, 10)
    assert measure_density(foreground, box) == pytest.approx(0.4)


def test_density_uses_alpha_as_weight() -> None:
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:, :, 3] = 128
    foreground = foreground_weights(RasterImage(pixels))

    assert measure_density(foreground, ContentBox.full(4, 4)) == pytest.approx(128 / 255)


def test_transparent_image_has_zero_density_and_centred_offsets() -> None:
    image = transparent_with_block(6, 6, (0, 0, 1, 1), alpha=0)
    foreground = foreground_weights(image)
    box = detect_content_box(image)

    center = compute_visual_center(foreground, box)

    assert measure_density(foreground, box) == 0.0
    assert (center.offset_x, center.offset_y) == (0.0, 0.0)
    assert (center.centroid_x, center.centroid_y) == (3.0, 3.0)


def test_symmetric_content_has_no_offset() -> None:
    image = transparent_with_block(20, 10, (4, 2, 12, 8))
    foreground = foreground_weights(image)
    box = detect_content_box(image)

    center = compute_visual_center(foreground, box)

    assert center.centroid_x == pytest.approx(8.0)
    assert center.centroid_y == pytest.approx(5.0)
    assert center.offset_x == pytest.approx(0.0)
    assert center.offset_y == pytest.approx(0.0)


def test_asymmetric_content_shifts_the_centroid() -> None:
    image = _two_columns(5)
    foreground = foreground_weights(image)
    box = detect_content_box(image)

    center = compute_visual_center(foreground, box)

    assert center.centroid_x == pytest.approx(110 / 30)
    assert center.centroid_y == pytest.approx(125 / 30)
    assert center.offset_x == pytest.approx((110 / 30 - 5) / 10)
    assert center.offset_y == pytest.approx((125 / 30 - 5) / 10)
