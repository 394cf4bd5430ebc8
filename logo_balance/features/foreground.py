"""Per-pixel foreground weighting shared by the logo measurements."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

import cv2
import numpy as np

from ..config import DEFAULT_ALPHA_THRESHOLD, DEFAULT_LUMINANCE_THRESHOLD
from ..io.models import RasterImage

logger = logging.getLogger(__name__)

MODE_ALPHA = "alpha"
MODE_LUMINANCE = "luminance"
MODE_SOLID = "solid"


@dataclass(frozen=True, slots=True)
class ForegroundMap:
    """Foreground weights in ``[0, 1]`` for every pixel of an image."""

    weights: np.ndarray
    mode: str

    @property
    def mask(self) -> np.ndarray:
        return self.weights > 0.0

    @property
    def is_empty(self) -> bool:
        return not bool(self.mask.any())


def luminance(image: RasterImage) -> np.ndarray:
    """Return the Rec. 601 luminance of *image* as a uint8 array."""
    return cv2.cvtColor(image.pixels, cv2.COLOR_RGBA2GRAY)


def corner_background(image: RasterImage) -> tuple[int, int]:
    """Return ``(row, col)`` of the corner holding the modal corner colour.

    Ties are resolved in the order top-left, top-right, bottom-left,
    bottom-right.
    """
    last_row = image.height - 1
    last_col = image.width - 1
    corners = [(0, 0), (0, last_col), (last_row, 0), (last_row, last_col)]
    colours = [tuple(int(v) for v in image.pixels[r, c, :3]) for r, c in corners]
    modal, _ = Counter(colours).most_common(1)[0]
    return corners[colours.index(modal)]


def foreground_weights(
    image: RasterImage,
    luminance_threshold: int = DEFAULT_LUMINANCE_THRESHOLD,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> ForegroundMap:
    """Classify every pixel of *image* and return its foreground weight.

    Images with any transparency are weighted by alpha; fully opaque images
    are compared against the modal corner colour by luminance and weighted
    0 or 1. A fully opaque single-colour canvas counts as solid foreground.
    """
    if image.has_alpha:
        alpha = image.alpha
        weights = np.where(alpha > alpha_threshold, alpha / 255.0, 0.0)
        return ForegroundMap(weights.astype(np.float64), MODE_ALPHA)

    pixels = image.pixels
    if bool((pixels == pixels[0, 0]).all()):
        return ForegroundMap(np.ones(pixels.shape[:2], dtype=np.float64), MODE_SOLID)

    lum = luminance(image).astype(np.int16)
    row, col = corner_background(image)
    background = lum[row, col]
    mask = np.abs(lum - background) > luminance_threshold
    logger.debug(
        "Luminance background %d at corner (%d, %d); %d foreground pixels",
        int(background),
        row,
        col,
        int(mask.sum()),
    )
    return ForegroundMap(mask.astype(np.float64), MODE_LUMINANCE)
