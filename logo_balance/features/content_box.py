"""Detect the tightest box around a logo's foreground pixels."""

from __future__ import annotations

import logging

import numpy as np

from ..config import DEFAULT_ALPHA_THRESHOLD, DEFAULT_LUMINANCE_THRESHOLD
from ..errors import EmptyContentError
from ..io.models import ContentBox, RasterImage
from .foreground import ForegroundMap, foreground_weights

logger = logging.getLogger(__name__)


def find_content_box(foreground: ForegroundMap) -> ContentBox:
    """Return the bounds of the foreground pixels in *foreground*.

    Raises ``EmptyContentError`` when no pixel is foreground.
    """
    mask = foreground.mask
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        raise EmptyContentError("image has no foreground pixels")
    cols = np.flatnonzero(mask.any(axis=0))
    return ContentBox(
        left=int(cols[0]),
        top=int(rows[0]),
        right=int(cols[-1]) + 1,
        bottom=int(rows[-1]) + 1,
    )


def content_box_from_weights(foreground: ForegroundMap) -> ContentBox:
    """Like ``find_content_box`` but fall back to the full image when empty."""
    try:
        return find_content_box(foreground)
    except EmptyContentError:
        height, width = foreground.weights.shape
        logger.debug("No foreground in %dx%d image; using full bounds", width, height)
        return ContentBox.full(width, height)


def detect_content_box(
    image: RasterImage,
    luminance_threshold: int = DEFAULT_LUMINANCE_THRESHOLD,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> ContentBox:
    """Return the content box of *image*, or its full bounds when it is empty."""
    foreground = foreground_weights(image, luminance_threshold, alpha_threshold)
    return content_box_from_weights(foreground)
