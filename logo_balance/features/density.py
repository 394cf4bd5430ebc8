"""Ink coverage measurement."""

from __future__ import annotations

from ..io.models import ContentBox
from .foreground import ForegroundMap


def measure_density(foreground: ForegroundMap, box: ContentBox) -> float:
    """Return the fraction of *box* covered by foreground weight, in [0, 1]."""
    region = foreground.weights[box.top : box.bottom, box.left : box.right]
    area = box.width * box.height
    if area <= 0 or region.size == 0:
        return 0.0
    density = float(region.sum()) / float(area)
    return float(max(0.0, min(1.0, density)))
